"""
Detached signatures and key fingerprints.

A Signature wraps the 64 raw bytes of an Ed25519 detached signature. It is
produced by ``SecretId.sign_detached`` and checked by
``PublicId.verify_detached``.
"""

import hashlib
from dataclasses import dataclass

from .types import SIGNATURE_SIZE, InvalidKeyError


@dataclass(frozen=True, order=True)
class Signature:
    """Ed25519 detached signature."""
    signature: bytes  # 64 bytes

    def __post_init__(self) -> None:
        if not isinstance(self.signature, bytes):
            object.__setattr__(self, "signature", bytes(self.signature))
        if len(self.signature) != SIGNATURE_SIZE:
            raise InvalidKeyError(
                f"Signature must be {SIGNATURE_SIZE} bytes, got {len(self.signature)}"
            )

    def to_bytes(self) -> bytes:
        return self.signature

    @classmethod
    def from_bytes(cls, data: bytes) -> "Signature":
        """
        Create a signature from raw bytes.

        Raises:
            InvalidKeyError: If data is not 64 bytes
        """
        return cls(signature=bytes(data))

    def __bytes__(self) -> bytes:
        return self.signature

    def __repr__(self) -> str:
        return f"Signature({self.signature[:8].hex()}..)"


def fingerprint(key_material: bytes) -> str:
    """
    Short uppercase hex digest of public key material, for comparing
    identities out of band.

    Used by ``PublicId.fingerprint`` over both public keys, giving strings
    like "A7B3 C9D1 E5F2 8A4B" (first 8 bytes of SHA-256).
    """
    digest = hashlib.sha256(key_material).hexdigest().upper()[:16]
    return " ".join(digest[i : i + 4] for i in range(0, len(digest), 4))
