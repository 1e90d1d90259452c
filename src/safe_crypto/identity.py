"""Public and secret identities."""

import functools
import hmac
import logging
from dataclasses import dataclass
from typing import Any, Optional, Type, Union

from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey
from cryptography.hazmat.primitives.asymmetric.x25519 import X25519PrivateKey

from .keys import (
    box_public_key_from_bytes,
    derive_keypairs_from_seed,
    gen_box_keypair,
    gen_sign_keypair,
    open_anonymous,
    precompute,
    public_key_to_bytes,
    seal_anonymous,
    sign_detached,
    sign_public_key_from_bytes,
    verify_detached,
)
from .serialisation import deserialise, serialise
from .shared import SharedSecretKey
from .signature import Signature, fingerprint
from .types import (
    PUBLIC_ID_SIZE,
    PUBLIC_KEY_SIZE,
    DeserialisationError,
    EncryptError,
    InvalidKeyError,
    SerialisationError,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True, order=True)
class PublicId:
    """
    Public half of an identity.

    Holds the raw Ed25519 signing key and X25519 encryption key. Ordering
    compares the signing key first, then the encryption key, so PublicIds
    can be dictionary keys and sorted. Contains no secret material and is
    safe to publish.
    """
    sign: bytes  # 32 bytes, Ed25519
    encrypt: bytes  # 32 bytes, X25519

    def __post_init__(self) -> None:
        for name in ("sign", "encrypt"):
            value = getattr(self, name)
            if not isinstance(value, bytes):
                value = bytes(value)
                object.__setattr__(self, name, value)
            if len(value) != PUBLIC_KEY_SIZE:
                raise InvalidKeyError(
                    f"{name} key must be {PUBLIC_KEY_SIZE} bytes, got {len(value)}"
                )

    def encrypt_anonymous(self, plaintext: Any) -> bytes:
        """
        Serialise a value and encrypt it so only this identity can read it.

        The ciphertext carries no information about the sender.

        Args:
            plaintext: Value to encrypt

        Returns:
            Sealed ciphertext

        Raises:
            EncryptError: If the value cannot be serialised
        """
        try:
            data = serialise(plaintext)
        except SerialisationError as e:
            raise EncryptError(e) from e
        return self.encrypt_anonymous_bytes(data)

    def encrypt_anonymous_bytes(self, plaintext: bytes) -> bytes:
        """Encrypt raw bytes so only this identity can read them."""
        return seal_anonymous(box_public_key_from_bytes(self.encrypt), plaintext)

    def verify_detached(self, signature: Union[Signature, bytes], data: bytes) -> bool:
        """
        Check a detached signature made by the matching SecretId.

        Args:
            signature: Signature or its raw 64 bytes
            data: The signed data

        Returns:
            True if the signature is valid, False otherwise
        """
        if isinstance(signature, Signature):
            signature = signature.to_bytes()
        return verify_detached(bytes(signature), data, sign_public_key_from_bytes(self.sign))

    def fingerprint(self) -> str:
        """Human-readable fingerprint of both public keys."""
        return fingerprint(self.to_bytes())

    def to_bytes(self) -> bytes:
        """Encode as signing key (32 bytes) followed by encryption key (32 bytes)."""
        return self.sign + self.encrypt

    @classmethod
    def from_bytes(cls, data: bytes) -> "PublicId":
        """
        Decode the 64-byte form produced by ``to_bytes``.

        Raises:
            InvalidKeyError: If data is not 64 bytes
        """
        if len(data) != PUBLIC_ID_SIZE:
            raise InvalidKeyError(f"PublicId must be {PUBLIC_ID_SIZE} bytes, got {len(data)}")
        return cls(sign=bytes(data[:PUBLIC_KEY_SIZE]), encrypt=bytes(data[PUBLIC_KEY_SIZE:]))

    def __repr__(self) -> str:
        return f"PublicId({self.sign[:4].hex()}..{self.encrypt[:4].hex()}..)"


class _SecretKeys:
    """Private key material shared by every copy of a SecretId."""

    __slots__ = ("sign", "encrypt")

    def __init__(self, sign: Ed25519PrivateKey, encrypt: X25519PrivateKey):
        object.__setattr__(self, "sign", sign)
        object.__setattr__(self, "encrypt", encrypt)

    def __setattr__(self, name, value):
        raise AttributeError("secret keys are immutable")

    def raw(self) -> bytes:
        return self.sign.private_bytes_raw() + self.encrypt.private_bytes_raw()


@functools.total_ordering
class SecretId:
    """
    Private half of an identity.

    ``SecretId()`` generates fresh signing and encryption key pairs. Copies
    made with ``clone``, ``copy.copy`` or ``copy.deepcopy`` share the same
    private key objects instead of duplicating them.
    """

    __slots__ = ("_inner", "_public")

    def __init__(self) -> None:
        _, sign_sk = gen_sign_keypair()
        _, encrypt_sk = gen_box_keypair()
        self._set_keys(sign_sk, encrypt_sk)
        logger.debug("Generated identity %s", self._public.fingerprint())

    @classmethod
    def from_seed(cls, seed: bytes) -> "SecretId":
        """
        Derive an identity deterministically from a 32-byte seed.

        Raises:
            InvalidKeyError: If the seed is not 32 bytes
        """
        sign_sk, encrypt_sk = derive_keypairs_from_seed(seed)
        secret_id = cls.__new__(cls)
        secret_id._set_keys(sign_sk, encrypt_sk)
        return secret_id

    def _set_keys(self, sign_sk: Ed25519PrivateKey, encrypt_sk: X25519PrivateKey) -> None:
        self._inner = _SecretKeys(sign=sign_sk, encrypt=encrypt_sk)
        self._public = PublicId(
            sign=public_key_to_bytes(sign_sk.public_key()),
            encrypt=public_key_to_bytes(encrypt_sk.public_key()),
        )

    @property
    def public_id(self) -> PublicId:
        return self._public

    def decrypt_anonymous(self, ciphertext: bytes, cls: Optional[Type] = None) -> Any:
        """
        Open a payload produced by ``PublicId.encrypt_anonymous``.

        Args:
            ciphertext: Sealed ciphertext
            cls: Optional expected type of the decrypted value

        Returns:
            The decoded value

        Raises:
            DecryptVerifyError: If the ciphertext was not sealed for this identity
                or has been modified
            DeserialisationError: If the plaintext does not decode as ``cls``
        """
        data = self.decrypt_anonymous_bytes(ciphertext)
        try:
            return deserialise(data, cls)
        except SerialisationError as e:
            raise DeserialisationError(e) from e

    def decrypt_anonymous_bytes(self, ciphertext: bytes) -> bytes:
        """
        Open raw bytes produced by ``PublicId.encrypt_anonymous_bytes``.

        Raises:
            DecryptVerifyError: If the ciphertext does not open with our keys
        """
        return open_anonymous(
            box_public_key_from_bytes(self._public.encrypt),
            self._inner.encrypt,
            bytes(ciphertext),
        )

    def sign_detached(self, data: bytes) -> Signature:
        """Sign data, returning a signature checkable with ``PublicId.verify_detached``."""
        return Signature(sign_detached(self._inner.sign, data))

    def shared_key(self, their_public_id: PublicId) -> SharedSecretKey:
        """
        Derive the symmetric key shared with another identity.

        ``a.shared_key(b.public_id)`` equals ``b.shared_key(a.public_id)``.

        Args:
            their_public_id: The peer's public identity

        Returns:
            SharedSecretKey for this pair of identities
        """
        precomputed = precompute(
            box_public_key_from_bytes(their_public_id.encrypt),
            self._inner.encrypt,
        )
        return SharedSecretKey(precomputed)

    def clone(self) -> "SecretId":
        clone = SecretId.__new__(SecretId)
        clone._inner = self._inner
        clone._public = self._public
        return clone

    def __copy__(self) -> "SecretId":
        return self.clone()

    def __deepcopy__(self, memo) -> "SecretId":
        return self.clone()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SecretId):
            return NotImplemented
        if self._public != other._public:
            return False
        if self._inner is other._inner:
            return True
        return hmac.compare_digest(self._inner.raw(), other._inner.raw())

    def __lt__(self, other: "SecretId") -> bool:
        if not isinstance(other, SecretId):
            return NotImplemented
        return self._public < other._public

    def __hash__(self) -> int:
        return hash(self._public)

    def __repr__(self) -> str:
        return f"SecretId(public={self._public!r}, secret=<hidden>)"
