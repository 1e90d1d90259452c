"""Constants and exception types for safe_crypto."""

from typing import Optional


# Key and signature sizes
PUBLIC_KEY_SIZE = 32
SECRET_KEY_SIZE = 32
SEED_SIZE = 32
SIGNATURE_SIZE = 64
PUBLIC_ID_SIZE = 2 * PUBLIC_KEY_SIZE

# Symmetric scheme (ChaCha20-Poly1305)
SYMMETRIC_KEY_SIZE = 32
NONCE_SIZE = 12
TAG_SIZE = 16

# Sealed box: ephemeral public key || ciphertext + tag
SEALED_BOX_OVERHEAD = PUBLIC_KEY_SIZE + TAG_SIZE

# PackedNonce: nonce || u64 ciphertext length || ciphertext
LENGTH_PREFIX_SIZE = 8
PACKED_NONCE_HEADER_SIZE = NONCE_SIZE + LENGTH_PREFIX_SIZE

# Key derivation constants
SEED_DERIVATION_SALT = b"SafeCrypto-v1-identity"
SEED_SIGN_INFO = b"ed25519-key"
SEED_ENCRYPT_INFO = b"x25519-key"

# HKDF info labels
SEALED_BOX_KEY_INFO = b"SafeCryptoV1-SealedBox-Key"
SEALED_BOX_NONCE_INFO = b"SafeCryptoV1-SealedBox-Nonce"
PRECOMPUTED_KEY_INFO = b"SafeCryptoV1-Precomputed"


# Exception types
class SafeCryptoError(Exception):
    """Base exception for safe_crypto errors."""
    pass


class InvalidKeyError(SafeCryptoError):
    """Invalid key, seed or signature bytes."""
    pass


class SerialisationError(SafeCryptoError):
    """A value could not be encoded to, or decoded from, bytes."""
    pass


class EncryptError(SafeCryptoError):
    """Error serialising a message before encryption."""

    def __init__(self, cause: SerialisationError):
        super().__init__(f"error serialising message: {cause}")
        self.cause = cause


class DecryptError(SafeCryptoError):
    """Base for failures of typed decryption."""
    pass


class DecryptBytesError(DecryptError):
    """Base for failures of byte-level decryption."""
    pass


class DecryptVerifyError(DecryptBytesError):
    """Decryption or authentication failed.

    Wrong key, wrong recipient and tampered ciphertext all raise this
    error with the same message.
    """

    def __init__(self) -> None:
        super().__init__("error decrypting/verifying message")


class DeserialisationError(DecryptError):
    """Decrypted bytes could not be decoded into the requested type."""

    message = "error deserialising decrypted message"

    def __init__(self, cause: Optional[SerialisationError] = None):
        if cause is None:
            super().__init__(self.message)
        else:
            super().__init__(f"{self.message}: {cause}")
        self.cause = cause


class EnvelopeDeserialisationError(DeserialisationError, DecryptBytesError):
    """Envelope bytes could not be parsed into a nonce and ciphertext."""

    message = "error deserialising envelope"
