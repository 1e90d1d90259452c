"""
safe_crypto - Identities, anonymous encryption, signatures and shared keys

Python implementation using Ed25519 + X25519 + ChaCha20-Poly1305.
"""

import logging

from .identity import PublicId, SecretId
from .shared import SharedSecretKey
from .signature import Signature, fingerprint
from .envelope import PackedNonce, encode_packed_nonce, decode_packed_nonce
from .serialisation import serialise, deserialise
from .types import (
    NONCE_SIZE,
    PUBLIC_KEY_SIZE,
    SIGNATURE_SIZE,
    SafeCryptoError,
    InvalidKeyError,
    SerialisationError,
    EncryptError,
    DecryptError,
    DecryptBytesError,
    DecryptVerifyError,
    DeserialisationError,
    EnvelopeDeserialisationError,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    # Identities
    "PublicId",
    "SecretId",
    "SharedSecretKey",
    # Signatures
    "Signature",
    "fingerprint",
    # Envelope
    "PackedNonce",
    "encode_packed_nonce",
    "decode_packed_nonce",
    # Codec
    "serialise",
    "deserialise",
    # Constants
    "NONCE_SIZE",
    "PUBLIC_KEY_SIZE",
    "SIGNATURE_SIZE",
    # Errors
    "SafeCryptoError",
    "InvalidKeyError",
    "SerialisationError",
    "EncryptError",
    "DecryptError",
    "DecryptBytesError",
    "DecryptVerifyError",
    "DeserialisationError",
    "EnvelopeDeserialisationError",
]
