"""Precomputed shared-secret encryption between two identities."""

import hmac
import logging
from typing import Any, Optional, Type

from .envelope import PackedNonce, decode_packed_nonce, encode_packed_nonce
from .keys import decrypt_precomputed, encrypt_precomputed, gen_nonce
from .serialisation import deserialise, serialise
from .types import (
    SYMMETRIC_KEY_SIZE,
    DeserialisationError,
    EncryptError,
    EnvelopeDeserialisationError,
    InvalidKeyError,
    SerialisationError,
)

logger = logging.getLogger(__name__)


class SharedSecretKey:
    """
    Symmetric key shared by one pair of identities.

    Created by ``SecretId.shared_key``. The key is derived once and can be
    reused for any number of messages; every encryption draws a fresh random
    nonce and ships it inside a PackedNonce envelope, so callers never
    handle nonces.

    Instances are immutable and safe to share between threads. Copies refer
    to the same key bytes.
    """

    __slots__ = ("_precomputed",)

    def __init__(self, precomputed: bytes):
        if len(precomputed) != SYMMETRIC_KEY_SIZE:
            raise InvalidKeyError(
                f"Precomputed key must be {SYMMETRIC_KEY_SIZE} bytes, got {len(precomputed)}"
            )
        self._precomputed = bytes(precomputed)

    def encrypt_bytes(self, plaintext: bytes) -> bytes:
        """
        Encrypt raw bytes under this key.

        Args:
            plaintext: Data to encrypt

        Returns:
            Encoded PackedNonce envelope

        Raises:
            EncryptError: If the envelope cannot be encoded
        """
        nonce = gen_nonce()
        ciphertext = encrypt_precomputed(self._precomputed, nonce, plaintext)
        try:
            return encode_packed_nonce(PackedNonce(nonce=nonce, ciphertext=ciphertext))
        except SerialisationError as e:
            raise EncryptError(e) from e

    def encrypt(self, plaintext: Any) -> bytes:
        """
        Serialise a value and encrypt it under this key.

        Raises:
            EncryptError: If the value cannot be serialised
        """
        try:
            data = serialise(plaintext)
        except SerialisationError as e:
            raise EncryptError(e) from e
        return self.encrypt_bytes(data)

    def decrypt_bytes(self, envelope: bytes) -> bytes:
        """
        Decrypt an envelope produced by ``encrypt_bytes``.

        Args:
            envelope: Encoded PackedNonce

        Returns:
            The plaintext bytes

        Raises:
            EnvelopeDeserialisationError: If the envelope cannot be parsed
            DecryptVerifyError: If authentication fails
        """
        try:
            packed = decode_packed_nonce(envelope)
        except SerialisationError as e:
            logger.debug("Rejected malformed envelope: %s", e)
            raise EnvelopeDeserialisationError(e) from e

        return decrypt_precomputed(self._precomputed, packed.nonce, packed.ciphertext)

    def decrypt(self, envelope: bytes, cls: Optional[Type] = None) -> Any:
        """
        Decrypt an envelope produced by ``encrypt`` and deserialise the result.

        Args:
            envelope: Encoded PackedNonce
            cls: Optional expected type of the decrypted value

        Returns:
            The decoded value

        Raises:
            EnvelopeDeserialisationError: If the envelope cannot be parsed
            DecryptVerifyError: If authentication fails
            DeserialisationError: If the plaintext does not decode as ``cls``
        """
        data = self.decrypt_bytes(envelope)
        try:
            return deserialise(data, cls)
        except SerialisationError as e:
            raise DeserialisationError(e) from e

    def clone(self) -> "SharedSecretKey":
        clone = SharedSecretKey.__new__(SharedSecretKey)
        clone._precomputed = self._precomputed
        return clone

    def __copy__(self) -> "SharedSecretKey":
        return self.clone()

    def __deepcopy__(self, memo) -> "SharedSecretKey":
        return self.clone()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SharedSecretKey):
            return NotImplemented
        return hmac.compare_digest(self._precomputed, other._precomputed)

    def __repr__(self) -> str:
        return "SharedSecretKey(<hidden>)"
