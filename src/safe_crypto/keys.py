"""Primitive cryptographic operations for safe_crypto.

Thin wrappers around the ``cryptography`` library:

- Ed25519 for detached signatures
- X25519 for key agreement
- HKDF-SHA256 for key derivation
- ChaCha20-Poly1305 for authenticated encryption

Randomness comes from ``os.urandom`` and the library's key generation,
both backed by the kernel CSPRNG. A failing random source raises from
here and is not converted into a crypto error.
"""

import os
from typing import Tuple

from cryptography.exceptions import InvalidSignature, InvalidTag
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey, Ed25519PublicKey
from cryptography.hazmat.primitives.asymmetric.x25519 import X25519PrivateKey, X25519PublicKey
from cryptography.hazmat.primitives.ciphers.aead import ChaCha20Poly1305
from cryptography.hazmat.primitives.hashes import SHA256
from cryptography.hazmat.primitives.kdf.hkdf import HKDF

from .types import (
    NONCE_SIZE,
    PRECOMPUTED_KEY_INFO,
    PUBLIC_KEY_SIZE,
    SEALED_BOX_KEY_INFO,
    SEALED_BOX_NONCE_INFO,
    SEALED_BOX_OVERHEAD,
    SEED_DERIVATION_SALT,
    SEED_ENCRYPT_INFO,
    SEED_SIGN_INFO,
    SEED_SIZE,
    SIGNATURE_SIZE,
    SYMMETRIC_KEY_SIZE,
    DecryptVerifyError,
    InvalidKeyError,
)


def _hkdf(key_material: bytes, length: int, salt: bytes, info: bytes) -> bytes:
    hkdf = HKDF(algorithm=SHA256(), length=length, salt=salt, info=info)
    return hkdf.derive(key_material)


def gen_sign_keypair() -> Tuple[Ed25519PublicKey, Ed25519PrivateKey]:
    """Generate a random Ed25519 signing key pair."""
    private_key = Ed25519PrivateKey.generate()
    return private_key.public_key(), private_key


def gen_box_keypair() -> Tuple[X25519PublicKey, X25519PrivateKey]:
    """Generate a random X25519 encryption key pair."""
    private_key = X25519PrivateKey.generate()
    return private_key.public_key(), private_key


def derive_keypairs_from_seed(seed: bytes) -> Tuple[Ed25519PrivateKey, X25519PrivateKey]:
    """
    Derive signing and encryption private keys from a 32-byte seed using HKDF-SHA256.

    Args:
        seed: 32-byte seed

    Returns:
        Tuple of (signing_private_key, encryption_private_key)

    Raises:
        InvalidKeyError: If the seed is not 32 bytes
    """
    if len(seed) != SEED_SIZE:
        raise InvalidKeyError(f"Seed must be {SEED_SIZE} bytes, got {len(seed)}")

    sign_seed = _hkdf(seed, 32, SEED_DERIVATION_SALT, SEED_SIGN_INFO)
    encrypt_seed = _hkdf(seed, 32, SEED_DERIVATION_SALT, SEED_ENCRYPT_INFO)

    return (
        Ed25519PrivateKey.from_private_bytes(sign_seed),
        X25519PrivateKey.from_private_bytes(encrypt_seed),
    )


def sign_detached(private_key: Ed25519PrivateKey, data: bytes) -> bytes:
    """Sign data with an Ed25519 key, returning the 64-byte signature."""
    return private_key.sign(data)


def verify_detached(signature: bytes, data: bytes, public_key: Ed25519PublicKey) -> bool:
    """
    Verify a detached Ed25519 signature.

    Args:
        signature: 64-byte signature
        data: The signed data
        public_key: The signer's Ed25519 public key

    Returns:
        True if the signature is valid, False otherwise
    """
    if len(signature) != SIGNATURE_SIZE:
        return False

    try:
        public_key.verify(signature, data)
        return True
    except InvalidSignature:
        return False


def _sealed_box_cipher(
    shared_secret: bytes,
    ephemeral_pub_bytes: bytes,
    recipient_pub_bytes: bytes,
) -> Tuple[ChaCha20Poly1305, bytes]:
    salt = ephemeral_pub_bytes + recipient_pub_bytes
    key = _hkdf(shared_secret, SYMMETRIC_KEY_SIZE, salt, SEALED_BOX_KEY_INFO)
    nonce = _hkdf(shared_secret, NONCE_SIZE, salt, SEALED_BOX_NONCE_INFO)
    return ChaCha20Poly1305(key), nonce


def seal_anonymous(recipient_public_key: X25519PublicKey, plaintext: bytes) -> bytes:
    """
    Encrypt data for a recipient without identifying the sender.

    Format:
        [0-31]  ephemeralPublicKey (32 bytes)
        [32+]   ciphertext + 16-byte tag

    A fresh ephemeral key pair is generated for every call, so the key and
    nonce derived from it are never reused.

    Args:
        recipient_public_key: Recipient's X25519 public key
        plaintext: Data to encrypt

    Returns:
        Sealed ciphertext
    """
    ephemeral_public, ephemeral_private = gen_box_keypair()
    ephemeral_pub_bytes = public_key_to_bytes(ephemeral_public)

    shared_secret = ephemeral_private.exchange(recipient_public_key)
    cipher, nonce = _sealed_box_cipher(
        shared_secret,
        ephemeral_pub_bytes,
        public_key_to_bytes(recipient_public_key),
    )

    return ephemeral_pub_bytes + cipher.encrypt(nonce, plaintext, None)


def open_anonymous(
    recipient_public_key: X25519PublicKey,
    recipient_private_key: X25519PrivateKey,
    ciphertext: bytes,
) -> bytes:
    """
    Open a sealed box produced by ``seal_anonymous``.

    Args:
        recipient_public_key: Our X25519 public key
        recipient_private_key: Our X25519 private key
        ciphertext: Sealed ciphertext

    Returns:
        The plaintext

    Raises:
        DecryptVerifyError: If the box does not open with these keys
    """
    if len(ciphertext) < SEALED_BOX_OVERHEAD:
        raise DecryptVerifyError()

    ephemeral_pub_bytes = bytes(ciphertext[:PUBLIC_KEY_SIZE])

    try:
        shared_secret = recipient_private_key.exchange(
            X25519PublicKey.from_public_bytes(ephemeral_pub_bytes)
        )
    except ValueError:
        # low-order ephemeral point
        raise DecryptVerifyError() from None

    cipher, nonce = _sealed_box_cipher(
        shared_secret,
        ephemeral_pub_bytes,
        public_key_to_bytes(recipient_public_key),
    )

    try:
        return cipher.decrypt(nonce, bytes(ciphertext[PUBLIC_KEY_SIZE:]), None)
    except InvalidTag:
        raise DecryptVerifyError() from None


def precompute(their_public_key: X25519PublicKey, my_private_key: X25519PrivateKey) -> bytes:
    """
    Derive a symmetric key from our private key and a peer's public key.

    X25519 is symmetric, so both peers derive the same key.

    Args:
        their_public_key: Peer's X25519 public key
        my_private_key: Our X25519 private key

    Returns:
        32-byte symmetric key

    Raises:
        InvalidKeyError: If the peer key is a low-order point
    """
    try:
        shared_secret = my_private_key.exchange(their_public_key)
    except ValueError as e:
        raise InvalidKeyError(f"Key agreement failed: {e}") from e

    return _hkdf(shared_secret, SYMMETRIC_KEY_SIZE, b"", PRECOMPUTED_KEY_INFO)


def gen_nonce() -> bytes:
    """Generate a random 12-byte nonce."""
    return os.urandom(NONCE_SIZE)


def encrypt_precomputed(key: bytes, nonce: bytes, plaintext: bytes) -> bytes:
    """Encrypt with a precomputed key, returning ciphertext + 16-byte tag."""
    return ChaCha20Poly1305(key).encrypt(nonce, plaintext, None)


def decrypt_precomputed(key: bytes, nonce: bytes, ciphertext: bytes) -> bytes:
    """
    Decrypt with a precomputed key.

    Raises:
        DecryptVerifyError: If authentication fails
    """
    if len(nonce) != NONCE_SIZE:
        raise DecryptVerifyError()

    try:
        return ChaCha20Poly1305(key).decrypt(nonce, ciphertext, None)
    except InvalidTag:
        raise DecryptVerifyError() from None


def public_key_to_bytes(public_key) -> bytes:
    """Convert an X25519 or Ed25519 public key to raw bytes."""
    return public_key.public_bytes_raw()


def sign_public_key_from_bytes(data: bytes) -> Ed25519PublicKey:
    """Create an Ed25519 public key from raw bytes."""
    if len(data) != PUBLIC_KEY_SIZE:
        raise InvalidKeyError(f"Public key must be {PUBLIC_KEY_SIZE} bytes, got {len(data)}")
    try:
        return Ed25519PublicKey.from_public_bytes(data)
    except ValueError as e:
        raise InvalidKeyError(f"Invalid Ed25519 public key: {e}") from e


def box_public_key_from_bytes(data: bytes) -> X25519PublicKey:
    """Create an X25519 public key from raw bytes."""
    if len(data) != PUBLIC_KEY_SIZE:
        raise InvalidKeyError(f"Public key must be {PUBLIC_KEY_SIZE} bytes, got {len(data)}")
    try:
        return X25519PublicKey.from_public_bytes(data)
    except ValueError as e:
        raise InvalidKeyError(f"Invalid X25519 public key: {e}") from e
