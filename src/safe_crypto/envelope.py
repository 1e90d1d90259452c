"""PackedNonce envelope encoding and decoding."""

from dataclasses import dataclass

from .types import (
    LENGTH_PREFIX_SIZE,
    NONCE_SIZE,
    PACKED_NONCE_HEADER_SIZE,
    SerialisationError,
)


@dataclass(frozen=True)
class PackedNonce:
    """Nonce and ciphertext produced by one shared-key encryption."""
    nonce: bytes  # 12 bytes
    ciphertext: bytes  # variable (message + 16-byte tag)


def encode_packed_nonce(packed: PackedNonce) -> bytes:
    """
    Encode a PackedNonce to bytes.

    Format (20-byte header + ciphertext):
        [0-11]   nonce (12 bytes)
        [12-19]  ciphertext length (8 bytes, little-endian uint64)
        [20+]    ciphertext (variable)

    Args:
        packed: PackedNonce to encode

    Returns:
        Encoded bytes

    Raises:
        SerialisationError: If the nonce has the wrong size
    """
    if len(packed.nonce) != NONCE_SIZE:
        raise SerialisationError(f"Nonce must be {NONCE_SIZE} bytes, got {len(packed.nonce)}")

    return (
        bytes(packed.nonce)
        + len(packed.ciphertext).to_bytes(LENGTH_PREFIX_SIZE, byteorder="little")
        + bytes(packed.ciphertext)
    )


def decode_packed_nonce(data: bytes) -> PackedNonce:
    """
    Decode bytes into a PackedNonce.

    Args:
        data: Encoded envelope bytes

    Returns:
        Decoded PackedNonce

    Raises:
        SerialisationError: If data is truncated or has trailing bytes
    """
    if len(data) < PACKED_NONCE_HEADER_SIZE:
        raise SerialisationError(
            f"Data too short: {len(data)} bytes (minimum {PACKED_NONCE_HEADER_SIZE})"
        )

    nonce = bytes(data[:NONCE_SIZE])
    length = int.from_bytes(data[NONCE_SIZE:PACKED_NONCE_HEADER_SIZE], byteorder="little")
    ciphertext = bytes(data[PACKED_NONCE_HEADER_SIZE:])

    if len(ciphertext) != length:
        raise SerialisationError(
            f"Ciphertext length mismatch: header says {length}, got {len(ciphertext)}"
        )

    return PackedNonce(nonce=nonce, ciphertext=ciphertext)
