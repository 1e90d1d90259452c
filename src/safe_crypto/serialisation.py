"""Generic value codec used before encryption and after decryption.

Values are encoded as compact JSON. Types JSON cannot represent are
wrapped in single-key tagged objects:

- ``bytes`` become ``{"__bytes__": "<base64>"}``
- tuples become ``{"__tuple__": [...]}``
- dicts with non-string keys, or with a key that is itself a tag, become
  ``{"__items__": [[key, value], ...]}``
- dataclass instances are encoded as a mapping of their fields

Every other dict is written as a plain JSON object, so a decoded object
with a single tag key is always a tagged value.

``deserialise`` can rebuild a dataclass (nested dataclass fields are
not rebuilt) or check the decoded value against a type, including
``typing`` generics such as ``List[int]`` or ``Optional[str]``.
"""

import base64
import dataclasses
import json
from typing import Any, Optional, Tuple, Type, TypeVar, Union, get_args, get_origin

from .types import SafeCryptoError, SerialisationError

T = TypeVar("T")

_BYTES_TAG = "__bytes__"
_TUPLE_TAG = "__tuple__"
_ITEMS_TAG = "__items__"
_TAGS = frozenset((_BYTES_TAG, _TUPLE_TAG, _ITEMS_TAG))


def _encode(value: Any) -> Any:
    if value is None or isinstance(value, (str, int, float)):
        return value
    if isinstance(value, (bytes, bytearray)):
        return {_BYTES_TAG: base64.b64encode(bytes(value)).decode("ascii")}
    if isinstance(value, tuple):
        return {_TUPLE_TAG: [_encode(item) for item in value]}
    if isinstance(value, list):
        return [_encode(item) for item in value]
    if isinstance(value, dict):
        if all(isinstance(key, str) and key not in _TAGS for key in value):
            return {key: _encode(item) for key, item in value.items()}
        return {_ITEMS_TAG: [[_encode(key), _encode(item)] for key, item in value.items()]}
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {f.name: _encode(getattr(value, f.name)) for f in dataclasses.fields(value)}
    raise TypeError(f"Object of type {type(value).__name__} is not serialisable")


def _object_hook(obj: dict) -> Any:
    if len(obj) != 1:
        return obj
    (tag, payload), = obj.items()
    if tag == _BYTES_TAG:
        return base64.b64decode(payload, validate=True)
    if tag == _TUPLE_TAG:
        return tuple(payload)
    if tag == _ITEMS_TAG:
        return {key: item for key, item in payload}
    return obj


def serialise(value: Any) -> bytes:
    """
    Encode a value to bytes.

    Args:
        value: JSON-compatible value, bytes, tuple, or dataclass instance

    Returns:
        UTF-8 encoded JSON

    Raises:
        SerialisationError: If the value cannot be encoded
    """
    try:
        text = json.dumps(
            _encode(value),
            separators=(",", ":"),
            sort_keys=True,
            allow_nan=False,
        )
    except (TypeError, ValueError, RecursionError) as e:
        raise SerialisationError(f"Cannot serialise value: {e}") from e
    return text.encode("utf-8")


def _type_name(cls: Any) -> str:
    return getattr(cls, "__name__", None) or repr(cls)


def _expected_types(cls: Any) -> Tuple[type, ...]:
    """Flatten ``cls`` into plain classes usable with ``isinstance``."""
    origin = get_origin(cls)
    if origin is Union:
        return tuple(t for arg in get_args(cls) for t in _expected_types(arg))
    return (origin or cls,)


def deserialise(data: bytes, cls: Optional[Type[T]] = None) -> Any:
    """
    Decode bytes produced by ``serialise``.

    Args:
        data: Encoded bytes
        cls: Optional expected type. Dataclasses are rebuilt from their
            fields; other types, including subscripted generics, are
            checked against their outer class.

    Returns:
        The decoded value

    Raises:
        SerialisationError: If the bytes are not a valid encoding of ``cls``
    """
    try:
        value = json.loads(bytes(data).decode("utf-8"), object_hook=_object_hook)
    except (UnicodeDecodeError, TypeError, ValueError, RecursionError) as e:
        raise SerialisationError(f"Cannot deserialise data: {e}") from e

    if cls is None or cls is Any:
        return value

    if dataclasses.is_dataclass(cls):
        if not isinstance(value, dict):
            raise SerialisationError(
                f"Expected mapping for {cls.__name__}, got {type(value).__name__}"
            )
        try:
            return cls(**value)
        except (TypeError, ValueError, SafeCryptoError) as e:
            raise SerialisationError(f"Cannot build {cls.__name__}: {e}") from e

    expected = _expected_types(cls)

    # bool is a subclass of int but never a valid int payload here
    if isinstance(value, bool) and bool not in expected:
        raise SerialisationError(f"Expected {_type_name(cls)}, got bool")

    if float in expected and int not in expected and type(value) is int:
        return float(value)

    try:
        matches = isinstance(value, expected)
    except TypeError as e:
        raise SerialisationError(f"Cannot check value against {_type_name(cls)}: {e}") from e

    if not matches:
        raise SerialisationError(
            f"Expected {_type_name(cls)}, got {type(value).__name__}"
        )
    return value
