"""Tests for the value codec."""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple, TypeVar, Union

import pytest
from safe_crypto.serialisation import serialise, deserialise
from safe_crypto.types import SerialisationError
from .test_vectors import TEST_VALUES


@dataclass
class Point:
    x: int
    y: int
    label: bytes = b""


class TestSerialise:
    """Test encoding values."""

    @pytest.mark.parametrize("name", list(TEST_VALUES.keys()))
    def test_values(self, name: str) -> None:
        value = TEST_VALUES[name]
        assert deserialise(serialise(value)) == value

    def test_deterministic(self) -> None:
        """Key order does not change the encoding."""
        assert serialise({"b": 1, "a": 2}) == serialise({"a": 2, "b": 1})

    def test_dataclass(self) -> None:
        point = Point(x=1, y=2, label=b"\x01")
        assert deserialise(serialise(point), Point) == point

    def test_int_keys_keep_their_type(self) -> None:
        decoded = deserialise(serialise({1: "one", "1": "string one"}))

        assert decoded == {1: "one", "1": "string one"}
        assert set(map(type, decoded)) == {int, str}

    def test_tag_shaped_dict_stays_dict(self) -> None:
        """A user dict that looks like a tagged value is not mistaken for one."""
        for value in ({"__bytes__": "AAAA"}, {"__tuple__": [1]}, {"__items__": [], "x": 1}):
            decoded = deserialise(serialise(value))
            assert isinstance(decoded, dict)
            assert decoded == value

    def test_nested_tuples(self) -> None:
        value = {"point": (1, (2, 3)), "items": [(4,)]}
        decoded = deserialise(serialise(value))

        assert decoded == value
        assert isinstance(decoded["point"][1], tuple)
        assert isinstance(decoded["items"][0], tuple)

    def test_dataclass_with_tuple_field(self) -> None:
        point = Point(x=1, y=2, label=b"")
        decoded = deserialise(serialise({"p": point, "pair": (point.x, point.y)}))

        assert decoded["pair"] == (1, 2)
        assert decoded["p"] == {"x": 1, "y": 2, "label": b""}

    def test_unsupported_type(self) -> None:
        with pytest.raises(SerialisationError):
            serialise(object())

    def test_unsupported_key_type(self) -> None:
        with pytest.raises(SerialisationError):
            serialise({frozenset(): 1})

    def test_circular_reference(self) -> None:
        value = []
        value.append(value)

        with pytest.raises(SerialisationError):
            serialise(value)

    def test_nan_rejected(self) -> None:
        with pytest.raises(SerialisationError):
            serialise(float("nan"))


class TestDeserialise:
    """Test decoding values."""

    def test_invalid_json(self) -> None:
        with pytest.raises(SerialisationError):
            deserialise(b"{not json")

    def test_invalid_utf8(self) -> None:
        with pytest.raises(SerialisationError):
            deserialise(b"\xff\xfe")

    def test_invalid_base64(self) -> None:
        with pytest.raises(SerialisationError):
            deserialise(b'{"__bytes__":"***"}')

    def test_type_check(self) -> None:
        assert deserialise(serialise("text"), str) == "text"

        with pytest.raises(SerialisationError, match="Expected int"):
            deserialise(serialise("text"), int)

    def test_bool_is_not_int(self) -> None:
        with pytest.raises(SerialisationError):
            deserialise(serialise(True), int)

    def test_int_accepted_as_float(self) -> None:
        assert deserialise(serialise(3), float) == 3.0

    def test_tuple(self) -> None:
        assert deserialise(serialise((1, 2)), tuple) == (1, 2)

        with pytest.raises(SerialisationError):
            deserialise(serialise([1, 2]), tuple)

    def test_malformed_tags(self) -> None:
        for data in (b'{"__tuple__":5}', b'{"__items__":[[1]]}', b'{"__items__":[[[1],2]]}'):
            with pytest.raises(SerialisationError):
                deserialise(data)

    def test_generic_types(self) -> None:
        assert deserialise(serialise([1, 2]), List[int]) == [1, 2]
        assert deserialise(serialise({"a": 1}), Dict[str, int]) == {"a": 1}
        assert deserialise(serialise(None), Optional[int]) is None
        assert deserialise(serialise(5), Optional[int]) == 5
        assert deserialise(serialise("x"), Union[int, str]) == "x"

    def test_generic_type_mismatch(self) -> None:
        for cls in (List[int], Dict[str, int], Optional[int], Tuple[int, int]):
            with pytest.raises(SerialisationError):
                deserialise(serialise("text"), cls)

    def test_bool_is_not_optional_int(self) -> None:
        with pytest.raises(SerialisationError):
            deserialise(serialise(True), Optional[int])

    def test_uncheckable_type(self) -> None:
        with pytest.raises(SerialisationError, match="Cannot check"):
            deserialise(serialise("text"), TypeVar("X"))

    def test_any(self) -> None:
        assert deserialise(serialise([1, "a"]), Any) == [1, "a"]

    def test_dataclass_wrong_fields(self) -> None:
        with pytest.raises(SerialisationError):
            deserialise(serialise({"x": 1}), Point)

    def test_dataclass_not_a_mapping(self) -> None:
        with pytest.raises(SerialisationError, match="Expected mapping"):
            deserialise(serialise([1, 2]), Point)
