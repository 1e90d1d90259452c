"""Test vectors shared by the safe_crypto tests."""

# Test seeds (32-byte hex strings)
ALICE_SEED_HEX = "0000000000000000000000000000000000000000000000000000000000000001"
BOB_SEED_HEX = "0000000000000000000000000000000000000000000000000000000000000002"
CAROL_SEED_HEX = "0000000000000000000000000000000000000000000000000000000000000003"

# Test payloads covering edge cases
TEST_BYTES = {
    "empty": b"",
    "single": b"\x00",
    "small": bytes([1, 2, 3]),
    "all_values": bytes(range(256)),
    "large": b"\xab" * 65536,
}

TEST_VALUES = {
    "string": "Hello, World!",
    "unicode": "Café 你好 \U0001F44B",
    "integer": 42,
    "negative": -7,
    "float": 3.5,
    "boolean": True,
    "none": None,
    "list": [1, "two", 3.0, None],
    "dict": {"key": "value", "num": 42, "nested": {"a": [1, 2]}},
    "bytes": b"\x00\x01\xfe\xff",
    "tuple": (1, (2, "x"), []),
    "int_keys": {1: "one", 2: "two"},
    "tuple_keys": {(1, 2): "pair"},
    "tag_shaped": {"__bytes__": "AAAA"},
    "tag_shaped_nested": [{"__tuple__": [1, 2]}, {"__items__": []}],
}
