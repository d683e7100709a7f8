import pytest

from blsave.coerce import (
    clamp_index,
    coerce_bool,
    coerce_color,
    coerce_enum,
    coerce_float,
    coerce_index,
    coerce_int,
    coerce_string,
    enum_table,
)
from blsave.entities import Color, ColorFx


@pytest.mark.parametrize(
    "token, expected",
    [("12", 12), (" -3 ", -3), ("+4", 4), ("2.9", 2), ("abc", 7), ("", 7), (None, 7), ("1_0", 7), ("nan", 7)],
)
def test_coerce_int(token, expected):
    assert coerce_int(token, 7) == expected


@pytest.mark.parametrize(
    "token, expected",
    [("1.5", 1.5), ("-0.25", -0.25), (".5", 0.5), ("3", 3.0), ("1e2", 100.0),
     ("nan", -1.0), ("inf", -1.0), ("-Infinity", -1.0), ("1e999", -1.0), ("x1", -1.0), (None, -1.0)],
)
def test_coerce_float(token, expected):
    assert coerce_float(token, -1.0) == expected


def test_coerce_bool_treats_any_nonzero_number_as_true():
    assert coerce_bool("1", False) is True
    assert coerce_bool("2", False) is True
    assert coerce_bool("0", True) is False
    assert coerce_bool("maybe", False) is False
    assert coerce_bool(None, True) is True


def test_coerce_enum_matches_codes_and_names():
    table = enum_table(ColorFx)
    assert coerce_enum("3", table, ColorFx.NONE) is ColorFx.GLOW
    assert coerce_enum("GLOW", table, ColorFx.NONE) is ColorFx.GLOW
    assert coerce_enum("Rainbow", table, ColorFx.NONE) is ColorFx.RAINBOW
    assert coerce_enum("99", table, ColorFx.NONE) is ColorFx.NONE
    assert coerce_enum(None, table, ColorFx.PEARL) is ColorFx.PEARL


def test_coerce_enum_case_sensitive_lookup_falls_back_to_default():
    table = enum_table(ColorFx)
    assert coerce_enum("GLOW", table, ColorFx.NONE, case_insensitive=False) is ColorFx.NONE
    assert coerce_enum("glow", table, ColorFx.NONE, case_insensitive=False) is ColorFx.GLOW


def test_coerce_string_reassembles_quoted_tokens():
    assert coerce_string(['"Test', 'House"']) == "Test House"
    assert coerce_string(["one", "two"], sep="\n") == "one\ntwo"
    assert coerce_string('"') == '"'


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("a\\tb", "a\tb"),
        ("line\\nnext", "line\nnext"),
        ("\\x41\\x42", "AB"),
        ("\\x80", "€"),
        ("\\xZZ", "\\xZZ"),
        ("\\x4", "\\x4"),
        ("\\x", "\\x"),
        ("end\\", "end\\"),
        ('say \\"hi\\"', 'say "hi"'),
        ("\\\\", "\\"),
        ("\\c0hi", "\x02\x01hi"),
        ("a\\c0", "a\x01"),
        ("\\c3red", "\x04red"),
        ("\\cr", "\x0f"),
        ("\\cz", "\\cz"),
        ("\\c", "\\c"),
    ],
)
def test_coerce_string_escapes(raw, expected):
    assert coerce_string(raw) == expected


def test_clamp_index_clamps_instead_of_wrapping():
    assert clamp_index(9999, 64) == 63
    assert clamp_index(-5, 64) == 0
    assert clamp_index(10, 64) == 10
    assert clamp_index(3, 0) == 0


def test_coerce_index_defaults_out_of_range_values():
    assert coerce_index("9999", 64) == 0
    assert coerce_index("10", 2) == 0
    assert coerce_index("1", 2) == 1
    assert coerce_index("-1", 64) == 0
    assert coerce_index("blue", 64, default=5) == 5


def test_coerce_color_accepts_unit_and_byte_scales():
    assert coerce_color(["1.000000", "0.5", "0", "1"]) == Color(1.0, 0.5, 0.0, 1.0)
    assert coerce_color(["255", "0", "0", "255"]) == Color(1.0, 0.0, 0.0, 1.0)
    assert coerce_color(["-1", "0", "0", "1"]) == Color(0.0, 0.0, 0.0, 1.0)


@pytest.mark.parametrize(
    "tokens",
    [[], ["1", "0", "0"], ["1", "0", "0", "1", "1"], ["1", "x", "0", "1"], ["nan", "0", "0", "1"]],
)
def test_coerce_color_rejects_malformed_entries(tokens):
    assert coerce_color(tokens) is None


def test_oversized_integer_tokens_fall_back_to_default():
    huge = "9" * 5000
    assert coerce_int(huge, 7) == 7
    assert coerce_int("-" + huge, 7) == 7
    assert coerce_index(huge, 64) == 0
    assert coerce_float(huge, -1.0) == -1.0
    assert coerce_bool(huge, False) is False


@pytest.mark.parametrize("token", ["3", "03", "+3", "3.0", " 3 ", "3.9"])
def test_coerce_enum_accepts_numeric_spellings(token):
    assert coerce_enum(token, enum_table(ColorFx), ColorFx.NONE) is ColorFx.GLOW


def test_coerce_enum_numeric_token_outside_table_is_default():
    table = enum_table(ColorFx)
    assert coerce_enum("-0", table, ColorFx.PEARL) is ColorFx.NONE
    assert coerce_enum("1e999", table, ColorFx.PEARL) is ColorFx.PEARL
    assert coerce_enum("9" * 5000, table, ColorFx.PEARL) is ColorFx.PEARL
