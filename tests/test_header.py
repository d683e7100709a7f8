import io

import pytest

from blsave.config import ReaderOptions
from blsave.entities import COLORSET_SIZE, DEFAULT_COLOR, Color
from blsave.errors import HeaderError, TruncatedHeaderError
from blsave.header import OLDEST_FORMAT_VERSION, decode_header, decode_version, parse_brick_count_line
from blsave.lines import LineSource

from conftest import BANNER, build_save


def _decode(data: bytes, options: ReaderOptions = ReaderOptions()):
    source = LineSource(io.BytesIO(data), options)
    return decode_header(source, options), source


@pytest.mark.parametrize("declared", [0, 10, 64, 200])
def test_colorset_always_has_64_entries(declared):
    colors = tuple("0.5 0.5 0.5 1" for _ in range(declared))
    metadata, _ = _decode(build_save(colors=colors))
    assert len(metadata.colors) == COLORSET_SIZE
    assert metadata.declared_color_count == min(declared, COLORSET_SIZE)
    assert metadata.declared_brick_count == 1


def test_short_palette_is_padded_with_default_color():
    metadata, _ = _decode(
        build_save(marker="1", colors=("255 0 0 255", "0 255 0 255"), linecount="Linecount 1")
    )
    assert metadata.format_version == 1
    assert metadata.description == "Test House"
    assert metadata.colors[0] == Color(1.0, 0.0, 0.0, 1.0)
    assert metadata.colors[1] == Color(0.0, 1.0, 0.0, 1.0)
    assert all(color == DEFAULT_COLOR for color in metadata.colors[2:])
    assert metadata.declared_color_count == 2


def test_malformed_palette_entry_does_not_stop_the_palette():
    metadata, _ = _decode(build_save(colors=("1 0 0 1", "red green blue", "0 0 1 1")))
    assert metadata.colors[0] == Color(1.0, 0.0, 0.0, 1.0)
    assert metadata.colors[1] == DEFAULT_COLOR
    assert metadata.colors[2] == Color(0.0, 0.0, 1.0, 1.0)
    assert metadata.declared_color_count == 3


def test_entries_past_64_are_ignored():
    colors = tuple(["0 0 0 1"] * 64 + ["1 1 1 1"] * 10)
    metadata, _ = _decode(build_save(colors=colors))
    assert set(metadata.colors) == {Color(0.0, 0.0, 0.0, 1.0)}


def test_multi_line_description_is_joined_and_unescaped():
    metadata, _ = _decode(build_save(description=("Line one", "tab\\there", '"quoted"')))
    assert metadata.description_lines == ("Line one", "tab\there", "quoted")
    assert metadata.description == "Line one\ntab\there\nquoted"


def test_empty_description():
    metadata, _ = _decode(build_save(description=()))
    assert metadata.description == ""
    assert metadata.colors[0] == Color(1.0, 0.0, 0.0, 1.0)


def test_description_count_is_clamped():
    options = ReaderOptions(max_description_lines=2)
    data = build_save(description=("a", "b"), colors=("1 1 1 1",))
    data = data.replace(b"\r\n2\r\n", b"\r\n5\r\n", 1)
    metadata, _ = _decode(data, options)
    assert metadata.description_lines == ("a", "b")


@pytest.mark.parametrize(
    "marker, expected",
    [(BANNER, OLDEST_FORMAT_VERSION), ("1", 1), ("7", 7), ("garbage", OLDEST_FORMAT_VERSION), ("-3", OLDEST_FORMAT_VERSION), ("", OLDEST_FORMAT_VERSION)],
)
def test_version_marker_is_never_fatal(marker, expected):
    assert decode_version(marker) == expected
    metadata, _ = _decode(build_save(marker=marker))
    assert metadata.format_version == expected


def test_truncated_after_version_marker():
    with pytest.raises(TruncatedHeaderError):
        _decode(b"1\r\n")


def test_empty_stream_is_truncated():
    with pytest.raises(HeaderError):
        _decode(b"")


def test_missing_description_line_is_truncated():
    with pytest.raises(TruncatedHeaderError):
        _decode(b"1\r\n3\r\nonly one line\r\n")


def test_stream_ending_inside_palette_is_not_fatal():
    metadata, source = _decode(b"1\r\n0\r\n1 0 0 1\r\n")
    assert metadata.declared_brick_count == 0
    assert metadata.declared_color_count == 1
    assert len(metadata.colors) == COLORSET_SIZE
    assert source.next_record() is None


def test_missing_linecount_pushes_brick_line_back():
    metadata, source = _decode(build_save(linecount=None, body=('1x1" 0 0 0 0 0 0  0 0 1 1 1',)))
    assert metadata.declared_brick_count == 0
    record = source.next_record()
    assert record is not None
    assert record.name == "1x1"


def test_palette_scan_limit_then_linecount():
    options = ReaderOptions(max_palette_lines=3)
    metadata, source = _decode(build_save(colors=("1 1 1 1",) * 3, linecount="Linecount 9"), options)
    assert metadata.declared_brick_count == 9
    assert source.next_record() is None


def test_palette_scan_limit_without_linecount_keeps_next_line():
    options = ReaderOptions(max_palette_lines=2)
    metadata, source = _decode(build_save(colors=("1 1 1 1",) * 2, linecount=None, body=("3x3\" 0 0 0",)), options)
    assert metadata.declared_brick_count == 0
    assert source.next_record().name == "3x3"


@pytest.mark.parametrize(
    "line, expected",
    [("Linecount 12", 12), ("linecount 3", 3), ("Linecount -4", 0), ("Linecount lots", 0), ("1 1 1 1", None)],
)
def test_parse_brick_count_line(line, expected):
    assert parse_brick_count_line(line) == expected
