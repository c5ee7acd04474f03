"""Tests for the Generation III text encoding."""

import pytest

from wc3_codec.parser import text_codec
from wc3_codec.parser.text_codec import (
    G3_EN,
    G3_JP,
    SENTINEL,
    SYMBOL,
    decode,
    encode,
    legacy_decode,
    legacy_encode,
)


def test_table_sizes():
    assert len(G3_EN) == 247
    assert len(G3_JP) == 247
    assert len(SYMBOL) == 256


def test_known_glyph_positions():
    assert G3_EN[0x00] == " "
    assert G3_EN[0xA1] == "0"
    assert G3_EN[0xBB] == "A"
    assert G3_EN[0xD5] == "a"
    assert G3_EN[0xF0] == ":"
    assert G3_JP[0x00] == "　"
    assert G3_JP[0x01] == "あ"
    assert G3_JP[0xBB] == "Ａ"
    assert SYMBOL[0xB4] == "'"
    assert SYMBOL[0xFF] == "#"


def test_decode_domestic():
    assert decode(b"\xC2\xD9\xE0\xE0\xE3\xFF", False) == "Hello"


def test_decode_stops_at_terminator():
    assert decode(b"\xBB\xBC\xFF\xBD\xBE") == "AB"


@pytest.mark.parametrize("stop", [0xF7, 0xF8, 0xFE, 0xFF])
def test_decode_stops_at_first_invalid_byte(stop):
    assert decode(bytes([0xBB, stop, 0xBC])) == "A"


def test_decode_high_valid_bytes():
    assert decode(bytes(range(0xF0, 0xF7))) == ":ÄÖÜäöü"


def test_decode_empty():
    assert decode(b"") == ""
    assert decode(b"\xFF" * 10, True) == ""


def test_decode_japanese():
    assert decode(b"\x01\x02\x03\xFF", True) == "あいう"
    assert decode(b"\x01\x02\x03\xFF", False) == "ÀÁÂ"


def test_encode_appends_terminator():
    assert encode("ABC") == b"\xBB\xBC\xBD\xFF"
    assert encode("") == b"\xFF"


def test_encode_japanese():
    assert encode("あいう", True) == b"\x01\x02\x03\xFF"
    assert encode("０", True) == b"\xA1\xFF"


def test_encode_truncates_at_unmapped_character():
    assert encode("A~B") == b"\xBB\xFF"
    # Hiragana い only exists in the Japanese font.
    assert encode("Aい") == b"\xBB\xFF"
    assert encode("~") == b"\xFF"


def test_encode_truncates_at_sentinel_character():
    assert encode("A" + SENTINEL + "B") == b"\xBB\xFF"


@pytest.mark.parametrize("text", ["", "A", "Hello World", "~~~~", "ab~cd"])
def test_encode_length_bound(text):
    assert len(encode(text)) <= len(text) + 1


@pytest.mark.parametrize("char, first_index, other_index", [
    ("Ç", 0x04, 0x19),
    ("È", 0x05, 0x1A),
    ("í", 0x1F, 0x6F),
    ("0", 0xA1, 0xEF),
])
def test_duplicate_glyph_encodes_to_first_position(char, first_index, other_index):
    assert G3_EN[first_index] == char
    assert G3_EN[other_index] == char
    assert encode(char) == bytes([first_index, 0xFF])
    assert decode(bytes([other_index])) == char


def test_japanese_table_has_no_duplicates():
    assert len(set(G3_JP)) == len(G3_JP)


@pytest.mark.parametrize("japanese", [False, True])
def test_round_trip_whole_table(japanese):
    table = G3_JP if japanese else G3_EN
    assert decode(encode(table, japanese), japanese) == table


@pytest.mark.parametrize("text, japanese", [
    ("POKéMON CENTER", False),
    ("Mystery Gift!", False),
    ("ふしぎなおくりもの", True),
])
def test_round_trip_strings(text, japanese):
    encoded = encode(text, japanese)
    assert len(encoded) == len(text) + 1
    assert decode(encoded, japanese) == text


def test_blank_glyph():
    assert text_codec.blank_glyph(False) == " "
    assert text_codec.blank_glyph(True) == "　"


def test_decode_char_out_of_table():
    assert text_codec.decode_char(0xF7, False) == SENTINEL
    assert text_codec.decode_char(0x00, False) == " "


def test_legacy_encode_is_fixed_width():
    out = legacy_encode("AB")
    assert len(out) == 40
    assert out[:2] == b"\xBB\xBC"
    assert out[2:] == bytes(38)


def test_legacy_encode_unknown_and_space_become_zero():
    assert legacy_encode("A~ B")[:4] == b"\xBB\x00\x00\xBC"


def test_legacy_encode_never_emits_ff():
    assert legacy_encode("#")[0] == 0


def test_legacy_encode_clips_to_40():
    out = legacy_encode("A" * 60)
    assert out == b"\xBB" * 40


def test_legacy_decode_maps_every_byte():
    assert legacy_decode(legacy_encode("Hi")) == "Hi" + " " * 38
    assert legacy_decode(b"\xFF") == "#"


def test_legacy_table_differs_from_domestic():
    assert legacy_encode("ま")[0] == 0x1F
    assert encode("ま") == b"\xFF"
    assert legacy_encode("'")[0] == 0xB4
    assert encode("'") == b"\xFF"
