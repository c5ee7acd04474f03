"""Generation III single-byte character encoding.

Two 247-glyph tables, one per font: the domestic (Western) font and the
Japanese font. Byte values 0xF7 and above never map to a glyph; 0xFF is
the string terminator.

Some glyphs appear more than once in a table (the domestic font has two
of Ç, È, í and 0). Encoding always picks the first position, so decoding
and re-encoding such bytes is not byte-exact.
"""

TERMINATOR = 0xFF
SENTINEL = chr(TERMINATOR)
FIRST_INVALID_BYTE = 0xF7

G3_EN = (
    " ÀÁÂÇÈÉÊËÌこÎÏÒÓÔ"  # 0x00
    "ŒÙÚÛÑßàáねÇÈéêëìí"  # 0x10
    "îïòóôœùúûñºª⒅&+あ"  # 0x20
    "ぃぅぇぉゃ=ょがぎぐげござじずぜ"  # 0x30
    "ぞだぢづでどばびぶべぼぱぴぷぺぽ"  # 0x40
    "っ¿¡⒆⒇オカキクケÍコサスセソ"  # 0x50
    "タチツテトナニヌâノハヒフヘホí"  # 0x60
    "ミムメモヤユヨラリルレロワヲンァ"  # 0x70
    "ィゥェォャュョガギグゲゴザジズゼ"  # 0x80
    "ゾダヂヅデドバビブベボパピプペポ"  # 0x90
    "ッ0123456789!?.-・"  # 0xA0
    "⑬“”‘’♂♀$,⑧/ABCDE"  # 0xB0
    "FGHIJKLMNOPQRSTU"  # 0xC0
    "VWXYZabcdefghijk"  # 0xD0
    "lmnopqrstuvwxyz0"  # 0xE0
    ":ÄÖÜäöü"  # 0xF0
)

G3_JP = (
    "　あいうえおかきくけこさしすせそ"  # 0x00
    "たちつてとなにぬねのはひふへほま"  # 0x10
    "みむめもやゆよらりるれろわをんぁ"  # 0x20
    "ぃぅぇぉゃゅょがぎぐげござじずぜ"  # 0x30
    "ぞだぢづでどばびぶべぼぱぴぷぺぽ"  # 0x40
    "っアイウエオカキクケコサシスセソ"  # 0x50
    "タチツテトナニヌネノハヒフヘホマ"  # 0x60
    "ミムメモヤユヨラリルレロワヲンァ"  # 0x70
    "ィゥェォャュョガギグゲゴザジズゼ"  # 0x80
    "ゾダヂヅデドバビブベボパピプペポ"  # 0x90
    "ッ０１２３４５６７８９！？。ー・"  # 0xA0
    "⋯『』「」♂♀$.⑧/ＡＢＣＤＥ"  # 0xB0
    "ＦＧＨＩＪＫＬＭＮＯＰＱＲＳＴＵ"  # 0xC0
    "ＶＷＸＹＺａｂｃｄｅｆｇｈｉｊｋ"  # 0xD0
    "ｌｍｎｏｐｑｒｓｔｕｖｗｘｙｚ0"  # 0xE0
    ":ÄÖÜäöü"  # 0xF0
)

# Older table used by the fixed-width 40-byte card text path. It predates
# the tables above, fills its gaps with blanks and is not interchangeable
# with them.
SYMBOL = (
    " ÀÁÂÇÈÉÊËÌこÎÏÒÓÔ"  # 0x00
    "ŒÙÚÛÑßàáねçèéêëìま"  # 0x10
    "îïòóôœùúûñºª &+あ"  # 0x20
    "ぃぅぇぉ =          "  # 0x30
    "                "  # 0x40
    " ¿¡      <Í%()  "  # 0x50
    "        â      í"  # 0x60
    "                "  # 0x70
    "                "  # 0x80
    "ゾダヂヅデドバビブベボパピプペポ"  # 0x90
    "ッ0123456789!?.-·"  # 0xA0
    "…“”‘'♂♀§,×/ABCDE"  # 0xB0
    "FGHIJKLMNOPQRSTU"  # 0xC0
    "VWXYZabcdefghijk"  # 0xD0
    "lmnopqrstuvwxyz>"  # 0xE0
    ":ÄÖÜäöü        #"  # 0xF0
)

LEGACY_TEXT_SIZE = 40


def _table(japanese: bool) -> str:
    return G3_JP if japanese else G3_EN


def blank_glyph(japanese: bool) -> str:
    """Glyph for byte 0x00, which is what a zero-filled slot decodes to."""
    return _table(japanese)[0]


def decode_char(value: int, japanese: bool) -> str:
    table = _table(japanese)
    if value >= len(table):
        return SENTINEL
    return table[value]


def encode_char(char: str, japanese: bool) -> int:
    """Byte for *char*, or TERMINATOR if the font has no such glyph."""
    index = _table(japanese).find(char)
    return index if index >= 0 else TERMINATOR


def decode(data: bytes | bytearray, japanese: bool = False) -> str:
    chars: list[str] = []
    for value in data:
        if value >= FIRST_INVALID_BYTE:
            break
        char = decode_char(value, japanese)
        if char == SENTINEL:
            break
        chars.append(char)
    return "".join(chars)


def encode(text: str, japanese: bool = False) -> bytes:
    """Encode *text* and append the 0xFF terminator.

    Encoding stops silently at the first character the font cannot
    represent, so the result may hold fewer glyphs than *text*.
    """
    out = bytearray()
    for char in text:
        value = encode_char(char, japanese)
        if value == TERMINATOR or char == SENTINEL:
            break
        out.append(value)
    out.append(TERMINATOR)
    return bytes(out)


def legacy_decode(data: bytes | bytearray) -> str:
    return "".join(SYMBOL[value] for value in data)


def legacy_encode(text: str) -> bytes:
    """Encode into a zero-padded 40-byte buffer using the SYMBOL table.

    Unknown characters become 0x00 and characters past the 40th are dropped.
    Byte 0xFF is never produced.
    """
    out = bytearray(LEGACY_TEXT_SIZE)
    for i, char in enumerate(text[:LEGACY_TEXT_SIZE]):
        index = SYMBOL.find(char, 0, TERMINATOR)
        if index > 0:
            out[i] = index
    return bytes(out)
