"""Record shapes and their byte layouts.

A distribution record carries no magic: the buffer length alone tells
Wonder Cards from Wonder News and the domestic font from the Japanese one.

Card layout (offsets from the start of the buffer):
  0x000  checksum (u16) + 2 unused bytes
  0x004  card header and text slots (0x14C, or 0xA4 for Japanese)
  ....   two 0x28-byte blocks (icon lives 10 bytes into the first)
  ....   script checksum (u16) + 2 unused bytes      at size - 1004
  ....   script header: id, map bank, map, NPC id    at size - 1000
  ....   script body (996 bytes)                      at size - 996

News layout:
  0x000  checksum (u16) + 2 unused bytes
  0x004  header; byte 6 = distribution flag, byte 7 = color
  0x008  11 text lines (40 bytes each, 20 for Japanese)
"""

from dataclasses import dataclass
from enum import IntEnum
from pathlib import Path

from wc3_codec.models.errors import UnrecognizedLengthError


CHECKSUM_FIELD_SIZE = 4
CARD_HEADER_SIZE = 0x14C
CARD_HEADER_SIZE_JP = 0xA4
CARD_BLOCK_SIZE = 0x28          # two of these follow the header
SCRIPT_AREA_SIZE = 0x3E8        # script header + script body
SCRIPT_HEADER_SIZE = 4
SCRIPT_SIZE = SCRIPT_AREA_SIZE - SCRIPT_HEADER_SIZE   # 996
NEWS_HEADER_SIZE = 4

SIZE_CARD = (CHECKSUM_FIELD_SIZE + CARD_HEADER_SIZE + CARD_BLOCK_SIZE * 2
             + CHECKSUM_FIELD_SIZE + SCRIPT_AREA_SIZE)
SIZE_CARD_JP = (CHECKSUM_FIELD_SIZE + CARD_HEADER_SIZE_JP + CARD_BLOCK_SIZE * 2
                + CHECKSUM_FIELD_SIZE + SCRIPT_AREA_SIZE)
SIZE_NEWS = CHECKSUM_FIELD_SIZE + NEWS_HEADER_SIZE + 40 * 11
SIZE_NEWS_JP = CHECKSUM_FIELD_SIZE + NEWS_HEADER_SIZE + 20 * 11

CARD_TEXT_START = 14
NEWS_TEXT_START = 8
ICON_OFFSET_FROM_HEADER_END = 10

CARD_EXTENSION = ".wc3"
NEWS_EXTENSION = ".wn3"


class RecordShape(IntEnum):
    """Kind × locale of a distribution record."""
    CARD = 0
    CARD_JAPANESE = 1
    NEWS = 2
    NEWS_JAPANESE = 3

    @property
    def is_card(self) -> bool:
        return self in (RecordShape.CARD, RecordShape.CARD_JAPANESE)

    @property
    def is_japanese(self) -> bool:
        return self in (RecordShape.CARD_JAPANESE, RecordShape.NEWS_JAPANESE)


@dataclass(frozen=True, slots=True)
class RecordLayout:
    """Fixed offsets for one record shape."""
    shape: RecordShape
    size: int
    text_start: int
    slots: tuple[tuple[int, int], ...]   # (offset from text_start, length)
    checksum_start: int                  # first byte covered by the header checksum
    checksum_length: int
    icon_offset: int | None = None       # Card only

    @property
    def japanese(self) -> bool:
        return self.shape.is_japanese

    @property
    def has_script(self) -> bool:
        return self.shape.is_card

    @property
    def text_size(self) -> int:
        last_offset, last_length = self.slots[-1]
        return last_offset + last_length

    @property
    def script_offset(self) -> int:
        return self.size - SCRIPT_SIZE

    @property
    def script_header_offset(self) -> int:
        return self.size - SCRIPT_AREA_SIZE

    @property
    def script_checksum_offset(self) -> int:
        return self.size - SCRIPT_AREA_SIZE - CHECKSUM_FIELD_SIZE

    @property
    def extension(self) -> str:
        return CARD_EXTENSION if self.shape.is_card else NEWS_EXTENSION

    def slot(self, index: int) -> tuple[int, int]:
        """Absolute (offset, length) of text slot *index*."""
        if not 0 <= index < len(self.slots):
            raise IndexError(
                f"Text slot {index} out of range for {self.shape.name} "
                f"({len(self.slots)} slots)"
            )
        offset, length = self.slots[index]
        return self.text_start + offset, length


def _fixed_slots(count: int, width: int) -> tuple[tuple[int, int], ...]:
    return tuple((i * width, width) for i in range(count))


# Japanese cards squeeze a short title and subtitle in front of six lines.
_CARD_JP_SLOTS: tuple[tuple[int, int], ...] = (
    (0, 18),
    (18, 13),
    (31, 20),
    (51, 20),
    (71, 20),
    (91, 20),
    (111, 20),
    (131, 20),
)

LAYOUTS: dict[RecordShape, RecordLayout] = {
    RecordShape.CARD: RecordLayout(
        shape=RecordShape.CARD,
        size=SIZE_CARD,
        text_start=CARD_TEXT_START,
        slots=_fixed_slots(8, 40),
        checksum_start=CHECKSUM_FIELD_SIZE,
        checksum_length=CARD_HEADER_SIZE,
        icon_offset=CHECKSUM_FIELD_SIZE + CARD_HEADER_SIZE + ICON_OFFSET_FROM_HEADER_END,
    ),
    RecordShape.CARD_JAPANESE: RecordLayout(
        shape=RecordShape.CARD_JAPANESE,
        size=SIZE_CARD_JP,
        text_start=CARD_TEXT_START,
        slots=_CARD_JP_SLOTS,
        checksum_start=CHECKSUM_FIELD_SIZE,
        checksum_length=CARD_HEADER_SIZE_JP,
        icon_offset=CHECKSUM_FIELD_SIZE + CARD_HEADER_SIZE_JP + ICON_OFFSET_FROM_HEADER_END,
    ),
    RecordShape.NEWS: RecordLayout(
        shape=RecordShape.NEWS,
        size=SIZE_NEWS,
        text_start=NEWS_TEXT_START,
        slots=_fixed_slots(11, 40),
        checksum_start=CHECKSUM_FIELD_SIZE,
        checksum_length=SIZE_NEWS - CHECKSUM_FIELD_SIZE,
    ),
    RecordShape.NEWS_JAPANESE: RecordLayout(
        shape=RecordShape.NEWS_JAPANESE,
        size=SIZE_NEWS_JP,
        text_start=NEWS_TEXT_START,
        slots=_fixed_slots(11, 20),
        checksum_start=CHECKSUM_FIELD_SIZE,
        checksum_length=SIZE_NEWS_JP - CHECKSUM_FIELD_SIZE,
    ),
}

_SHAPE_BY_SIZE: dict[int, RecordShape] = {
    layout.size: shape for shape, layout in LAYOUTS.items()
}


def detect_shape(data: bytes | bytearray | int) -> RecordShape:
    """Classify a buffer (or a bare length) into one of the four shapes.

    Raises:
        UnrecognizedLengthError: If the length matches no known shape.
    """
    length = data if isinstance(data, int) else len(data)
    try:
        return _SHAPE_BY_SIZE[length]
    except KeyError:
        raise UnrecognizedLengthError(length) from None


def layout_for(shape: RecordShape) -> RecordLayout:
    return LAYOUTS[shape]


def is_card_extension(path: Path) -> bool | None:
    """True for .wc3, False for .wn3, None for anything else."""
    suffix = path.suffix.lower()
    if suffix == CARD_EXTENSION:
        return True
    if suffix == NEWS_EXTENSION:
        return False
    return None
