"""Editable view over one Wonder Card / Wonder News buffer.

WonderRecord owns a mutable copy of the buffer (``data``) and keeps the
bytes it was built from (``original``) for diffing. Every offset comes from
the shape's RecordLayout; field setters write straight into ``data``.

Checksums are NOT maintained automatically. Call fix_checksum() (and
fix_script_checksum() for cards) after editing, or save through
record_io.save_record(), which does it by default.
"""

import logging
import struct
from pathlib import Path

from wc3_codec.models.errors import CardOnlyError, ScriptRegionError
from wc3_codec.models.layout import (
    SCRIPT_AREA_SIZE,
    SCRIPT_SIZE,
    RecordLayout,
    RecordShape,
    detect_shape,
    layout_for,
)
from wc3_codec.parser import text_codec
from wc3_codec.parser.binary_reader import BinaryReader, check_range
from wc3_codec.parser.checksum import checksum


logger = logging.getLogger(__name__)

# Card flag byte: bit 7 = distributable, bit 6 = distributable with
# restriction, low bits = color.
CARD_FLAGS_OFFSET = 0x0C
CARD_DISTRO_BIT = 0x80
CARD_RESTRICTED_BIT = 0x40
CARD_COLOR_MASK = 0x1F
CARD_COLOR_GROUPS = 8

NEWS_DISTRO_OFFSET = 0x06
NEWS_COLOR_OFFSET = 0x07

HEADER_CHECKSUM_OFFSET = 0

# Debug-only magic values; they detach a card from its usual delivery channel.
FAKE_CARD_MAGIC = 0xB9BEB4BA
FAKE_SCRIPT_MAGIC = 0xFFFFFF33
FAKE_CARD_OFFSET = 4


class WonderRecord:
    """A parsed distribution record.

    Args:
        data: Raw buffer; its length selects the shape.
        file_path: Where the buffer came from, if anywhere.

    Raises:
        UnrecognizedLengthError: If the buffer length matches no shape.
    """

    def __init__(self, data: bytes | bytearray, file_path: Path | None = None) -> None:
        self.shape: RecordShape = detect_shape(data)
        self.layout: RecordLayout = layout_for(self.shape)
        self.data = bytearray(data)
        self.original = bytes(data)
        self.exportable = any(self.original)
        self.edited = False
        self.file_path = file_path
        self.distributable = 0
        self.color = 0
        self._load_color_distro()

    def __repr__(self) -> str:
        return f"WonderRecord(shape={self.shape.name}, edited={self.edited})"

    # ------------------------------------------------------------------
    # Raw access
    # ------------------------------------------------------------------

    @property
    def japanese(self) -> bool:
        return self.layout.japanese

    @property
    def is_card(self) -> bool:
        return self.shape.is_card

    def get_bytes(self, offset: int, length: int) -> bytes:
        check_range(len(self.data), offset, length)
        return bytes(self.data[offset : offset + length])

    def set_bytes(self, value: bytes | bytearray, offset: int) -> None:
        check_range(len(self.data), offset, len(value))
        self.data[offset : offset + len(value)] = value
        self.edited = True

    def _reader(self, offset: int) -> BinaryReader:
        return BinaryReader(self.data, offset)

    def _require_card(self, operation: str) -> None:
        if not self.is_card:
            raise CardOnlyError(f"{operation} needs a Wonder Card, got {self.shape.name}")

    def _require_script(self, operation: str) -> None:
        if not self.layout.has_script:
            raise ScriptRegionError(f"{operation} needs a card script area, got {self.shape.name}")

    def to_bytes(self) -> bytes:
        return bytes(self.data)

    @property
    def is_modified(self) -> bool:
        return self.data != self.original

    def changed_offsets(self) -> list[int]:
        """Offsets whose byte differs from the buffer the record was built from."""
        return [i for i, (a, b) in enumerate(zip(self.data, self.original)) if a != b]

    # ------------------------------------------------------------------
    # Flags and color
    # ------------------------------------------------------------------

    def _load_color_distro(self) -> None:
        if self.is_card:
            flags = self._reader(CARD_FLAGS_OFFSET).uint8()
            if flags & CARD_DISTRO_BIT:
                self.distributable = 1
            elif flags & CARD_RESTRICTED_BIT:
                self.distributable = 2
            else:
                self.distributable = 0
            self.color = flags & ~CARD_DISTRO_BIT & 0xFF
        else:
            # 0x02 is seen in the wild but behaves like 0x00 as far as is known.
            self.distributable = 1 if self.data[NEWS_DISTRO_OFFSET] == 0x01 else 0
            self.color = self.data[NEWS_COLOR_OFFSET]

    @property
    def color_group(self) -> int:
        """Card color bucketed into the 8 selectable designs (4 raw values each)."""
        raw = self.color & CARD_COLOR_MASK
        if raw >= CARD_COLOR_GROUPS * 4:
            return 0
        return raw // 4

    def set_color_distro(self, color: int, distro: int) -> None:
        """Write color and distribution flag.

        For cards *color* is a color group (0-7); for news it is the raw
        color byte. *distro* is 0, 1 or 2.
        """
        if self.is_card:
            value = color * 4 if 0 <= color < CARD_COLOR_GROUPS else 0
            if distro == 1:
                value |= CARD_DISTRO_BIT
            elif distro == 2:
                value |= CARD_RESTRICTED_BIT
            self.set_bytes(bytes([value]), CARD_FLAGS_OFFSET)
        else:
            distro_byte = distro if distro in (1, 2) else 0
            self.set_bytes(bytes([distro_byte, color & 0xFF]), NEWS_DISTRO_OFFSET)
        self._load_color_distro()

    # ------------------------------------------------------------------
    # Text
    # ------------------------------------------------------------------

    @property
    def slot_count(self) -> int:
        return len(self.layout.slots)

    def get_text(self, index: int) -> str:
        """Decode text slot *index*.

        A slot with no terminator (zero-filled by clear_text) has its trailing
        blank padding dropped; terminated text is returned as stored.
        """
        offset, length = self.layout.slot(index)
        raw = self.get_bytes(offset, length)
        text = text_codec.decode(raw, self.japanese)
        if text_codec.TERMINATOR in raw:
            return text
        return text.rstrip(text_codec.blank_glyph(self.japanese))

    def set_text(self, text: str, index: int) -> None:
        """Encode *text* into slot *index*, clipped to the slot width."""
        offset, length = self.layout.slot(index)
        encoded = text_codec.encode(text, self.japanese)
        if len(encoded) > length:
            logger.debug("Text for slot %d clipped from %d to %d bytes", index, len(encoded), length)
            encoded = encoded[:length]
        self.set_bytes(encoded, offset)

    def texts(self) -> list[str]:
        return [self.get_text(i) for i in range(self.slot_count)]

    def clear_text(self) -> None:
        """Zero the whole text region. Checksum fields are left alone."""
        size = self.layout.text_size
        self.set_bytes(bytes(size), self.layout.text_start)

    def _legacy_offset(self, index: int) -> int:
        self._require_card("Legacy text access")
        if not 0 <= index < self.slot_count:
            raise IndexError(f"Text slot {index} out of range ({self.slot_count} slots)")
        return self.layout.text_start + index * text_codec.LEGACY_TEXT_SIZE

    def get_legacy_text(self, index: int) -> str:
        """Read a fixed 40-byte card line through the old SYMBOL table."""
        offset = self._legacy_offset(index)
        return text_codec.legacy_decode(self.get_bytes(offset, text_codec.LEGACY_TEXT_SIZE))

    def set_legacy_text(self, text: str, index: int) -> None:
        offset = self._legacy_offset(index)
        self.set_bytes(text_codec.legacy_encode(text), offset)

    # ------------------------------------------------------------------
    # Icon
    # ------------------------------------------------------------------

    @property
    def icon(self) -> int:
        self._require_card("Icon access")
        return self._reader(self.layout.icon_offset).uint16()

    @icon.setter
    def icon(self, value: int) -> None:
        self._require_card("Icon access")
        self.set_bytes(struct.pack("<H", value & 0xFFFF), self.layout.icon_offset)

    # ------------------------------------------------------------------
    # Checksums
    # ------------------------------------------------------------------

    @property
    def stored_checksum(self) -> int:
        return self._reader(HEADER_CHECKSUM_OFFSET).uint16()

    def compute_checksum(self) -> int:
        return checksum(self.data, self.layout.checksum_length, self.layout.checksum_start)

    @property
    def header_checksum_valid(self) -> bool:
        return self.stored_checksum == self.compute_checksum()

    def fix_checksum(self) -> int:
        """Recompute the header checksum and store it at offset 0."""
        value = self.compute_checksum()
        self.set_bytes(struct.pack("<H", value), HEADER_CHECKSUM_OFFSET)
        logger.debug("%s header checksum set to 0x%04X", self.shape.name, value)
        return value

    @property
    def stored_script_checksum(self) -> int:
        self._require_script("Script checksum")
        return self._reader(self.layout.script_checksum_offset).uint16()

    def compute_script_checksum(self) -> int:
        self._require_script("Script checksum")
        return checksum(self.data, SCRIPT_AREA_SIZE, self.layout.script_header_offset)

    @property
    def script_checksum_valid(self) -> bool:
        return self.stored_script_checksum == self.compute_script_checksum()

    def fix_script_checksum(self) -> int:
        """Recompute the checksum over script header + body."""
        value = self.compute_script_checksum()
        self.set_bytes(struct.pack("<H", value), self.layout.script_checksum_offset)
        logger.debug("Script checksum set to 0x%04X", value)
        return value

    def fix_checksums(self) -> None:
        self.fix_checksum()
        if self.layout.has_script:
            self.fix_script_checksum()

    # ------------------------------------------------------------------
    # Script area (cards only)
    # ------------------------------------------------------------------

    @property
    def script(self) -> bytes:
        self._require_script("Script access")
        return self.get_bytes(self.layout.script_offset, SCRIPT_SIZE)

    def set_script(self, script: bytes | bytearray) -> None:
        """Zero the script body, then write *script* at its start."""
        self._require_script("Script access")
        if len(script) > SCRIPT_SIZE:
            raise ValueError(f"Script is {len(script)} bytes, limit is {SCRIPT_SIZE}")
        self.set_bytes(bytes(SCRIPT_SIZE), self.layout.script_offset)
        self.set_bytes(script, self.layout.script_offset)

    def clean_trash(self) -> int:
        """Zero bytes after the script's final 0xFF terminator.

        Walks backward from the end of the buffer. Returns the number of
        bytes cleared.
        """
        self._require_script("Trash cleaning")
        cleared = 0
        end = self.layout.size
        for i in range(SCRIPT_SIZE):
            pos = end - i - 1
            if self.data[pos] == 0xFF:
                break
            self.data[pos] = 0
            cleared += 1
        if cleared:
            self.edited = True
        return cleared

    def _script_header_byte(self, index: int) -> int:
        self._require_script("Script header access")
        return self._reader(self.layout.script_header_offset + index).uint8()

    def _set_script_header_byte(self, index: int, value: int) -> None:
        self._require_script("Script header access")
        self.set_bytes(bytes([value]), self.layout.script_header_offset + index)

    @property
    def script_id(self) -> int:
        return self._script_header_byte(0)

    @script_id.setter
    def script_id(self, value: int) -> None:
        self._set_script_header_byte(0, value)

    @property
    def map_bank(self) -> int:
        return self._script_header_byte(1)

    @map_bank.setter
    def map_bank(self, value: int) -> None:
        self._set_script_header_byte(1, value)

    @property
    def map_number(self) -> int:
        return self._script_header_byte(2)

    @map_number.setter
    def map_number(self, value: int) -> None:
        self._set_script_header_byte(2, value)

    @property
    def map_npc(self) -> int:
        return self._script_header_byte(3)

    @map_npc.setter
    def map_npc(self, value: int) -> None:
        self._set_script_header_byte(3, value)

    # ------------------------------------------------------------------
    # Debug mutators
    # ------------------------------------------------------------------

    def fake_wonder_card(self) -> None:
        self.set_bytes(struct.pack("<I", FAKE_CARD_MAGIC), FAKE_CARD_OFFSET)

    def fake_script(self) -> None:
        # The 4-byte script header as written by the game's own card routine.
        self._require_script("fake_script")
        self.set_bytes(struct.pack("<I", FAKE_SCRIPT_MAGIC), self.layout.script_header_offset)
