"""Move a card's script body to and from an address-relative image.

Script editors that work on ROM images expect the script at its runtime
address. The address is taken from the script itself (the u32 operand right
after the first command byte) with the ROM bank byte masked off. The image
is ``address + 996`` bytes long, starts with the address as a u32 when the
address leaves room for it, and holds the script body at ``address``.
"""

import logging
import struct

from wc3_codec.models.layout import SCRIPT_SIZE
from wc3_codec.models.record import WonderRecord
from wc3_codec.parser.binary_reader import BinaryReader


logger = logging.getLogger(__name__)

ADDRESS_MASK = 0x00FFFFFF


def script_address(record: WonderRecord) -> int:
    """Flat (bank-stripped) address the card's script is meant to run at."""
    reader = BinaryReader(record.script)
    reader.skip(1)
    return reader.uint32() & ADDRESS_MASK


def extract_relocatable(record: WonderRecord) -> bytes:
    """Build the relocated image for *record*'s script body."""
    script = record.script
    address = script_address(record)
    image = bytearray(address + SCRIPT_SIZE)
    # Addresses 0-3 would overlap the header; those images carry no header.
    if address > 3:
        struct.pack_into("<I", image, 0, address)
    image[address : address + SCRIPT_SIZE] = script
    logger.info("Script relocated to address 0x%X", address)
    return bytes(image)


def reinsert_relocatable(image: bytes | bytearray) -> bytes:
    """Slice the script body back out of a relocated image.

    The result is at most 996 bytes; it is shorter if the image ends early.
    """
    address = BinaryReader(image).uint32()
    logger.debug("Reading script from image at address 0x%X", address)
    return bytes(image[address : address + SCRIPT_SIZE])


def import_relocatable(record: WonderRecord, image: bytes | bytearray) -> None:
    """Replace *record*'s script body with the one held in *image*."""
    record.set_script(reinsert_relocatable(image))
