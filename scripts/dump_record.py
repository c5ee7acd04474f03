"""Print the fields of a Wonder Card / Wonder News file.

Usage:
    python -m scripts.dump_record PATH [--legacy-text] [--script] [--verbose]
"""

import argparse
import logging
from pathlib import Path

from wc3_codec.models.errors import WonderRecordError
from wc3_codec.models.record import WonderRecord
from wc3_codec.parser.record_io import load_record
from wc3_codec.parser.script_relocator import script_address


DISTRO_LABELS = {0: "no", 1: "yes", 2: "restricted"}


def _checksum_status(valid: bool) -> str:
    return "ok" if valid else "BAD"


def format_record(record: WonderRecord, legacy_text: bool = False) -> list[str]:
    """Human-readable summary lines for *record*."""
    lines = [
        f"Shape:        {record.shape.name} ({record.layout.size} bytes)",
        f"Exportable:   {'yes' if record.exportable else 'no (empty)'}",
        f"Distribute:   {DISTRO_LABELS.get(record.distributable, record.distributable)}",
        f"Color:        0x{record.color:02X}",
        f"Checksum:     0x{record.stored_checksum:04X} "
        f"({_checksum_status(record.header_checksum_valid)})",
    ]
    if record.is_card:
        lines += [
            f"Color group:  {record.color_group}",
            f"Icon:         {record.icon}",
            f"Script sum:   0x{record.stored_script_checksum:04X} "
            f"({_checksum_status(record.script_checksum_valid)})",
            f"Script id:    0x{record.script_id:02X}",
            f"Map:          bank {record.map_bank}, map {record.map_number}, NPC {record.map_npc}",
            f"Script addr:  0x{script_address(record):06X}",
        ]

    lines.append("Text:")
    for i in range(record.slot_count):
        if legacy_text and record.is_card:
            text = record.get_legacy_text(i).rstrip()
        else:
            text = record.get_text(i)
        lines.append(f"  [{i:>2}] {text}")
    return lines


def _hexdump(data: bytes, width: int = 16) -> list[str]:
    return [
        f"  {offset:04X}: " + " ".join(f"{b:02X}" for b in data[offset : offset + width])
        for offset in range(0, len(data), width)
    ]


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Dump a .wc3/.wn3 distribution record")
    parser.add_argument("path", type=Path, help="Record file")
    parser.add_argument("--legacy-text", action="store_true",
                        help="Decode card text with the old fixed-width table")
    parser.add_argument("--script", action="store_true",
                        help="Hex dump the script body (cards only)")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    try:
        record = load_record(args.path)
    except (OSError, WonderRecordError) as exc:
        print(f"Error: {exc}")
        return 1

    for line in format_record(record, legacy_text=args.legacy_text):
        print(line)

    if args.script and record.is_card:
        print("Script:")
        for line in _hexdump(record.script):
            print(line)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
