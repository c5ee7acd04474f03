"""Verify or rewrite the checksums of Wonder Card / Wonder News files.

Usage:
    python -m scripts.fix_checksums PATH [PATH ...] [--check] [--clean-trash]
"""

import argparse
import logging
from pathlib import Path

from wc3_codec.engine.save_config import SaveConfig
from wc3_codec.models.errors import WonderRecordError
from wc3_codec.models.record import WonderRecord
from wc3_codec.parser.record_io import load_record, save_record


def checksum_problems(record: WonderRecord) -> list[str]:
    problems: list[str] = []
    if not record.header_checksum_valid:
        problems.append(
            f"header 0x{record.stored_checksum:04X} != 0x{record.compute_checksum():04X}"
        )
    if record.is_card and not record.script_checksum_valid:
        problems.append(
            f"script 0x{record.stored_script_checksum:04X} "
            f"!= 0x{record.compute_script_checksum():04X}"
        )
    return problems


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Check or fix record checksums")
    parser.add_argument("paths", type=Path, nargs="+", help="Record files")
    parser.add_argument("--check", action="store_true",
                        help="Only report bad checksums; exit 1 if any")
    parser.add_argument("--clean-trash", action="store_true",
                        help="Zero garbage after the card script before fixing")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)
    config = SaveConfig(fix_checksums=True, clean_script_trash=args.clean_trash)

    failed = False
    for path in args.paths:
        try:
            record = load_record(path)
        except (OSError, WonderRecordError) as exc:
            print(f"Error: {path}: {exc}")
            failed = True
            continue

        problems = checksum_problems(record)
        if args.check:
            if problems:
                failed = True
                print(f"{path.name}: " + "; ".join(problems))
            else:
                print(f"{path.name}: ok")
            continue

        save_record(record, config=config)
        status = "fixed" if problems or record.is_modified else "unchanged"
        print(f"{path.name}: {status}")

    return 1 if failed else 0


if __name__ == "__main__":
    raise SystemExit(main())
