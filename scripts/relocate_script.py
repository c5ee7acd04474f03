"""Export a card's script for a ROM script editor, or import it back.

Usage:
    python -m scripts.relocate_script export CARD.wc3 IMAGE.bin
    python -m scripts.relocate_script import CARD.wc3 IMAGE.bin [--output PATH]
"""

import argparse
import logging
from pathlib import Path

from wc3_codec.models.errors import WonderRecordError
from wc3_codec.parser.record_io import load_record, save_record
from wc3_codec.parser.script_relocator import (
    extract_relocatable,
    import_relocatable,
    script_address,
)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Relocate Wonder Card scripts")
    sub = parser.add_subparsers(dest="command", required=True)

    export_cmd = sub.add_parser("export", help="Write the script as an address-relative image")
    export_cmd.add_argument("card", type=Path)
    export_cmd.add_argument("image", type=Path)

    import_cmd = sub.add_parser("import", help="Replace the card script from an image")
    import_cmd.add_argument("card", type=Path)
    import_cmd.add_argument("image", type=Path)
    import_cmd.add_argument("--output", type=Path,
                            help="Write the updated card here instead of in place")

    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    try:
        record = load_record(args.card)
        if not record.is_card:
            print(f"Error: {args.card} is a {record.shape.name} record, not a card")
            return 1

        if args.command == "export":
            args.image.write_bytes(extract_relocatable(record))
            print(f"Open {args.image.name} in the script editor at address "
                  f"0x{script_address(record):X}")
        else:
            import_relocatable(record, args.image.read_bytes())
            written = save_record(record, args.output)
            print(f"Script imported into {written}")
    except (OSError, WonderRecordError) as exc:
        print(f"Error: {exc}")
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
