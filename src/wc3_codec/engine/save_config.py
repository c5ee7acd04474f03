"""Options applied when writing a record back to disk."""

from dataclasses import dataclass


@dataclass(slots=True)
class SaveConfig:
    """What save_record() does to a record before writing it."""

    fix_checksums: bool = True        # header checksum, plus script checksum for cards
    clean_script_trash: bool = False  # zero bytes after the script's last 0xFF
