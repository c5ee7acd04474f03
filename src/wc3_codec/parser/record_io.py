"""Load and save .wc3 / .wn3 files."""

import logging
from pathlib import Path

from wc3_codec.engine.save_config import SaveConfig
from wc3_codec.models.layout import is_card_extension
from wc3_codec.models.record import WonderRecord


logger = logging.getLogger(__name__)


def load_record(path: Path) -> WonderRecord:
    """Read *path* and parse it.

    The extension is only a hint; a .wn3 holding card-sized data is loaded
    as a card and logged as a warning.

    Raises:
        UnrecognizedLengthError: If the file size matches no record shape.
    """
    record = WonderRecord(path.read_bytes(), file_path=path)
    expects_card = is_card_extension(path)
    if expects_card is not None and expects_card != record.is_card:
        logger.warning(
            "%s has a %s extension but holds a %s record",
            path.name, path.suffix, record.shape.name,
        )
    return record


def save_record(record: WonderRecord, path: Path | None = None,
                config: SaveConfig | None = None) -> Path:
    """Write *record* to *path* (default: the file it was loaded from).

    Returns:
        The path written.
    """
    config = config or SaveConfig()
    target = path or record.file_path
    if target is None:
        raise ValueError("No path given and record was not loaded from a file")

    if config.clean_script_trash and record.is_card:
        record.clean_trash()
    if config.fix_checksums:
        record.fix_checksums()

    target.write_bytes(record.to_bytes())
    record.file_path = target
    logger.info("Saved %s record to %s", record.shape.name, target)
    return target
