"""
JSON file persistence, import, and export of week entries.

This is the only module that touches the file system. Writes replace the
whole file atomically so a reader never sees a partially written list.
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import List, Union

from scorecard.config import ScorecardConfig
from scorecard.entries import WeekEntry, create_empty_entry, sort_entries
from scorecard.sanitizer import RejectedInput, sanitize

logger = logging.getLogger(__name__)

IMPORT_ERROR_MESSAGE = "Import failed. Please check the file format."


class ImportFailed(ValueError):
    """Raised when an imported file cannot be turned into week entries."""


def entries_to_json(entries: List[WeekEntry], indent: int | None = None) -> str:
    return json.dumps(
        [e.to_dict() for e in sort_entries(entries)],
        indent=indent,
        ensure_ascii=False,
    )


def _write_atomic(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(text)
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


# ---------------------------------------------------------------------------
# Persistence
# ---------------------------------------------------------------------------

def load_entries(filepath: Union[str, Path]) -> List[WeekEntry]:
    """
    Load stored entries, falling back to a single empty current week.

    Missing files, invalid JSON, rejected collections, and empty lists all
    produce the fallback; content problems never raise.
    """
    path = Path(filepath)
    if not path.exists():
        return [create_empty_entry()]

    try:
        with open(path, "r", encoding="utf-8") as f:
            entries = sanitize(json.load(f))
    except (OSError, json.JSONDecodeError, UnicodeDecodeError, RejectedInput) as exc:
        logger.warning("Failed to load entries from %s: %s", path, exc)
        return [create_empty_entry()]

    if not entries:
        logger.warning("No entries stored in %s, starting with an empty week", path)
        return [create_empty_entry()]

    return entries


def save_entries(filepath: Union[str, Path], entries: List[WeekEntry]) -> None:
    _write_atomic(Path(filepath), entries_to_json(entries))
    logger.debug("Saved %d entries to %s", len(entries), filepath)


# ---------------------------------------------------------------------------
# Import / export
# ---------------------------------------------------------------------------

def export_entries(
    filepath: Union[str, Path],
    entries: List[WeekEntry],
    cfg: ScorecardConfig | None = None,
) -> Path:
    """Write a pretty-printed export. Returns the path written."""
    if cfg is None:
        cfg = ScorecardConfig()

    path = Path(filepath)
    if path.is_dir():
        path = path / cfg.storage.data_file

    _write_atomic(path, entries_to_json(entries, indent=cfg.storage.export_indent))
    logger.info("Exported %d entries to %s", len(entries), path)
    return path


def import_entries(filepath: Union[str, Path]) -> List[WeekEntry]:
    """
    Read and sanitize an exported file.

    Raises:
        ImportFailed: the file is unreadable, not JSON, or rejected by
            sanitize(). The message is suitable for showing to the user.
    """
    path = Path(filepath)
    try:
        with open(path, "r", encoding="utf-8") as f:
            entries = sanitize(json.load(f))
    except (OSError, json.JSONDecodeError, UnicodeDecodeError, RejectedInput) as exc:
        logger.error("Failed to import %s: %s", path, exc)
        raise ImportFailed(IMPORT_ERROR_MESSAGE) from exc

    logger.info("Imported %d entries from %s", len(entries), path)
    return entries or [create_empty_entry()]
