"""Decide the ingestion mode for a user-supplied path or URL.

URL inputs never touch the filesystem. Directories with at least one CSV
file are imported as a CSV set; anything else is sent as a file, with
directories packed as an in-memory tar.gz first.
"""

from __future__ import annotations

import logging
import stat
from pathlib import Path
from urllib.parse import urlparse

from adapters.archive import compress_directory
from adapters.csv_locator import is_csv, locate_csv_files
from core.domain.errors import FileReadError, FolderStatError
from core.domain.models import CsvTriplet, IngestionMode, InputDescriptor

logger = logging.getLogger(__name__)

CSV_FILE_NAME = "model.csv"


def is_valid_url(value: str) -> bool:
    """True for syntactically valid absolute URLs (scheme + host)."""

    try:
        parsed = urlparse(value.strip())
    except ValueError:
        return False
    return bool(parsed.scheme) and bool(parsed.netloc)


def has_csvs(path: str | Path) -> bool:
    """True if `path` is a directory holding at least one `.csv` file (any case)."""

    try:
        entries = list(Path(path).iterdir())
    except OSError:
        return False
    return any(not entry.is_dir() and is_csv(entry) for entry in entries)


def _read_bytes(path: Path) -> bytes:
    try:
        return path.read_bytes()
    except OSError as exc:
        raise FileReadError(str(path), exc) from exc


def classify_input(source: str) -> InputDescriptor:
    if is_valid_url(source):
        logger.debug("Input %s classified as URL import", source)
        return InputDescriptor(mode=IngestionMode.URL, source=source)

    if has_csvs(source):
        location = locate_csv_files(source)
        logger.debug(
            "Input %s classified as CSV import (model=%s, component=%s, relationship=%s)",
            source,
            location.model.name,
            location.component.name,
            location.relationship.name,
        )
        triplet = CsvTriplet(
            model=_read_bytes(location.model),
            component=_read_bytes(location.component),
            relationship=_read_bytes(location.relationship),
        )
        return InputDescriptor(
            mode=IngestionMode.CSV,
            source=source,
            file_name=CSV_FILE_NAME,
            csv=triplet,
        )

    path = Path(source)
    try:
        info = path.stat()
    except OSError as exc:
        raise FolderStatError(source, exc) from exc

    if stat.S_ISDIR(info.st_mode):
        data = compress_directory(path)
        file_name = f"{path.resolve().name}.tar.gz"
    else:
        data = _read_bytes(path)
        file_name = path.name

    logger.debug("Input %s classified as file import (%s, %d bytes)", source, file_name, len(data))
    return InputDescriptor(mode=IngestionMode.FILE, source=source, file_name=file_name, data=data)
