from __future__ import annotations

from pathlib import Path
from typing import Union

from ..core.constants import CSV_EXTENSION, MAX_IMPORT_FILE_BYTES
from ..core.exceptions import (
    EmptyFileError,
    FileOperationError,
    FileTooLargeError,
    ImportFileNotFoundError,
    NotARegularFileError,
    ValidationError,
    WrongExtensionError,
)


def validate_import_file(file_path: Union[str, Path, None], *, max_bytes: int = MAX_IMPORT_FILE_BYTES) -> Path:
    """Check a candidate import path before any of its content is read.

    Order: exists, regular file, .csv extension, non-empty, size limit.
    """
    if file_path is None or not str(file_path).strip():
        raise ValidationError("File path cannot be null or empty")

    path = Path(file_path)
    if not path.exists():
        raise ImportFileNotFoundError(f"File not found: {path}")
    if not path.is_file():
        raise NotARegularFileError(f"Path is not a regular file: {path}")
    if not path.name.lower().endswith(CSV_EXTENSION):
        raise WrongExtensionError("File must have .csv extension")

    try:
        size = path.stat().st_size
    except OSError as e:
        raise FileOperationError(f"Cannot read file: {e}") from e

    if size == 0:
        raise EmptyFileError("File is empty")
    if size > max_bytes:
        raise FileTooLargeError(f"File exceeds max size: {size} bytes (limit {max_bytes})")
    return path
