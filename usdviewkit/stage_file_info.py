"""Facts about a chosen USD file for display in a parameter panel."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path

USD_EXTENSIONS = frozenset({"usd", "usda", "usdc", "usdz"})
NO_FILE_SELECTED = "No file selected"
_MAX_DISPLAY = 50
_TAIL = 47
_TIME_FORMAT = "%Y-%m-%d %H:%M:%S UTC"


def display_path(path: str | None) -> str:
    """Shorten a path for display, keeping its tail behind an ellipsis."""
    if path is None:
        return NO_FILE_SELECTED
    if len(path) > _MAX_DISPLAY:
        return f"...{path[-_TAIL:]}"
    return path


def _extension(path) -> str | None:
    suffix = Path(path).suffix
    return suffix[1:] if suffix else None


def is_usd_extension(path) -> bool:
    """True when the file extension is one of the USD formats, in any case."""
    extension = _extension(path)
    return extension is not None and extension.lower() in USD_EXTENSIONS


@dataclass(frozen=True)
class FileInfo:
    """Size, modification time and format of a file."""

    path: str
    size: int
    modified: datetime
    extension: str | None

    @property
    def is_valid_format(self) -> bool:
        return self.extension is not None and self.extension.lower() in USD_EXTENSIONS

    @property
    def modified_text(self) -> str:
        return self.modified.strftime(_TIME_FORMAT)

    @property
    def format_label(self) -> str | None:
        return None if self.extension is None else f".{self.extension}"


def describe_file(path: str) -> FileInfo:
    """Return information about an existing file at ``path``."""
    if not path:
        raise ValueError("no file path given")
    file = Path(path)
    if not file.exists():
        raise FileNotFoundError(f"File not found or inaccessible: {path}")
    stat = file.stat()
    modified = datetime.fromtimestamp(int(stat.st_mtime), tz=timezone.utc)
    return FileInfo(path=path, size=stat.st_size, modified=modified, extension=_extension(path))