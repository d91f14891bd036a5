# src/tsvlog/core/logging/paths.py
"""
Storage-path resolution for file-based loggers.

A FileLogger picks its destination once, at construction:

    <root>/<log_dir>/<YYYY-MM-DD.HH-MM-SS>-<log_file>.txt

so every entry from one logger instance goes to one file for its whole lifetime.
There is no rotation.
"""

from datetime import datetime
from pathlib import Path

from tsvlog.exceptions import DestinationError

DEFAULT_LOG_DIR = Path("storage/log")
FILENAME_TIME_FORMAT = "%Y-%m-%d.%H-%M-%S"


def dated_log_name(log_file: str, now: datetime | None = None) -> str:
    now = now or datetime.now()
    return f"{now.strftime(FILENAME_TIME_FORMAT)}-{log_file}.txt"


def resolve_storage_path(fragment: str | Path, *, root: str | Path | None = None, create: bool = True) -> Path:
    """
    Return the absolute path for a logical path fragment.

    Args:
        fragment: path relative to `root` (absolute fragments are kept as is).
        root: base directory, defaults to the current working directory.
        create: create missing parent directories.

    Raises:
        DestinationError: the parent directory could not be created.
    """
    base = Path(root) if root is not None else Path.cwd()
    path = (base / fragment).resolve()
    if create:
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise DestinationError(f"Could not create log directory {path.parent}: {e}") from e
    return path
