"""Backup key generation and on-disk layout.

Backups live at ``{data_path}/backups/{key}_jellyfin.dump`` where ``key``
is the UTC creation time formatted ``%Y%m%d%H%M%S``.  The filesystem is
the only catalog: a key exists if and only if its file does.

Two backups created within the same second get the same key; the second
``pg_dump`` overwrites the first file.
"""

from datetime import datetime, timezone
from pathlib import Path

BACKUPS_DIR_NAME = "backups"
BACKUP_FILE_SUFFIX = "_jellyfin.dump"
KEY_FORMAT = "%Y%m%d%H%M%S"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def new_backup_key() -> str:
    """Return a backup key for the current UTC second."""
    return _utcnow().strftime(KEY_FORMAT)


def backups_dir(data_path: Path) -> Path:
    """Directory holding all backup files under ``data_path``."""
    return Path(data_path) / BACKUPS_DIR_NAME


def backup_file_path(data_path: Path, key: str) -> Path:
    """Path of the dump file for ``key``."""
    return backups_dir(data_path) / f"{key}{BACKUP_FILE_SUFFIX}"


def list_backups(data_path: Path) -> list[str]:
    """List backup keys found on disk, oldest first.

    Args:
        data_path: Host data directory.

    Returns:
        Sorted keys of ``*_jellyfin.dump`` files.  Empty list if the
        backups directory does not exist.
    """
    directory = backups_dir(data_path)
    if not directory.is_dir():
        return []

    keys = [
        p.name[: -len(BACKUP_FILE_SUFFIX)]
        for p in directory.glob(f"*{BACKUP_FILE_SUFFIX}")
        if p.is_file()
    ]
    return sorted(keys)
