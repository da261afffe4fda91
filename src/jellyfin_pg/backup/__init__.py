"""Backup file layout and tool invocation.

Usage:
    from jellyfin_pg.backup import backup_file_path, list_backups, run_tool
"""

from jellyfin_pg.backup.files import (
    backup_file_path,
    backups_dir,
    list_backups,
    new_backup_key,
)
from jellyfin_pg.backup.process import ToolResult, run_tool

__all__ = [
    "backup_file_path",
    "backups_dir",
    "list_backups",
    "new_backup_key",
    "ToolResult",
    "run_tool",
]
