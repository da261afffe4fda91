"""Child-process wrapper for the PostgreSQL client tools.

Runs ``pg_dump`` / ``pg_restore`` without a shell.  The password travels
only in the child's ``PGPASSWORD`` environment variable, never in argv.
Cancelling the awaiting task kills the child before the cancellation
propagates.

Usage:
    from jellyfin_pg.backup.process import run_tool

    result = await run_tool(
        "pg_dump",
        ["-h", "localhost", "-U", "jellyfin", "-f", "/tmp/out.dump", "jellyfin"],
        password="secret",
    )
"""

import asyncio
import logging
import os
from collections.abc import Sequence
from dataclasses import dataclass

from jellyfin_pg.errors import ExternalToolError

logger = logging.getLogger(__name__)

PASSWORD_ENV_VAR = "PGPASSWORD"


@dataclass(frozen=True)
class ToolResult:
    """Outcome of a successful tool run."""

    returncode: int
    stdout: str
    stderr: str


def build_env(password: str | None) -> dict[str, str]:
    """Copy of the current environment with ``PGPASSWORD`` set if given."""
    env = os.environ.copy()
    if password:
        env[PASSWORD_ENV_VAR] = password
    return env


async def run_tool(
    tool: str,
    args: Sequence[str],
    password: str | None = None,
) -> ToolResult:
    """Run ``tool`` with ``args`` and wait for it to exit.

    Args:
        tool: Executable name, resolved on ``PATH``.
        args: Arguments passed verbatim (no shell, no quoting).
        password: Exported to the child as ``PGPASSWORD`` when non-empty.

    Returns:
        ``ToolResult`` with decoded stdout/stderr.

    Raises:
        ExternalToolError: If the tool exits with a non-zero code.
        OSError: If the tool cannot be started (e.g. not installed).
        asyncio.CancelledError: If the caller is cancelled; the child is
            killed first.
    """
    try:
        proc = await asyncio.create_subprocess_exec(
            tool,
            *args,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            env=build_env(password),
        )
    except OSError as exc:
        logger.error("Failed to start %s: %s", tool, exc)
        raise

    try:
        stdout_data, stderr_data = await proc.communicate()
    except asyncio.CancelledError:
        logger.warning("Cancelled while waiting for %s, killing pid %s", tool, proc.pid)
        if proc.returncode is None:
            try:
                proc.kill()
            except ProcessLookupError:
                pass
            await proc.wait()
        raise

    stdout = stdout_data.decode(errors="ignore") if stdout_data else ""
    stderr = stderr_data.decode(errors="ignore") if stderr_data else ""

    if proc.returncode != 0:
        raise ExternalToolError(tool, proc.returncode, stderr)

    logger.debug("%s exited with code 0", tool)
    return ToolResult(returncode=proc.returncode, stdout=stdout, stderr=stderr)
