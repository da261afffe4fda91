"""Tests for the pg_dump / pg_restore child-process wrapper.

Verifies that the password only reaches the child through PGPASSWORD,
that non-zero exits raise ExternalToolError with the captured stderr, and
that cancelling the caller kills the child.
"""

import asyncio

import pytest

from jellyfin_pg.backup import process
from jellyfin_pg.backup.process import ToolResult, build_env, run_tool
from jellyfin_pg.errors import ExternalToolError


class DummyProcess:
    def __init__(self, returncode=0, stdout=b"", stderr=b""):
        self.pid = 4242
        self._final_returncode = returncode
        self.returncode = None
        self._stdout = stdout
        self._stderr = stderr

    async def communicate(self):
        self.returncode = self._final_returncode
        return self._stdout, self._stderr


class HangingProcess:
    """Process whose communicate() never finishes until killed."""

    def __init__(self):
        self.pid = 4343
        self.returncode = None
        self.killed = False
        self.waited = False
        self._done = asyncio.Event()

    async def communicate(self):
        await self._done.wait()
        return b"", b""

    def kill(self):
        self.killed = True
        self.returncode = -9
        self._done.set()

    async def wait(self):
        self.waited = True
        return self.returncode


def _install_fake_exec(monkeypatch, proc):
    calls = []

    async def fake_exec(*args, **kwargs):
        calls.append((args, kwargs))
        return proc

    monkeypatch.setattr(asyncio, "create_subprocess_exec", fake_exec)
    return calls


class TestBuildEnv:
    """Test child environment construction."""

    def test_password_set(self, monkeypatch) -> None:
        """A password is exported as PGPASSWORD."""
        monkeypatch.delenv("PGPASSWORD", raising=False)
        assert build_env("pw")["PGPASSWORD"] == "pw"

    def test_empty_password_not_set(self, monkeypatch) -> None:
        """An empty password leaves PGPASSWORD unset."""
        monkeypatch.delenv("PGPASSWORD", raising=False)
        assert "PGPASSWORD" not in build_env("")
        assert "PGPASSWORD" not in build_env(None)

    def test_inherits_environment(self, monkeypatch) -> None:
        """The rest of the parent environment is kept (e.g. PATH)."""
        monkeypatch.setenv("JELLYFIN_PG_TEST_MARKER", "1")
        assert build_env("pw")["JELLYFIN_PG_TEST_MARKER"] == "1"

    def test_parent_environment_untouched(self, monkeypatch) -> None:
        """PGPASSWORD is only set on the copy, never on os.environ."""
        monkeypatch.delenv("PGPASSWORD", raising=False)
        build_env("pw")
        assert "PGPASSWORD" not in process.os.environ


class TestRunTool:
    """Test run_tool() invocation and error handling."""

    async def test_success_returns_result(self, monkeypatch) -> None:
        """Exit code 0 returns decoded output."""
        _install_fake_exec(monkeypatch, DummyProcess(0, b"out", b"verbose log"))

        result = await run_tool("pg_dump", ["-v"], password="pw")

        assert result == ToolResult(returncode=0, stdout="out", stderr="verbose log")

    async def test_args_passed_without_shell(self, monkeypatch) -> None:
        """The tool and each argument are passed as separate argv items."""
        calls = _install_fake_exec(monkeypatch, DummyProcess())

        await run_tool("pg_dump", ["-f", "/data/backups/a b.dump", "jellyfin"])

        args, kwargs = calls[0]
        assert args == ("pg_dump", "-f", "/data/backups/a b.dump", "jellyfin")
        assert kwargs["stdout"] == asyncio.subprocess.PIPE
        assert kwargs["stderr"] == asyncio.subprocess.PIPE

    async def test_password_only_in_env(self, monkeypatch) -> None:
        """The password appears in the child env, never in argv."""
        calls = _install_fake_exec(monkeypatch, DummyProcess())

        await run_tool("pg_restore", ["-U", "jellyfin"], password="t0p-secret")

        args, kwargs = calls[0]
        assert kwargs["env"]["PGPASSWORD"] == "t0p-secret"
        assert all("t0p-secret" not in a for a in args)

    async def test_nonzero_exit_raises(self, monkeypatch) -> None:
        """A non-zero exit raises ExternalToolError carrying stderr."""
        _install_fake_exec(
            monkeypatch,
            DummyProcess(1, b"", b"pg_dump: error: connection refused\n"),
        )

        with pytest.raises(ExternalToolError) as exc_info:
            await run_tool("pg_dump", [], password="pw")

        err = exc_info.value
        assert err.tool == "pg_dump"
        assert err.returncode == 1
        assert err.stderr == "pg_dump: error: connection refused\n"
        assert str(err).endswith("connection refused")
        assert "exit code 1" in str(err)

    async def test_missing_tool_raises_oserror(self, monkeypatch) -> None:
        """A tool that cannot be started raises the OSError unchanged."""

        async def fake_exec(*args, **kwargs):
            raise FileNotFoundError(2, "No such file or directory", args[0])

        monkeypatch.setattr(asyncio, "create_subprocess_exec", fake_exec)

        with pytest.raises(FileNotFoundError):
            await run_tool("pg_dump", [])

    async def test_cancel_kills_child(self, monkeypatch) -> None:
        """Cancelling the caller kills and reaps the child, then re-raises."""
        proc = HangingProcess()
        _install_fake_exec(monkeypatch, proc)

        task = asyncio.create_task(run_tool("pg_restore", [], password="pw"))
        await asyncio.sleep(0)
        task.cancel()

        with pytest.raises(asyncio.CancelledError):
            await task

        assert proc.killed is True
        assert proc.waited is True
