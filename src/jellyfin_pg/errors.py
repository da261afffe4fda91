"""Exception types raised by the PostgreSQL provider.

Query failures are not wrapped: they surface as
``sqlalchemy.exc.DBAPIError``.  Filesystem failures surface as ``OSError``.
"""


class JellyfinPgError(Exception):
    """Base class for provider errors."""


class ExternalToolError(JellyfinPgError, RuntimeError):
    """Raised when ``pg_dump`` or ``pg_restore`` exits with a non-zero code.

    Attributes:
        tool: Name of the executable that failed.
        returncode: Exit code reported by the child process.
        stderr: Captured standard error text.
    """

    def __init__(self, tool: str, returncode: int, stderr: str) -> None:
        self.tool = tool
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(f"{tool} failed with exit code {returncode}: {stderr.strip()}")


class UnsupportedOperationError(JellyfinPgError, NotImplementedError):
    """Raised by providers that cannot perform an operation on this backend."""


class ProviderNotInitialisedError(JellyfinPgError, RuntimeError):
    """Raised when an operation needs connection info that was never set."""


class ProviderNotFoundError(JellyfinPgError, LookupError):
    """Raised when the configured database type has no matching provider."""
