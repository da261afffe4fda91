"""Lookup of provider settings in the host's generic option bag.

Keys are matched case-insensitively and the first match wins.  Missing
keys fall back to a default factory.

Usage:
    from jellyfin_pg.config.options import build_connection_info, get_option

    port = get_option(options, "port", int, lambda: 5432)
    info = build_connection_info(options)
"""

from collections.abc import Callable, Iterable
from typing import TypeVar

from jellyfin_pg.config.models import ConnectionInfo, CustomDatabaseOption

T = TypeVar("T")


def get_option(
    options: Iterable[CustomDatabaseOption] | None,
    key: str,
    converter: Callable[[str], T],
    default: Callable[[], T] | None = None,
) -> T | None:
    """Look up ``key`` in ``options`` and convert its value.

    Args:
        options: Host option pairs, or ``None`` when the host supplied none.
        key: Option name, compared case-insensitively.
        converter: Applied to the raw string value of the first match.
        default: Factory called when the key is absent.

    Returns:
        The converted value, ``default()`` when absent, or ``None`` when
        absent and no default was given.

    Raises:
        ValueError: If ``converter`` rejects the value (e.g. a non-numeric port).
    """
    if options is not None:
        wanted = key.casefold()
        for option in options:
            if option.key.casefold() == wanted:
                return converter(option.value)

    return default() if default is not None else None


def build_connection_info(
    options: Iterable[CustomDatabaseOption] | None,
) -> ConnectionInfo:
    """Resolve host, port, database, username and password from ``options``."""
    options = list(options) if options is not None else None
    return ConnectionInfo(
        host=get_option(options, "host", str, lambda: "localhost"),
        port=get_option(options, "port", int, lambda: 5432),
        database=get_option(options, "database", str, lambda: "jellyfin"),
        username=get_option(options, "username", str, lambda: "jellyfin"),
        password=get_option(options, "password", str, lambda: "jellyfin"),
    )
