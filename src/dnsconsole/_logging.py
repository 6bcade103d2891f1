"""Logging helpers shared by the dnsconsole modules.

The package logger gets a NullHandler so nothing is printed unless the
application configures logging. Log calls attach structured fields through
``extra``; ``log_extra`` adds the zone of the request in flight.
"""

import logging
import time
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any

PACKAGE_LOGGER = "dnsconsole"

logging.getLogger(PACKAGE_LOGGER).addHandler(logging.NullHandler())

# Zone of the Cloudflare request in flight
_zone_id: ContextVar[str | None] = ContextVar("dnsconsole_zone_id", default=None)


def get_logger(name: str) -> logging.Logger:
    """Logger for a module, placed under the ``dnsconsole`` tree.

    Args:
        name: Module name, usually ``__name__``. Names outside the package
            are nested under it.
    """
    if name != PACKAGE_LOGGER and not name.startswith(f"{PACKAGE_LOGGER}."):
        name = f"{PACKAGE_LOGGER}.{name}"
    return logging.getLogger(name)


@contextmanager
def zone_context(zone_id: str | None) -> Iterator[None]:
    """Tag log records emitted inside the block with ``zone_id``."""
    token = _zone_id.set(zone_id or None)
    try:
        yield
    finally:
        _zone_id.reset(token)


def current_zone() -> str | None:
    return _zone_id.get()


def log_extra(**fields: Any) -> dict[str, Any]:
    """Build an ``extra`` mapping for a log call.

    The current zone is added as ``zone_id`` unless the caller passed one.
    """
    zone_id = _zone_id.get()
    if zone_id is not None:
        fields.setdefault("zone_id", zone_id)
    return fields


class RequestTimer:
    """Measures one API round trip.

    ``elapsed_ms`` is rounded to a tenth of a millisecond and stays 0 until
    the block exits.
    """

    def __init__(self) -> None:
        self.elapsed_ms = 0.0
        self._started_ns = 0

    def __enter__(self) -> "RequestTimer":
        self._started_ns = time.perf_counter_ns()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.elapsed_ms = round((time.perf_counter_ns() - self._started_ns) / 1_000_000, 1)
