"""Pytest fixtures for dnsconsole test suite."""

import logging
import logging.handlers
import os
from collections.abc import Generator
from pathlib import Path
from typing import Any

import pytest

from dnsconsole.client import CloudflareDnsClient
from dnsconsole.storage import CredentialStore

# Live API credentials for opt-in integration tests
CLOUDFLARE_API_TOKEN = os.environ.get("CLOUDFLARE_API_TOKEN", "")
CLOUDFLARE_ZONE_ID = os.environ.get("CLOUDFLARE_ZONE_ID", "")

API_URL = "https://api.cloudflare.com/client/v4"
ZONE_ID = "023e105f4ecef8ad9ca31a8372d0c353"
API_TOKEN = "test-api-token"
RECORDS_URL = f"{API_URL}/zones/{ZONE_ID}/dns_records"


def make_record(**overrides: Any) -> dict[str, Any]:
    """Build a DNS record as Cloudflare returns it."""
    record: dict[str, Any] = {
        "id": "372e67954025e0ba6aaa6d586b9e0b59",
        "zone_id": ZONE_ID,
        "zone_name": "example.com",
        "name": "www.example.com",
        "type": "A",
        "content": "198.51.100.4",
        "proxiable": True,
        "proxied": False,
        "ttl": 3600,
        "locked": False,
        "meta": {"auto_added": False, "source": "primary"},
        "comment": None,
        "tags": [],
        "created_on": "2024-01-01T05:20:00.12345Z",
        "modified_on": "2024-01-01T05:20:00.12345Z",
    }
    record.update(overrides)
    return record


def envelope(result: Any = None, **overrides: Any) -> dict[str, Any]:
    """Build a successful Cloudflare response envelope."""
    body: dict[str, Any] = {
        "success": True,
        "errors": [],
        "messages": [],
        "result": result,
    }
    body.update(overrides)
    return body


def error_envelope(*errors: tuple[int, str]) -> dict[str, Any]:
    """Build a failed Cloudflare response envelope."""
    return {
        "success": False,
        "errors": [{"code": code, "message": message} for code, message in errors],
        "messages": [],
        "result": None,
    }


@pytest.fixture
def client() -> Generator[CloudflareDnsClient]:
    """Create a DNS client against the default API URL."""
    dns_client = CloudflareDnsClient()
    yield dns_client
    dns_client.close()


@pytest.fixture
def credential_store(tmp_path: Path) -> CredentialStore:
    """Create a credential store in a temporary directory."""
    return CredentialStore(tmp_path / "dnsconsole" / "credentials.json")


@pytest.fixture(scope="session")
def live_credentials() -> tuple[str, str]:
    """Return live Cloudflare credentials, skipping when not configured."""
    if not CLOUDFLARE_API_TOKEN or not CLOUDFLARE_ZONE_ID:
        pytest.skip("CLOUDFLARE_API_TOKEN and CLOUDFLARE_ZONE_ID not set")
    return CLOUDFLARE_API_TOKEN, CLOUDFLARE_ZONE_ID


class LogCapture:
    """Helper class to capture and inspect log records."""

    def __init__(self, handler: logging.handlers.MemoryHandler) -> None:
        self._handler = handler

    @property
    def records(self) -> list[logging.LogRecord]:
        """Get all captured log records."""
        return self._handler.buffer

    def get_records(
        self, level: int | None = None, name: str | None = None
    ) -> list[logging.LogRecord]:
        """Get log records filtered by level and/or logger name.

        Args:
            level: Filter by log level (e.g., logging.INFO).
            name: Filter by logger name prefix (e.g., "dnsconsole.client").

        Returns:
            List of matching log records.
        """
        records = self.records
        if level is not None:
            records = [r for r in records if r.levelno == level]
        if name is not None:
            records = [r for r in records if r.name.startswith(name)]
        return records

    def get_messages(self, level: int | None = None, name: str | None = None) -> list[str]:
        """Get log messages filtered by level and/or logger name."""
        return [r.getMessage() for r in self.get_records(level, name)]

    def clear(self) -> None:
        """Clear all captured log records."""
        self._handler.buffer.clear()


@pytest.fixture
def log_capture() -> Generator[LogCapture]:
    """Capture logs from the dnsconsole library during a test.

    Usage:
        def test_something(log_capture):
            # do something that logs
            assert "DNS record created" in log_capture.get_messages(logging.INFO)
    """
    handler = logging.handlers.MemoryHandler(capacity=1000)
    handler.setLevel(logging.DEBUG)

    package_logger = logging.getLogger("dnsconsole")
    original_level = package_logger.level
    package_logger.setLevel(logging.DEBUG)
    package_logger.addHandler(handler)

    try:
        yield LogCapture(handler)
    finally:
        package_logger.removeHandler(handler)
        package_logger.setLevel(original_level)
        handler.close()
