"""Local cache for console credentials."""

import contextlib
import json
import os
from pathlib import Path

from pydantic import BaseModel, ValidationError

from dnsconsole._logging import get_logger

logger = get_logger(__name__)

DEFAULT_CREDENTIALS_PATH = Path.home() / ".dnsconsole" / "credentials.json"


class StoredCredentials(BaseModel):
    """Credentials cached between runs."""

    api_token: str
    zone_id: str

    def __repr__(self) -> str:
        return f"StoredCredentials(zone_id={self.zone_id!r})"


class CredentialStore:
    """Key-value file holding the API token and zone id.

    Written after a successful connect, removed on logout, read once at
    startup to prefill the connection form.

    Args:
        path: Location of the JSON file.
    """

    def __init__(self, path: Path | str = DEFAULT_CREDENTIALS_PATH):
        self.path = Path(path)

    def load(self) -> StoredCredentials | None:
        """Read cached credentials.

        Returns:
            The cached credentials, or None when the file is missing,
            unreadable, or either value is empty.
        """
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            credentials = StoredCredentials.model_validate(data)
        except FileNotFoundError:
            return None
        except (OSError, ValueError, ValidationError) as exc:
            logger.warning(
                "Ignoring unreadable credentials file",
                extra={"path": str(self.path), "error": str(exc)},
            )
            return None

        if not credentials.api_token or not credentials.zone_id:
            return None
        return credentials

    def save(self, api_token: str, zone_id: str) -> None:
        """Write credentials, readable by the current user only."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = StoredCredentials(api_token=api_token, zone_id=zone_id).model_dump_json()

        fd = os.open(self.path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            fh.write(payload)
        logger.debug("Credentials cached", extra={"path": str(self.path), "zone_id": zone_id})

    def clear(self) -> None:
        """Remove cached credentials."""
        with contextlib.suppress(FileNotFoundError):
            self.path.unlink()
        logger.debug("Credentials cache cleared", extra={"path": str(self.path)})
