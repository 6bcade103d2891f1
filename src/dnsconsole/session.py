"""Console session state."""

from pydantic import BaseModel, Field

from dnsconsole.models import DnsRecord
from dnsconsole.view import SortConfig


class Session(BaseModel):
    """State of one console session.

    Passed explicitly into every controller operation. Never persisted
    server-side; only the credentials are cached locally, by the
    controller, after a successful connect.
    """

    api_token: str = ""
    zone_id: str = ""
    authenticated: bool = False
    records: list[DnsRecord] = Field(default_factory=list)
    error: str | None = None
    search_term: str = ""
    sort: SortConfig | None = None
    loading: bool = False
    action_pending: bool = False

    model_config = {"validate_assignment": True}

    @property
    def has_credentials(self) -> bool:
        """Whether both a token and a zone id are set."""
        return bool(self.api_token and self.zone_id)

    def clear(self) -> None:
        """Reset to the logged-out state."""
        self.api_token = ""
        self.zone_id = ""
        self.authenticated = False
        self.records = []
        self.error = None
        self.search_term = ""
        self.sort = None
        self.loading = False
        self.action_pending = False

    def __repr__(self) -> str:
        # Keep the token out of reprs and logs
        return (
            f"Session(zone_id={self.zone_id!r}, authenticated={self.authenticated}, "
            f"records={len(self.records)})"
        )
