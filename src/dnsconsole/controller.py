"""Console controller orchestrating sessions and the DNS client."""

import logging
from collections.abc import Callable
from enum import StrEnum

from pydantic import BaseModel

from dnsconsole._logging import get_logger
from dnsconsole.client import CloudflareDnsClient, FormInput
from dnsconsole.exceptions import DnsConsoleError
from dnsconsole.models import DnsRecord, DnsRecordFormData
from dnsconsole.session import Session
from dnsconsole.storage import CredentialStore
from dnsconsole.view import next_sort, visible_records

logger = get_logger(__name__)


class NotificationVariant(StrEnum):
    """How prominently a notification is shown."""

    DEFAULT = "default"
    DESTRUCTIVE = "destructive"


class Notification(BaseModel):
    """A transient, user-facing message."""

    title: str
    description: str
    variant: NotificationVariant = NotificationVariant.DEFAULT


Notifier = Callable[[Notification], None]


def log_notification(notification: Notification) -> None:
    """Default notifier: write the notification to the library log."""
    level = (
        logging.ERROR if notification.variant == NotificationVariant.DESTRUCTIVE else logging.INFO
    )
    logger.log(level, "%s: %s", notification.title, notification.description)


class ConsoleController:
    """Drives a console session against a Cloudflare zone.

    Every operation takes the session explicitly. Errors from the client are
    caught here, at the action boundary, reported through ``notify`` and
    leave the displayed records as they were. Mutations are never applied
    locally; a successful create, update or delete re-lists the zone.

    Args:
        client: DNS record client.
        store: Local credential cache.
        notify: Callback receiving user-facing notifications.
    """

    def __init__(
        self,
        client: CloudflareDnsClient,
        store: CredentialStore,
        notify: Notifier = log_notification,
    ):
        self.client = client
        self.store = store
        self.notify = notify

    def _success(self, description: str, title: str = "Success") -> None:
        self.notify(Notification(title=title, description=description))

    def _failure(self, description: str) -> None:
        self.notify(
            Notification(
                title="Error",
                description=description,
                variant=NotificationVariant.DESTRUCTIVE,
            )
        )

    def restore(self, session: Session) -> bool:
        """Prefill the session from cached credentials.

        Does not authenticate; the user still has to connect.

        Returns:
            True if cached credentials were found.
        """
        credentials = self.store.load()
        if credentials is None:
            return False
        session.api_token = credentials.api_token
        session.zone_id = credentials.zone_id
        return True

    def connect(self, session: Session, api_token: str, zone_id: str) -> bool:
        """Verify credentials by listing records, then start the session.

        Credentials are cached only after the verifying fetch succeeds.
        """
        session.loading = True
        session.error = None
        try:
            records = self.client.list_records(api_token, zone_id)
        except DnsConsoleError as exc:
            session.error = str(exc)
            session.authenticated = False
            self._failure(str(exc))
            return False
        finally:
            session.loading = False

        session.records = records
        session.api_token = api_token
        session.zone_id = zone_id
        session.authenticated = True
        self.store.save(api_token, zone_id)
        logger.info(
            "Connected to zone",
            extra={"zone_id": zone_id, "record_count": len(records)},
        )
        self._success("Connected to Cloudflare and records fetched.")
        return True

    def refresh(self, session: Session) -> bool:
        """Re-list the zone's records into the session."""
        if not session.has_credentials:
            self._failure("API Token and Zone ID are missing.")
            return False

        session.loading = True
        session.error = None
        try:
            session.records = self.client.list_records(session.api_token, session.zone_id)
        except DnsConsoleError as exc:
            session.error = str(exc)
            self._failure(str(exc))
            return False
        finally:
            session.loading = False

        self._success("DNS records refreshed.")
        return True

    def _begin_action(self, session: Session) -> bool:
        if session.action_pending:
            self._failure("Another action is still in progress.")
            return False
        session.action_pending = True
        return True

    def _proxies_unproxiable(self, session: Session, data: FormInput, record_id: str) -> bool:
        proxied = data.proxied if isinstance(data, DnsRecordFormData) else data.get("proxied")
        record = self.find_record(session, record_id)
        return bool(proxied) and record is not None and not record.proxiable

    def save_record(
        self,
        session: Session,
        data: FormInput,
        record_id: str | None = None,
    ) -> bool:
        """Create a record, or update ``record_id`` when given.

        Returns:
            True if the record was saved.
        """
        if record_id and self._proxies_unproxiable(session, data, record_id):
            self._failure("This record cannot be proxied.")
            return False
        if not self._begin_action(session):
            return False
        try:
            if record_id:
                self.client.update_record(session.api_token, session.zone_id, record_id, data)
                message = "DNS record updated successfully."
            else:
                self.client.create_record(session.api_token, session.zone_id, data)
                message = "DNS record created successfully."
        except DnsConsoleError as exc:
            self._failure(str(exc))
            return False
        finally:
            session.action_pending = False

        self._success(message)
        self.refresh(session)
        return True

    def delete_record(self, session: Session, record_id: str) -> bool:
        """Delete a record and re-list the zone.

        Returns:
            True if the record was deleted.
        """
        if not self._begin_action(session):
            return False
        try:
            self.client.delete_record(session.api_token, session.zone_id, record_id)
        except DnsConsoleError as exc:
            self._failure(str(exc))
            return False
        finally:
            session.action_pending = False

        self._success("DNS record deleted successfully.")
        self.refresh(session)
        return True

    def logout(self, session: Session) -> None:
        """Forget the session and the cached credentials."""
        session.clear()
        self.store.clear()
        self._success("You have been logged out.", title="Logged Out")

    def search(self, session: Session, term: str) -> list[DnsRecord]:
        """Set the search term and return the resulting view."""
        session.search_term = term
        return self.view(session)

    def sort_by(self, session: Session, key: str) -> list[DnsRecord]:
        """Sort by ``key``, toggling direction on repeated clicks."""
        session.sort = next_sort(session.sort, key)
        return self.view(session)

    def find_record(self, session: Session, record_id: str) -> DnsRecord | None:
        """Look up a displayed record by id."""
        return next((record for record in session.records if record.id == record_id), None)

    def view(self, session: Session) -> list[DnsRecord]:
        """Records as displayed: filtered by the search term, then sorted."""
        return visible_records(session.records, session.search_term, session.sort)
