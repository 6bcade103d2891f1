"""Cloudflare DNS record client."""

from collections.abc import Callable, Mapping
from typing import Any, Literal, TypeVar

import httpx
from pydantic import TypeAdapter, ValidationError

from dnsconsole._logging import RequestTimer, get_logger, log_extra, zone_context
from dnsconsole.exceptions import InvalidArgument, UnknownError, UpstreamError
from dnsconsole.models import ApiEnvelope, DeletedRecord, DnsRecord, DnsRecordFormData

logger = get_logger(__name__)

CLOUDFLARE_API_BASE_URL = "https://api.cloudflare.com/client/v4"

T = TypeVar("T")
Method = Literal["GET", "POST", "PUT", "DELETE"]
FormInput = DnsRecordFormData | Mapping[str, Any]

_record_list = TypeAdapter(list[DnsRecord])


class CloudflareDnsClient:
    """Client for the DNS records of a Cloudflare zone.

    Each operation is a single, uncached round trip to
    ``<base_url>/zones/<zone_id>/dns_records``. Credentials are passed per
    call so one client can serve any session.

    Args:
        base_url: Base URL of the Cloudflare v4 API.
        timeout: HTTP request timeout in seconds (default: 30).
        http_client: Optional pre-configured httpx client. When omitted the
                     client creates and owns its own.
    """

    def __init__(
        self,
        base_url: str = CLOUDFLARE_API_BASE_URL,
        timeout: float = 30,
        http_client: httpx.Client | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._owns_http = http_client is None
        self._http = http_client if http_client is not None else httpx.Client(timeout=timeout)

    def close(self) -> None:
        """Close the HTTP client if this instance created it."""
        if self._owns_http:
            self._http.close()

    def __enter__(self) -> "CloudflareDnsClient":
        return self

    def __exit__(self, *args) -> None:
        self.close()

    @staticmethod
    def _require_credentials(api_token: str, zone_id: str) -> None:
        if not api_token or not zone_id:
            raise InvalidArgument("API Token and Zone ID are required.")

    @staticmethod
    def _require_record(api_token: str, zone_id: str, record_id: str) -> None:
        if not api_token or not zone_id or not record_id:
            raise InvalidArgument("API Token, Zone ID, and Record ID are required.")

    @staticmethod
    def _form_data(data: FormInput) -> DnsRecordFormData:
        if isinstance(data, DnsRecordFormData):
            return data
        try:
            return DnsRecordFormData.model_validate(data)
        except ValidationError as exc:
            raise InvalidArgument(f"Invalid DNS record data: {exc}") from exc

    def _request(
        self,
        method: Method,
        endpoint: str,
        api_token: str,
        zone_id: str,
        parse: Callable[[ApiEnvelope], T],
        body: dict[str, Any] | None = None,
    ) -> T:
        """Make an authenticated request and unwrap the response envelope.

        Args:
            method: HTTP verb.
            endpoint: Path below ``/zones/<zone_id>``.
            api_token: Bearer token.
            zone_id: Zone identifier.
            parse: Converts a successful envelope into the operation's result.
            body: JSON request body, if any.

        Returns:
            Whatever ``parse`` returns for the envelope.

        Raises:
            UpstreamError: If Cloudflare reports failure, the transport fails,
                or the body is not a valid envelope.
            UnknownError: For any other failure.
        """
        url = f"{self.base_url}/zones/{zone_id}{endpoint}"
        headers = {
            "Authorization": f"Bearer {api_token}",
            "Content-Type": "application/json",
        }

        with zone_context(zone_id):
            try:
                with RequestTimer() as timer:
                    response = self._http.request(
                        method,
                        url,
                        headers=headers,
                        json=body,
                        timeout=self.timeout,
                    )
                logger.debug(
                    "Cloudflare API response received",
                    extra=log_extra(
                        method=method,
                        url=url,
                        status_code=response.status_code,
                        elapsed_ms=timer.elapsed_ms,
                    ),
                )

                envelope = ApiEnvelope.model_validate(response.json())
                if not envelope.success:
                    raise UpstreamError.from_envelope(envelope, response.status_code)

                return parse(envelope)

            except UpstreamError as exc:
                self._log_failure(method, url, str(exc))
                raise
            except (httpx.HTTPError, ValueError) as exc:
                # Transport failures, undecodable JSON, and envelope/result validation
                error = UpstreamError(str(exc))
                self._log_failure(method, url, str(error))
                raise error from exc
            except Exception as exc:
                error = UnknownError()
                self._log_failure(method, url, str(error))
                raise error from exc

    @staticmethod
    def _log_failure(method: str, url: str, message: str) -> None:
        logger.error(
            "Cloudflare API error",
            extra=log_extra(method=method, url=url, detail=message),
        )

    @staticmethod
    def _parse_record_list(envelope: ApiEnvelope) -> list[DnsRecord]:
        info = envelope.result_info
        if info is not None and info.total_pages is not None and info.total_pages > 1:
            logger.warning(
                "Zone has more DNS records than one page; only the first page was returned",
                extra=log_extra(
                    page=info.page,
                    total_pages=info.total_pages,
                    total_count=info.total_count,
                ),
            )
        return _record_list.validate_python(envelope.result)

    @staticmethod
    def _parse_record(envelope: ApiEnvelope) -> DnsRecord:
        return DnsRecord.model_validate(envelope.result)

    @staticmethod
    def _parse_deleted(envelope: ApiEnvelope) -> DeletedRecord:
        return DeletedRecord.model_validate(envelope.result)

    def list_records(self, api_token: str, zone_id: str) -> list[DnsRecord]:
        """List the DNS records of a zone.

        Only the first page Cloudflare returns is read.

        Args:
            api_token: Cloudflare API token.
            zone_id: Zone identifier.

        Returns:
            Records in the order Cloudflare returned them.

        Raises:
            InvalidArgument: If the token or zone id is empty.
            UpstreamError: If the request fails.
        """
        self._require_credentials(api_token, zone_id)
        return self._request("GET", "/dns_records", api_token, zone_id, self._parse_record_list)

    def create_record(self, api_token: str, zone_id: str, data: FormInput) -> DnsRecord:
        """Create a DNS record.

        Args:
            api_token: Cloudflare API token.
            zone_id: Zone identifier.
            data: Form data (model or mapping) for the new record.

        Returns:
            The created record, including its Cloudflare-assigned id.

        Raises:
            InvalidArgument: If credentials are empty or the data is invalid.
            UpstreamError: If the request fails.
        """
        self._require_credentials(api_token, zone_id)
        form = self._form_data(data)

        record = self._request(
            "POST",
            "/dns_records",
            api_token,
            zone_id,
            self._parse_record,
            body=form.to_payload(),
        )
        logger.info(
            "DNS record created",
            extra={"zone_id": zone_id, "record_id": record.id, "record_type": str(record.type)},
        )
        return record

    def update_record(
        self,
        api_token: str,
        zone_id: str,
        record_id: str,
        data: FormInput,
    ) -> DnsRecord:
        """Replace the fields of an existing DNS record.

        Args:
            api_token: Cloudflare API token.
            zone_id: Zone identifier.
            record_id: Identifier of the record to update.
            data: Form data (model or mapping) with the new field values.

        Returns:
            The updated record.

        Raises:
            InvalidArgument: If an identifier is empty or the data is invalid.
            UpstreamError: If the request fails.
        """
        self._require_record(api_token, zone_id, record_id)
        form = self._form_data(data)

        record = self._request(
            "PUT",
            f"/dns_records/{record_id}",
            api_token,
            zone_id,
            self._parse_record,
            body=form.to_payload(),
        )
        logger.info(
            "DNS record updated",
            extra={"zone_id": zone_id, "record_id": record_id},
        )
        return record

    def delete_record(self, api_token: str, zone_id: str, record_id: str) -> DeletedRecord:
        """Delete a DNS record.

        Args:
            api_token: Cloudflare API token.
            zone_id: Zone identifier.
            record_id: Identifier of the record to delete.

        Returns:
            The deleted record's id.

        Raises:
            InvalidArgument: If an identifier is empty.
            UpstreamError: If the request fails.
        """
        self._require_record(api_token, zone_id, record_id)

        deleted = self._request(
            "DELETE",
            f"/dns_records/{record_id}",
            api_token,
            zone_id,
            self._parse_deleted,
        )
        logger.info(
            "DNS record deleted",
            extra={"zone_id": zone_id, "record_id": deleted.id},
        )
        return deleted
