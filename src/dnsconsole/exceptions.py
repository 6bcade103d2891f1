"""Cloudflare DNS console exceptions."""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from dnsconsole.models import ApiEnvelope, ApiMessage

REQUEST_FAILED = "Cloudflare API request failed"
UNKNOWN_FAILURE = "An unknown error occurred while communicating with Cloudflare API."


class DnsConsoleError(Exception):
    """Base exception for all dnsconsole errors."""

    pass


class InvalidArgument(DnsConsoleError, ValueError):
    """A required argument was missing or invalid.

    Raised before any network call is made.
    """

    pass


class UpstreamError(DnsConsoleError):
    """Cloudflare reported a failure, or the round trip itself failed.

    Covers both envelopes with ``success: false`` and transport-level
    problems (connection errors, malformed response bodies).
    """

    def __init__(
        self,
        detail: str,
        errors: "list[ApiMessage] | None" = None,
        status_code: int | None = None,
    ):
        self.detail = detail
        self.errors = errors or []
        self.status_code = status_code
        super().__init__(f"{REQUEST_FAILED}: {detail}")

    @classmethod
    def from_envelope(
        cls,
        envelope: "ApiEnvelope",
        status_code: int | None = None,
    ) -> "UpstreamError":
        """Create an UpstreamError from a failed Cloudflare envelope.

        Error pairs are joined in the order Cloudflare returned them.

        Args:
            envelope: Parsed response envelope with ``success`` false.
            status_code: HTTP status code of the response.

        Returns:
            UpstreamError instance.
        """
        detail = ", ".join(f"Error {err.code}: {err.message}" for err in envelope.errors)
        return cls(
            detail=detail or REQUEST_FAILED,
            errors=list(envelope.errors),
            status_code=status_code,
        )

    @property
    def codes(self) -> list[int]:
        """Cloudflare error codes carried by this error."""
        return [err.code for err in self.errors]


class UnknownError(DnsConsoleError):
    """A failure of unrecognized shape."""

    def __init__(self, detail: str = UNKNOWN_FAILURE):
        self.detail = detail
        super().__init__(detail)
