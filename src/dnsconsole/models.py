"""Pydantic models for Cloudflare DNS resources."""

from datetime import datetime
from enum import StrEnum
from typing import Annotated, Any

from pydantic import BaseModel, Field, SerializeAsAny, field_validator, model_validator

# =============================================================================
# Constants
# =============================================================================

TTL_AUTO = 1
TTL_MIN = 60
TTL_MAX = 86400
DEFAULT_TTL = 3600
DEFAULT_MX_PRIORITY = 10


def check_ttl(ttl: int) -> int:
    """Validate a TTL value.

    Args:
        ttl: Time-to-live in seconds.

    Returns:
        The TTL unchanged.

    Raises:
        ValueError: If the TTL is neither automatic (1) nor within 60-86400.
    """
    if ttl != TTL_AUTO and not TTL_MIN <= ttl <= TTL_MAX:
        raise ValueError(f"TTL must be {TTL_AUTO} (automatic) or between {TTL_MIN} and {TTL_MAX}")
    return ttl


# =============================================================================
# Enums
# =============================================================================


class RecordType(StrEnum):
    """DNS record types known to Cloudflare."""

    A = "A"
    AAAA = "AAAA"
    CNAME = "CNAME"
    MX = "MX"
    TXT = "TXT"
    SRV = "SRV"
    NS = "NS"
    CAA = "CAA"
    PTR = "PTR"
    SPF = "SPF"
    CERT = "CERT"
    DNSKEY = "DNSKEY"
    DS = "DS"
    NAPTR = "NAPTR"
    SMIMEA = "SMIMEA"
    SSHFP = "SSHFP"
    SVCB = "SVCB"
    TLSA = "TLSA"
    URI = "URI"


# Types offered when creating or editing a record
EDITABLE_RECORD_TYPES: tuple[RecordType, ...] = (
    RecordType.A,
    RecordType.AAAA,
    RecordType.CNAME,
    RecordType.MX,
    RecordType.TXT,
    RecordType.SRV,
    RecordType.NS,
    RecordType.CAA,
    RecordType.PTR,
    RecordType.SPF,
)

# Unlisted provider types fall through to a plain string
AnyRecordType = Annotated[RecordType | str, Field(union_mode="left_to_right")]


# =============================================================================
# Record metadata variants
# =============================================================================


class RecordMeta(BaseModel):
    """Provider metadata common to every record type.

    Unknown keys returned by Cloudflare are kept as extra fields.
    """

    auto_added: bool | None = None
    managed_by_apps: bool | None = None
    managed_by_argo_tunnel: bool | None = None
    source: str | None = None

    model_config = {"extra": "allow"}


class MxRecordMeta(RecordMeta):
    """Metadata for MX records."""

    priority: int | None = None


_META_TYPES: dict[str, type[RecordMeta]] = {
    RecordType.MX: MxRecordMeta,
}


def record_meta_type(record_type: str | None) -> type[RecordMeta]:
    """Get the metadata variant for a record type.

    Args:
        record_type: DNS record type, e.g. "MX".

    Returns:
        The RecordMeta subclass that describes the type's extra fields.
    """
    return _META_TYPES.get(str(record_type), RecordMeta)


# =============================================================================
# Pydantic Models
# =============================================================================


class DnsRecord(BaseModel):
    """A DNS record as returned by the Cloudflare API.

    Read-side model: values are taken as Cloudflare reports them, and fields
    not declared here (SRV/CAA ``data``, ``settings``, ...) are kept as
    extras. For MX records the top-level ``priority`` is also copied into
    ``meta``.
    """

    id: str
    zone_id: str | None = None
    zone_name: str | None = None
    name: str
    type: AnyRecordType
    content: str
    proxiable: bool = False
    proxied: bool = False
    ttl: int = TTL_AUTO
    locked: bool = False
    meta: SerializeAsAny[RecordMeta] = Field(default_factory=RecordMeta)
    comment: str | None = None
    tags: list[str] = Field(default_factory=list)
    created_on: datetime | None = None
    modified_on: datetime | None = None

    model_config = {"extra": "allow"}

    @model_validator(mode="before")
    @classmethod
    def _tag_meta(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        meta = data.get("meta") or {}
        if isinstance(meta, BaseModel):
            meta = meta.model_dump(exclude_none=True)
        meta = dict(meta)

        record_type = data.get("type")
        # Cloudflare reports MX priority at the top level
        if record_type == RecordType.MX and "priority" not in meta and "priority" in data:
            meta["priority"] = data["priority"]

        return {**data, "meta": record_meta_type(record_type).model_validate(meta)}

    @property
    def priority(self) -> int | None:
        """MX priority, or None for other record types."""
        return getattr(self.meta, "priority", None)

    @property
    def ttl_display(self) -> str:
        """TTL as shown to users ("Auto" for the automatic sentinel)."""
        return "Auto" if self.ttl == TTL_AUTO else str(self.ttl)


class DnsRecordFormData(BaseModel):
    """User-supplied fields for creating or updating a record."""

    type: AnyRecordType = RecordType.A
    name: str = Field(min_length=1)
    content: str = Field(min_length=1)
    ttl: int = DEFAULT_TTL
    proxied: bool | None = None
    priority: int | None = Field(default=None, ge=0, le=65535)

    @field_validator("type")
    @classmethod
    def _check_type(cls, value: str) -> str:
        if value not in EDITABLE_RECORD_TYPES:
            raise ValueError(f"Invalid DNS record type: {value}")
        return value

    @field_validator("ttl")
    @classmethod
    def _check_ttl(cls, value: int) -> int:
        return check_ttl(value)

    @classmethod
    def from_record(cls, record: DnsRecord) -> "DnsRecordFormData":
        """Prefill form data from an existing record.

        Args:
            record: The record being edited.

        Returns:
            Form data carrying the record's editable fields.
        """
        priority = record.priority
        if priority is None and record.type == RecordType.MX:
            priority = DEFAULT_MX_PRIORITY
        return cls(
            type=record.type,
            name=record.name,
            content=record.content,
            ttl=record.ttl,
            proxied=record.proxied,
            priority=priority,
        )

    def to_payload(self) -> dict[str, Any]:
        """Build the JSON body for a create or update request.

        Returns:
            Request payload. ``proxied`` defaults to False; ``priority`` is
            only present for MX records that supplied one.
        """
        payload: dict[str, Any] = {
            "type": str(self.type),
            "name": self.name,
            "content": self.content,
            "ttl": self.ttl,
            "proxied": self.proxied if self.proxied is not None else False,
        }
        if self.type == RecordType.MX and self.priority is not None:
            payload["priority"] = self.priority
        return payload


class DeletedRecord(BaseModel):
    """Confirmation returned by a delete request."""

    id: str

    model_config = {"extra": "allow"}


class ApiMessage(BaseModel):
    """An error or informational message in a Cloudflare envelope."""

    code: int
    message: str


class ResultInfo(BaseModel):
    """Pagination metadata for list responses."""

    page: int = 1
    per_page: int | None = None
    count: int | None = None
    total_count: int | None = None
    total_pages: int | None = None


class ApiEnvelope(BaseModel):
    """The uniform wrapper around every Cloudflare API response."""

    success: bool
    errors: list[ApiMessage] = Field(default_factory=list)
    messages: list[Any] = Field(default_factory=list)
    result: Any = None
    result_info: ResultInfo | None = None
