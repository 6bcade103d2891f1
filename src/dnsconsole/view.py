"""Search and sort for the displayed record list."""

from collections.abc import Iterable
from datetime import datetime
from enum import StrEnum
from functools import cmp_to_key
from typing import Any

from pydantic import BaseModel

from dnsconsole.models import DnsRecord

# Column key that never sorts (the row-actions column)
ACTIONS_KEY = "actions"


class SortDirection(StrEnum):
    """Sort directions for a table column."""

    ASCENDING = "ascending"
    DESCENDING = "descending"


class SortConfig(BaseModel):
    """The active single-column sort."""

    key: str
    direction: SortDirection = SortDirection.ASCENDING

    model_config = {"frozen": True}


def filter_records(records: Iterable[DnsRecord], term: str) -> list[DnsRecord]:
    """Keep records whose name or content contains the search term.

    Matching is case-insensitive. An empty term keeps every record.
    """
    needle = term.lower()
    return [
        record
        for record in records
        if needle in record.name.lower() or needle in record.content.lower()
    ]


def next_sort(current: SortConfig | None, key: str) -> SortConfig:
    """Sort configuration after a click on the ``key`` column.

    Clicking the column that is already sorted ascending flips it to
    descending; any other click sorts ascending.
    """
    if current is not None and current.key == key and current.direction == SortDirection.ASCENDING:
        return SortConfig(key=key, direction=SortDirection.DESCENDING)
    return SortConfig(key=key, direction=SortDirection.ASCENDING)


def compare_values(a: Any, b: Any) -> int:
    """Compare two column values in ascending order.

    Strings compare case-insensitively, with case only breaking ties.
    Booleans put True first. Numbers and datetimes compare by value.
    Anything else, including mixed types, compares equal.

    Returns:
        Negative, zero or positive, like a classic ``cmp``.
    """
    # bool before int: bool is an int subclass
    if isinstance(a, bool) and isinstance(b, bool):
        if a == b:
            return 0
        return -1 if a else 1
    if isinstance(a, bool) or isinstance(b, bool):
        return 0
    if isinstance(a, str) and isinstance(b, str):
        # Case-insensitive first, case only breaks ties
        left, right = (a.casefold(), a), (b.casefold(), b)
        return (left > right) - (left < right)
    if isinstance(a, int | float) and isinstance(b, int | float):
        diff = a - b
        return (diff > 0) - (diff < 0)
    if isinstance(a, datetime) and isinstance(b, datetime):
        try:
            return (a > b) - (a < b)
        except TypeError:
            # naive vs aware
            return 0
    return 0


def sort_records(records: Iterable[DnsRecord], sort: SortConfig | None) -> list[DnsRecord]:
    """Sort records by a single column.

    The sort is stable; records whose values compare equal keep their
    relative order. Unknown columns leave the order untouched.
    """
    items = list(records)
    if sort is None or sort.key == ACTIONS_KEY or sort.key not in DnsRecord.model_fields:
        return items

    sign = 1 if sort.direction == SortDirection.ASCENDING else -1

    def compare(left: DnsRecord, right: DnsRecord) -> int:
        return sign * compare_values(getattr(left, sort.key), getattr(right, sort.key))

    return sorted(items, key=cmp_to_key(compare))


def visible_records(
    records: Iterable[DnsRecord],
    term: str = "",
    sort: SortConfig | None = None,
) -> list[DnsRecord]:
    """Filter then sort, producing the list shown to the user."""
    return sort_records(filter_records(records, term), sort)
