"""Sort keys — the closed set of ways a datatable column can be ordered.

Every orderable column name maps to exactly one variant:

    DirectKey      a column stored on the volunteer row
    JoinedKey      a column of a to-one relation (needs a join)
    RankKey        a 0/1 rank from an existence predicate over a relation
    AggregateKey   an aggregate over a to-many relation

The mapping is fixed at import time. Unknown names are rejected with
``UnsupportedSortColumnError``; there is no fallback column.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Union

from casa_datatables.domain.exceptions import UnsupportedSortColumnError


class AggregateKind(str, Enum):
    """Aggregates an AggregateKey can request over a related collection."""

    MAX = "max"
    WINDOWED_COUNT = "windowed_count"  # count inside the trailing contact window


@dataclass(frozen=True)
class DirectKey:
    field: str


@dataclass(frozen=True)
class JoinedKey:
    relation: str
    field: str


@dataclass(frozen=True)
class RankKey:
    predicate: str


@dataclass(frozen=True)
class AggregateKey:
    kind: AggregateKind
    relation: str
    field: str


SortKey = Union[DirectKey, JoinedKey, RankKey, AggregateKey]

SORT_KEYS: Mapping[str, SortKey] = MappingProxyType({
    "display_name": DirectKey("display_name"),
    "email": DirectKey("email"),
    "active": DirectKey("active"),
    "supervisor_name": JoinedKey("supervisor", "display_name"),
    "has_transition_aged_youth_cases": RankKey("transition_aged_youth_case"),
    "most_recent_contact_occurred_at": AggregateKey(
        AggregateKind.MAX, "case_contacts", "occurred_at"
    ),
    "contacts_made_in_past_days": AggregateKey(
        AggregateKind.WINDOWED_COUNT, "case_contacts", "occurred_at"
    ),
})


def resolve_sort_key(column: str) -> SortKey:
    """Map a logical column name to its sort key."""
    try:
        return SORT_KEYS[column]
    except KeyError:
        raise UnsupportedSortColumnError(column) from None
