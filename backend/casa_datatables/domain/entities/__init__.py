from .volunteer import VolunteerRow, SupervisorRef, MostRecentContact
from .datatable import DatatableRequest, DatatablePage, OrderDirection, UNASSIGNED
from .sort_key import (
    AggregateKey,
    AggregateKind,
    DirectKey,
    JoinedKey,
    RankKey,
    SortKey,
    SORT_KEYS,
    resolve_sort_key,
)

__all__ = [
    "VolunteerRow",
    "SupervisorRef",
    "MostRecentContact",
    "DatatableRequest",
    "DatatablePage",
    "OrderDirection",
    "UNASSIGNED",
    "AggregateKey",
    "AggregateKind",
    "DirectKey",
    "JoinedKey",
    "RankKey",
    "SortKey",
    "SORT_KEYS",
    "resolve_sort_key",
]
