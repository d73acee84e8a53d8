"""Domain entities for one datatable request/response cycle."""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType

from .volunteer import VolunteerRow

# Allowed-value sentinel selecting rows whose relation is unassigned
UNASSIGNED = None


class OrderDirection(str, Enum):
    """Sort direction accepted by the datatable."""

    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class DatatableRequest:
    """Immutable input to one datatable query cycle.

    ``filters`` maps a filter name to the set of allowed values. ``None``
    inside a set is the unassigned sentinel. An empty set is a valid,
    exclude-everything selection and is distinct from an absent filter.
    """

    order_by: str
    order_direction: str = OrderDirection.ASC.value
    page: int = 1
    per_page: int = 10
    search_term: str | None = None
    filters: Mapping[str, frozenset[str | None]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        frozen = {
            name: frozenset(values) for name, values in dict(self.filters).items()
        }
        object.__setattr__(self, "filters", MappingProxyType(frozen))

    @classmethod
    def build(
        cls,
        *,
        order_by: str,
        order_direction: str = OrderDirection.ASC.value,
        page: int = 1,
        per_page: int = 10,
        search_term: str | None = None,
        filters: Mapping[str, Iterable[str | None]] | None = None,
    ) -> "DatatableRequest":
        """Convenience constructor accepting any iterable of filter values."""
        return cls(
            order_by=order_by,
            order_direction=order_direction,
            page=page,
            per_page=per_page,
            search_term=search_term,
            filters={name: frozenset(values) for name, values in (filters or {}).items()},
        )

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.per_page


@dataclass
class DatatablePage:
    """One page of volunteers plus the counts the table footer needs."""

    records_total: int
    records_filtered: int
    rows: list[VolunteerRow] = field(default_factory=list)
