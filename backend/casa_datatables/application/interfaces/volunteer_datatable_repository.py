"""Abstract repository interface (port) for the volunteers datatable."""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from contextlib import AbstractAsyncContextManager

from casa_datatables.domain.entities import OrderDirection, SortKey, VolunteerRow


class VolunteerDatatableRepository(ABC):
    """Port for datatable reads — implemented in the infrastructure layer.

    The base scope of every method is the volunteers of one organisation.
    Callers run all reads of one request inside ``read_snapshot()`` so the
    counts and the page agree with each other.
    """

    @abstractmethod
    def read_snapshot(self) -> AbstractAsyncContextManager[None]:
        """Open a read scope in which every query sees the same data."""
        ...

    @abstractmethod
    async def org_exists(self, org_id: int) -> bool:
        ...

    @abstractmethod
    async def count_total(self, org_id: int) -> int:
        """Count the base scope, ignoring filters and search."""
        ...

    @abstractmethod
    async def count_filtered(
        self,
        org_id: int,
        *,
        filters: Mapping[str, frozenset[str | None]],
        search_term: str | None,
    ) -> int:
        """Count the base scope after filters and search, before paging."""
        ...

    @abstractmethod
    async def fetch_page(
        self,
        org_id: int,
        *,
        filters: Mapping[str, frozenset[str | None]],
        search_term: str | None,
        sort_key: SortKey,
        direction: OrderDirection,
        offset: int,
        limit: int,
    ) -> list[VolunteerRow]:
        """Return one ordered page of the filtered scope."""
        ...
