"""Application service (use case) for the volunteers datatable."""

from typing import Any

from casa_datatables.application.interfaces import VolunteerDatatableRepository
from casa_datatables.application.schemas.datatable import VolunteerDatatableResponse
from casa_datatables.domain.entities import (
    DatatablePage,
    DatatableRequest,
    OrderDirection,
    resolve_sort_key,
)
from casa_datatables.domain.exceptions import EntityNotFoundError, InvalidRequestError
from casa_datatables.infrastructure.logging.query_logger import QueryLogger

qlog = QueryLogger("VolunteerDatatable")


class VolunteerDatatableService:
    """Runs one datatable request: validate, resolve, count, page, serialize.

    Validation and sort-key resolution happen before the repository is
    touched. All reads share one repository snapshot so ``recordsTotal``,
    ``recordsFiltered`` and the page agree. Store errors propagate as-is.
    """

    def __init__(self, repository: VolunteerDatatableRepository, *, max_per_page: int = 500):
        self._repository = repository
        self._max_per_page = max_per_page

    async def query(self, org_id: int, request: DatatableRequest) -> DatatablePage:
        direction = self._validate(request)
        sort_key = resolve_sort_key(request.order_by)

        async with self._repository.read_snapshot():
            if not await self._repository.org_exists(org_id):
                raise EntityNotFoundError("CasaOrg", org_id)

            total = await self._repository.count_total(org_id)
            filtered = await self._repository.count_filtered(
                org_id,
                filters=request.filters,
                search_term=request.search_term,
            )

            rows = []
            if request.offset < filtered:
                rows = await self._repository.fetch_page(
                    org_id,
                    filters=request.filters,
                    search_term=request.search_term,
                    sort_key=sort_key,
                    direction=direction,
                    offset=request.offset,
                    limit=request.per_page,
                )

        qlog.stats(
            org=org_id,
            order=f"{request.order_by} {direction.value}",
            page=f"{request.page}x{request.per_page}",
            recordsTotal=total,
            recordsFiltered=filtered,
            rows=len(rows),
        )
        return DatatablePage(records_total=total, records_filtered=filtered, rows=rows)

    async def render(
        self, org_id: int, request: DatatableRequest, *, draw: int | None = None
    ) -> dict[str, Any]:
        """Run the request and return the JSON-ready response body."""
        page = await self.query(org_id, request)
        response = VolunteerDatatableResponse.from_page(page, draw=draw)
        return response.model_dump(
            by_alias=True,
            mode="json",
            exclude={"draw"} if draw is None else None,
        )

    def _validate(self, request: DatatableRequest) -> OrderDirection:
        if request.page < 1:
            raise InvalidRequestError("page", "must be at least 1")
        if request.per_page < 1:
            raise InvalidRequestError("per_page", "must be at least 1")
        if request.per_page > self._max_per_page:
            raise InvalidRequestError("per_page", f"must be at most {self._max_per_page}")
        try:
            return OrderDirection(request.order_direction)
        except ValueError:
            raise InvalidRequestError(
                "direction", f"must be 'asc' or 'desc', got '{request.order_direction}'"
            ) from None
