"""Pydantic schemas for the volunteers datatable API."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from casa_datatables.domain.entities import DatatablePage, DatatableRequest
from casa_datatables.domain.exceptions import InvalidRequestError

DEFAULT_ORDER_BY = "display_name"


# ── Request Schemas ──────────────────────────────────────────────────


class DatatableOrderSchema(BaseModel):
    """Column and direction to order by."""

    by: str = Field(..., examples=["supervisor_name"])
    direction: str = Field(default="asc", examples=["asc", "desc"])


class DatatableQueryRequest(BaseModel):
    """Logical datatable request.

    Paging and direction are validated by the service so that direct
    callers and HTTP callers get the same InvalidRequestError.
    """

    order: DatatableOrderSchema = Field(
        default_factory=lambda: DatatableOrderSchema(by=DEFAULT_ORDER_BY)
    )
    page: int = 1
    per_page: int = 10
    search_term: str | None = None
    filters: dict[str, list[str | None]] = Field(
        default_factory=dict,
        examples=[{"active": ["true"], "supervisor": ["Ada Lovelace", None]}],
    )

    def to_domain(self) -> DatatableRequest:
        return DatatableRequest.build(
            order_by=self.order.by,
            order_direction=self.order.direction,
            page=self.page,
            per_page=self.per_page,
            search_term=self.search_term,
            filters=self.filters,
        )


class DataTablesColumn(BaseModel):
    """One entry of the DataTables ``columns`` array."""

    data: str | None = None
    name: str | None = None

    @property
    def key(self) -> str | None:
        return self.name or self.data


class DataTablesOrder(BaseModel):
    column: int
    dir: str = "asc"


class DataTablesSearch(BaseModel):
    value: str | None = None


class DataTablesRequest(BaseModel):
    """Server-side request as sent by jQuery DataTables."""

    draw: int = 0
    start: int = 0
    length: int = 0
    columns: list[DataTablesColumn] = Field(default_factory=list)
    order: list[DataTablesOrder] = Field(default_factory=list)
    search: DataTablesSearch = Field(default_factory=DataTablesSearch)
    additional_filters: dict[str, list[str | None]] = Field(default_factory=dict)

    def to_domain(self, *, default_per_page: int = 10) -> DatatableRequest:
        """Translate offset/length paging and column indexes to a logical request."""
        per_page = self.length if self.length > 0 else default_per_page
        page = max(self.start, 0) // per_page + 1

        order_by, direction = DEFAULT_ORDER_BY, "asc"
        if self.order:
            first = self.order[0]
            if not 0 <= first.column < len(self.columns):
                raise InvalidRequestError(
                    "order", f"column index {first.column} is outside 'columns'"
                )
            order_by = self.columns[first.column].key or ""
            direction = first.dir

        return DatatableRequest.build(
            order_by=order_by,
            order_direction=direction,
            page=page,
            per_page=per_page,
            search_term=self.search.value,
            filters=self.additional_filters,
        )


# ── Response Schemas ─────────────────────────────────────────────────


class SupervisorSchema(BaseModel):
    id: str | None = None
    name: str | None = None


class MostRecentContactSchema(BaseModel):
    case_id: str | None = None
    occurred_at: datetime | None = None


class VolunteerRowSchema(BaseModel):
    """A single serialized volunteer row."""

    id: str
    display_name: str
    email: str
    active: bool
    supervisor: SupervisorSchema
    has_transition_aged_youth_cases: bool
    most_recent_contact: MostRecentContactSchema
    contacts_made_in_past_days: int
    made_contact_with_all_cases_in_days: bool


class VolunteerDatatableResponse(BaseModel):
    """Counts plus one page of rows, in the DataTables response shape."""

    model_config = ConfigDict(populate_by_name=True)

    records_total: int = Field(..., alias="recordsTotal")
    records_filtered: int = Field(..., alias="recordsFiltered")
    data: list[VolunteerRowSchema] = Field(default_factory=list)
    draw: int | None = None

    @classmethod
    def from_page(cls, page: DatatablePage, *, draw: int | None = None) -> "VolunteerDatatableResponse":
        return cls(
            records_total=page.records_total,
            records_filtered=page.records_filtered,
            data=[_row_schema(row) for row in page.rows],
            draw=draw,
        )


def _id(value: int | None) -> str | None:
    return None if value is None else str(value)


def _row_schema(row) -> VolunteerRowSchema:
    return VolunteerRowSchema(
        id=str(row.id),
        display_name=row.display_name,
        email=row.email,
        active=row.active,
        supervisor=SupervisorSchema(id=_id(row.supervisor.id), name=row.supervisor.name),
        has_transition_aged_youth_cases=row.has_transition_aged_youth_cases,
        most_recent_contact=MostRecentContactSchema(
            case_id=_id(row.most_recent_contact.case_id),
            occurred_at=row.most_recent_contact.occurred_at,
        ),
        contacts_made_in_past_days=row.contacts_made_in_past_days,
        made_contact_with_all_cases_in_days=row.made_contact_with_all_cases_in_days,
    )
