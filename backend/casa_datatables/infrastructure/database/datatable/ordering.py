"""Compile a resolved sort key into ORDER BY clauses.

Each key compiles to a list of expressions ending with the volunteer id,
and every expression takes the request direction, so a descending page
is the exact reverse of the ascending one. Nullable keys get a leading
0/1 rank instead of relying on the backend's NULLS FIRST/LAST default:
NULL ranks lowest.
"""

from sqlalchemy import case, func
from sqlalchemy.sql.elements import ColumnElement, UnaryExpression

from casa_datatables.domain.entities import (
    AggregateKey,
    AggregateKind,
    DirectKey,
    JoinedKey,
    OrderDirection,
    RankKey,
    SortKey,
)
from casa_datatables.domain.exceptions import UnsupportedSortColumnError
from casa_datatables.infrastructure.database.datatable.derived import DerivedColumns
from casa_datatables.infrastructure.database.models import VolunteerModel

_DIRECT_COLUMNS: dict[str, ColumnElement] = {
    "display_name": VolunteerModel.display_name,
    "email": VolunteerModel.email,
    "active": VolunteerModel.active,
}


def _null_rank(expr: ColumnElement) -> ColumnElement[int]:
    return case((expr.is_(None), 0), else_=1)


def sort_expressions(sort_key: SortKey, columns: DerivedColumns) -> list[ColumnElement]:
    """Primary sort expressions for ``sort_key``, without the id tie-break."""
    if isinstance(sort_key, DirectKey):
        column = _DIRECT_COLUMNS.get(sort_key.field)
        if column is not None:
            return [column]

    elif isinstance(sort_key, JoinedKey):
        if (sort_key.relation, sort_key.field) == ("supervisor", "display_name"):
            name = columns.supervisor_name
            return [_null_rank(name), name]

    elif isinstance(sort_key, RankKey):
        if sort_key.predicate == "transition_aged_youth_case":
            return [columns.has_transition_aged_youth_cases]

    elif isinstance(sort_key, AggregateKey):
        if (sort_key.relation, sort_key.field) == ("case_contacts", "occurred_at"):
            if sort_key.kind is AggregateKind.MAX:
                latest = columns.most_recent_contact_occurred_at
                return [_null_rank(latest), latest]
            if sort_key.kind is AggregateKind.WINDOWED_COUNT:
                count = columns.contacts_made_in_past_days
                # rank 0: at least one contact in the window, rank 1: none
                return [case((count.is_(None), 1), else_=0), func.coalesce(count, 0)]

    raise UnsupportedSortColumnError(repr(sort_key))


def order_clauses(
    sort_key: SortKey,
    direction: OrderDirection,
    columns: DerivedColumns,
) -> list[UnaryExpression]:
    keys = [*sort_expressions(sort_key, columns), VolunteerModel.id]
    if direction is OrderDirection.DESC:
        return [key.desc() for key in keys]
    return [key.asc() for key in keys]
