"""Categorical (tri-state) filters for the volunteers datatable.

A filter is a set of allowed string values. The empty set excludes every
row. Values within one filter are OR-ed, different filters are AND-ed.
Selecting both transition_aged_youth values still drops volunteers
without any linked case.
"""

import logging
from collections.abc import Callable, Collection, Mapping

from sqlalchemy import Select, false, or_
from sqlalchemy.sql.elements import ColumnElement

from casa_datatables.domain.entities import UNASSIGNED
from casa_datatables.infrastructure.database.datatable.derived import (
    no_transition_aged_youth_case,
    transition_aged_youth_case_exists,
)
from casa_datatables.infrastructure.database.models import SupervisorModel, VolunteerModel

logger = logging.getLogger(__name__)

ValuePredicate = Callable[[str | None], ColumnElement[bool]]


def apply_categorical_filter(
    stmt: Select,
    allowed_values: Collection[str | None],
    predicate_for: ValuePredicate,
) -> Select:
    """Restrict ``stmt`` to rows matching at least one allowed value."""
    if not allowed_values:
        return stmt.where(false())

    # None first, then lexical, so the emitted SQL is stable between requests
    ordered = sorted(set(allowed_values), key=lambda v: (v is not None, v or ""))
    return stmt.where(or_(*(predicate_for(value) for value in ordered)))


def _active(value: str | None) -> ColumnElement[bool]:
    if value == "true":
        return VolunteerModel.active.is_(True)
    if value == "false":
        return VolunteerModel.active.is_(False)
    return false()


def _supervisor(value: str | None) -> ColumnElement[bool]:
    if value is UNASSIGNED:
        return VolunteerModel.supervisor_id.is_(None)
    return SupervisorModel.display_name == value


def _transition_aged_youth(value: str | None) -> ColumnElement[bool]:
    if value == "true":
        return transition_aged_youth_case_exists()
    if value == "false":
        return no_transition_aged_youth_case()
    return false()


class VolunteerFilters:
    """Applies the recognized volunteer filters to a supervisor-joined scope.

    Unrecognized filter names are skipped so older clients keep working
    when the filter set grows.
    """

    def __init__(self):
        self._predicates: dict[str, ValuePredicate] = {
            "active": _active,
            "supervisor": _supervisor,
            "transition_aged_youth": _transition_aged_youth,
        }

    def apply(
        self,
        stmt: Select,
        filters: Mapping[str, Collection[str | None]],
    ) -> Select:
        for name in sorted(filters):
            predicate_for = self._predicates.get(name)
            if predicate_for is None:
                logger.debug("Ignoring unrecognized datatable filter '%s'", name)
                continue
            stmt = apply_categorical_filter(stmt, filters[name], predicate_for)
        return stmt
