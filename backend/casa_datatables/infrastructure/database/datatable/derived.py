"""Derived volunteer columns — values computed through joins and aggregates.

Contacts reach a volunteer through the volunteer's case assignments, so
every aggregate here groups contact rows by ``case_assignments.volunteer_id``.
The (volunteer, case) pair is unique, so no contact is counted twice.
"""

from dataclasses import dataclass
from datetime import datetime, time, timedelta, timezone

from sqlalchemy import Exists, Select, Subquery, and_, case, func, select
from sqlalchemy.sql.elements import ColumnElement

from casa_datatables.infrastructure.database.models import (
    CasaCaseModel,
    CaseAssignmentModel,
    CaseContactModel,
    SupervisorModel,
    VolunteerModel,
)


def window_start(now: datetime, days: int) -> datetime:
    """Midnight UTC of the day ``days`` days before ``now``."""
    day = (now.astimezone(timezone.utc) - timedelta(days=days)).date()
    return datetime.combine(day, time.min, tzinfo=timezone.utc)


def any_case_exists() -> Exists:
    """Correlated EXISTS: the volunteer has at least one linked case."""
    return (
        select(CaseAssignmentModel.id)
        .where(CaseAssignmentModel.volunteer_id == VolunteerModel.id)
        .exists()
    )


def transition_aged_youth_case_exists() -> Exists:
    """Correlated EXISTS: a linked case has the transition-aged-youth flag set."""
    return (
        select(CaseAssignmentModel.id)
        .join(CasaCaseModel, CasaCaseModel.id == CaseAssignmentModel.casa_case_id)
        .where(
            CaseAssignmentModel.volunteer_id == VolunteerModel.id,
            CasaCaseModel.transition_aged_youth.is_(True),
        )
        .exists()
    )


def case_number_matches(term: str) -> Exists:
    """Correlated EXISTS: a linked case number contains ``term`` (any case)."""
    return (
        select(CaseAssignmentModel.id)
        .join(CasaCaseModel, CasaCaseModel.id == CaseAssignmentModel.casa_case_id)
        .where(
            CaseAssignmentModel.volunteer_id == VolunteerModel.id,
            CasaCaseModel.case_number.icontains(term, autoescape=True),
        )
        .exists()
    )


def _most_recent_contacts() -> Subquery:
    return (
        select(
            CaseAssignmentModel.volunteer_id.label("volunteer_id"),
            func.max(CaseContactModel.occurred_at).label("occurred_at"),
        )
        .join(CaseContactModel, CaseContactModel.casa_case_id == CaseAssignmentModel.casa_case_id)
        .group_by(CaseAssignmentModel.volunteer_id)
        .subquery("most_recent_contacts")
    )


def _contacts_made_since(start: datetime) -> Subquery:
    return (
        select(
            CaseAssignmentModel.volunteer_id.label("volunteer_id"),
            func.count(CaseContactModel.id).label("contact_count"),
        )
        .join(CaseContactModel, CaseContactModel.casa_case_id == CaseAssignmentModel.casa_case_id)
        .where(CaseContactModel.occurred_at >= start)
        .group_by(CaseAssignmentModel.volunteer_id)
        .subquery("contacts_made_in_past_days")
    )


@dataclass(frozen=True)
class DerivedColumns:
    """The joined and aggregated columns of one page query.

    Built once per request because the trailing window depends on the
    request time.
    """

    most_recent: Subquery
    recent_contacts: Subquery

    @classmethod
    def build(cls, *, since: datetime) -> "DerivedColumns":
        return cls(
            most_recent=_most_recent_contacts(),
            recent_contacts=_contacts_made_since(since),
        )

    @property
    def supervisor_name(self) -> ColumnElement:
        return SupervisorModel.display_name

    @property
    def has_transition_aged_youth_cases(self) -> ColumnElement[int]:
        return case((transition_aged_youth_case_exists(), 1), else_=0)

    @property
    def most_recent_contact_occurred_at(self) -> ColumnElement:
        return self.most_recent.c.occurred_at

    @property
    def contacts_made_in_past_days(self) -> ColumnElement:
        """Contact count inside the window; NULL when the volunteer has none."""
        return self.recent_contacts.c.contact_count

    def attach(self, stmt: Select) -> Select:
        """Join the aggregates onto a volunteer scope and select the derived values.

        The scope must already be outer-joined to ``SupervisorModel``.
        """
        return (
            stmt.outerjoin(
                self.most_recent,
                self.most_recent.c.volunteer_id == VolunteerModel.id,
            )
            .outerjoin(
                self.recent_contacts,
                self.recent_contacts.c.volunteer_id == VolunteerModel.id,
            )
            .add_columns(
                SupervisorModel.id.label("supervisor_id"),
                self.supervisor_name.label("supervisor_name"),
                self.has_transition_aged_youth_cases.label("has_transition_aged_youth_cases"),
                self.most_recent_contact_occurred_at.label("most_recent_contact_occurred_at"),
                self.contacts_made_in_past_days.label("contacts_made_in_past_days"),
            )
        )


def no_transition_aged_youth_case() -> ColumnElement[bool]:
    """Predicate for the "false" branch of the transition_aged_youth filter.

    The volunteer must have at least one linked case, none of them flagged,
    so volunteers without cases match neither branch.
    """
    return and_(any_case_exists(), ~transition_aged_youth_case_exists())
