"""SQLAlchemy implementation of the volunteers datatable repository."""

from collections.abc import AsyncIterator, Callable, Mapping
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from casa_datatables.application.interfaces import VolunteerDatatableRepository
from casa_datatables.domain.entities import (
    MostRecentContact,
    OrderDirection,
    SortKey,
    SupervisorRef,
    VolunteerRow,
)
from casa_datatables.infrastructure.database.datatable import (
    DerivedColumns,
    VolunteerFilters,
    apply_search,
    order_clauses,
    window_start,
)
from casa_datatables.infrastructure.database.models import (
    CasaCaseModel,
    CasaOrgModel,
    CaseAssignmentModel,
    CaseContactModel,
    SupervisorModel,
    VolunteerModel,
)
from casa_datatables.infrastructure.logging.query_logger import QueryLogger, QueryStage

qlog = QueryLogger("VolunteerDatatable")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SQLAlchemyVolunteerDatatableRepository(VolunteerDatatableRepository):
    """Implements the datatable port with SQLAlchemy select() statements.

    The scope of every query is ``volunteers`` outer-joined to their
    supervisor (a to-one join, so it never duplicates rows). Filters and
    search add WHERE clauses; the page query additionally joins the
    contact aggregates it orders and displays by.
    """

    def __init__(
        self,
        session: AsyncSession,
        *,
        window_days: int = 60,
        contact_made_in_days: int = 14,
        isolation_level: str | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self._session = session
        self._window_days = window_days
        self._contact_made_in_days = contact_made_in_days
        self._isolation_level = isolation_level
        self._clock = clock
        self._filters = VolunteerFilters()

    @asynccontextmanager
    async def read_snapshot(self) -> AsyncIterator[None]:
        # Isolation can only be chosen before the transaction's first statement
        if self._isolation_level and not self._session.in_transaction():
            await self._session.connection(
                execution_options={"isolation_level": self._isolation_level}
            )
        yield

    async def org_exists(self, org_id: int) -> bool:
        with qlog.timed_step(QueryStage.SCOPE, "Resolving organisation", org_id=org_id):
            result = await self._session.execute(
                select(CasaOrgModel.id).where(CasaOrgModel.id == org_id)
            )
            return result.scalar_one_or_none() is not None

    async def count_total(self, org_id: int) -> int:
        with qlog.timed_step(QueryStage.COUNT, "Counting base scope", org_id=org_id):
            result = await self._session.execute(
                select(func.count())
                .select_from(VolunteerModel)
                .where(VolunteerModel.casa_org_id == org_id)
            )
            return result.scalar_one()

    async def count_filtered(
        self,
        org_id: int,
        *,
        filters: Mapping[str, frozenset[str | None]],
        search_term: str | None,
    ) -> int:
        with qlog.timed_step(QueryStage.COUNT, "Counting filtered scope", org_id=org_id):
            scope = self._filtered_scope(org_id, filters, search_term)
            result = await self._session.execute(
                select(func.count()).select_from(scope.subquery())
            )
            return result.scalar_one()

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
        now = self._clock()
        columns = DerivedColumns.build(since=window_start(now, self._window_days))
        stmt = (
            columns.attach(self._filtered_scope(org_id, filters, search_term))
            .order_by(*order_clauses(sort_key, direction, columns))
            .offset(offset)
            .limit(limit)
        )

        with qlog.timed_step(
            QueryStage.PAGE, "Fetching ordered page",
            sort_key=sort_key, direction=direction.value, offset=offset, limit=limit,
        ):
            result = await self._session.execute(stmt)
            rows = [self._to_entity(row) for row in result.all()]

        if rows:
            with qlog.timed_step(QueryStage.DETAILS, "Loading contact details", rows=len(rows)):
                await self._load_most_recent_cases(rows, columns)
                await self._load_contact_coverage(rows, now)
        return rows

    # ── Scope ────────────────────────────────────────────────────────

    def _base_scope(self, org_id: int) -> Select:
        return (
            select(VolunteerModel)
            .outerjoin(SupervisorModel, SupervisorModel.id == VolunteerModel.supervisor_id)
            .where(VolunteerModel.casa_org_id == org_id)
        )

    def _filtered_scope(
        self,
        org_id: int,
        filters: Mapping[str, frozenset[str | None]],
        search_term: str | None,
    ) -> Select:
        stmt = self._filters.apply(self._base_scope(org_id), filters)
        return apply_search(stmt, search_term)

    # ── Row details ──────────────────────────────────────────────────

    async def _load_most_recent_cases(
        self, rows: list[VolunteerRow], columns: DerivedColumns
    ) -> None:
        """Fill in which case the most recent contact was recorded on."""
        latest = columns.most_recent
        result = await self._session.execute(
            select(CaseAssignmentModel.volunteer_id, CaseContactModel.casa_case_id)
            .join(CaseContactModel, CaseContactModel.casa_case_id == CaseAssignmentModel.casa_case_id)
            .join(
                latest,
                (latest.c.volunteer_id == CaseAssignmentModel.volunteer_id)
                & (latest.c.occurred_at == CaseContactModel.occurred_at),
            )
            .where(CaseAssignmentModel.volunteer_id.in_([r.id for r in rows]))
            .order_by(CaseAssignmentModel.volunteer_id, CaseContactModel.casa_case_id)
        )
        case_ids: dict[int, int] = {}
        for volunteer_id, casa_case_id in result.all():
            case_ids.setdefault(volunteer_id, casa_case_id)
        for row in rows:
            row.most_recent_contact.case_id = case_ids.get(row.id)

    async def _load_contact_coverage(self, rows: list[VolunteerRow], now: datetime) -> None:
        """Flag volunteers who made contact on every active case recently."""
        ids = [r.id for r in rows]
        active_assignment = (
            CaseAssignmentModel.volunteer_id.in_(ids),
            CaseAssignmentModel.active.is_(True),
            CasaCaseModel.active.is_(True),
        )

        active_result = await self._session.execute(
            select(CaseAssignmentModel.volunteer_id, func.count(CaseAssignmentModel.casa_case_id))
            .join(CasaCaseModel, CasaCaseModel.id == CaseAssignmentModel.casa_case_id)
            .where(*active_assignment)
            .group_by(CaseAssignmentModel.volunteer_id)
        )
        active_counts = dict(active_result.all())

        covered_result = await self._session.execute(
            select(
                CaseAssignmentModel.volunteer_id,
                func.count(func.distinct(CaseAssignmentModel.casa_case_id)),
            )
            .join(CasaCaseModel, CasaCaseModel.id == CaseAssignmentModel.casa_case_id)
            .join(CaseContactModel, CaseContactModel.casa_case_id == CaseAssignmentModel.casa_case_id)
            .where(
                *active_assignment,
                CaseContactModel.contact_made.is_(True),
                CaseContactModel.occurred_at >= window_start(now, self._contact_made_in_days),
            )
            .group_by(CaseAssignmentModel.volunteer_id)
        )
        covered_counts = dict(covered_result.all())

        for row in rows:
            active = active_counts.get(row.id, 0)
            row.made_contact_with_all_cases_in_days = (
                active == 0 or covered_counts.get(row.id, 0) == active
            )

    # ── Mapping ──────────────────────────────────────────────────────

    @staticmethod
    def _to_entity(row) -> VolunteerRow:
        """Map one page row (volunteer + derived columns) → domain entity."""
        volunteer: VolunteerModel = row[0]
        return VolunteerRow(
            id=volunteer.id,
            display_name=volunteer.display_name,
            email=volunteer.email,
            active=volunteer.active,
            supervisor=SupervisorRef(id=row.supervisor_id, name=row.supervisor_name),
            has_transition_aged_youth_cases=bool(row.has_transition_aged_youth_cases),
            most_recent_contact=MostRecentContact(
                occurred_at=row.most_recent_contact_occurred_at,
            ),
            contacts_made_in_past_days=row.contacts_made_in_past_days or 0,
        )
