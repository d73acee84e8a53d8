"""Fixtures for datatable integration tests: a seeded temporary SQLite database.

Seed layout (mirrors the volunteers page of one CASA organisation):

* 3 supervisors, each supervising 2 volunteers;
* every supervised volunteer has 2 cases: one without the transition-aged
  youth flag, and one flagged only for the supervisor's second volunteer;
* 2 unassigned volunteers without cases;
* a second organisation with one volunteer, outside the base scope.
"""

from collections.abc import AsyncIterator, Awaitable, Callable
from dataclasses import dataclass, field
from typing import Any

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession

from casa_datatables.application.services import VolunteerDatatableService
from casa_datatables.domain.entities import DatatableRequest
from casa_datatables.infrastructure.database import Base
from casa_datatables.infrastructure.database.models import (
    CasaCaseModel,
    CasaOrgModel,
    CaseAssignmentModel,
    SupervisorModel,
    VolunteerModel,
)
from casa_datatables.infrastructure.database.repositories import (
    SQLAlchemyVolunteerDatatableRepository,
)
from casa_datatables.infrastructure.database.session import (
    build_engine,
    build_session_factory,
)

_SUPERVISOR_NAMES = ["Alma Reyes", "Bruno Tanaka", "Chioma Okafor"]
_VOLUNTEER_NAMES = [
    "Harriet Quinn",
    "Dmitri Volkov",
    "Esperanza Lugo",
    "Farid Haddad",
    "Greta Lindqvist",
    "Ines Moreau",
]
_UNASSIGNED_NAMES = ["Jonas Weber", "Keiko Sato"]


@dataclass
class CasaFixture:
    """Seeded models, kept in id order."""

    org_id: int
    other_org_id: int
    supervisors: list[SupervisorModel]
    assigned: list[VolunteerModel]
    unassigned: list[VolunteerModel]
    cases: list[CasaCaseModel]
    cases_by_volunteer: dict[int, list[CasaCaseModel]] = field(default_factory=dict)
    supervisor_of: dict[int, SupervisorModel] = field(default_factory=dict)

    @property
    def all_volunteers(self) -> list[VolunteerModel]:
        return sorted(self.assigned + self.unassigned, key=lambda v: v.id)

    def default_filters(self) -> dict[str, list[str | None]]:
        return {
            "active": ["false", "true"],
            "supervisor": [s.display_name for s in self.supervisors],
            "transition_aged_youth": ["false", "true"],
        }

    def filters_with_unassigned(self) -> dict[str, list[str | None]]:
        """Filters matching every volunteer of the org, case-less ones included.

        Any transition_aged_youth selection drops volunteers without cases,
        so that filter is left out.
        """
        filters = self.default_filters()
        filters["supervisor"].append(None)
        del filters["transition_aged_youth"]
        return filters


@pytest_asyncio.fixture
async def session(tmp_path) -> AsyncIterator[AsyncSession]:
    engine = build_engine(f"sqlite:///{tmp_path / 'datatable.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    factory = build_session_factory(engine)
    async with factory() as db_session:
        yield db_session
    await engine.dispose()


@pytest_asyncio.fixture
async def casa(session: AsyncSession) -> CasaFixture:
    org = CasaOrgModel(name="Prince George CASA")
    other_org = CasaOrgModel(name="Montgomery CASA")
    session.add_all([org, other_org])
    await session.flush()

    supervisors = [
        SupervisorModel(
            casa_org_id=org.id,
            display_name=name,
            email=f"{name.lower().replace(' ', '.')}@casa.example.org",
        )
        for name in _SUPERVISOR_NAMES
    ]
    session.add_all(supervisors)
    await session.flush()

    assigned: list[VolunteerModel] = []
    cases: list[CasaCaseModel] = []
    cases_by_volunteer: dict[int, list[CasaCaseModel]] = {}
    supervisor_of: dict[int, SupervisorModel] = {}
    names = iter(_VOLUNTEER_NAMES)
    for supervisor in supervisors:
        for idx in range(2):
            name = next(names)
            volunteer = VolunteerModel(
                casa_org_id=org.id,
                supervisor_id=supervisor.id,
                display_name=name,
                email=f"{name.lower().replace(' ', '.')}@volunteers.example.org",
                active=True,
            )
            session.add(volunteer)
            await session.flush()

            own_cases = []
            for flagged in (False, idx == 1):
                casa_case = CasaCaseModel(
                    casa_org_id=org.id,
                    case_number=f"CINA-24-{len(cases) + 1:04d}",
                    transition_aged_youth=flagged,
                )
                session.add(casa_case)
                await session.flush()
                session.add(CaseAssignmentModel(volunteer_id=volunteer.id, casa_case_id=casa_case.id))
                cases.append(casa_case)
                own_cases.append(casa_case)

            assigned.append(volunteer)
            cases_by_volunteer[volunteer.id] = own_cases
            supervisor_of[volunteer.id] = supervisor

    unassigned = [
        VolunteerModel(
            casa_org_id=org.id,
            display_name=name,
            email=f"{name.lower().replace(' ', '.')}@volunteers.example.org",
            active=True,
        )
        for name in _UNASSIGNED_NAMES
    ]
    session.add_all(unassigned)
    session.add(
        VolunteerModel(
            casa_org_id=other_org.id,
            display_name="Lorenzo Outsider",
            email="lorenzo.outsider@volunteers.example.org",
            active=True,
        )
    )
    await session.commit()

    return CasaFixture(
        org_id=org.id,
        other_org_id=other_org.id,
        supervisors=supervisors,
        assigned=assigned,
        unassigned=unassigned,
        cases=cases,
        cases_by_volunteer=cases_by_volunteer,
        supervisor_of=supervisor_of,
    )


RunDatatable = Callable[..., Awaitable[dict[str, Any]]]


@pytest.fixture
def run_datatable(session: AsyncSession, casa: CasaFixture) -> RunDatatable:
    """Render one datatable request with the reference defaults, overridable per test."""

    async def _run(**overrides: Any) -> dict[str, Any]:
        params: dict[str, Any] = {
            "order_by": "display_name",
            "order_direction": "asc",
            "page": 1,
            "per_page": 10,
            "search_term": None,
            "filters": casa.default_filters(),
        }
        params.update(overrides)
        repository = SQLAlchemyVolunteerDatatableRepository(session)
        service = VolunteerDatatableService(repository)
        return await service.render(casa.org_id, DatatableRequest.build(**params))

    return _run
