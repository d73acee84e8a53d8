"""FastAPI dependency injection — wires infrastructure to application layer."""

from collections.abc import AsyncGenerator

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from casa_datatables.config import get_settings
from casa_datatables.application.services import VolunteerDatatableService
from casa_datatables.infrastructure.database.session import get_db_session
from casa_datatables.infrastructure.database.repositories import (
    SQLAlchemyVolunteerDatatableRepository,
)


async def get_volunteer_datatable_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[VolunteerDatatableService, None]:
    """Provides a VolunteerDatatableService bound to the request's session."""
    settings = get_settings()
    repository = SQLAlchemyVolunteerDatatableRepository(
        session,
        window_days=settings.contact_window_days,
        contact_made_in_days=settings.contact_made_in_days,
        isolation_level=_isolation_level(session, settings.datatable_isolation_level),
    )
    yield VolunteerDatatableService(repository, max_per_page=settings.datatable_max_per_page)


def _isolation_level(session: AsyncSession, configured: str | None) -> str | None:
    """Isolation level for the read snapshot, or None where it cannot apply.

    The snapshot guarantee holds on PostgreSQL only. pysqlite does not emit
    BEGIN before a SELECT, so on SQLite the counts and the page are separate
    autocommit reads.
    """
    if not configured:
        return None
    if session.bind is not None and session.bind.dialect.name == "sqlite":
        return None
    return configured
