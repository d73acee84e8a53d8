from .base import Base
from .session import engine, async_session_factory, get_db_session
from .models import (
    CasaOrgModel,
    SupervisorModel,
    VolunteerModel,
    CasaCaseModel,
    CaseAssignmentModel,
    CaseContactModel,
)

__all__ = [
    "Base",
    "engine",
    "async_session_factory",
    "get_db_session",
    "CasaOrgModel",
    "SupervisorModel",
    "VolunteerModel",
    "CasaCaseModel",
    "CaseAssignmentModel",
    "CaseContactModel",
]
