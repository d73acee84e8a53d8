from .casa import (
    CasaOrgModel,
    SupervisorModel,
    VolunteerModel,
    CasaCaseModel,
    CaseAssignmentModel,
    CaseContactModel,
)

__all__ = [
    "CasaOrgModel",
    "SupervisorModel",
    "VolunteerModel",
    "CasaCaseModel",
    "CaseAssignmentModel",
    "CaseContactModel",
]
