from .volunteer_datatable_service import VolunteerDatatableService

__all__ = [
    "VolunteerDatatableService",
]
