from .volunteer_datatable_repository import VolunteerDatatableRepository

__all__ = [
    "VolunteerDatatableRepository",
]
