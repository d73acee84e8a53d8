from .volunteer_datatable_repository import SQLAlchemyVolunteerDatatableRepository

__all__ = [
    "SQLAlchemyVolunteerDatatableRepository",
]
