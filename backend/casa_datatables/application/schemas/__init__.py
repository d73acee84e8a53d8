from .datatable import (
    DEFAULT_ORDER_BY,
    DatatableOrderSchema,
    DatatableQueryRequest,
    DataTablesColumn,
    DataTablesOrder,
    DataTablesRequest,
    DataTablesSearch,
    MostRecentContactSchema,
    SupervisorSchema,
    VolunteerDatatableResponse,
    VolunteerRowSchema,
)

__all__ = [
    "DEFAULT_ORDER_BY",
    "DatatableOrderSchema",
    "DatatableQueryRequest",
    "DataTablesColumn",
    "DataTablesOrder",
    "DataTablesRequest",
    "DataTablesSearch",
    "MostRecentContactSchema",
    "SupervisorSchema",
    "VolunteerDatatableResponse",
    "VolunteerRowSchema",
]
