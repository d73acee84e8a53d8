"""Domain-specific exceptions — framework-independent."""


class EntityNotFoundError(Exception):
    """Raised when a requested entity does not exist."""

    def __init__(self, entity_type: str, entity_id: int | str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with id '{entity_id}' not found")


class InvalidRequestError(Exception):
    """Raised when a datatable request has malformed paging or ordering.

    Always raised before the store is queried.
    """

    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(f"Invalid '{field}': {message}")


class UnsupportedSortColumnError(Exception):
    """Raised when ordering is requested on a column the datatable does not know."""

    def __init__(self, column: str):
        self.column = column
        super().__init__(f"Unsupported sort column '{column}'")
