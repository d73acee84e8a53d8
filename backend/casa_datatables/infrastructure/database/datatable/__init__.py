from .derived import DerivedColumns, window_start
from .filters import VolunteerFilters, apply_categorical_filter
from .search import apply_search
from .ordering import order_clauses, sort_expressions

__all__ = [
    "DerivedColumns",
    "window_start",
    "VolunteerFilters",
    "apply_categorical_filter",
    "apply_search",
    "order_clauses",
    "sort_expressions",
]
