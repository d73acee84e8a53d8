"""Unit tests for translating DataTables wire requests into datatable requests."""

import pytest

from casa_datatables.application.schemas.datatable import (
    DatatableQueryRequest,
    DataTablesRequest,
)
from casa_datatables.domain.exceptions import InvalidRequestError

_COLUMNS = [
    {"data": "display_name"},
    {"data": "email"},
    {"data": "supervisor", "name": "supervisor_name"},
    {"data": "most_recent_contact", "name": "most_recent_contact_occurred_at"},
]


def test_offset_paging_becomes_page_number():
    wire = DataTablesRequest(draw=3, start=20, length=10, columns=_COLUMNS)

    request = wire.to_domain()

    assert request.page == 3
    assert request.per_page == 10
    assert request.offset == 20


def test_missing_length_uses_default_page_size():
    request = DataTablesRequest(start=0, length=0).to_domain(default_per_page=25)

    assert request.per_page == 25
    assert request.page == 1


def test_order_column_name_wins_over_data():
    wire = DataTablesRequest(columns=_COLUMNS, order=[{"column": 2, "dir": "desc"}])

    request = wire.to_domain()

    assert request.order_by == "supervisor_name"
    assert request.order_direction == "desc"


def test_no_order_defaults_to_display_name_ascending():
    request = DataTablesRequest(columns=_COLUMNS).to_domain()

    assert request.order_by == "display_name"
    assert request.order_direction == "asc"


def test_order_column_outside_columns_is_invalid():
    wire = DataTablesRequest(columns=_COLUMNS, order=[{"column": 9, "dir": "asc"}])

    with pytest.raises(InvalidRequestError):
        wire.to_domain()


def test_search_and_additional_filters_are_carried_over():
    wire = DataTablesRequest(
        search={"value": "CINA-24"},
        additional_filters={"supervisor": ["Alma Reyes", None], "active": []},
    )

    request = wire.to_domain()

    assert request.search_term == "CINA-24"
    assert request.filters["supervisor"] == frozenset({"Alma Reyes", None})
    assert request.filters["active"] == frozenset()


def test_query_request_defaults():
    request = DatatableQueryRequest().to_domain()

    assert request.order_by == "display_name"
    assert request.page == 1
    assert request.per_page == 10
    assert dict(request.filters) == {}


def test_domain_request_filters_are_immutable():
    request = DatatableQueryRequest(filters={"active": ["true"]}).to_domain()

    with pytest.raises(TypeError):
        request.filters["active"] = frozenset()
