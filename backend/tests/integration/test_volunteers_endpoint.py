"""Tests for the volunteers datatable HTTP endpoints."""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from casa_datatables.application.services import VolunteerDatatableService
from casa_datatables.infrastructure.database.repositories import (
    SQLAlchemyVolunteerDatatableRepository,
)
from casa_datatables.infrastructure.dependencies import get_volunteer_datatable_service
from casa_datatables.main import app


@pytest_asyncio.fixture
async def client(session, casa):
    async def _service_override():
        yield VolunteerDatatableService(SQLAlchemyVolunteerDatatableRepository(session))

    app.dependency_overrides[get_volunteer_datatable_service] = _service_override
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as http_client:
        yield http_client
    app.dependency_overrides.clear()


@pytest.mark.asyncio
async def test_query_endpoint_returns_page_and_counts(client, casa):
    response = await client.post(
        f"/api/v1/orgs/{casa.org_id}/volunteers/query",
        json={
            "order": {"by": "display_name", "direction": "desc"},
            "page": 1,
            "per_page": 4,
            "filters": casa.default_filters(),
        },
    )

    assert response.status_code == 200
    body = response.json()
    assert body["recordsTotal"] == 8
    assert body["recordsFiltered"] == 6
    assert "draw" not in body
    names = [row["display_name"] for row in body["data"]]
    expected = sorted((v.display_name for v in casa.assigned), reverse=True)[:4]
    assert names == expected


@pytest.mark.asyncio
async def test_datatable_endpoint_echoes_draw(client, casa):
    response = await client.post(
        f"/api/v1/orgs/{casa.org_id}/volunteers/datatable",
        json={
            "draw": 7,
            "start": 0,
            "length": 10,
            "columns": [{"data": "display_name"}, {"data": "email"}],
            "order": [{"column": 1, "dir": "asc"}],
            "search": {"value": casa.supervisors[0].display_name},
            "additional_filters": casa.default_filters(),
        },
    )

    assert response.status_code == 200
    body = response.json()
    assert body["draw"] == 7
    assert body["recordsFiltered"] == 2
    emails = [row["email"] for row in body["data"]]
    assert emails == sorted(emails)


@pytest.mark.asyncio
async def test_unsupported_column_is_bad_request(client, casa):
    response = await client.post(
        f"/api/v1/orgs/{casa.org_id}/volunteers/query",
        json={"order": {"by": "password"}},
    )

    assert response.status_code == 400
    assert "password" in response.json()["detail"]


@pytest.mark.asyncio
async def test_invalid_paging_is_bad_request(client, casa):
    response = await client.post(
        f"/api/v1/orgs/{casa.org_id}/volunteers/query",
        json={"page": 0},
    )

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_out_of_range_order_column_is_bad_request(client, casa):
    response = await client.post(
        f"/api/v1/orgs/{casa.org_id}/volunteers/datatable",
        json={"columns": [{"data": "email"}], "order": [{"column": 3, "dir": "asc"}]},
    )

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_unknown_org_is_not_found(client):
    response = await client.post("/api/v1/orgs/9999/volunteers/query", json={})

    assert response.status_code == 404
