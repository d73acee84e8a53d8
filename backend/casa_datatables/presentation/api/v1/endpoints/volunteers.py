"""Volunteers datatable endpoints."""

from typing import Any

from fastapi import APIRouter, Depends, HTTPException, status

from casa_datatables.application.schemas.datatable import (
    DatatableQueryRequest,
    DataTablesRequest,
)
from casa_datatables.application.services import VolunteerDatatableService
from casa_datatables.config import get_settings
from casa_datatables.domain.exceptions import (
    EntityNotFoundError,
    InvalidRequestError,
    UnsupportedSortColumnError,
)
from casa_datatables.infrastructure.dependencies import get_volunteer_datatable_service

router = APIRouter(prefix="/orgs/{org_id}/volunteers", tags=["Volunteers"])


@router.post("/query")
async def query_volunteers(
    org_id: int,
    body: DatatableQueryRequest,
    service: VolunteerDatatableService = Depends(get_volunteer_datatable_service),
) -> dict[str, Any]:
    """Return one page of an organisation's volunteers with total/filtered counts."""
    try:
        return await service.render(org_id, body.to_domain())
    except (InvalidRequestError, UnsupportedSortColumnError) as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.post("/datatable")
async def volunteers_datatable(
    org_id: int,
    body: DataTablesRequest,
    service: VolunteerDatatableService = Depends(get_volunteer_datatable_service),
) -> dict[str, Any]:
    """Same query, spoken in the jQuery DataTables server-side protocol."""
    settings = get_settings()
    try:
        request = body.to_domain(default_per_page=settings.datatable_default_per_page)
        return await service.render(org_id, request, draw=body.draw)
    except (InvalidRequestError, UnsupportedSortColumnError) as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
