"""V1 API router — aggregates all v1 endpoint routers."""

from fastapi import APIRouter

from casa_datatables.presentation.api.v1.endpoints.health import router as health_router
from casa_datatables.presentation.api.v1.endpoints.volunteers import router as volunteers_router

router = APIRouter(prefix="/v1")
router.include_router(health_router)
router.include_router(volunteers_router)
