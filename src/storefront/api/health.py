"""Liveness endpoint."""

from fastapi import APIRouter
from protean.utils.globals import current_domain

from storefront.api.schemas import CamelModel
from storefront.utils.db import database_status

health_router = APIRouter(tags=["health"])


class HealthResponse(CamelModel):
    status: str
    message: str
    database: str


@health_router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    return HealthResponse(
        status="ok",
        message="Server is running",
        database=database_status(current_domain),
    )
