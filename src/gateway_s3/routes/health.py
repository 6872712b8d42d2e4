"""Liveness probe."""

from fastapi import APIRouter

from gateway_s3.response_models import HealthResponse

router = APIRouter(tags=["health"])


@router.get("/healthz", response_model=HealthResponse)
def healthz() -> HealthResponse:
    return HealthResponse(status="ok")
