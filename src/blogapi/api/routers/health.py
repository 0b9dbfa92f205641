"""
blogapi.api.routers.health

Health and readiness endpoints.

Responsibilities:
- Provide liveness probe (`/healthz`).
- Provide readiness probe (`/readyz`) with a storage round trip.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from starlette.status import HTTP_503_SERVICE_UNAVAILABLE

from blogapi.api.deps import gateway
from blogapi.domain.errors import StorageError
from blogapi.domain.gateway import BlogGateway
from blogapi.observability.logging import get_logger

log = get_logger(__name__)

router = APIRouter()


@router.get("/healthz")
async def healthz() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/readyz", response_model=None)
async def readyz(store: BlogGateway = Depends(gateway)) -> dict[str, str] | JSONResponse:
    try:
        await store.ping()
    except StorageError as e:
        log.warning("readyz.storage_unavailable", error=str(e))
        return JSONResponse(
            status_code=HTTP_503_SERVICE_UNAVAILABLE, content={"status": "unavailable"}
        )
    return {"status": "ready"}
