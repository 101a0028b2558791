"""Health & Readiness Probes — liveness and readiness endpoints.

Invariants:
    - GET /health/ always returns 200 if process is up (liveness)
    - GET /health/ready returns 503 unless the backend is configured and the last load succeeded
"""

import logging
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from printdesk.api.routes.orders import get_store
from printdesk.services.order_store import OrderStore

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness probe. Returns 200 if the process is up."""
    return {
        "status": "healthy",
        "service": "printdesk-api",
        "version": "1.0.0",
    }


@router.get("/ready")
async def readiness_check(store: OrderStore = Depends(get_store)):
    """Readiness probe — backend configured and reachable on the last load."""
    if not store.configured:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "not_ready", "reason": "not_configured"},
        )
    if not store.connected:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "not_ready",
                "reason": "backend_unavailable",
                "error": store.last_error,
            },
        )
    return {
        "status": "ready",
        "checks": {"backend": "healthy"},
        "orders": len(store.snapshot),
    }
