"""Health Probe - liveness endpoint for container orchestration.

Invariants:
    - GET /api/v1/health/ always returns 200 if process is up
"""

import logging
from fastapi import APIRouter, Depends, status

from tapecalc.services.session_registry import SessionRegistry, get_registry

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
def health_check(registry: SessionRegistry = Depends(get_registry)):
    """Basic liveness probe. Returns 200 if the process is up."""
    return {
        "status": "healthy",
        "service": "tapecalc-api",
        "version": "1.0.0",
        "sessions": len(registry),
    }
