"""Health check endpoints."""

from fastapi import APIRouter, HTTPException, Request

router = APIRouter(prefix="/health", tags=["health"])


@router.get("/live")
async def liveness() -> dict:
    """
    Liveness probe.

    Just confirms the process is running and can respond to HTTP.
    Does not contact the upstream node.
    """
    return {"status": "alive"}


@router.get("/ready")
async def readiness(request: Request) -> dict:
    """
    Readiness probe.

    Returns 503 until the faucet service has been created by the
    application lifespan.
    """
    if getattr(request.app.state, "faucet_service", None) is None:
        raise HTTPException(status_code=503, detail="Faucet service not ready")
    return {"status": "ready"}
