"""FastAPI dependencies shared by the routers."""

from fastapi import HTTPException, Request, status

from faucet.services.faucet import FaucetService


def get_faucet_service(request: Request) -> FaucetService:
    """Return the process-wide faucet service created during startup."""
    service = getattr(request.app.state, "faucet_service", None)
    if service is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Faucet service not initialized",
        )
    return service
