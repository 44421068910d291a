"""Network status endpoint."""

from fastapi import APIRouter, Depends

from faucet.dependencies import get_faucet_service
from faucet.schemas.faucet import NetworkStatus
from faucet.services.faucet import FaucetService

router = APIRouter(tags=["faucet"])


@router.get("/status", response_model=NetworkStatus)
async def get_status(
    service: FaucetService = Depends(get_faucet_service),
) -> NetworkStatus:
    """Current devnet slot and node version. Unavailable values fall back to defaults."""
    return await service.get_network_status()
