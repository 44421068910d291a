"""Airdrop claim endpoint."""

from fastapi import APIRouter, Depends, Request

from faucet.dependencies import get_faucet_service
from faucet.rate_limit import limiter, request_rate_limit
from faucet.schemas.faucet import AirdropRequest, AirdropResponse
from faucet.services.faucet import FaucetService

router = APIRouter(tags=["faucet"])


@router.post("/airdrop", response_model=AirdropResponse)
@limiter.limit(request_rate_limit)
async def request_airdrop(
    request: Request,
    claim: AirdropRequest,
    service: FaucetService = Depends(get_faucet_service),
) -> AirdropResponse:
    """
    Request an airdrop for an address.

    Always answers 200; ``success`` tells whether the claim went through and
    ``message`` explains why it did not.
    """
    return await service.request_airdrop(claim)
