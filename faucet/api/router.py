"""Router aggregating all endpoint routers."""

from fastapi import APIRouter

from faucet.api.airdrop import router as airdrop_router
from faucet.api.health import router as health_router
from faucet.api.status import router as status_router

api_router = APIRouter()

api_router.include_router(health_router)
api_router.include_router(airdrop_router)
api_router.include_router(status_router)
