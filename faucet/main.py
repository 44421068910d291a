"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from faucet.api.router import api_router
from faucet.config import Settings, get_settings
from faucet.rate_limit import limiter
from faucet.services.faucet import FaucetService, format_sol
from faucet.services.rpc_client import RpcClient

settings = get_settings()

# Configure logging
logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def build_lifespan(settings: Settings):
    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator:
        """Create the shared RPC client and faucet service; close them on shutdown."""
        logger.info(f"Starting {settings.app_name} v{settings.app_version}")

        rpc_client = RpcClient(timeout=settings.rpc_timeout_secs)
        app.state.faucet_service = FaucetService(settings, rpc_client)

        logger.info(f"Airdrop: {format_sol(settings.airdrop_amount)} SOL")
        logger.info(f"Rate limit: {settings.rate_limit_secs} seconds")
        if settings.solana_rpc_url:
            logger.info(f"Upstream RPC override: {settings.solana_rpc_url}")

        yield

        logger.info("Shutting down application")
        app.state.faucet_service = None
        try:
            await rpc_client.aclose()
        except Exception as e:
            logger.warning(f"Error closing RPC client: {e}")

    return lifespan


def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    app_settings = app_settings or settings
    app = FastAPI(
        title=app_settings.app_name,
        version=app_settings.app_version,
        description="Rate-limited Solana airdrop and network status gateway.",
        lifespan=build_lifespan(app_settings),
    )

    # Rate limiting
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    app.include_router(api_router)

    @app.get("/")
    async def root() -> dict:
        """Root endpoint returning API information."""
        return {
            "name": app_settings.app_name,
            "version": app_settings.app_version,
            "docs": "/docs",
        }

    return app


app = create_app()
