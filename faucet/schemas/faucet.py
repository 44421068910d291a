"""Request and response schemas for the faucet endpoints."""

from typing import Optional

from pydantic import BaseModel, Field


class AirdropRequest(BaseModel):
    """Claim request for a single address."""
    address: str
    network: Optional[str] = None  # "devnet" (default) or "testnet"


class AirdropResponse(BaseModel):
    """Outcome of a claim; domain failures are reported with success=False."""
    success: bool
    tx_signature: Optional[str] = None
    message: str
    lamports: int = Field(default=0, ge=0)


class NetworkStatus(BaseModel):
    """Summary of the upstream network."""
    network: str
    slot: int = Field(default=0, ge=0)
    version: str = "unknown"
