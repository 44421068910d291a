"""Faucet service: airdrop claims and network status.

Every domain failure is converted into a response object here; nothing
below the API layer raises to the caller.
"""

import asyncio
import logging
import time
from typing import Any, Callable, Optional

from faucet.config import DEVNET, Settings
from faucet.schemas.faucet import AirdropRequest, AirdropResponse, NetworkStatus
from faucet.services.claim_limiter import ClaimLimiter
from faucet.services.rpc_client import (
    DecodeError,
    EmptyResponseError,
    RpcCallError,
    RpcClient,
    TransportError,
    UpstreamError,
)

logger = logging.getLogger(__name__)

MIN_ADDRESS_LENGTH = 32
MAX_ADDRESS_LENGTH = 44

UNKNOWN_VERSION = "unknown"


class FaucetError(Exception):
    """Base class for claim policy failures."""


class InvalidAddressError(FaucetError):
    """The address failed the length check."""

    def __init__(self, message: str = "Invalid Solana address"):
        super().__init__(message)


class RateLimitedError(FaucetError):
    """The address is still inside its cooldown window."""

    def __init__(self, remaining_seconds: int):
        super().__init__(f"Rate limited. Try again in {remaining_seconds} seconds")
        self.remaining_seconds = remaining_seconds


def validate_address(address: str) -> str:
    """Trim ``address`` and apply the length heuristic.

    This is not a base58 or checksum check.
    """
    trimmed = address.strip()
    if not MIN_ADDRESS_LENGTH <= len(trimmed) <= MAX_ADDRESS_LENGTH:
        raise InvalidAddressError()
    return trimmed


def format_sol(lamports: int) -> str:
    """Render a lamport amount in SOL, e.g. 5000000000 -> "5", 1500000000 -> "1.5"."""
    sol = lamports / 1e9
    if sol == int(sol):
        return str(int(sol))
    return f"{sol:.9f}".rstrip("0").rstrip(".")


def describe_rpc_failure(error: RpcCallError) -> str:
    """Human-readable message for a failed upstream call."""
    if isinstance(error, UpstreamError):
        return f"RPC Error: {error.message}"
    if isinstance(error, DecodeError):
        return f"Parse error: {error}"
    if isinstance(error, TransportError):
        return f"Request failed: {error}"
    if isinstance(error, EmptyResponseError):
        return "No result from RPC"
    return f"RPC call failed: {error}"


def _failure(message: str) -> AirdropResponse:
    return AirdropResponse(success=False, tx_signature=None, message=message, lamports=0)


class FaucetService:
    """Handles claims and status queries against the upstream node."""

    def __init__(
        self,
        settings: Settings,
        rpc_client: RpcClient,
        limiter: Optional[ClaimLimiter] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.settings = settings
        self.rpc = rpc_client
        self.limiter = limiter if limiter is not None else ClaimLimiter(
            cooldown_seconds=settings.rate_limit_secs,
            prune_threshold=settings.rate_limit_prune_threshold,
        )
        self._clock = clock

    # ─── Airdrop ────────────────────────────────────────────────────────

    async def request_airdrop(self, request: AirdropRequest) -> AirdropResponse:
        """Validate, rate-check, dispatch and record a single claim."""
        try:
            address = validate_address(request.address)
        except InvalidAddressError as e:
            logger.info(f"Rejected claim for invalid address {request.address!r}")
            return _failure(str(e))

        network = request.network or DEVNET
        endpoint = self.settings.rpc_url_for(network)
        amount = self.settings.airdrop_amount

        try:
            self._check_cooldown(address)
        except RateLimitedError as e:
            logger.info(f"Claim for {address} rate limited ({e.remaining_seconds}s left)")
            return _failure(str(e))

        try:
            signature = await self.rpc.call(endpoint, "requestAirdrop", [address, amount])
            if not isinstance(signature, str):
                raise DecodeError(f"expected signature string, got {type(signature).__name__}")
        except RpcCallError as e:
            logger.warning(f"Airdrop to {address} on {network} failed: {e}")
            return _failure(describe_rpc_failure(e))

        self.limiter.record(address, self._clock())
        logger.info(f"Airdropped {amount} lamports to {address} on {network}: {signature}")
        return AirdropResponse(
            success=True,
            tx_signature=signature,
            message=f"Airdropped {format_sol(amount)} SOL to {address}",
            lamports=amount,
        )

    def _check_cooldown(self, address: str) -> None:
        decision = self.limiter.check(address, self._clock())
        if not decision.allowed:
            raise RateLimitedError(decision.remaining_seconds)

    # ─── Status ─────────────────────────────────────────────────────────

    async def get_network_status(self) -> NetworkStatus:
        """Query slot and version from devnet, substituting defaults on failure."""
        endpoint = self.settings.rpc_url_for(DEVNET)
        slot, version = await asyncio.gather(
            self._fetch_slot(endpoint),
            self._fetch_version(endpoint),
        )
        return NetworkStatus(network=DEVNET, slot=slot, version=version)

    async def _fetch_slot(self, endpoint: str) -> int:
        try:
            result = await self.rpc.call(endpoint, "getSlot", [])
        except RpcCallError as e:
            logger.warning(f"getSlot failed: {e}")
            return 0
        if isinstance(result, bool) or not isinstance(result, int) or result < 0:
            logger.warning(f"getSlot returned unexpected result {result!r}")
            return 0
        return result

    async def _fetch_version(self, endpoint: str) -> str:
        try:
            result: Any = await self.rpc.call(endpoint, "getVersion", [])
        except RpcCallError as e:
            logger.warning(f"getVersion failed: {e}")
            return UNKNOWN_VERSION
        version = result.get("solanaCore") if isinstance(result, dict) else None
        if not isinstance(version, str):
            return UNKNOWN_VERSION
        return version
