"""
Shared pytest fixtures for the faucet gateway tests.

Provides:
- Test settings with predictable values
- A fake upstream Solana node served through httpx.MockTransport
- A controllable clock for cooldown tests
- FastAPI test client wired to the fake node
"""

import json
import os
from typing import Any, AsyncGenerator, Callable, Union

import httpx
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# Set test environment variables BEFORE importing app modules
os.environ.setdefault("LOG_LEVEL", "WARNING")

from faucet.config import Settings
from faucet.services.claim_limiter import ClaimLimiter
from faucet.services.faucet import FaucetService
from faucet.services.rpc_client import RpcClient

DEVNET_URL = "https://devnet.rpc.test/"
TESTNET_URL = "https://testnet.rpc.test/"


# ─── Test Settings ───────────────────────────────────────────────────────────


@pytest.fixture
def test_settings() -> Settings:
    """Test settings with predictable values."""
    return Settings(
        _env_file=None,
        solana_rpc_url=None,
        devnet_rpc_url=DEVNET_URL,
        testnet_rpc_url=TESTNET_URL,
        airdrop_amount=5_000_000_000,
        rate_limit_secs=3600,
        rpc_timeout_secs=5.0,
        request_rate_limit="1000/minute",
    )


# ─── Fake Upstream Node ──────────────────────────────────────────────────────


Reply = Union[dict, bytes, Exception, Callable[[dict], Any]]


class FakeRpcNode:
    """In-memory JSON-RPC node for httpx.MockTransport.

    Replies are configured per method: a dict is sent as the JSON body, bytes
    are sent raw, an exception is raised from the transport, and a callable
    receives the decoded request and returns any of the above.
    """

    def __init__(self):
        self.replies: dict[str, Reply] = {}
        self.requests: list[dict] = []
        self.urls: list[str] = []
        self.status_code = 200

    def reply(self, method: str, reply: Reply) -> None:
        self.replies[method] = reply

    def result(self, method: str, result: Any) -> None:
        self.replies[method] = {"jsonrpc": "2.0", "id": 1, "result": result}

    def error(self, method: str, code: int, message: str) -> None:
        self.replies[method] = {
            "jsonrpc": "2.0",
            "id": 1,
            "error": {"code": code, "message": message},
        }

    def calls(self, method: str) -> list[dict]:
        return [r for r in self.requests if r.get("method") == method]

    def handler(self, request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        self.requests.append(body)
        self.urls.append(str(request.url))

        reply = self.replies.get(body.get("method"))
        if callable(reply) and not isinstance(reply, Exception):
            reply = reply(body)
        if reply is None:
            reply = {
                "jsonrpc": "2.0",
                "id": body.get("id"),
                "error": {"code": -32601, "message": "Method not found"},
            }
        if isinstance(reply, Exception):
            raise reply
        if isinstance(reply, bytes):
            return httpx.Response(self.status_code, content=reply)
        return httpx.Response(self.status_code, json=reply)


@pytest.fixture
def rpc_node() -> FakeRpcNode:
    """Provide a fake upstream node."""
    return FakeRpcNode()


@pytest_asyncio.fixture
async def rpc_client(rpc_node: FakeRpcNode) -> AsyncGenerator[RpcClient, None]:
    """RPC client whose transport is the fake node."""
    client = RpcClient(
        client=httpx.AsyncClient(transport=httpx.MockTransport(rpc_node.handler))
    )
    yield client
    await client.aclose()


# ─── Clock ───────────────────────────────────────────────────────────────────


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


# ─── Faucet Service ──────────────────────────────────────────────────────────


@pytest.fixture
def claim_limiter(test_settings: Settings) -> ClaimLimiter:
    return ClaimLimiter(cooldown_seconds=test_settings.rate_limit_secs)


@pytest.fixture
def faucet_service(
    test_settings: Settings,
    rpc_client: RpcClient,
    claim_limiter: ClaimLimiter,
    clock: FakeClock,
) -> FaucetService:
    """Faucet service backed by the fake node and a fake clock."""
    return FaucetService(test_settings, rpc_client, limiter=claim_limiter, clock=clock)


# ─── FastAPI Test Client ─────────────────────────────────────────────────────


@pytest_asyncio.fixture
async def test_client(faucet_service: FaucetService) -> AsyncGenerator[AsyncClient, None]:
    """Create a test client using the fake-node faucet service.

    ASGITransport does not run the lifespan, so the service is placed on
    app.state directly.
    """
    from faucet.main import app
    from faucet.rate_limit import limiter

    original_service = getattr(app.state, "faucet_service", None)
    app.state.faucet_service = faucet_service
    limiter.reset()

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client

    app.state.faucet_service = original_service
    limiter.reset()


@pytest.fixture
def anyio_backend():
    """Specify the async backend for pytest-asyncio."""
    return "asyncio"
