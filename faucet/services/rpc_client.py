"""JSON-RPC client for the upstream Solana node.

Wraps a shared ``httpx.AsyncClient`` and turns every way an upstream call can
go wrong into one of a small set of exceptions, so handlers can map them to
responses without knowing about HTTP:

- ``TransportError``: the request never produced a response (DNS, refused
  connection, timeout, TLS).
- ``DecodeError``: the body is not a JSON-RPC envelope.
- ``UpstreamError``: the node answered with a structured ``error``.
- ``EmptyResponseError``: the envelope has neither ``result`` nor ``error``.

Calls are never retried.
"""

import itertools
import logging
from typing import Any, Optional, Union

import httpx
from pydantic import ValidationError

from faucet.schemas.rpc import RpcRequest, RpcResponse

logger = logging.getLogger(__name__)

_MAX_REQUEST_ID = 0xFFFFFFFF

Params = Union[list[Any], dict[str, Any]]


class RpcCallError(Exception):
    """Base class for failed upstream RPC calls."""


class TransportError(RpcCallError):
    """The upstream node could not be reached."""


class DecodeError(RpcCallError):
    """The upstream reply could not be decoded."""


class UpstreamError(RpcCallError):
    """The upstream node reported a JSON-RPC error."""

    def __init__(self, code: int, message: str):
        super().__init__(message)
        self.code = code
        self.message = message


class EmptyResponseError(RpcCallError):
    """The upstream reply carried neither a result nor an error."""

    def __init__(self, message: str = "No result from RPC"):
        super().__init__(message)


class RpcClient:
    """Minimal async JSON-RPC 2.0 client."""

    def __init__(
        self,
        timeout: float = 30.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self._client = client or httpx.AsyncClient(timeout=timeout)
        self._ids = itertools.count(1)

    def _next_id(self) -> int:
        return (next(self._ids) - 1) % _MAX_REQUEST_ID + 1

    def build_request(self, method: str, params: Optional[Params] = None) -> RpcRequest:
        """Build the outbound envelope for a call."""
        if not method:
            raise ValueError("RPC method must be a non-empty string")
        return RpcRequest(
            id=self._next_id(),
            method=method,
            params=params if params is not None else [],
        )

    async def call(
        self,
        endpoint: str,
        method: str,
        params: Optional[Params] = None,
    ) -> Any:
        """
        Send one JSON-RPC call and return its ``result``.

        Args:
            endpoint: Upstream node URL
            method: RPC method name
            params: Positional (list) or named (dict) parameters

        Returns:
            The decoded ``result`` value

        Raises:
            TransportError, DecodeError, UpstreamError, EmptyResponseError
        """
        envelope = self.build_request(method, params)
        logger.debug(f"RPC {method} -> {endpoint} (id={envelope.id})")

        try:
            response = await self._client.post(endpoint, json=envelope.model_dump())
        except httpx.HTTPError as e:
            detail = str(e) or type(e).__name__
            logger.warning(f"RPC {method} transport failure: {detail}")
            raise TransportError(detail) from e

        # Nodes report JSON-RPC errors with non-2xx statuses too, so the body
        # is decoded regardless of the status code.
        try:
            reply = RpcResponse.model_validate_json(response.content)
        except ValidationError as e:
            detail = f"invalid JSON-RPC response (HTTP {response.status_code}): {e.errors()[0]['msg']}"
            logger.warning(f"RPC {method} decode failure: {detail}")
            raise DecodeError(detail) from e

        if reply.error is not None:
            logger.warning(
                f"RPC {method} upstream error {reply.error.code}: {reply.error.message}"
            )
            raise UpstreamError(reply.error.code, reply.error.message)

        if reply.result is None:
            raise EmptyResponseError()

        return reply.result

    async def aclose(self) -> None:
        """Close the underlying HTTP connection pool."""
        await self._client.aclose()
