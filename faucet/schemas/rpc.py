"""JSON-RPC 2.0 envelope schemas for the upstream Solana node."""

from typing import Any, Optional, Union

from pydantic import BaseModel, Field

JSONRPC_VERSION = "2.0"


class RpcRequest(BaseModel):
    """Outbound JSON-RPC request envelope."""
    jsonrpc: str = JSONRPC_VERSION
    id: int = Field(default=1, ge=0, le=0xFFFFFFFF)
    method: str = Field(min_length=1)
    params: Union[list[Any], dict[str, Any]] = Field(default_factory=list)


class RpcErrorObject(BaseModel):
    """Structured error reported by the upstream node."""
    code: int
    message: str
    data: Optional[Any] = None


class RpcResponse(BaseModel):
    """Inbound JSON-RPC response envelope.

    A well-formed reply carries exactly one of ``result`` or ``error``;
    both may be missing, which callers treat as a failure.
    """
    jsonrpc: str = JSONRPC_VERSION
    id: Optional[int] = None
    result: Optional[Any] = None
    error: Optional[RpcErrorObject] = None
