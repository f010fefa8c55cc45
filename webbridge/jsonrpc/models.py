"""JSON-RPC 2.0 request/response models."""
from pydantic import BaseModel, Field, StrictInt, StrictStr, model_validator
from typing import Any, Dict, List, Optional, Union, Literal

RequestId = Union[StrictInt, StrictStr]


class JSONRPCRequest(BaseModel):
    """JSON-RPC 2.0 request model.

    ``id`` is required: notifications are not supported. ``params`` is an
    ordered list of JSON values.
    """

    jsonrpc: Literal["2.0"] = "2.0"
    method: StrictStr
    params: List[Any] = Field(default_factory=list)
    id: RequestId


class JSONRPCError(BaseModel):
    """JSON-RPC 2.0 error model."""

    code: int
    message: str
    data: Optional[Any] = None


class JSONRPCResponse(BaseModel):
    """JSON-RPC 2.0 response model."""

    jsonrpc: Literal["2.0"] = "2.0"
    id: Optional[RequestId]
    result: Optional[Any] = None
    error: Optional[JSONRPCError] = None

    @model_validator(mode="after")
    def _check_result_or_error(self) -> "JSONRPCResponse":
        if self.error is not None and self.result is not None:
            raise ValueError("response must not carry both result and error")
        return self

    def to_dict(self) -> Dict[str, Any]:
        """Wire representation with exactly one of ``result``/``error``.

        ``model_dump(exclude_none=True)`` would drop a null result, so the
        dict is assembled by hand.
        """
        data: Dict[str, Any] = {"jsonrpc": self.jsonrpc, "id": self.id}
        if self.error is not None:
            data["error"] = self.error.model_dump(exclude_none=True)
        else:
            data["result"] = self.result
        return data


class ErrorCode:
    """JSON-RPC 2.0 standard error codes."""

    PARSE_ERROR = -32700
    INVALID_REQUEST = -32600
    METHOD_NOT_FOUND = -32601
    INVALID_PARAMS = -32602
    INTERNAL_ERROR = -32603
