"""JSON-RPC 2.0 implementation for WebBridge services."""
from .models import JSONRPCRequest, JSONRPCResponse, JSONRPCError, ErrorCode
from .errors import (
    RPCError,
    ParseError,
    InvalidRequestError,
    MethodNotFoundError,
    InvalidParamsError,
    InternalError,
)
from .handler import JSONRPCHandler

__all__ = [
    "JSONRPCRequest",
    "JSONRPCResponse",
    "JSONRPCError",
    "ErrorCode",
    "RPCError",
    "ParseError",
    "InvalidRequestError",
    "MethodNotFoundError",
    "InvalidParamsError",
    "InternalError",
    "JSONRPCHandler",
]
