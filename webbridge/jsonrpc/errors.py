"""JSON-RPC error taxonomy raised by handlers and the dispatcher."""
from typing import Any, Optional

from ..utils.errors import WebBridgeError
from .models import ErrorCode, JSONRPCError


class RPCError(WebBridgeError):
    """Error reported back to the caller as a JSON-RPC error object."""

    code = ErrorCode.INTERNAL_ERROR

    def __init__(self, message: str, data: Optional[Any] = None):
        super().__init__(message)
        self.message = message
        self.data = data

    def to_error(self) -> JSONRPCError:
        return JSONRPCError(code=self.code, message=self.message, data=self.data)


class ParseError(RPCError):
    """Payload is not valid JSON."""

    code = ErrorCode.PARSE_ERROR


class InvalidRequestError(RPCError):
    """Payload is JSON but not a well-formed JSON-RPC request."""

    code = ErrorCode.INVALID_REQUEST


class MethodNotFoundError(RPCError):
    """Namespace or method name could not be resolved."""

    code = ErrorCode.METHOD_NOT_FOUND


class InvalidParamsError(RPCError):
    code = ErrorCode.INVALID_PARAMS


class InternalError(RPCError):
    code = ErrorCode.INTERNAL_ERROR
