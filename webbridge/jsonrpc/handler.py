"""JSON-RPC 2.0 dispatcher for namespaced, versioned services."""
from typing import Any, Dict, Optional, Union
import inspect
import json
import logging

from pydantic import ValidationError

from ..service import MethodEntry, Service
from ..utils.validation import split_method
from .errors import (
    InternalError,
    InvalidParamsError,
    InvalidRequestError,
    MethodNotFoundError,
    ParseError,
    RPCError,
)
from .models import (
    JSONRPCRequest,
    JSONRPCResponse,
    JSONRPCError,
    ErrorCode
)

logger = logging.getLogger(__name__)


def _error_response(request_id: Any, error: RPCError) -> JSONRPCResponse:
    return JSONRPCResponse(id=request_id, error=error.to_error())


def _reject_constant(token: str) -> Any:
    raise ValueError(f"Invalid JSON token: {token}")


def _salvage_id(payload: Any) -> Any:
    """Best-effort id of a request that failed validation."""
    if isinstance(payload, dict):
        request_id = payload.get("id")
        if isinstance(request_id, (int, str)) and not isinstance(request_id, bool):
            return request_id
    return None


class JSONRPCHandler:
    """Routes JSON-RPC 2.0 requests to methods of registered services.

    Method strings have the form ``<namespace>.<version>.<method>``. The
    version is parsed but not checked against the service.
    """

    def __init__(self, strict_arity: bool = False):
        self.services: Dict[str, Service] = {}
        self.strict_arity = strict_arity

    def register_service(self, service: Service):
        """Register a service under its namespace.

        Args:
            service: Service whose methods become callable as
                ``<namespace>.<version>.<method>``

        A namespace that is already registered is replaced.
        """
        if service.namespace in self.services:
            logger.warning(f"Replacing service: {service.namespace}")
        self.services[service.namespace] = service
        logger.info(f"Registered service: {service.namespace}")

    def resolve(self, method: str) -> MethodEntry:
        """Look up the method entry for a qualified method string.

        Raises:
            MethodNotFoundError: malformed name, unknown namespace or method
        """
        qualified = split_method(method)
        if qualified is None:
            raise MethodNotFoundError(f"Method not found: {method}")

        service = self.services.get(qualified.namespace)
        if service is None:
            raise MethodNotFoundError(f"Method not found: {method}")

        entry = service.get_method(qualified.name)
        if entry is None:
            raise MethodNotFoundError(f"Method not found: {method}")
        return entry

    async def handle_message(self, message: Union[str, bytes]) -> JSONRPCResponse:
        """Handle one raw transport message.

        Args:
            message: JSON text of a single request, or its UTF-8 bytes

        Returns:
            JSONRPCResponse, an error response for malformed input
        """
        try:
            if isinstance(message, bytes):
                message = message.decode("utf-8")
            # NaN and Infinity are not JSON
            payload = json.loads(message, parse_constant=_reject_constant)
        except ValueError as e:
            logger.warning(f"Dropping unparseable message: {e}")
            return _error_response(None, ParseError("Parse error", data={"details": str(e)}))

        try:
            request = JSONRPCRequest.model_validate(payload)
        except ValidationError as e:
            logger.warning(f"Invalid JSON-RPC request: {message}")
            return _error_response(
                _salvage_id(payload),
                InvalidRequestError(
                    "Invalid Request",
                    data={"details": e.errors(include_url=False, include_context=False)},
                ),
            )

        return await self.handle_request(request)

    async def handle_request(
        self,
        request: JSONRPCRequest
    ) -> JSONRPCResponse:
        """Handle a JSON-RPC 2.0 request.

        Args:
            request: JSONRPCRequest object

        Returns:
            JSONRPCResponse with result or error
        """
        try:
            entry = self.resolve(request.method)

            if self.strict_arity and len(request.params) != entry.arity:
                raise InvalidParamsError(
                    f"{request.method} expects {entry.arity} params, got {len(request.params)}",
                    data={"expected": entry.arity, "received": len(request.params)},
                )

            # Sync and async handlers share one path
            result = entry.handler(request.params)
            if inspect.isawaitable(result):
                result = await result

            # Reject results the transport could not serialize
            try:
                json.dumps(result, allow_nan=False)
            except (TypeError, ValueError) as e:
                logger.error(f"Unserializable result from {request.method}: {e}")
                raise InternalError("Internal error", data={"details": str(e)})

            return JSONRPCResponse(
                id=request.id,
                result=result
            )

        except RPCError as e:
            if isinstance(e, MethodNotFoundError):
                logger.warning(e.message)
            return _error_response(request.id, e)
        except ValueError as e:
            # Invalid parameters
            return JSONRPCResponse(
                id=request.id,
                error=JSONRPCError(
                    code=ErrorCode.INVALID_PARAMS,
                    message=str(e)
                )
            )
        except Exception as e:
            # Internal error
            logger.error(f"Internal error handling {request.method}: {e}", exc_info=True)
            return JSONRPCResponse(
                id=request.id,
                error=JSONRPCError(
                    code=ErrorCode.INTERNAL_ERROR,
                    message="Internal error",
                    data={"details": str(e)}
                )
            )

    def get_service(self, namespace: str) -> Optional[Service]:
        return self.services.get(namespace)
