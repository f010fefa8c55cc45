"""Calculator example service (``org.rdk.Calculator``)."""
import json
import logging
from numbers import Real
from typing import Any, List

from .jsonrpc.errors import InvalidParamsError
from .service import Service

logger = logging.getLogger(__name__)

NAMESPACE = "org.rdk.Calculator"


def _operand(value: Any) -> Real:
    # bool is an int subclass but not a number on the wire
    if isinstance(value, bool) or not isinstance(value, Real):
        raise InvalidParamsError(
            f"Expected a number, got {json.dumps(value)}",
            data={"value": value},
        )
    return value


async def add(params: List[Any]) -> Real:
    """Sum of all params; an empty list sums to 0."""
    logger.info(f"add({json.dumps(params)})")
    return sum(_operand(p) for p in params)


async def sub(params: List[Any]) -> Real:
    """First param minus the second; further params are ignored."""
    logger.info(f"sub({json.dumps(params)})")
    if len(params) < 2:
        raise InvalidParamsError(
            f"sub expects 2 params, got {len(params)}",
            data={"expected": 2, "received": len(params)},
        )
    return _operand(params[0]) - _operand(params[1])


def create_calculator_service() -> Service:
    """Build the calculator service with its ``add`` and ``sub`` methods."""
    service = Service(NAMESPACE)
    service.register_method("add", 1, add)
    service.register_method("sub", 1, sub)
    return service
