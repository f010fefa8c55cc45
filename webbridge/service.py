"""Service record: a namespace plus its method table."""
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Callable, Dict, List, Mapping, Optional
import logging

from .utils.validation import validate_method_name, validate_namespace

logger = logging.getLogger(__name__)

MethodHandler = Callable[[List[Any]], Any]


@dataclass(frozen=True)
class MethodEntry:
    """Registered method: declared arity and the callable that serves it."""

    arity: int
    handler: MethodHandler


class Service:
    """Named group of JSON-RPC methods, e.g. ``org.rdk.Calculator``.

    Concrete services are built by creating a Service and registering
    methods on it, not by subclassing.
    """

    def __init__(self, namespace: str):
        if not validate_namespace(namespace):
            raise ValueError(f"Invalid service namespace: {namespace!r}")
        self._namespace = namespace
        self._methods: Dict[str, MethodEntry] = {}

    @property
    def namespace(self) -> str:
        return self._namespace

    @property
    def methods(self) -> Mapping[str, MethodEntry]:
        """Read-only view of the method table."""
        return MappingProxyType(self._methods)

    def register_method(self, name: str, arity: int, handler: MethodHandler) -> None:
        """Register a method handler.

        Args:
            name: Bare method name (e.g. "add")
            arity: Expected number of positional params
            handler: Callable taking the params list; may return an awaitable

        A name that is already registered is replaced.
        """
        if not validate_method_name(name):
            raise ValueError(f"Invalid method name: {name!r}")
        if name in self._methods:
            logger.warning(f"Replacing method {self._namespace}.{name}")
        self._methods[name] = MethodEntry(arity=arity, handler=handler)
        logger.info(f"Registered method: {self._namespace}.{name} (arity {arity})")

    def get_method(self, name: str) -> Optional[MethodEntry]:
        return self._methods.get(name)

    def __repr__(self) -> str:
        return f"Service(namespace={self._namespace!r}, methods={sorted(self._methods)})"
