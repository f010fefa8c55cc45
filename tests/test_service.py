"""Unit tests for service method registration."""
import pytest
from unittest.mock import AsyncMock

from webbridge.jsonrpc.handler import JSONRPCHandler
from webbridge.jsonrpc.models import JSONRPCRequest
from webbridge.service import MethodEntry, Service


@pytest.fixture
def service():
    """Create an empty Service for testing."""
    return Service("org.rdk.Sample")


@pytest.fixture
def sample_method_handler():
    """Create a sample async method handler."""
    async def handler(params):
        return {"count": len(params), "doubled": [p * 2 for p in params]}
    return handler


class TestServiceIdentity:
    """Test service construction."""

    def test_namespace(self, service):
        assert service.namespace == "org.rdk.Sample"
        assert len(service.methods) == 0

    @pytest.mark.parametrize("namespace", ["", "org..rdk", "org.rdk.", "1org.rdk", "org.rdk.1"])
    def test_invalid_namespace_rejected(self, namespace):
        """Test that namespaces which could not be routed are rejected."""
        with pytest.raises(ValueError):
            Service(namespace)


class TestMethodRegistration:
    """Test method registration functionality."""

    def test_register_single_method(self, service, sample_method_handler):
        """Test registering a single method."""
        service.register_method("double", 1, sample_method_handler)

        assert "double" in service.methods
        entry = service.get_method("double")
        assert entry == MethodEntry(arity=1, handler=sample_method_handler)

    def test_register_multiple_methods(self, service):
        """Test registering multiple methods."""
        async def handler1(params):
            return "result1"

        async def handler2(params):
            return "result2"

        service.register_method("method1", 0, handler1)
        service.register_method("method2", 2, handler2)

        assert len(service.methods) == 2
        assert service.methods["method1"].handler is handler1
        assert service.methods["method2"].arity == 2

    def test_register_method_overwrites_existing(self, service):
        """Test that registering a method with the same name overwrites."""
        first = AsyncMock(return_value="first")
        second = AsyncMock(return_value="second")

        service.register_method("my_method", 1, first)
        service.register_method("my_method", 3, second)

        assert len(service.methods) == 1
        assert service.methods["my_method"].handler is second
        assert service.methods["my_method"].arity == 3

    def test_invalid_method_name_rejected(self, service, sample_method_handler):
        with pytest.raises(ValueError):
            service.register_method("has.dot", 1, sample_method_handler)

    def test_methods_view_is_read_only(self, service, sample_method_handler):
        """Test that the method table cannot be mutated through the view."""
        service.register_method("double", 1, sample_method_handler)

        with pytest.raises(TypeError):
            service.methods["other"] = MethodEntry(arity=0, handler=sample_method_handler)

    def test_get_missing_method(self, service):
        assert service.get_method("missing") is None


class TestDispatchThroughService:
    """Test that dispatch reaches the registered method."""

    @pytest.mark.asyncio
    async def test_dispatch_success(self, service, sample_method_handler):
        service.register_method("double", 1, sample_method_handler)
        handler = JSONRPCHandler()
        handler.register_service(service)

        response = await handler.handle_request(
            JSONRPCRequest(method="org.rdk.Sample.1.double", params=[1, 2], id=1)
        )

        assert response.result == {"count": 2, "doubled": [2, 4]}

    @pytest.mark.asyncio
    async def test_replaced_handler_is_unreachable(self, service):
        """Test that the old handler is never invoked after re-registration."""
        old = AsyncMock(return_value="old")
        new = AsyncMock(return_value="new")
        service.register_method("run", 0, old)
        handler = JSONRPCHandler()
        handler.register_service(service)

        service.register_method("run", 0, new)
        response = await handler.handle_request(
            JSONRPCRequest(method="org.rdk.Sample.1.run", params=[], id=2)
        )

        assert response.result == "new"
        new.assert_awaited_once_with([])
        old.assert_not_called()
