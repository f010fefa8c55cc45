"""Service manager: owns the listening endpoint and the service table."""
import asyncio
import logging
import socket
from typing import Any, Mapping, Optional, Union

import uvicorn
from fastapi import FastAPI

from . import __version__
from .config import DEFAULT_PATH, SUBPROTOCOL, ServerConfig
from .jsonrpc.handler import JSONRPCHandler
from .service import Service
from .transport import WebSocketTransport
from .utils.errors import TransportError

logger = logging.getLogger(__name__)


class ServiceManager:
    """Accepts WebSocket connections and dispatches requests to services.

    Lifecycle: created, ``open`` binds and starts listening, services are
    registered, then ``close`` (or process exit) stops the server.
    """

    def __init__(
        self,
        path: str = DEFAULT_PATH,
        strict_arity: bool = False,
        subprotocol: str = SUBPROTOCOL,
    ):
        self.path = path
        self.jsonrpc_handler = JSONRPCHandler(strict_arity=strict_arity)
        self.transport = WebSocketTransport(self.jsonrpc_handler, subprotocol=subprotocol)
        self.app = self._create_app()

        self._server: Optional[uvicorn.Server] = None
        self._serve_task: Optional[asyncio.Task] = None
        self._port: Optional[int] = None

    def _create_app(self) -> FastAPI:
        app = FastAPI(
            title="WebBridge",
            description="JSON-RPC 2.0 services over WebSocket",
            version=__version__,
        )
        app.add_api_websocket_route(self.path, self.transport.handle_connection)

        @app.get("/health")
        async def health_check():
            """Health check endpoint."""
            return {
                "status": "healthy",
                "service": "webbridge",
                "version": __version__,
                "transport": "WebSocket",
                "subprotocol": self.transport.subprotocol,
                "services": len(self.jsonrpc_handler.services),
                "connections": len(self.transport.connections),
            }

        return app

    @property
    def is_listening(self) -> bool:
        return self._server is not None and self._server.started

    @property
    def port(self) -> Optional[int]:
        """Port actually bound, useful when opened with port 0."""
        return self._port

    def register_service(self, service: Service) -> None:
        """Make a service's methods callable; replaces a same-named service."""
        self.jsonrpc_handler.register_service(service)

    def _bind(self, config: ServerConfig) -> socket.socket:
        family = socket.AF_INET6 if ":" in config.host else socket.AF_INET
        sock = socket.socket(family, socket.SOCK_STREAM)
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        try:
            sock.bind((config.host, config.port))
        except OSError as e:
            sock.close()
            logger.error(f"Failed to bind {config.host}:{config.port}: {e}")
            raise TransportError(f"Cannot listen on {config.host}:{config.port}: {e}") from e
        return sock

    async def open(self, config: Union[ServerConfig, Mapping[str, Any]]) -> None:
        """Bind and start listening.

        Args:
            config: ServerConfig or a mapping with ``host`` and ``port``

        Returns once the endpoint accepts connections.

        Raises:
            TransportError: already open, or the address cannot be bound
        """
        if self._server is not None:
            raise TransportError("Service manager is already open")
        if not isinstance(config, ServerConfig):
            config = ServerConfig.model_validate(config)

        sock = self._bind(config)
        self._port = sock.getsockname()[1]

        server = uvicorn.Server(
            uvicorn.Config(
                self.app,
                host=config.host,
                port=self._port,
                log_level="info",
                log_config=None,
            )
        )
        self._server = server
        self._serve_task = asyncio.create_task(server.serve(sockets=[sock]))

        while not server.started:
            if self._serve_task.done():
                error = self._serve_task.exception()
                self._server = None
                self._serve_task = None
                sock.close()
                raise TransportError(f"Server failed to start on {config.host}:{self._port}: {error}")
            await asyncio.sleep(0.01)

        logger.info(f"Listening on ws://{config.host}:{self._port}{self.path}")

    async def wait_closed(self) -> None:
        """Block until the server stops."""
        if self._serve_task is not None:
            await self._serve_task

    async def close(self) -> None:
        """Stop listening and drop open connections."""
        if self._server is None:
            return
        self._server.should_exit = True
        await self.wait_closed()
        self._server = None
        self._serve_task = None
        logger.info("Service manager closed")
