"""WebSocket transport carrying one JSON-RPC document per frame."""
import json
import logging
from typing import Set

from fastapi import WebSocket, WebSocketDisconnect

from .config import SUBPROTOCOL
from .jsonrpc.handler import JSONRPCHandler

logger = logging.getLogger(__name__)


class WebSocketTransport:
    """Serves JSON-RPC over accepted WebSocket connections.

    Each connection is handled by its own receive/dispatch/send loop, so
    messages on one connection are answered in arrival order.
    """

    def __init__(self, jsonrpc_handler: JSONRPCHandler, subprotocol: str = SUBPROTOCOL):
        self.jsonrpc_handler = jsonrpc_handler
        self.subprotocol = subprotocol
        self.connections: Set[WebSocket] = set()

    async def handle_connection(self, websocket: WebSocket):
        """Accept a connection and dispatch its messages until it closes."""
        offered = websocket.scope.get("subprotocols", [])
        subprotocol = self.subprotocol if self.subprotocol in offered else None
        if subprotocol is None:
            logger.warning(f"Client did not offer subprotocol '{self.subprotocol}': {offered}")

        await websocket.accept(subprotocol=subprotocol)
        self.connections.add(websocket)
        logger.info(f"Client connected: {websocket.client}")

        try:
            while True:
                message = await websocket.receive()
                if message["type"] == "websocket.disconnect":
                    break

                # Binary frames are decoded as strict UTF-8 by the handler
                data = message.get("text")
                if data is None:
                    data = message.get("bytes") or b""

                response = await self.jsonrpc_handler.handle_message(data)
                try:
                    await websocket.send_text(json.dumps(response.to_dict()))
                except RuntimeError as e:
                    # Peer closed before the response could be written
                    logger.info(f"Dropping response to closed connection: {e}")
                    break

        except WebSocketDisconnect:
            pass
        finally:
            self.connections.discard(websocket)
            logger.info(f"Client disconnected: {websocket.client}")
