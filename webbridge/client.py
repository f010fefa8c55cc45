"""WebSocket JSON-RPC client for WebBridge services."""
import asyncio
import json
import logging
import os
from typing import Any, Dict, List, Optional, Union

import websockets
from websockets.asyncio.client import ClientConnection
from websockets.exceptions import ConnectionClosed

from .config import SUBPROTOCOL

logger = logging.getLogger(__name__)

DEFAULT_URL = "ws://127.0.0.1:10001/jsonrpc"


def build_request(
    method: str,
    params: Optional[List[Any]] = None,
    request_id: Union[int, str] = 10,
) -> Dict[str, Any]:
    """Build a JSON-RPC 2.0 request object."""
    return {
        "jsonrpc": "2.0",
        "id": request_id,
        "method": method,
        "params": params or [],
    }


DEFAULT_REQUEST = build_request("org.rdk.Calculator.1.add", [2, 2], request_id=10)


class RpcClient:
    """Sends one request on connect and logs whatever the server sends back.

    Replies are not matched against request ids.
    """

    def __init__(
        self,
        url: str = DEFAULT_URL,
        subprotocol: str = SUBPROTOCOL,
        request: Optional[Dict[str, Any]] = None,
    ):
        """Initialize client.

        Args:
            url: WebSocket endpoint (e.g., ws://127.0.0.1:10001/jsonrpc)
            subprotocol: WebSocket subprotocol to offer
            request: Request sent once the connection is open
        """
        self.url = url
        self.subprotocol = subprotocol
        self.request = request if request is not None else dict(DEFAULT_REQUEST)
        self._ws: Optional[ClientConnection] = None

    async def __aenter__(self):
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    @property
    def connected(self) -> bool:
        return self._ws is not None

    async def connect(self) -> None:
        """Open the connection, then send the configured request.

        Connection failures propagate; there is no retry.
        """
        logger.info(f"Connecting to {self.url}")
        self._ws = await websockets.connect(self.url, subprotocols=[self.subprotocol])
        logger.info("client connected")
        await self.on_connected()

    async def on_connected(self) -> None:
        await self.send(self.request)

    async def send(self, request: Dict[str, Any]) -> None:
        if self._ws is None:
            raise RuntimeError("Client is not connected")
        data = json.dumps(request)
        logger.info(f"send:{data}")
        await self._ws.send(data)

    def on_message(self, message: Union[str, bytes]) -> Any:
        """Parse and log one inbound message; invalid JSON raises."""
        payload = json.loads(message)
        logger.info(f"recv:{json.dumps(payload)}")
        return payload

    async def receive(self) -> Any:
        """Wait for the next message and return it parsed."""
        if self._ws is None:
            raise RuntimeError("Client is not connected")
        return self.on_message(await self._ws.recv())

    async def run(self) -> None:
        """Connect and log messages until the server closes the connection."""
        await self.connect()
        try:
            async for message in self._ws:
                self.on_message(message)
        except ConnectionClosed as e:
            logger.info(f"Connection closed by server: {e}")
        finally:
            await self.close()

    async def close(self) -> None:
        if self._ws is not None:
            await self._ws.close()
            self._ws = None


async def _call_once(url: str) -> Any:
    async with RpcClient(url) as client:
        return await client.receive()


def main():
    logging.basicConfig(level=logging.INFO)
    asyncio.run(_call_once(os.getenv("WEBBRIDGE_URL", DEFAULT_URL)))


if __name__ == "__main__":
    main()
