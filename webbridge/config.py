"""Server configuration."""
import os

from pydantic import BaseModel, Field

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 10001
DEFAULT_PATH = "/jsonrpc"
# WebSocket subprotocol token negotiated with clients
SUBPROTOCOL = "json"


class ServerConfig(BaseModel):
    """Bind address consumed by ``ServiceManager.open``."""

    host: str = DEFAULT_HOST
    port: int = Field(default=DEFAULT_PORT, ge=0, le=65535)


def load_config() -> ServerConfig:
    """Build the server config from WEBBRIDGE_HOST / WEBBRIDGE_PORT."""
    return ServerConfig(
        host=os.getenv("WEBBRIDGE_HOST", DEFAULT_HOST),
        port=int(os.getenv("WEBBRIDGE_PORT", str(DEFAULT_PORT))),
    )
