"""WebBridge server entry point: calculator service over WebSocket JSON-RPC."""
import asyncio
import logging
import os

from .calculator import create_calculator_service
from .config import DEFAULT_PATH, ServerConfig, load_config
from .service_manager import ServiceManager

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# Arity is advisory unless WEBBRIDGE_STRICT_ARITY is set
strict_arity = os.getenv("WEBBRIDGE_STRICT_ARITY", "").lower() in ("1", "true", "yes")

service_manager = ServiceManager(
    path=os.getenv("WEBBRIDGE_PATH", DEFAULT_PATH),
    strict_arity=strict_arity,
)
app = service_manager.app


def register_all_services():
    """Register all services."""
    service_manager.register_service(create_calculator_service())


async def serve(config: ServerConfig):
    """Open the endpoint, register services and run until stopped."""
    logger.info("Starting WebBridge server...")
    await service_manager.open(config)
    register_all_services()
    logger.info(f"Registered {len(service_manager.jsonrpc_handler.services)} services")
    try:
        await service_manager.wait_closed()
    finally:
        logger.info("Shutting down WebBridge server...")


def main():
    asyncio.run(serve(load_config()))


if __name__ == "__main__":
    main()
