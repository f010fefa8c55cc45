"""JSON-RPC 2.0 services over WebSocket."""

__version__ = "1.0.0"
