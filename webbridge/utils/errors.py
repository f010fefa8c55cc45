"""Custom exception classes for WebBridge."""


class WebBridgeError(Exception):
    """Base exception for WebBridge errors."""

    pass


class TransportError(WebBridgeError):
    """Listening endpoint could not be opened (bind/listen failure)."""

    pass
