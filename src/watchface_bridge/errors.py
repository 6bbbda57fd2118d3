"""Errors raised by the weather pipeline stages."""


class BridgeError(Exception):
    """Base class for failures that end a pipeline run."""
    pass


class LocationUnavailable(BridgeError):
    """Raised when no position fix can be obtained."""
    pass


class FetchFailed(BridgeError):
    """Raised when the weather request fails or its body cannot be parsed."""
    pass


class DeliveryFailed(BridgeError):
    """Raised when the device rejects or never receives an app message."""
    pass
