"""Exception types raised by the CRPT document client."""


class CrptApiError(Exception):
    """Base class for all client errors."""


class Cancelled(CrptApiError):
    """A caller stopped waiting for a rate-limit slot before one was granted."""


class SerializationError(CrptApiError):
    """A document could not be encoded to, or decoded from, its wire format."""


class TransportError(CrptApiError):
    """The HTTP request failed at the network or IO level."""

    def __init__(self, message: str, uri: str | None = None):
        super().__init__(message)
        self.uri = uri
