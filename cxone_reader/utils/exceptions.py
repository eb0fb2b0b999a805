"""Error types raised by the CxOne client."""


class CxOneError(Exception):
    """Base class for all CxOne client errors."""


class InvalidToken(CxOneError):
    """A bearer-style token could not be decoded."""


class InvalidCredential(CxOneError):
    """The API key is malformed or could not be exchanged for an access token."""


class TransportFailure(CxOneError):
    """An HTTP call failed (network error, non-2xx status or malformed body)."""

    def __init__(self, endpoint, message):
        """Initialize the failure.

        Args:
            endpoint (str): API endpoint path that failed
            message (str): Description of the failure
        """
        super().__init__(f"Request to {endpoint} failed: {message}")
        self.endpoint = endpoint
        self.message = message


class ConfigurationError(CxOneError):
    """Invalid user-supplied configuration, e.g. a malformed branch mapping file."""
