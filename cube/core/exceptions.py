"""
Custom exceptions for the CUBE gateway and shell.

Exception hierarchy:
    CubeError (base)
    ├── InvalidAddressError - Malformed address, rejected before any upstream call
    ├── UpstreamUnavailableError - Every sub-query of a composite operation failed
    ├── UpstreamError - Upstream answered with a non-success status
    ├── NoDataFoundError - Upstream succeeded but had nothing to return
    └── TransportError - Upstream could not be reached (network, timeout)

Each exception carries a message that can be shown to the operator,
and optionally a technical message for logging. `http_status` is the
status the gateway answers with when the error escapes a route.
"""


class CubeError(Exception):
    """
    Base exception for all CUBE errors.

    Attributes:
        message: Operator-facing error message
        technical_message: Detailed message for logs (optional)
    """

    http_status = 500

    def __init__(
        self,
        message: str = "Something went wrong. Try again later.",
        technical_message: str | None = None,
    ):
        self.message = message
        self.technical_message = technical_message or message
        super().__init__(self.technical_message)

    def __str__(self) -> str:
        return self.technical_message


class InvalidAddressError(CubeError):
    """
    Raised when an address is not a well-formed Solana public key.

    Examples:
        - Empty input
        - Ethereum-style 0x address
        - Characters outside the base58 alphabet
    """

    http_status = 400

    def __init__(
        self,
        message: str = "Invalid token address.",
        technical_message: str | None = None,
    ):
        super().__init__(message, technical_message)


class UpstreamUnavailableError(CubeError):
    """Raised when all sub-queries of a composite operation failed."""

    def __init__(
        self,
        message: str = "Failed to fetch token details.",
        technical_message: str | None = None,
    ):
        super().__init__(message, technical_message)


class UpstreamError(CubeError):
    """
    Raised when an upstream provider answers with a non-success status.

    Attributes:
        status: HTTP status returned by the upstream
    """

    def __init__(
        self,
        status: int,
        message: str | None = None,
        technical_message: str | None = None,
    ):
        self.status = status
        super().__init__(
            message or f"Upstream provider responded with HTTP {status}.",
            technical_message,
        )


class NoDataFoundError(CubeError):
    """
    Raised when the upstream call succeeded but returned an empty result.

    This is a semantic "nothing to show", not a transport failure.
    """

    http_status = 404

    def __init__(
        self,
        message: str = "No data found.",
        technical_message: str | None = None,
    ):
        super().__init__(message, technical_message)


class TransportError(CubeError):
    """
    Raised when an upstream cannot be reached.

    Examples:
        - Connection refused
        - DNS failure
        - Request timeout
    """

    def __init__(
        self,
        message: str = "Upstream provider is unreachable. Try again later.",
        technical_message: str | None = None,
    ):
        super().__init__(message, technical_message)
