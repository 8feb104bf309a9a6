"""
Structural request errors raised before a collaborator is invoked.
"""


class GatewayError(Exception):
    """Base error carrying the status code and client-facing message."""

    status_code = 500
    message = "Internal server error"

    def __init__(self, detail: str = ""):
        super().__init__(detail or self.message)
        self.detail = detail


class InvalidJSONError(GatewayError):
    """Request body could not be decoded as JSON."""

    status_code = 400
    message = "Invalid JSON"


class PayloadTooLargeError(GatewayError):
    """Request body exceeded the configured size limit."""

    status_code = 413
    message = "Payload too large"
