"""
Response writer: turns a GatewayResponse into a Starlette response.
"""

from typing import Any

from starlette.responses import JSONResponse, Response

from mai_gateway.gateway.models import GatewayResponse


HEALTH_BODY = {"status": "ok"}
NOT_FOUND_BODY = {"error": "Not found"}
INTERNAL_ERROR_BODY = {"error": "Internal server error"}


def error_body(message: str) -> dict:
    """Standard error payload."""
    return {"error": message}


def render(response: GatewayResponse) -> Response:
    """
    Serialize a GatewayResponse.

    JSON bodies are written compactly with Content-Type and a
    Content-Length matching the encoded bytes. 204 carries neither.
    """
    if response.status_code == 204:
        return Response(status_code=204)
    return JSONResponse(content=response.body, status_code=response.status_code)


def json_response(status_code: int, body: Any) -> Response:
    """Shortcut for render(GatewayResponse(...))."""
    return render(GatewayResponse(status_code=status_code, body=body))
