"""Origin classification and the ASGI middleware that applies it.

Trusted origins get their exact value echoed in Access-Control-Allow-Origin
along with ``Vary: Origin``. Untrusted origins are still served; the browser
blocks the response on its side. The allowed methods, headers and preflight
max-age are sent on every response.

A Sunfire subdomain label is any run of characters other than ".", "/",
":" and whitespace, so hosts like ``my_app.sunfirematrix.com`` qualify.
"""

import logging
import re
from typing import Dict

from starlette.datastructures import Headers, MutableHeaders
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from mai_gateway.gateway.models import AccessDecision


logger = logging.getLogger(__name__)

SUNFIRE_ORIGIN = re.compile(r"https://([^./:\s]+\.)*sunfirematrix\.com", re.IGNORECASE)
LOCALHOST_ORIGIN = re.compile(r"http://localhost(:[0-9]+)?", re.IGNORECASE)
EXTENSION_PREFIX = "chrome-extension://"

ALLOW_METHODS = "GET, POST, OPTIONS"
ALLOW_HEADERS = "Content-Type, Authorization"
MAX_AGE = "86400"  # one day


def is_trusted_origin(origin: str) -> bool:
    """Check an origin against the Sunfire, localhost and extension rules."""
    return bool(
        SUNFIRE_ORIGIN.fullmatch(origin)
        or LOCALHOST_ORIGIN.fullmatch(origin)
        or origin.startswith(EXTENSION_PREFIX)
    )


def classify_origin(origin: str) -> AccessDecision:
    """
    Decide whether to echo the request origin back.

    Args:
        origin: Value of the Origin header, empty string when absent

    Returns:
        AccessDecision for the response headers
    """
    if origin and is_trusted_origin(origin):
        return AccessDecision(allow_origin=origin, vary_by_origin=True)
    return AccessDecision()


def access_control_headers(decision: AccessDecision) -> Dict[str, str]:
    """Render the CORS header set for a decision."""
    headers = {}
    if decision.allow_origin is not None:
        headers["Access-Control-Allow-Origin"] = decision.allow_origin
    if decision.vary_by_origin:
        headers["Vary"] = "Origin"
    headers["Access-Control-Allow-Methods"] = ALLOW_METHODS
    headers["Access-Control-Allow-Headers"] = ALLOW_HEADERS
    headers["Access-Control-Max-Age"] = MAX_AGE
    return headers


class OriginAccessMiddleware:
    """
    Pure ASGI middleware that classifies the origin before the app runs
    and stamps the resulting headers onto http.response.start.

    Runs for every HTTP request, so preflight and error responses carry
    the same headers as successful ones.
    """

    def __init__(self, app: ASGIApp):
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        origin = Headers(scope=scope).get("origin", "")
        decision = classify_origin(origin)
        if origin and decision.allow_origin is None:
            logger.debug(f"Origin not trusted, omitting allow-origin: {origin}")
        cors_headers = access_control_headers(decision)

        async def send_with_cors(message: Message) -> None:
            if message["type"] == "http.response.start":
                headers = MutableHeaders(scope=message)
                for name, value in cors_headers.items():
                    headers[name] = value
            await send(message)

        await self.app(scope, receive, send_with_cors)
