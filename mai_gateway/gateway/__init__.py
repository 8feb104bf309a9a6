"""
Request classification, routing and response writing.
"""

from .models import AccessDecision, RouteKind, RouteOutcome, GatewayResponse
from .cors import OriginAccessMiddleware, classify_origin, access_control_headers
from .routing import ROUTE_TABLE, resolve_route, needs_body
from .errors import GatewayError, InvalidJSONError, PayloadTooLargeError
from .responses import render, json_response

__all__ = [
    "AccessDecision",
    "RouteKind",
    "RouteOutcome",
    "GatewayResponse",
    "OriginAccessMiddleware",
    "classify_origin",
    "access_control_headers",
    "ROUTE_TABLE",
    "resolve_route",
    "needs_body",
    "GatewayError",
    "InvalidJSONError",
    "PayloadTooLargeError",
    "render",
    "json_response",
]
