"""
Declarative route table for the gateway.

Paths are compared exactly against the raw request target, so trailing
slashes and query strings never match.
"""

from typing import Dict, Tuple

from mai_gateway.gateway.models import RouteKind


ROUTE_TABLE: Dict[Tuple[str, str], RouteKind] = {
    ("GET", "/health"): RouteKind.HEALTH,
    ("GET", "/api/health"): RouteKind.HEALTH,
    ("POST", "/plans"): RouteKind.PLAN_FETCH,
    ("POST", "/api/plans"): RouteKind.PLAN_FETCH,
    ("POST", "/ai-recommend"): RouteKind.SCRIPT_GENERATE,
    ("POST", "/api/recommend"): RouteKind.SCRIPT_GENERATE,
}

# Only these methods carry a JSON payload that is parsed before dispatch
BODY_METHODS = frozenset({"POST"})


def resolve_route(method: str, target: str) -> RouteKind:
    """
    Select the route for a method and raw request target.

    OPTIONS is a preflight on every path. Anything missing from the
    table is NOT_FOUND, including known paths under the wrong method.
    """
    if method == "OPTIONS":
        return RouteKind.PREFLIGHT
    return ROUTE_TABLE.get((method, target), RouteKind.NOT_FOUND)


def needs_body(method: str) -> bool:
    """Whether the body must be collected and parsed before dispatch."""
    return method in BODY_METHODS
