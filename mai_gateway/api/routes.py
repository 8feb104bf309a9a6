"""
API routes for the gateway.

A single catch-all endpoint resolves every request through the route
table so that preflight, health, body parsing and dispatch follow one
fixed precedence regardless of path.
"""

import logging
from fastapi import APIRouter, Request
from fastapi.responses import Response

from mai_gateway.config import get_settings
from mai_gateway.gateway.body import collect_body, parse_payload
from mai_gateway.gateway.errors import GatewayError
from mai_gateway.gateway.models import GatewayResponse, RouteKind, RouteOutcome
from mai_gateway.gateway.responses import (
    HEALTH_BODY,
    INTERNAL_ERROR_BODY,
    NOT_FOUND_BODY,
    error_body,
    json_response,
    render,
)
from mai_gateway.gateway.routing import needs_body, resolve_route
from mai_gateway.services.ai_assistant import generate_closing_script
from mai_gateway.services.plan_fetcher import fetch_plans


logger = logging.getLogger(__name__)
router = APIRouter()

GATEWAY_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def request_target(request: Request) -> str:
    """
    Rebuild the raw request target (path plus query string).

    Route matching is exact, so ``/plans?x=1`` must not match ``/plans``.
    """
    raw_path = request.scope.get("raw_path") or request.scope["path"].encode("utf-8")
    target = raw_path.split(b"?", 1)[0].decode("latin-1")
    query = request.scope.get("query_string", b"")
    if query:
        target = f"{target}?{query.decode('latin-1')}"
    return target


async def dispatch(outcome: RouteOutcome) -> Response:
    """
    Invoke the collaborator for a parsed POST request.

    Collaborator failures are logged with their traceback and reported
    to the caller only as a generic 500.
    """
    try:
        if outcome.kind is RouteKind.PLAN_FETCH:
            result = await fetch_plans(outcome.payload)
        else:
            result = await generate_closing_script(outcome.payload)
        return json_response(200, result)
    except Exception as e:
        logger.exception(f"Error handling {outcome.kind.value} request: {e}")
        return json_response(500, INTERNAL_ERROR_BODY)


@router.api_route("/{path:path}", methods=GATEWAY_METHODS, include_in_schema=False)
async def gateway(request: Request) -> Response:
    """Route a request and write exactly one response for it."""
    method = request.method
    target = request_target(request)
    kind = resolve_route(method, target)

    if kind is RouteKind.PREFLIGHT:
        return render(GatewayResponse(status_code=204))

    if kind is RouteKind.HEALTH:
        return json_response(200, HEALTH_BODY)

    if not needs_body(method):
        return json_response(404, NOT_FOUND_BODY)

    # The body is parsed before the path is checked, so a bad body on an
    # unknown path is still a 400.
    settings = get_settings()
    try:
        raw = await collect_body(request, settings.max_body_bytes)
        payload = parse_payload(raw)
    except GatewayError as e:
        logger.warning(f"Rejected {method} {target}: {e}")
        return json_response(e.status_code, error_body(e.message))
    except Exception as e:
        logger.exception(f"Error reading {method} {target} body: {e}")
        return json_response(500, INTERNAL_ERROR_BODY)

    if kind is RouteKind.NOT_FOUND:
        return json_response(404, NOT_FOUND_BODY)

    return await dispatch(RouteOutcome(kind=kind, payload=payload))
