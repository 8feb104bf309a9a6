"""
Pydantic models for the gateway.
These models define the data passed between the classifier, router and writer.
"""

from enum import Enum
from typing import Any, Optional
from pydantic import BaseModel, Field


class AccessDecision(BaseModel):
    """Cross-origin decision derived from the request's Origin header."""
    allow_origin: Optional[str] = Field(default=None, description="Origin echoed back when trusted")
    vary_by_origin: bool = Field(default=False, description="Whether caches must key on Origin")


class RouteKind(str, Enum):
    """Terminal outcomes of the router."""
    HEALTH = "health"
    PREFLIGHT = "preflight"
    PLAN_FETCH = "plan_fetch"
    SCRIPT_GENERATE = "script_generate"
    NOT_FOUND = "not_found"


class RouteOutcome(BaseModel):
    """Selected route plus the decoded request payload, if any."""
    kind: RouteKind
    payload: Any = None


class GatewayResponse(BaseModel):
    """Status and JSON body of the single response written per request."""
    status_code: int
    body: Any = None
