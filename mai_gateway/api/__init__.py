"""
API layer for the gateway.
"""

from .routes import router, dispatch, request_target

__all__ = [
    "router",
    "dispatch",
    "request_target",
]
