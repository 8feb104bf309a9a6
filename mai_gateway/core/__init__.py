"""
Core services for the gateway.
"""

from .fireworks_client import get_fireworks_client, FireworksClient

__all__ = [
    "get_fireworks_client",
    "FireworksClient",
]
