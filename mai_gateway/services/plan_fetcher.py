"""
Plan lookup against the upstream plans API.
"""

import logging
from typing import Any, Dict, Optional

import httpx
from tenacity import retry, stop_after_attempt, wait_exponential, retry_if_exception_type

from mai_gateway import __version__
from mai_gateway.config import get_settings


logger = logging.getLogger(__name__)


class PlanFetchError(Exception):
    """Plans could not be retrieved from the upstream API."""


@retry(
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=0.5, min=0.5, max=4),
    retry=retry_if_exception_type(httpx.TransportError),
    reraise=True,
)
async def _post_lookup(
    client: httpx.AsyncClient, url: str, payload: Any, headers: Dict[str, str]
) -> httpx.Response:
    return await client.post(url, json=payload, headers=headers)


async def fetch_plans(payload: Any, client: Optional[httpx.AsyncClient] = None) -> Any:
    """
    Fetch plan data for a lookup payload.

    The payload is forwarded unchanged; the upstream API decides what
    fields it needs (ZIP code, county, drugs, providers, ...).

    Args:
        payload: Decoded JSON body from the extension
        client: Optional shared HTTP client, mainly for tests

    Returns:
        The upstream JSON response

    Raises:
        PlanFetchError: If the API is unconfigured or answers with an error
    """
    settings = get_settings()
    if not settings.plans_api_url:
        raise PlanFetchError("PLANS_API_URL is not configured")

    headers = {"User-Agent": f"mai-gateway/{__version__}"}
    if settings.plans_api_key:
        headers["Authorization"] = f"Bearer {settings.plans_api_key}"

    owns_client = client is None
    if owns_client:
        client = httpx.AsyncClient(timeout=settings.plans_api_timeout)

    try:
        response = await _post_lookup(client, settings.plans_api_url, payload, headers)
    finally:
        if owns_client:
            await client.aclose()

    if response.status_code >= 400:
        raise PlanFetchError(
            f"Plans API returned {response.status_code}: {response.text[:200]}"
        )

    try:
        plans = response.json()
    except ValueError as e:
        raise PlanFetchError(f"Plans API returned invalid JSON: {e}") from e

    logger.info(f"Fetched plans from upstream ({len(response.content)} bytes)")
    return plans
