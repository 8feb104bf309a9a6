"""
Request body collection and JSON decoding.
"""

import json
from typing import Any, Optional

from starlette.requests import Request

from mai_gateway.gateway.errors import InvalidJSONError, PayloadTooLargeError


EMPTY_BODY = b"{}"


async def collect_body(request: Request, max_bytes: Optional[int] = None) -> bytes:
    """
    Accumulate the request body until the client signals end of stream.

    Args:
        request: Incoming request
        max_bytes: Optional upper bound on the body size

    Returns:
        The complete body

    Raises:
        PayloadTooLargeError: If more than max_bytes arrive
    """
    chunks = []
    received = 0
    async for chunk in request.stream():
        received += len(chunk)
        if max_bytes is not None and received > max_bytes:
            raise PayloadTooLargeError(f"body exceeded {max_bytes} bytes")
        chunks.append(chunk)
    return b"".join(chunks)


def _reject_constant(name: str) -> Any:
    raise ValueError(f"non-standard JSON constant: {name}")


def parse_payload(raw: bytes) -> Any:
    """
    Decode a complete body as JSON. An empty body is treated as ``{}``.

    Raises:
        InvalidJSONError: If the body is not valid UTF-8 JSON
    """
    try:
        text = (raw or EMPTY_BODY).decode("utf-8")
        return json.loads(text, parse_constant=_reject_constant)
    except (ValueError, RecursionError) as e:
        # JSONDecodeError and UnicodeDecodeError are ValueErrors; deep nesting
        # exhausts the parser's recursion limit
        raise InvalidJSONError(str(e) or type(e).__name__) from e
