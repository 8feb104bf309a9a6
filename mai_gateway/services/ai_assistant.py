"""
Closing script generation with the Fireworks LLM.
"""

import asyncio
import json
import logging
from typing import Any, Dict, List

from pydantic import BaseModel, Field

from mai_gateway.core.fireworks_client import get_fireworks_client
from mai_gateway.prompts import CLOSING_SCRIPT_SYSTEM, CLOSING_SCRIPT_PROMPT


logger = logging.getLogger(__name__)


class ScriptGenerationError(Exception):
    """The model did not produce a usable closing script."""


class ClosingScript(BaseModel):
    """Closing script returned to the extension."""
    script: str = Field(description="Script the agent reads aloud")
    talking_points: List[str] = Field(default_factory=list, description="Short reminders for the agent")


def build_prompt(payload: Any) -> str:
    """Render the closing script prompt for a call context payload."""
    context = json.dumps(payload, indent=2, ensure_ascii=False, default=str)
    return CLOSING_SCRIPT_PROMPT.format(context=context)


def _parse_script(result: Dict[str, Any]) -> ClosingScript:
    script = result.get("script") or ""
    if not isinstance(script, str) or not script.strip():
        raise ScriptGenerationError("Model response did not contain a script")

    points = result.get("talking_points") or []
    if isinstance(points, str):
        points = [points]

    return ClosingScript(
        script=script.strip(),
        talking_points=[str(p).strip() for p in points if str(p).strip()],
    )


async def generate_closing_script(payload: Any) -> Dict[str, Any]:
    """
    Generate a closing script for the call described by payload.

    The Fireworks SDK call is blocking, so it runs in a worker thread
    to keep the event loop free for other requests.

    Returns:
        ``{"script": str, "talking_points": [str, ...]}``
    """
    llm_client = get_fireworks_client()
    result = await asyncio.to_thread(
        llm_client.generate_json,
        prompt=build_prompt(payload),
        system_prompt=CLOSING_SCRIPT_SYSTEM,
    )

    if not isinstance(result, dict):
        raise ScriptGenerationError(f"Expected a JSON object, got {type(result).__name__}")

    closing = _parse_script(result)
    logger.info(f"Generated closing script ({len(closing.script)} chars, "
                f"{len(closing.talking_points)} talking points)")
    return closing.model_dump()
