"""
Business operations the gateway dispatches to.
"""

from .plan_fetcher import fetch_plans, PlanFetchError
from .ai_assistant import generate_closing_script, ScriptGenerationError, ClosingScript

__all__ = [
    "fetch_plans",
    "PlanFetchError",
    "generate_closing_script",
    "ScriptGenerationError",
    "ClosingScript",
]
