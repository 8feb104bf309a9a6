"""
Fireworks AI client for LLM inference.
Provides wrapper around the Fireworks API with retry logic.
"""

import json
from functools import lru_cache
from typing import Any, Dict, Optional
from tenacity import retry, stop_after_attempt, wait_exponential

from mai_gateway.config import get_settings


class FireworksClient:
    """
    Wrapper for Fireworks AI API with JSON output support.
    """

    def __init__(self):
        """Initialize the Fireworks client with API key."""
        settings = get_settings()
        if not settings.fireworks_api_key:
            raise ValueError("FIREWORKS_API_KEY is not configured")

        from fireworks.client import Fireworks

        self.client = Fireworks(api_key=settings.fireworks_api_key)
        self.llm_model = settings.fireworks_llm_model

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=2, min=2, max=20),
        reraise=True,
    )
    def generate_json(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        temperature: float = 0.4,
        max_tokens: int = 2048,
    ) -> Dict[str, Any]:
        """
        Generate structured JSON output using the LLM.

        Args:
            prompt: User prompt
            system_prompt: Optional system prompt
            temperature: Sampling temperature
            max_tokens: Maximum tokens to generate

        Returns:
            Parsed JSON as dictionary
        """
        full_system = "You must respond with valid JSON only. No additional text."
        if system_prompt:
            full_system = f"{system_prompt}\n\n{full_system}"

        messages = [
            {"role": "system", "content": full_system},
            {"role": "user", "content": prompt},
        ]

        response = self.client.chat.completions.create(
            model=self.llm_model,
            messages=messages,
            temperature=temperature,
            max_tokens=max_tokens,
            response_format={"type": "json_object"},
        )

        content = response.choices[0].message.content
        return json.loads(content)


@lru_cache()
def get_fireworks_client() -> FireworksClient:
    """Get cached Fireworks client instance."""
    return FireworksClient()
