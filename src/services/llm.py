"""LLM service for Ollama integration."""

import json
import logging
from typing import Any

import httpx
from pydantic import ValidationError as PydanticValidationError

from src.config import get_settings
from src.exceptions import UpstreamServiceError
from src.schemas.meal import MealSuggestion
from src.services.llm_prompts import MEAL_SUGGESTION_SYSTEM_PROMPT, get_meal_suggestion_prompt

logger = logging.getLogger(__name__)


def strip_code_fences(text: str) -> str:
    """Remove markdown code fences the model sometimes wraps JSON in."""
    text = text.strip()
    if text.startswith("```json"):
        text = text[7:]
    if text.startswith("```"):
        text = text[3:]
    if text.endswith("```"):
        text = text[:-3]
    return text.strip()


class LLMService:
    """Service for interacting with Ollama LLM."""

    def __init__(self) -> None:
        self.settings = get_settings()
        self.base_url = self.settings.ollama_base_url
        self.model = self.settings.llm_model
        self.timeout = self.settings.llm_timeout_seconds

    def chat_request(
        self,
        prompt: str,
        system_prompt: str | None,
        temperature: float,
        max_tokens: int,
    ) -> dict[str, Any]:
        """Build a non-streaming Ollama ``/api/chat`` request body."""
        messages = [{"role": "user", "content": prompt}]
        if system_prompt:
            messages.insert(0, {"role": "system", "content": system_prompt})
        return {
            "model": self.model,
            "messages": messages,
            "stream": False,
            "options": {"temperature": temperature, "num_predict": max_tokens},
        }

    async def generate(
        self,
        prompt: str,
        system_prompt: str | None = None,
        temperature: float = 0.3,
        max_tokens: int = 2048,
    ) -> str:
        """Return the assistant message text for a single-turn chat.

        Raises ``KeyError`` or ``TypeError`` when the reply is not shaped like
        ``{"message": {"content": ...}}``.
        """
        body = self.chat_request(prompt, system_prompt, temperature, max_tokens)
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            response = await client.post(f"{self.base_url}/api/chat", json=body)
            response.raise_for_status()
        return response.json()["message"]["content"]

    async def generate_json(
        self,
        prompt: str,
        system_prompt: str | None = None,
        temperature: float = 0.1,
    ) -> Any:
        """Generate structured JSON response from the LLM."""
        result = ""
        try:
            result = await self.generate(
                prompt=prompt,
                system_prompt=system_prompt,
                temperature=temperature,
            )
            return json.loads(strip_code_fences(result))
        except json.JSONDecodeError as e:
            logger.warning(f"Failed to parse LLM response as JSON: {e}")
            logger.warning(f"Raw response: {result or 'N/A'}")
            raise
        except httpx.HTTPError as e:
            logger.error(f"HTTP error calling Ollama: {e}")
            raise

    async def health_check(self) -> bool:
        """Check if Ollama is available and the model is loaded."""
        try:
            async with httpx.AsyncClient(timeout=10.0) as client:
                response = await client.get(f"{self.base_url}/api/tags")
                response.raise_for_status()
                data = response.json()
                models = [m["name"] for m in data.get("models", [])]
                return self.model in models or any(self.model in m for m in models)
        except httpx.HTTPError:
            return False


class MealSuggestionGenerator:
    """Asks the LLM for meal suggestions and validates what comes back."""

    def __init__(self, llm: LLMService | None = None) -> None:
        self.llm = llm or LLMService()

    async def generate(
        self,
        ingredients: list[str],
        dietary_tags: str | None = None,
        allergies: str | None = None,
        preferences: str | None = None,
    ) -> list[MealSuggestion]:
        """Return at least one suggestion or raise ``UpstreamServiceError``."""
        prompt = get_meal_suggestion_prompt(ingredients, dietary_tags, allergies, preferences)
        try:
            payload = await self.llm.generate_json(
                prompt=prompt,
                system_prompt=MEAL_SUGGESTION_SYSTEM_PROMPT,
                temperature=0.8,
            )
        except (httpx.HTTPError, json.JSONDecodeError, KeyError, TypeError) as e:
            raise UpstreamServiceError(f"Meal suggestion request failed: {e}") from e

        if not isinstance(payload, list) or not payload:
            raise UpstreamServiceError("Meal suggestion response was not a non-empty list")

        try:
            return [MealSuggestion.model_validate(entry) for entry in payload]
        except PydanticValidationError as e:
            raise UpstreamServiceError(f"Meal suggestion response was malformed: {e}") from e
