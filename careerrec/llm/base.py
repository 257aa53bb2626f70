"""Abstract base class for LLM providers and shared response parsing."""

import json
import os
import re
from abc import ABC, abstractmethod
from typing import Any

SYSTEM_PROMPT = (
    "You are a career assistant that recommends jobs and learning resources "
    "to candidates.\n\n"
    "Return ONLY a JSON object (no markdown, no explanation) that matches the "
    "structure requested in the user message."
)

_OBJECT_SPAN = re.compile(r"\{.*\}", re.DOTALL)


def parse_json_payload(raw_text: str) -> Any:
    """Parse an LLM response text into a JSON value.

    Handles markdown-wrapped JSON (```json ... ```), plain JSON, and JSON
    surrounded by prose (the outermost ``{...}`` span is tried last).

    Raises:
        ValueError: If no JSON can be recovered from the text.
    """
    if not isinstance(raw_text, str) or not raw_text.strip():
        msg = "Failed to parse LLM response as JSON: empty response"
        raise ValueError(msg)

    cleaned = re.sub(r"^```(?:json)?\s*\n?", "", raw_text.strip())
    cleaned = re.sub(r"\n?```\s*$", "", cleaned)

    try:
        return json.loads(cleaned)
    except json.JSONDecodeError as e:
        match = _OBJECT_SPAN.search(cleaned)
        if match is None:
            msg = f"Failed to parse LLM response as JSON: {e}"
            raise ValueError(msg) from e
        try:
            return json.loads(match.group(0))
        except json.JSONDecodeError as inner:
            msg = f"Failed to parse LLM response as JSON: {inner}"
            raise ValueError(msg) from inner


class LLMProvider(ABC):
    """Base class that every LLM provider must implement."""

    @property
    @abstractmethod
    def provider_id(self) -> str:
        """Unique identifier for this provider (e.g. 'anthropic')."""

    @abstractmethod
    def complete(
        self,
        prompt: str,
        model: str | None = None,
        *,
        system: str | None = None,
    ) -> str:
        """Send a prompt to the LLM and return raw response text.

        Args:
            prompt: User message describing the candidate and the output shape.
            model: Override the provider's default model. None uses default.
            system: Override the system prompt. None falls back to SYSTEM_PROMPT.

        Returns:
            Raw text response from the LLM (expected to be JSON).
        """

    @property
    @abstractmethod
    def default_model(self) -> str:
        """The default model ID used when no override is specified."""

    @property
    @abstractmethod
    def env_var(self) -> str | None:
        """Environment variable name for the API key, or None if not needed."""

    def require_api_key(self) -> str:
        """Read the API key named by ``env_var``.

        Raises:
            ValueError: If the variable is unset or empty.
        """
        name = self.env_var
        api_key = os.environ.get(name) if name else None
        if not api_key:
            msg = f"{name} environment variable is required"
            raise ValueError(msg)
        return api_key

    def resolve(self, model: str | None, system: str | None) -> tuple[str, str]:
        """Apply the provider defaults to a model and system prompt override."""
        return model or self.default_model, system if system is not None else SYSTEM_PROMPT
