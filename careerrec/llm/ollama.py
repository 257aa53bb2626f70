"""Ollama local LLM provider (OpenAI-compatible API)."""

import logging
import os

from careerrec.llm.base import LLMProvider

logger = logging.getLogger(__name__)

_DEFAULT_BASE_URL = "http://localhost:11434/v1"


class OllamaProvider(LLMProvider):
    """Local models served by Ollama. No API key; OLLAMA_BASE_URL picks the host."""

    @property
    def provider_id(self) -> str:
        return "ollama"

    @property
    def default_model(self) -> str:
        return "llama3"

    @property
    def env_var(self) -> None:
        return None

    def complete(
        self,
        prompt: str,
        model: str | None = None,
        *,
        system: str | None = None,
    ) -> str:
        try:
            import openai
        except ImportError:
            msg = (
                "openai is required for Ollama (OpenAI-compatible API). "
                "Install with: pip install 'careerrec[openai]'"
            )
            raise ImportError(msg) from None

        base_url = os.environ.get("OLLAMA_BASE_URL", _DEFAULT_BASE_URL)
        use_model, use_system = self.resolve(model, system)
        logger.info("Requesting recommendations from Ollama at %s (%s)", base_url, use_model)

        # Ollama ignores the key but the client refuses to start without one.
        client = openai.OpenAI(base_url=base_url, api_key="ollama")
        response = client.chat.completions.create(
            model=use_model,
            messages=[
                {"role": "system", "content": use_system},
                {"role": "user", "content": prompt},
            ],
            response_format={"type": "json_object"},
        )
        return response.choices[0].message.content or ""
