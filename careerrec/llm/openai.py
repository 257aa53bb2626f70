"""OpenAI LLM provider."""

import logging

from careerrec.llm.base import LLMProvider

logger = logging.getLogger(__name__)


class OpenAIProvider(LLMProvider):
    """Chat Completions in JSON mode, so the reply is always one JSON object."""

    @property
    def provider_id(self) -> str:
        return "openai"

    @property
    def default_model(self) -> str:
        return "gpt-4o-mini"

    @property
    def env_var(self) -> str:
        return "OPENAI_API_KEY"

    def complete(
        self,
        prompt: str,
        model: str | None = None,
        *,
        system: str | None = None,
    ) -> str:
        api_key = self.require_api_key()
        try:
            import openai
        except ImportError:
            msg = (
                "openai is required for this provider. "
                "Install with: pip install 'careerrec[openai]'"
            )
            raise ImportError(msg) from None

        use_model, use_system = self.resolve(model, system)
        logger.info("Requesting recommendations from OpenAI (%s)", use_model)

        response = openai.OpenAI(api_key=api_key).chat.completions.create(
            model=use_model,
            messages=[
                {"role": "system", "content": use_system},
                {"role": "user", "content": prompt},
            ],
            response_format={"type": "json_object"},
        )
        # content is None when the model refuses
        return response.choices[0].message.content or ""
