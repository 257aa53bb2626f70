"""Google Gemini LLM provider (google-genai SDK)."""

import logging

from careerrec.llm.base import LLMProvider

logger = logging.getLogger(__name__)


class GeminiProvider(LLMProvider):
    """Gemini with a JSON response MIME type."""

    @property
    def provider_id(self) -> str:
        return "gemini"

    @property
    def default_model(self) -> str:
        return "gemini-2.5-flash"

    @property
    def env_var(self) -> str:
        return "GOOGLE_API_KEY"

    def complete(
        self,
        prompt: str,
        model: str | None = None,
        *,
        system: str | None = None,
    ) -> str:
        api_key = self.require_api_key()
        try:
            from google import genai
            from google.genai import types as genai_types
        except ImportError:
            msg = (
                "google-genai is required for this provider. "
                "Install with: pip install 'careerrec[gemini]'"
            )
            raise ImportError(msg) from None

        use_model, use_system = self.resolve(model, system)
        logger.info("Requesting recommendations from Gemini (%s)", use_model)

        generation_config = genai_types.GenerateContentConfig(
            system_instruction=use_system,
            response_mime_type="application/json",
        )
        response = genai.Client(api_key=api_key).models.generate_content(
            model=use_model,
            contents=prompt,
            config=generation_config,
        )
        # text is None when the candidate was blocked
        return response.text or ""
