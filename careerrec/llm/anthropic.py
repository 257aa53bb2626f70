"""Anthropic Claude LLM provider."""

import logging

from careerrec.llm.base import LLMProvider

logger = logging.getLogger(__name__)

# A full list of ten jobs with descriptions does not fit in 1024 tokens.
_MAX_TOKENS = 4096


class AnthropicProvider(LLMProvider):
    """Claude via the Messages API; the reply text blocks are concatenated."""

    @property
    def provider_id(self) -> str:
        return "anthropic"

    @property
    def default_model(self) -> str:
        return "claude-sonnet-4-20250514"

    @property
    def env_var(self) -> str:
        return "ANTHROPIC_API_KEY"

    def complete(
        self,
        prompt: str,
        model: str | None = None,
        *,
        system: str | None = None,
    ) -> str:
        api_key = self.require_api_key()
        try:
            import anthropic
        except ImportError:
            msg = (
                "anthropic is required for this provider. "
                "Install with: pip install 'careerrec[anthropic]'"
            )
            raise ImportError(msg) from None

        use_model, use_system = self.resolve(model, system)
        logger.info("Requesting recommendations from Anthropic (%s)", use_model)

        message = anthropic.Anthropic(api_key=api_key).messages.create(
            model=use_model,
            max_tokens=_MAX_TOKENS,
            system=use_system,
            messages=[{"role": "user", "content": prompt}],
        )
        text = "".join(getattr(block, "text", "") for block in message.content)
        logger.debug("Anthropic stop_reason=%s, %d chars", message.stop_reason, len(text))
        return text
