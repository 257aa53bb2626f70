"""LLM provider registry with lazy loading.

Usage:
    from careerrec.llm import get_provider, parse_json_payload

    provider = get_provider("anthropic")
    raw = provider.complete(prompt, system=system_prompt)
    payload = parse_json_payload(raw)
"""

import importlib

from careerrec.llm.base import LLMProvider, parse_json_payload

__all__ = ["LLMProvider", "available_providers", "get_provider", "parse_json_payload"]

# Lazy registry: maps provider name → (module_path, class_name)
_REGISTRY: dict[str, tuple[str, str]] = {
    "anthropic": ("careerrec.llm.anthropic", "AnthropicProvider"),
    "openai": ("careerrec.llm.openai", "OpenAIProvider"),
    "gemini": ("careerrec.llm.gemini", "GeminiProvider"),
    "ollama": ("careerrec.llm.ollama", "OllamaProvider"),
}


def get_provider(name: str) -> LLMProvider:
    """Instantiate and return an LLM provider by name.

    Args:
        name: Provider identifier (anthropic, openai, gemini, ollama).

    Returns:
        An LLMProvider instance.

    Raises:
        ValueError: If the provider name is unknown.
    """
    if name not in _REGISTRY:
        valid = ", ".join(sorted(_REGISTRY))
        msg = f"Unknown LLM provider '{name}'. Available: {valid}"
        raise ValueError(msg)

    module_path, class_name = _REGISTRY[name]
    module = importlib.import_module(module_path)
    cls = getattr(module, class_name)
    return cls()  # type: ignore[no-any-return]


def available_providers() -> list[str]:
    """Return sorted list of registered provider names."""
    return sorted(_REGISTRY)
