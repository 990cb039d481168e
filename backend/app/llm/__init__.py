"""
Text oracle selection: Gemini (default) or OpenAI, picked by LLM_PROVIDER.
Falls back to the deterministic mock when the selected provider has no API key.
"""
import logging
from typing import Callable

from app.config import settings
from app.llm.base import TextOracle, parse_json_object, strip_json_fences

logger = logging.getLogger(__name__)

SUPPORTED_PROVIDERS = ("gemini", "openai")


def llm_provider() -> str:
    """Configured provider name; ValueError if it is not one of SUPPORTED_PROVIDERS."""
    provider = (settings.llm_provider or "gemini").strip().lower()
    if provider not in SUPPORTED_PROVIDERS:
        raise ValueError(f"Unsupported LLM_PROVIDER: {settings.llm_provider}")
    return provider


def get_text_oracle() -> TextOracle:
    """FastAPI dependency; overridden in tests."""
    provider = llm_provider()
    if provider == "openai":
        key = (settings.openai_api_key or "").strip()
        if not key:
            logger.warning("OPENAI_API_KEY not set; using mock text oracle.")
            from app.llm.mock_impl import get_mock_text_oracle
            return get_mock_text_oracle()
        from app.llm.openai_impl import OpenAITextOracle
        return OpenAITextOracle(api_key=key)
    from app.llm.gemini_impl import get_gemini_api_key
    key = get_gemini_api_key()
    if not key:
        logger.warning("GEMINI_API_KEY not set; using mock text oracle.")
        from app.llm.mock_impl import get_mock_text_oracle
        return get_mock_text_oracle()
    from app.llm.gemini_impl import GeminiTextOracle
    return GeminiTextOracle(api_key=key)


def get_text_oracle_factory() -> Callable[[], TextOracle]:
    """FastAPI dependency for routes that only sometimes need the oracle; the caller builds it on demand."""
    return get_text_oracle


__all__ = [
    "SUPPORTED_PROVIDERS",
    "TextOracle",
    "get_text_oracle",
    "get_text_oracle_factory",
    "llm_provider",
    "parse_json_object",
    "strip_json_fences",
]
