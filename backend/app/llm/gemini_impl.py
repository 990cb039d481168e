"""
Gemini (Google) text oracle via google.genai.
Uses GEN_MODEL_NAME (e.g. gemini-2.5-flash) and GEMINI_API_KEY.
JSON mime type plus response schema; one attempt per call, bounded by LLM_TIMEOUT_SECONDS.
"""
import logging
import os
import time

from google import genai
from google.genai import types

from app.config import normalize_gen_model, settings

logger = logging.getLogger(__name__)


def get_gemini_api_key() -> str:
    """Resolve Gemini API key from settings or env. Never log the key."""
    return (getattr(settings, "gemini_api_key", "") or os.environ.get("GEMINI_API_KEY") or "").strip()


def _resolve_model_name(name: str) -> str:
    """Return a model id that works with generateContent. Replace known-unsupported ids (e.g. from old .env)."""
    resolved = normalize_gen_model(name)
    if resolved != (name or "").strip():
        logger.info("Gemini: mapping unsupported model %s -> %s", name, resolved)
    return resolved


class GeminiTextOracle:
    """Google Gemini implementation of TextOracle (generate_content)."""

    def __init__(self, model_name: str | None = None, api_key: str | None = None) -> None:
        key = api_key or get_gemini_api_key()
        timeout_ms = int(settings.llm_timeout_seconds * 1000)
        self._client = genai.Client(api_key=key, http_options=types.HttpOptions(timeout=timeout_ms))
        self.model_name = _resolve_model_name(model_name or settings.gen_model_name)

    def generate_json(
        self,
        system_instruction: str,
        contents: str,
        response_schema: dict | None = None,
    ) -> str:
        config = types.GenerateContentConfig(
            system_instruction=system_instruction,
            response_mime_type="application/json",
            response_schema=response_schema,
            max_output_tokens=settings.gemini_max_output_tokens,
            temperature=0.4,
        )
        t_start = time.perf_counter()
        logger.info("Gemini request: model=%s, contents_len=%s", self.model_name, len(contents))
        response = self._client.models.generate_content(
            model=self.model_name,
            contents=contents,
            config=config,
        )
        raw = (getattr(response, "text", None) or "").strip()
        um = getattr(response, "usage_metadata", None)
        inp = (getattr(um, "prompt_token_count", 0) or 0) if um else 0
        out = (getattr(um, "candidates_token_count", 0) or 0) if um else 0
        logger.info(
            "Gemini response %.2fs: raw_len=%s, input_tokens=%s, output_tokens=%s",
            time.perf_counter() - t_start,
            len(raw),
            inp,
            out,
        )
        return raw
