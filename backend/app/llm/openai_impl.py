"""
OpenAI implementation of TextOracle (chat completions in JSON mode).
The response schema is described in the system message since JSON mode does not enforce it.
"""
import json
import logging
import time

from openai import OpenAI

from app.config import settings

logger = logging.getLogger(__name__)


class OpenAITextOracle:
    def __init__(self, api_key: str | None = None, model_name: str | None = None):
        self.client = OpenAI(
            api_key=api_key or settings.openai_api_key,
            timeout=settings.llm_timeout_seconds,
            max_retries=0,
        )
        self.model_name = model_name or settings.openai_model

    def generate_json(
        self,
        system_instruction: str,
        contents: str,
        response_schema: dict | None = None,
    ) -> str:
        system = system_instruction
        if response_schema:
            system += "\n\nRespond with a JSON object matching this schema:\n" + json.dumps(response_schema)
        t_start = time.perf_counter()
        response = self.client.chat.completions.create(
            model=self.model_name,
            messages=[
                {"role": "system", "content": system},
                {"role": "user", "content": contents},
            ],
            response_format={"type": "json_object"},
            temperature=0.4,
        )
        content = (response.choices[0].message.content or "").strip()
        usage = response.usage
        logger.info(
            "OpenAI response %.2fs: model=%s, raw_len=%s, input_tokens=%s, output_tokens=%s",
            time.perf_counter() - t_start,
            self.model_name,
            len(content),
            (usage.prompt_tokens or 0) if usage else 0,
            (usage.completion_tokens or 0) if usage else 0,
        )
        return content
