"""
Text oracle interface: one structured-JSON completion per call.
Implementations bound every call with settings.llm_timeout_seconds and never retry;
callers own prompt construction and validation of the returned payload.
"""
import json
from typing import Any, Protocol


class TextOracle(Protocol):
    """A hosted model that turns an instruction into a JSON document (as text)."""

    model_name: str

    def generate_json(
        self,
        system_instruction: str,
        contents: str,
        response_schema: dict | None = None,
    ) -> str:
        """
        Return the raw model text (expected to be a JSON document; may be empty).
        response_schema is an OpenAPI-style schema (uppercase type names) used by providers
        that support constrained output. Raises on transport failure or deadline.
        """
        ...


def strip_json_fences(text: str) -> str:
    """Remove markdown code fences and leading/trailing non-JSON around the object."""
    t = (text or "").strip()
    if t.startswith("```"):
        lines = t.split("\n")
        if lines[0].strip().startswith("```"):
            lines = lines[1:]
        if lines and lines[-1].strip() == "```":
            lines = lines[:-1]
        t = "\n".join(lines)
    start = t.find("{")
    end = t.rfind("}")
    if start != -1 and end != -1 and end > start:
        t = t[start : end + 1]
    return t.strip()


def parse_json_object(raw: str) -> dict[str, Any]:
    """Parse a model response into a dict. Raises ValueError when empty, malformed or not an object."""
    if not raw or not raw.strip():
        raise ValueError("empty response")
    try:
        data = json.loads(strip_json_fences(raw))
    except json.JSONDecodeError as e:
        raise ValueError(f"invalid JSON: {e}") from e
    if not isinstance(data, dict):
        raise ValueError(f"expected a JSON object, got {type(data).__name__}")
    return data
