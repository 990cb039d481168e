"""
Mock text oracle: returns placeholder payloads when no API key is configured.
Shapes its answer from the top-level keys of the response schema, like a model following it.
"""
import json
import logging
import re

logger = logging.getLogger(__name__)

DEFAULT_NUM_QUESTIONS = 5

_COUNT_RE = re.compile(r"Generate (\d+)")

_STEMS = [
    ("She ___ to school every day.", ["go", "goes", "going", "gone"], 1),
    ("Which word is a synonym of 'rapid'?", ["slow", "quick", "late", "heavy"], 1),
    ("They ___ dinner when the phone rang.", ["eat", "were eating", "have eaten", "eats"], 1),
    ("Choose the correctly spelled word.", ["recieve", "receive", "receeve", "riceive"], 1),
    ("If I ___ you, I would apologise.", ["am", "was", "were", "be"], 2),
    ("Pick the antonym of 'generous'.", ["kind", "selfish", "open", "warm"], 1),
    ("He has lived here ___ 2010.", ["for", "since", "from", "by"], 1),
    ("The book ___ on the table is mine.", ["lying", "lay", "lain", "lies"], 0),
]


def _make_mock_questions(n: int) -> list[dict]:
    questions = []
    for i in range(n):
        stem, options, correct = _STEMS[i % len(_STEMS)]
        questions.append({
            "id": i + 1,
            "question": f"[Mock] {stem}",
            "options": list(options),
            "correct": correct,
            "explanation": "Mock explanation. Set GEMINI_API_KEY in .env for real generation.",
        })
    return questions


class MockTextOracle:
    """Deterministic stand-in so the app runs without an API key."""

    model_name = "mock"

    def generate_json(
        self,
        system_instruction: str,
        contents: str,
        response_schema: dict | None = None,
    ) -> str:
        keys = set(((response_schema or {}).get("properties") or {}).keys())
        if "questions" in keys:
            m = _COUNT_RE.search(contents) or _COUNT_RE.search(system_instruction)
            n = int(m.group(1)) if m else DEFAULT_NUM_QUESTIONS
            return json.dumps({"questions": _make_mock_questions(n)})
        if "recommendations" in keys:
            # No opinion: callers keep their original order.
            return json.dumps({"recommendations": []})
        logger.debug("Mock text oracle: unknown schema keys %s", sorted(keys))
        return "{}"


def get_mock_text_oracle() -> MockTextOracle:
    return MockTextOracle()
