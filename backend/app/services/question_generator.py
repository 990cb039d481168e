"""
English test generation: difficulty-scaled prompt -> text oracle -> validated question list.
Question count defaults to min(duration // 2, 25). Ids are re-numbered 1..n regardless of what the
model sends. One oracle attempt per request; any failure surfaces as GenerationError.
"""
import logging
from dataclasses import dataclass, asdict

from app.config import settings
from app.errors import GenerationError, ValidationError
from app.llm import TextOracle, parse_json_object

logger = logging.getLogger(__name__)

DIFFICULTIES = ("beginner", "intermediate", "advanced")
OPTIONS_PER_QUESTION = 4

# Grammar/vocabulary focus per tier
TIER_FOCUS = {
    "beginner": "basic grammar, simple vocabulary, present/past tense, basic sentence structure",
    "intermediate": "complex grammar, intermediate vocabulary, all tenses, conditional sentences, phrasal verbs",
    "advanced": (
        "advanced grammar, sophisticated vocabulary, complex sentence structures, "
        "idiomatic expressions, advanced writing techniques"
    ),
}

QUESTION_SET_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "questions": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "id": {"type": "INTEGER"},
                    "question": {"type": "STRING"},
                    "options": {"type": "ARRAY", "items": {"type": "STRING"}},
                    "correct": {"type": "INTEGER"},
                    "explanation": {"type": "STRING"},
                },
                "required": ["id", "question", "options", "correct", "explanation"],
            },
        }
    },
    "required": ["questions"],
}


@dataclass
class TestQuestion:
    id: int
    question: str
    options: list[str]
    correct: int
    explanation: str | None = None

    def to_dict(self) -> dict:
        return asdict(self)


def question_count_for(duration: int, question_count: int | None = None) -> int:
    """Explicit count wins; otherwise 2 minutes per question, capped at settings.max_questions."""
    if question_count is not None:
        return question_count
    return min(duration // settings.minutes_per_question, settings.max_questions)


def build_prompt(difficulty: str, duration: int, num_questions: int) -> tuple[str, str]:
    """Return (system_instruction, contents) for one generation call."""
    system = f"""You are an expert English language teacher. Generate {num_questions} multiple choice English test questions for {difficulty} level students. Focus on: {TIER_FOCUS[difficulty]}.

Each question should have exactly 4 options (A, B, C, D) with only one correct answer. Include a brief explanation for the correct answer.

Return your response as a JSON object with this exact format:
{{
  "questions": [
    {{
      "id": 1,
      "question": "Question text here",
      "options": ["option A", "option B", "option C", "option D"],
      "correct": 0,
      "explanation": "Brief explanation of why this is correct"
    }}
  ]
}}
"correct" is the zero-based index of the correct option."""
    contents = (
        f"Generate {num_questions} English test questions for {difficulty} level, "
        f"suitable for a {duration}-minute test."
    )
    return system, contents


def _coerce_question(item: object) -> TestQuestion | None:
    """Return a normalized question, or None when the item breaks the 4-option / index contract."""
    if not isinstance(item, dict):
        return None
    text = item.get("question")
    options = item.get("options")
    correct = item.get("correct", item.get("correctIndex"))
    if not isinstance(text, str) or not text.strip():
        return None
    if not isinstance(options, list) or len(options) != OPTIONS_PER_QUESTION:
        return None
    if isinstance(correct, bool) or not isinstance(correct, (int, float)) or int(correct) != correct:
        return None
    correct = int(correct)
    if not 0 <= correct < OPTIONS_PER_QUESTION:
        return None
    explanation = item.get("explanation")
    return TestQuestion(
        id=0,
        question=text.strip(),
        options=[str(o) for o in options],
        correct=correct,
        explanation=str(explanation) if explanation is not None else None,
    )


def parse_question_set(raw: str, num_questions: int) -> list[TestQuestion]:
    """
    Validate and normalize the oracle payload.
    Raises GenerationError for empty/malformed JSON, a missing questions array, or fewer usable
    questions than requested. Extra questions are dropped.
    """
    try:
        data = parse_json_object(raw)
    except ValueError as e:
        raise GenerationError(f"Failed to generate test questions: {e}") from e
    items = data.get("questions")
    if not isinstance(items, list):
        raise GenerationError("Failed to generate test questions: response has no questions array")
    questions = []
    for item in items:
        q = _coerce_question(item)
        if q is None:
            logger.info("Dropping malformed question from oracle: %.200r", item)
            continue
        questions.append(q)
    if len(questions) < num_questions:
        raise GenerationError(
            f"Failed to generate test questions: got {len(questions)} usable, expected {num_questions}"
        )
    questions = questions[:num_questions]
    for i, q in enumerate(questions):
        q.id = i + 1
    return questions


def generate_english_test(
    oracle: TextOracle,
    difficulty: str,
    duration: int,
    question_count: int | None = None,
) -> list[TestQuestion]:
    """Generate a question set for the tier and duration (minutes)."""
    if difficulty not in DIFFICULTIES:
        raise ValidationError(f"difficulty must be one of: {', '.join(DIFFICULTIES)}")
    if not isinstance(duration, int) or duration <= 0:
        raise ValidationError("duration must be a positive number of minutes")
    n = question_count_for(duration, question_count)
    if n < 1 or n > settings.max_questions:
        raise ValidationError(
            f"A test needs between 1 and {settings.max_questions} questions; "
            f"use a duration of at least {settings.minutes_per_question} minutes"
        )
    system, contents = build_prompt(difficulty, duration, n)
    try:
        raw = oracle.generate_json(system, contents, response_schema=QUESTION_SET_SCHEMA)
    except Exception as e:
        logger.exception("Text oracle failed generating %s questions (%s): %s", n, difficulty, e)
        raise GenerationError() from e
    questions = parse_question_set(raw, n)
    logger.info("Generated %s %s questions for a %s-minute test", len(questions), difficulty, duration)
    return questions
