"""
English test schemas: generation request, question payload, submission and history.
"""
from datetime import datetime
from typing import Annotated, Literal

from pydantic import Field, field_validator

from app.schemas.base import CamelModel

Difficulty = Literal["beginner", "intermediate", "advanced"]
AnswerIndex = Annotated[int, Field(ge=-1, le=3)]  # -1 = unanswered


class TestGenerateRequest(CamelModel):
    difficulty: Difficulty
    duration: int = Field(gt=0, description="Test length in minutes")
    question_count: int | None = Field(default=None, ge=1, description="Upper bound is settings.max_questions, checked by the generator")


class QuestionPayload(CamelModel):
    id: int
    question: str
    options: list[str]
    correct: int = Field(ge=0, le=3)  # zero-based index into options
    explanation: str | None = None

    @field_validator("options")
    @classmethod
    def four_options(cls, v: list[str]) -> list[str]:
        if len(v) != 4:
            raise ValueError("each question must have exactly 4 options")
        return v


class TestGenerateResponse(CamelModel):
    questions: list[QuestionPayload]


class TestSubmitRequest(CamelModel):
    """score/correctAnswers/totalQuestions are accepted for compatibility but recomputed server-side."""
    difficulty: Difficulty
    duration: int = Field(gt=0)
    questions: list[QuestionPayload] = Field(min_length=1)
    answers: list[AnswerIndex]
    score: int | None = None
    correct_answers: int | None = None
    total_questions: int | None = None
    time_spent: int = Field(ge=0, description="Elapsed seconds, as measured by the client")


class TestAttemptResponse(CamelModel):
    id: int
    user_id: str
    difficulty: str
    duration: int
    questions: list[dict]
    answers: list[int]
    score: int
    correct_answers: int
    total_questions: int
    time_spent: int
    completed_at: datetime | None = None


class TestStatsResponse(CamelModel):
    total_tests: int
    average_score: int
    best_score: int
    total_time_spent: int
    level: str
