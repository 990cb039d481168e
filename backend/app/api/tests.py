"""
English test routes: generate a question set, submit an attempt (scored server-side), history and stats.
All scoped by the session user.
"""
import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.deps import RequestContext, get_current_user
from app.database import get_db
from app.llm import TextOracle, get_text_oracle
from app.schemas.test import (
    QuestionPayload,
    TestAttemptResponse,
    TestGenerateRequest,
    TestGenerateResponse,
    TestStatsResponse,
    TestSubmitRequest,
)
from app.services.question_generator import generate_english_test
from app.services.test_attempts import attempt_stats, get_attempt, list_attempts, record_attempt

router = APIRouter(prefix="/api/tests", tags=["tests"])
logger = logging.getLogger(__name__)


@router.post("/generate", response_model=TestGenerateResponse)
def generate_test(
    data: TestGenerateRequest,
    ctx: RequestContext = Depends(get_current_user),
    oracle: TextOracle = Depends(get_text_oracle),
):
    """Generate questions for difficulty/duration; count = min(duration // 2, 25) unless questionCount is given."""
    logger.info("POST /api/tests/generate: user=%s difficulty=%s duration=%s", ctx.user_id, data.difficulty, data.duration)
    questions = generate_english_test(oracle, data.difficulty, data.duration, data.question_count)
    return TestGenerateResponse(questions=[QuestionPayload(**q.to_dict()) for q in questions])


@router.post("", response_model=TestAttemptResponse)
def submit_test(
    data: TestSubmitRequest,
    ctx: RequestContext = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Persist a finished attempt. score/correctAnswers/totalQuestions are recomputed from questions + answers."""
    attempt = record_attempt(
        db,
        ctx.user_id,
        difficulty=data.difficulty,
        duration=data.duration,
        questions=[q.model_dump(by_alias=True) for q in data.questions],
        answers=list(data.answers),
        time_spent=data.time_spent,
    )
    if data.score is not None and data.score != attempt.score:
        logger.info("Client score %s differs from server score %s (attempt %s)", data.score, attempt.score, attempt.id)
    return TestAttemptResponse.model_validate(attempt)


@router.get("/history", response_model=list[TestAttemptResponse])
def test_history(ctx: RequestContext = Depends(get_current_user), db: Session = Depends(get_db)):
    """Caller's attempts, newest first."""
    return [TestAttemptResponse.model_validate(a) for a in list_attempts(db, ctx.user_id)]


@router.get("/stats", response_model=TestStatsResponse)
def test_stats(ctx: RequestContext = Depends(get_current_user), db: Session = Depends(get_db)):
    """Totals, average and best score, time spent and level over the caller's history."""
    s = attempt_stats(db, ctx.user_id)
    return TestStatsResponse(
        total_tests=s.total_tests,
        average_score=s.average_score,
        best_score=s.best_score,
        total_time_spent=s.total_time_spent,
        level=s.level,
    )


@router.get("/{test_id}", response_model=TestAttemptResponse)
def get_test(test_id: int, ctx: RequestContext = Depends(get_current_user), db: Session = Depends(get_db)):
    """One of the caller's attempts; 404 if not owned."""
    return TestAttemptResponse.model_validate(get_attempt(db, ctx.user_id, test_id))
