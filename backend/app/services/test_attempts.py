"""
Test attempt persistence. The score is always recomputed here from the stored questions and
answers; whatever the client computed is ignored.
"""
import logging

from sqlalchemy.orm import Session

from app.errors import NotFoundError, ValidationError
from app.models.test_attempt import TestAttempt
from app.services.scoring import HistoryStats, history_stats, score_answers

logger = logging.getLogger(__name__)


def record_attempt(
    db: Session,
    user_id: str,
    difficulty: str,
    duration: int,
    questions: list[dict],
    answers: list[int],
    time_spent: int,
) -> TestAttempt:
    if not questions:
        raise ValidationError("questions must not be empty")
    if len(answers) != len(questions):
        raise ValidationError("answers must have one entry per question")
    result = score_answers(questions, answers)
    attempt = TestAttempt(
        user_id=user_id,
        difficulty=difficulty,
        duration=duration,
        questions=questions,
        answers=answers,
        score=result.score,
        correct_answers=result.correct_answers,
        total_questions=result.total_questions,
        time_spent=time_spent,
    )
    db.add(attempt)
    db.commit()
    db.refresh(attempt)
    logger.info("Test attempt %s saved: %s/%s (%s%%)", attempt.id, result.correct_answers, result.total_questions, result.score)
    return attempt


def list_attempts(db: Session, user_id: str) -> list[TestAttempt]:
    """Caller's attempts, newest first."""
    return (
        db.query(TestAttempt)
        .filter(TestAttempt.user_id == user_id)
        .order_by(TestAttempt.completed_at.desc(), TestAttempt.id.desc())
        .all()
    )


def get_attempt(db: Session, user_id: str, attempt_id: int) -> TestAttempt:
    attempt = (
        db.query(TestAttempt)
        .filter(TestAttempt.id == attempt_id, TestAttempt.user_id == user_id)
        .first()
    )
    if not attempt:
        raise NotFoundError("Test not found")
    return attempt


def attempt_stats(db: Session, user_id: str) -> HistoryStats:
    return history_stats(list_attempts(db, user_id))
