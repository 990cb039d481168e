"""
Scoring: pure functions over a question list and a parallel answer array (-1 = unanswered).
score = round(100 * correct / total). Elapsed time is supplied by the caller, never measured here.
"""
from dataclasses import dataclass

UNANSWERED = -1


@dataclass(frozen=True)
class ScoreResult:
    score: int
    correct_answers: int
    total_questions: int


@dataclass(frozen=True)
class HistoryStats:
    total_tests: int
    average_score: int
    best_score: int
    total_time_spent: int
    level: str


def _correct_index(question) -> int | None:
    if isinstance(question, dict):
        return question.get("correct", question.get("correctIndex"))
    return getattr(question, "correct", None)


def _round_half_up(x: float) -> int:
    """Math.round semantics: 0.5 goes up (Python's round() is banker's)."""
    return int(x + 0.5)


def score_answers(questions: list, answers: list[int]) -> ScoreResult:
    """
    Count positions where answers[i] matches the question's correct index.
    Caller must guard total > 0 and len(answers) == len(questions).
    """
    total = len(questions)
    if total == 0:
        raise ValueError("cannot score an empty question list")
    if len(answers) != total:
        raise ValueError(f"answers has {len(answers)} entries for {total} questions")
    correct = sum(1 for q, a in zip(questions, answers) if a != UNANSWERED and a == _correct_index(q))
    return ScoreResult(
        score=_round_half_up(100 * correct / total),
        correct_answers=correct,
        total_questions=total,
    )


def level_for(total_tests: int) -> str:
    if total_tests < 5:
        return "Beginner"
    if total_tests < 15:
        return "Intermediate"
    return "Advanced"


def history_stats(attempts: list) -> HistoryStats:
    """Summary over a user's attempts (objects with score and time_spent)."""
    scores = [a.score for a in attempts]
    return HistoryStats(
        total_tests=len(attempts),
        average_score=_round_half_up(sum(scores) / len(scores)) if scores else 0,
        best_score=max(scores) if scores else 0,
        total_time_spent=sum(a.time_spent for a in attempts),
        level=level_for(len(attempts)),
    )
