#!/usr/bin/env python3
"""
Pre-push / production readiness checks.
Run from backend dir with project venv active: python scripts/pre_push_checks.py
"""
import sys
from pathlib import Path

BACKEND = Path(__file__).resolve().parent.parent
if str(BACKEND) not in sys.path:
    sys.path.insert(0, str(BACKEND))


def check_imports():
    from app.main import app
    paths = {getattr(r, "path", "") for r in app.routes}
    for p in ("/api/login", "/api/tests/generate", "/api/colleges", "/api/teachers", "/api/bookings"):
        assert p in paths, f"missing route {p}"
    return "imports"


def check_scoring():
    from app.services.scoring import score_answers
    questions = [{"correct": 1}] * 10
    r = score_answers(questions, [1] * 7 + [0, 2, -1])
    assert (r.score, r.correct_answers, r.total_questions) == (70, 7, 10)
    return "scoring"


def check_mock_generation():
    from app.llm.mock_impl import MockTextOracle
    from app.services.question_generator import generate_english_test
    questions = generate_english_test(MockTextOracle(), "beginner", 20)
    assert len(questions) == 10 and [q.id for q in questions] == list(range(1, 11))
    return "mock_generation"


def check_init_db():
    from app.database import SessionLocal, init_db
    from app.models.college import College
    init_db()
    db = SessionLocal()
    try:
        assert db.query(College).count() > 0, "no colleges seeded (SEED_ON_STARTUP=false?)"
    finally:
        db.close()
    return "init_db"


def check_production_config():
    from app.config import DEFAULT_SESSION_SECRET, settings
    if settings.is_production:
        assert settings.session_secret != DEFAULT_SESSION_SECRET, "SESSION_SECRET not set"
        assert settings.identity_provider.strip().lower() != "dev", "IDENTITY_PROVIDER=dev in production"
    return "production_config"


def main():
    checks = [check_imports, check_scoring, check_mock_generation, check_init_db, check_production_config]
    for fn in checks:
        try:
            name = fn()
            print(f"OK {name}")
        except Exception as e:
            print(f"FAIL {fn.__name__}: {e}")
            return 1
    print("All pre-push checks passed.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
