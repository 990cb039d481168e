"""
API tests for the English test router: generate, submit (scored server-side), history, stats, detail.
Uses FastAPI TestClient with the text oracle overridden.
"""
from conftest import make_questions


def _submit(client, questions, answers, difficulty="beginner", duration=20, time_spent=600, **extra):
    body = {
        "difficulty": difficulty,
        "duration": duration,
        "questions": questions,
        "answers": answers,
        "timeSpent": time_spent,
        **extra,
    }
    return client.post("/api/tests", json=body)


def test_generate_requires_session(client):
    r = client.post("/api/tests/generate", json={"difficulty": "beginner", "duration": 20})
    assert r.status_code == 401


def test_generate_count_from_duration(auth_client, text_oracle):
    text_oracle.respond_with({"questions": make_questions(12, correct=3)})
    r = auth_client.post("/api/tests/generate", json={"difficulty": "beginner", "duration": 20})
    assert r.status_code == 200, r.text
    questions = r.json()["questions"]
    assert len(questions) == 10
    assert [q["id"] for q in questions] == list(range(1, 11))
    assert all(len(q["options"]) == 4 and q["correct"] == 3 for q in questions)
    assert "Generate 10 English test questions for beginner level" in text_oracle.calls[0]["contents"]


def test_generate_explicit_count(auth_client, text_oracle):
    r = auth_client.post("/api/tests/generate", json={"difficulty": "advanced", "duration": 30, "questionCount": 3})
    assert r.status_code == 200, r.text
    assert len(r.json()["questions"]) == 3


def test_generate_validation_errors_are_400(auth_client, text_oracle):
    for body in (
        {"difficulty": "expert", "duration": 20},
        {"difficulty": "beginner", "duration": 0},
        {"difficulty": "beginner"},
        {"difficulty": "beginner", "duration": 20, "questionCount": 26},
    ):
        r = auth_client.post("/api/tests/generate", json=body)
        assert r.status_code == 400, body
        assert r.json()["message"]
    assert text_oracle.calls == []


def test_generate_duration_too_short_is_400(auth_client, text_oracle):
    r = auth_client.post("/api/tests/generate", json={"difficulty": "beginner", "duration": 1})
    assert r.status_code == 400
    assert text_oracle.calls == []


def test_generate_oracle_failure_is_500_without_detail(auth_client, text_oracle):
    text_oracle.error = RuntimeError("upstream said: quota exceeded for key sk-123")
    r = auth_client.post("/api/tests/generate", json={"difficulty": "beginner", "duration": 20})
    assert r.status_code == 500
    assert r.json() == {"message": "Failed to generate test"}


def test_generate_malformed_payload_is_500(auth_client, text_oracle):
    text_oracle.respond_with("Sorry, I cannot help with that.")
    r = auth_client.post("/api/tests/generate", json={"difficulty": "intermediate", "duration": 20})
    assert r.status_code == 500
    assert r.json() == {"message": "Failed to generate test"}


def test_generate_too_few_questions_is_500(auth_client, text_oracle):
    text_oracle.respond_with({"questions": make_questions(4)})
    r = auth_client.post("/api/tests/generate", json={"difficulty": "beginner", "duration": 20})
    assert r.status_code == 500


def test_end_to_end_generate_submit_history(auth_client, text_oracle, user_id):
    """Login, generate beginner/20 (10 questions), answer 7 correctly, score 70."""
    text_oracle.respond_with({"questions": make_questions(10, correct=1)})
    gen = auth_client.post("/api/tests/generate", json={"difficulty": "beginner", "duration": 20})
    assert gen.status_code == 200
    questions = gen.json()["questions"]
    answers = [1] * 7 + [0, 2, -1]

    r = _submit(auth_client, questions, answers, score=100, correctAnswers=10, totalQuestions=10)
    assert r.status_code == 200, r.text
    attempt = r.json()
    assert attempt["score"] == 70
    assert attempt["correctAnswers"] == 7
    assert attempt["totalQuestions"] == 10
    assert attempt["userId"] == user_id
    assert attempt["answers"] == answers

    history = auth_client.get("/api/tests/history").json()
    assert [a["id"] for a in history] == [attempt["id"]]

    detail = auth_client.get(f"/api/tests/{attempt['id']}")
    assert detail.status_code == 200
    assert detail.json()["score"] == 70


def test_submit_length_mismatch_is_400(auth_client):
    r = _submit(auth_client, make_questions(3), [0, 0])
    assert r.status_code == 400


def test_submit_empty_questions_is_400(auth_client):
    r = _submit(auth_client, [], [])
    assert r.status_code == 400


def test_submit_rejects_out_of_range_answer(auth_client):
    r = _submit(auth_client, make_questions(2), [0, 4])
    assert r.status_code == 400


def test_history_newest_first_and_stats(auth_client):
    first = _submit(auth_client, make_questions(2), [0, 0], time_spent=100).json()
    second = _submit(auth_client, make_questions(2), [0, 1], time_spent=50).json()
    history = auth_client.get("/api/tests/history").json()
    assert [a["id"] for a in history] == [second["id"], first["id"]]

    stats = auth_client.get("/api/tests/stats").json()
    assert stats == {
        "totalTests": 2,
        "averageScore": 75,
        "bestScore": 100,
        "totalTimeSpent": 150,
        "level": "Beginner",
    }


def test_stats_empty_history(auth_client):
    assert auth_client.get("/api/tests/stats").json()["totalTests"] == 0


def test_history_is_scoped_to_user(client, auth_client):
    attempt = _submit(auth_client, make_questions(1), [0]).json()
    client.post("/api/login", json={"idToken": "good:someone-else"})
    assert client.get("/api/tests/history").json() == []
    assert client.get(f"/api/tests/{attempt['id']}").status_code == 404


def test_questions_stored_as_submitted(auth_client):
    questions = make_questions(1)
    attempt = _submit(auth_client, questions, [0]).json()
    stored = attempt["questions"][0]
    assert stored["question"] == questions[0]["question"]
    assert stored["options"] == questions[0]["options"]
    assert stored["correct"] == 0


def test_question_count_limit_follows_settings(auth_client, text_oracle, monkeypatch):
    from app.config import settings

    monkeypatch.setattr(settings, "max_questions", 5)
    r = auth_client.post("/api/tests/generate", json={"difficulty": "beginner", "duration": 30, "questionCount": 6})
    assert r.status_code == 400
    assert text_oracle.calls == []

    r = auth_client.post("/api/tests/generate", json={"difficulty": "beginner", "duration": 30, "questionCount": 5})
    assert r.status_code == 200, r.text
    assert len(r.json()["questions"]) == 5

    r = auth_client.post("/api/tests/generate", json={"difficulty": "beginner", "duration": 60})
    assert r.status_code == 200
    assert len(r.json()["questions"]) == 5
