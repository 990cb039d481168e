"""
Free-text re-ranking of directory results via the text oracle.
Candidates the model scores come first (highest score first); the rest follow in original order.
Any oracle failure (misconfiguration, transport, deadline, malformed JSON, schema violation) returns the input
order unchanged. This function never raises.
"""
import json
import logging
from dataclasses import dataclass
from typing import Any, Callable, Sequence

from app.llm import TextOracle, parse_json_object
from app.models.college import College
from app.models.teacher import Teacher

logger = logging.getLogger(__name__)

RECOMMENDATION_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "recommendations": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "id": {"type": "INTEGER"},
                    "score": {"type": "NUMBER"},
                    "reason": {"type": "STRING"},
                },
                "required": ["id", "score", "reason"],
            },
        }
    },
    "required": ["recommendations"],
}

RERANK_SYSTEM = """You are an education advisor for Indian students. Given a student's request and a JSON list of candidate {kind}s, pick the candidates that fit the request and score each from 0 to 100 for relevance (100 = perfect fit). Use only ids from the list. Give a one-sentence reason per pick.
Output valid JSON only: {{"recommendations": [{{"id": <candidate id>, "score": <0-100>, "reason": "<why it fits>"}}]}}"""


@dataclass
class RankedCandidate:
    item: Any
    score: float | None = None
    reason: str | None = None


def college_projection(c: College) -> dict:
    return {
        "id": c.id,
        "name": c.name,
        "location": c.location,
        "courses": list(c.courses or []),
        "fees": c.fees,
        "ranking": c.ranking,
        "entranceExam": c.entrance_exam,
    }


def teacher_projection(t: Teacher) -> dict:
    return {
        "id": t.id,
        "name": t.name,
        "specializations": list(t.specializations or []),
        "experience": t.experience,
        "hourlyRate": t.hourly_rate,
        "rating": t.rating / 10,
    }


def _parse_recommendations(raw: str) -> list[tuple[Any, float, str | None]]:
    """Return [(id, score, reason)]. Raises ValueError on schema violation."""
    data = parse_json_object(raw)
    recs = data.get("recommendations")
    if not isinstance(recs, list):
        raise ValueError("response has no recommendations array")
    out = []
    for r in recs:
        if not isinstance(r, dict) or "id" not in r:
            raise ValueError(f"malformed recommendation: {r!r:.200}")
        score = r.get("score")
        if isinstance(score, bool) or not isinstance(score, (int, float)):
            raise ValueError(f"recommendation {r.get('id')!r} has non-numeric score")
        reason = r.get("reason")
        out.append((r["id"], float(score), str(reason) if reason is not None else None))
    return out


def rerank(
    oracle_factory: Callable[[], TextOracle],
    query: str,
    candidates: Sequence[Any],
    project: Callable[[Any], dict],
    kind: str = "college",
) -> list[RankedCandidate]:
    """
    Reorder candidates by oracle relevance to query. Output always contains every candidate exactly once.
    The oracle is built from oracle_factory only when there is something to rank.
    """
    original = [RankedCandidate(item=c) for c in candidates]
    if not candidates or not (query or "").strip():
        return original
    try:
        oracle = oracle_factory()
        by_id = {}
        projected = []
        for c in candidates:
            p = project(c)
            by_id[p["id"]] = c
            projected.append(p)
        contents = (
            f"Student request: {query.strip()}\n\n"
            f"Candidate {kind}s (JSON):\n{json.dumps(projected, ensure_ascii=False)}"
        )
        raw = oracle.generate_json(
            RERANK_SYSTEM.format(kind=kind),
            contents,
            response_schema=RECOMMENDATION_SCHEMA,
        )
        recs = _parse_recommendations(raw)
        scored: dict[Any, RankedCandidate] = {}
        for rec_id, score, reason in recs:
            # Models sometimes echo ids as strings
            key = rec_id if rec_id in by_id else next((k for k in by_id if str(k) == str(rec_id)), None)
            if key is None or key in scored:
                continue
            scored[key] = RankedCandidate(item=by_id[key], score=score, reason=reason)
        ranked = sorted(scored.values(), key=lambda r: r.score, reverse=True)
        seen = set(scored)
        ranked.extend(RankedCandidate(item=by_id[p["id"]]) for p in projected if p["id"] not in seen)
        logger.info("Re-ranked %s %ss for query (scored=%s)", len(ranked), kind, len(scored))
        return ranked
    except Exception as e:
        logger.warning("Re-ranking failed; keeping original %s order: %s", kind, e)
        return original
