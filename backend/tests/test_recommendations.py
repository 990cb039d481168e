"""Unit tests for re-ranking: scored-first ordering and silent fallback to the original order."""
import json
from types import SimpleNamespace

import pytest

from app.services.recommendations import RECOMMENDATION_SCHEMA, rerank
from conftest import FakeTextOracle


def _candidates():
    return [SimpleNamespace(id=i, name=f"College {i}") for i in (11, 12, 13, 14)]


def _project(c):
    return {"id": c.id, "name": c.name}


def _ids(ranked):
    return [r.item.id for r in ranked]


def test_scored_first_then_original_order():
    oracle = FakeTextOracle()
    oracle.respond_with({"recommendations": [
        {"id": 13, "score": 60, "reason": "Good fit"},
        {"id": 12, "score": 95, "reason": "Best fit"},
    ]})
    ranked = rerank(lambda: oracle, "engineering near Delhi", _candidates(), _project)
    assert _ids(ranked) == [12, 13, 11, 14]
    assert ranked[0].score == 95
    assert ranked[0].reason == "Best fit"
    assert ranked[2].score is None
    assert oracle.calls[0]["schema"] is RECOMMENDATION_SCHEMA


def test_unknown_duplicate_and_string_ids():
    oracle = FakeTextOracle()
    oracle.respond_with({"recommendations": [
        {"id": 999, "score": 100, "reason": "not a candidate"},
        {"id": "14", "score": 80, "reason": "string id"},
        {"id": 14, "score": 10, "reason": "duplicate"},
    ]})
    ranked = rerank(lambda: oracle, "cheap", _candidates(), _project)
    assert _ids(ranked) == [14, 11, 12, 13]
    assert ranked[0].score == 80
    assert len(ranked) == 4


@pytest.mark.parametrize(
    "payload",
    [
        "",
        "definitely not json",
        json.dumps({"results": []}),
        json.dumps({"recommendations": [{"id": 12, "score": "high", "reason": "x"}]}),
        json.dumps({"recommendations": ["12"]}),
    ],
)
def test_malformed_response_keeps_original_order(payload):
    oracle = FakeTextOracle()
    oracle.respond_with(payload)
    ranked = rerank(lambda: oracle, "anything", _candidates(), _project)
    assert _ids(ranked) == [11, 12, 13, 14]
    assert all(r.score is None for r in ranked)


def test_oracle_error_keeps_original_order():
    oracle = FakeTextOracle()
    oracle.error = ConnectionError("network down")
    ranked = rerank(lambda: oracle, "medical colleges", _candidates(), _project)
    assert _ids(ranked) == [11, 12, 13, 14]


def test_blank_query_or_no_candidates_skips_oracle():
    oracle = FakeTextOracle()
    assert _ids(rerank(lambda: oracle, "   ", _candidates(), _project)) == [11, 12, 13, 14]
    assert rerank(lambda: oracle, "anything", [], _project) == []
    assert oracle.calls == []


def test_empty_recommendations_keep_order():
    oracle = FakeTextOracle()  # mock payload: no recommendations
    assert _ids(rerank(lambda: oracle, "anything", _candidates(), _project)) == [11, 12, 13, 14]


def test_oracle_construction_error_keeps_original_order():
    def broken_factory():
        raise ValueError("Unsupported LLM_PROVIDER: anthropic")

    ranked = rerank(broken_factory, "engineering", _candidates(), _project)
    assert _ids(ranked) == [11, 12, 13, 14]
    assert all(r.score is None for r in ranked)


def test_oracle_not_built_without_query():
    built = []

    def factory():
        built.append(1)
        return FakeTextOracle()

    rerank(factory, "", _candidates(), _project)
    rerank(factory, "anything", [], _project)
    assert built == []
