"""
Colleges API: filtered list with optional free-text re-ranking, AI search over the full list, detail.
Read-only reference data; no session required.
"""
from typing import Callable

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.database import get_db
from app.errors import ValidationError
from app.llm import TextOracle, get_text_oracle_factory
from app.schemas.directory import CollegeResponse, SearchRequest
from app.services.directory import CollegeFilters, get_college, search_colleges
from app.services.recommendations import RankedCandidate, college_projection, rerank

router = APIRouter(prefix="/api/colleges", tags=["colleges"])


def _ranked_to_response(r: RankedCandidate) -> CollegeResponse:
    out = CollegeResponse.model_validate(r.item)
    out.relevance_score = r.score
    out.relevance_reason = r.reason
    return out


@router.get("", response_model=list[CollegeResponse])
def list_colleges(
    course: str | None = None,
    location: str | None = None,
    min_fees: int | None = Query(default=None, alias="minFees", ge=0),
    max_fees: int | None = Query(default=None, alias="maxFees", ge=0),
    query: str | None = None,
    db: Session = Depends(get_db),
    oracle_factory: Callable[[], TextOracle] = Depends(get_text_oracle_factory),
):
    """AND of all given filters, ranking order; with query, re-ranked by relevance (original order on failure)."""
    filters = CollegeFilters(course=course, location=location, min_fees=min_fees, max_fees=max_fees)
    colleges = search_colleges(db, filters)
    if query and query.strip():
        return [_ranked_to_response(r) for r in rerank(oracle_factory, query, colleges, college_projection, kind="college")]
    return [CollegeResponse.model_validate(c) for c in colleges]


@router.post("/search", response_model=list[CollegeResponse])
def ai_search_colleges(
    data: SearchRequest,
    db: Session = Depends(get_db),
    oracle_factory: Callable[[], TextOracle] = Depends(get_text_oracle_factory),
):
    """Re-rank every college against a free-text request."""
    if not (data.query or "").strip():
        raise ValidationError("Query is required")
    colleges = search_colleges(db)
    return [_ranked_to_response(r) for r in rerank(oracle_factory, data.query, colleges, college_projection, kind="college")]


@router.get("/{college_id}", response_model=CollegeResponse)
def college_detail(college_id: int, db: Session = Depends(get_db)):
    return CollegeResponse.model_validate(get_college(db, college_id))
