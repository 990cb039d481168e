"""
Teachers API: filtered list (rating order) with optional free-text re-ranking, detail.
"""
from typing import Callable

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.database import get_db
from app.llm import TextOracle, get_text_oracle_factory
from app.schemas.directory import TeacherResponse
from app.services.directory import TeacherFilters, get_teacher, search_teachers
from app.services.recommendations import RankedCandidate, rerank, teacher_projection

router = APIRouter(prefix="/api/teachers", tags=["teachers"])


def _ranked_to_response(r: RankedCandidate) -> TeacherResponse:
    out = TeacherResponse.model_validate(r.item)
    out.relevance_score = r.score
    out.relevance_reason = r.reason
    return out


@router.get("", response_model=list[TeacherResponse])
def list_teachers(
    subject: str | None = None,
    min_experience: int | None = Query(default=None, alias="minExperience", ge=0),
    max_rate: int | None = Query(default=None, alias="maxRate", ge=0),
    query: str | None = None,
    db: Session = Depends(get_db),
    oracle_factory: Callable[[], TextOracle] = Depends(get_text_oracle_factory),
):
    filters = TeacherFilters(subject=subject, min_experience=min_experience, max_rate=max_rate)
    teachers = search_teachers(db, filters)
    if query and query.strip():
        return [_ranked_to_response(r) for r in rerank(oracle_factory, query, teachers, teacher_projection, kind="teacher")]
    return [TeacherResponse.model_validate(t) for t in teachers]


@router.get("/{teacher_id}", response_model=TeacherResponse)
def teacher_detail(teacher_id: int, db: Session = Depends(get_db)):
    return TeacherResponse.model_validate(get_teacher(db, teacher_id))
