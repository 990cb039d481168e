"""
College and teacher directory schemas. relevanceScore/relevanceReason are set only on re-ranked results.
"""
from datetime import datetime

from app.schemas.base import CamelModel


class CollegeResponse(CamelModel):
    id: int
    name: str
    location: str
    courses: list[str]
    fees: int
    ranking: int | None = None
    entrance_exam: str | None = None
    description: str | None = None
    image_url: str | None = None
    created_at: datetime | None = None
    relevance_score: float | None = None
    relevance_reason: str | None = None


class TeacherResponse(CamelModel):
    id: int
    name: str
    email: str | None = None
    specializations: list[str]
    experience: int
    qualifications: list[str]
    hourly_rate: int
    rating: int  # tenths of a star
    total_reviews: int
    image_url: str | None = None
    bio: str | None = None
    availability: dict | None = None
    created_at: datetime | None = None
    relevance_score: float | None = None
    relevance_reason: str | None = None


class SearchRequest(CamelModel):
    query: str | None = None
