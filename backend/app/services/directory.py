"""
College and teacher directory: AND-combined filters over reference data.
No filters -> full list (colleges by ranking, teachers by rating). No pagination or result cap.
"""
from dataclasses import dataclass

from sqlalchemy import desc, nulls_last
from sqlalchemy.orm import Session

from app.errors import NotFoundError
from app.models.college import College
from app.models.teacher import Teacher


@dataclass
class CollegeFilters:
    course: str | None = None  # matched against the college name
    location: str | None = None
    min_fees: int | None = None
    max_fees: int | None = None


@dataclass
class TeacherFilters:
    subject: str | None = None  # substring of any specialization
    min_experience: int | None = None
    max_rate: int | None = None


def _like(value: str) -> str:
    escaped = value.strip().replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def search_colleges(db: Session, filters: CollegeFilters | None = None) -> list[College]:
    q = db.query(College)
    f = filters or CollegeFilters()
    if f.course and f.course.strip():
        q = q.filter(College.name.ilike(_like(f.course), escape="\\"))
    if f.location and f.location.strip():
        q = q.filter(College.location.ilike(_like(f.location), escape="\\"))
    if f.min_fees is not None:
        q = q.filter(College.fees >= f.min_fees)
    if f.max_fees is not None:
        q = q.filter(College.fees <= f.max_fees)
    return q.order_by(nulls_last(College.ranking.asc()), College.id).all()


def get_college(db: Session, college_id: int) -> College:
    college = db.query(College).filter(College.id == college_id).first()
    if not college:
        raise NotFoundError("College not found")
    return college


def search_teachers(db: Session, filters: TeacherFilters | None = None) -> list[Teacher]:
    q = db.query(Teacher)
    f = filters or TeacherFilters()
    if f.min_experience is not None:
        q = q.filter(Teacher.experience >= f.min_experience)
    if f.max_rate is not None:
        q = q.filter(Teacher.hourly_rate <= f.max_rate)
    teachers = q.order_by(desc(Teacher.rating), Teacher.id).all()
    if f.subject and f.subject.strip():
        # specializations is a JSON list; match in Python to stay portable across SQLite and Postgres
        needle = f.subject.strip().lower()
        teachers = [t for t in teachers if any(needle in (s or "").lower() for s in (t.specializations or []))]
    return teachers


def get_teacher(db: Session, teacher_id: int) -> Teacher:
    teacher = db.query(Teacher).filter(Teacher.id == teacher_id).first()
    if not teacher:
        raise NotFoundError("Teacher not found")
    return teacher
