from typing import Any, Dict, List, Optional

from sqlalchemy import case, func
from sqlalchemy.orm import Session

from app.models import RecordStatus, Resume


def get_resume(db: Session, resume_id: int) -> Optional[Resume]:
    return db.query(Resume).filter(Resume.id == resume_id).first()


def get_resumes_for_user(db: Session, user_id: int, status: Optional[RecordStatus] = RecordStatus.ACTIVE) -> List[Resume]:
    query = db.query(Resume).filter(Resume.user_id == user_id)
    if status is not None:
        query = query.filter(Resume.status == status)
    return query.order_by(Resume.added_at.desc(), Resume.id.desc()).all()


def find_active_resume_by_name(
    db: Session, user_id: int, name: str, exclude_id: Optional[int] = None
) -> Optional[Resume]:
    query = db.query(Resume).filter(
        Resume.user_id == user_id,
        Resume.status == RecordStatus.ACTIVE,
        func.lower(Resume.name) == name.strip().lower(),
    )
    if exclude_id is not None:
        query = query.filter(Resume.id != exclude_id)
    return query.first()


def create_resume(db: Session, **fields: Any) -> Resume:
    resume = Resume(**fields)
    db.add(resume)
    db.flush()
    return resume


def update_resume(db: Session, resume: Resume, changes: Dict[str, Any]) -> Resume:
    for attr, value in changes.items():
        setattr(resume, attr, value)
    db.flush()
    return resume


def get_resume_stats(db: Session) -> Dict[str, int]:
    total, active, inactive, users_with_resumes = db.query(
        func.count(Resume.id),
        func.sum(case((Resume.status == RecordStatus.ACTIVE, 1), else_=0)),
        func.sum(case((Resume.status == RecordStatus.INACTIVE, 1), else_=0)),
        func.count(func.distinct(Resume.user_id)),
    ).one()
    return {
        "total_resumes": total or 0,
        "active_resumes": int(active or 0),
        "inactive_resumes": int(inactive or 0),
        "users_with_resumes": users_with_resumes or 0,
    }
