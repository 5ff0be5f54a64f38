from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import String, case, cast, func
from sqlalchemy.orm import Session

from app.crud.listing import apply_filters, apply_search, paginate
from app.models import RecordStatus, Resume, ResumeTemplate, TemplateCategory


def get_template(db: Session, template_id: int) -> Optional[ResumeTemplate]:
    return db.query(ResumeTemplate).filter(ResumeTemplate.id == template_id).first()


def get_template_by_name(db: Session, name: str) -> Optional[ResumeTemplate]:
    return db.query(ResumeTemplate).filter(func.lower(ResumeTemplate.name) == name.strip().lower()).first()


def create_template(db: Session, **fields: Any) -> ResumeTemplate:
    template = ResumeTemplate(**fields)
    db.add(template)
    db.flush()
    return template


def update_template(db: Session, template: ResumeTemplate, changes: Dict[str, Any]) -> ResumeTemplate:
    for attr, value in changes.items():
        setattr(template, attr, value)
    db.flush()
    return template


def count_template_usage(db: Session, template_id: int) -> int:
    return db.query(func.count(Resume.id)).filter(Resume.template_id == template_id).scalar() or 0


def list_templates(
    db: Session,
    filters: Optional[Dict[str, Any]] = None,
    search: Optional[str] = None,
    limit: int = 10,
    offset: int = 0,
) -> Tuple[List[ResumeTemplate], int]:
    query = apply_filters(db.query(ResumeTemplate), ResumeTemplate, filters)
    query = apply_search(
        query,
        [ResumeTemplate.name, ResumeTemplate.description, cast(ResumeTemplate.category, String)],
        search,
    )
    return paginate(query, [ResumeTemplate.added_at.desc(), ResumeTemplate.id.desc()], limit, offset)


def get_template_stats(db: Session) -> Dict[str, int]:
    columns = [
        func.count(ResumeTemplate.id),
        func.sum(case((ResumeTemplate.status == RecordStatus.ACTIVE, 1), else_=0)),
        func.sum(case((ResumeTemplate.status == RecordStatus.INACTIVE, 1), else_=0)),
    ]
    columns += [
        func.sum(case((ResumeTemplate.category == category, 1), else_=0))
        for category in TemplateCategory
    ]
    row = db.query(*columns).one()
    stats = {
        "total_templates": row[0] or 0,
        "active_templates": int(row[1] or 0),
        "inactive_templates": int(row[2] or 0),
    }
    for category, count in zip(TemplateCategory, row[3:]):
        stats[f"{category.value.lower()}_templates"] = int(count or 0)
    return stats
