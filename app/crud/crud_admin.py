from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import case, func
from sqlalchemy.orm import Session

from app.crud.listing import apply_filters, apply_search, paginate
from app.models import Admin, AdminRole, RecordStatus


def get_admin(db: Session, admin_id: int) -> Optional[Admin]:
    return db.query(Admin).filter(Admin.id == admin_id).first()


def get_admin_by_email(db: Session, email: str) -> Optional[Admin]:
    return db.query(Admin).filter(func.lower(Admin.email) == email.strip().lower()).first()


def count_admins(db: Session) -> int:
    return db.query(func.count(Admin.id)).scalar() or 0


def create_admin(db: Session, **fields: Any) -> Admin:
    admin = Admin(**fields)
    db.add(admin)
    db.flush()
    return admin


def update_admin(db: Session, admin: Admin, changes: Dict[str, Any]) -> Admin:
    for attr, value in changes.items():
        setattr(admin, attr, value)
    db.flush()
    return admin


def list_admins(
    db: Session,
    filters: Optional[Dict[str, Any]] = None,
    search: Optional[str] = None,
    limit: int = 10,
    offset: int = 0,
) -> Tuple[List[Admin], int]:
    query = apply_filters(db.query(Admin), Admin, filters)
    query = apply_search(query, [Admin.name, Admin.email, Admin.phone], search)
    return paginate(query, [Admin.added_at.desc(), Admin.id.desc()], limit, offset)


def get_admin_stats(db: Session) -> Dict[str, int]:
    total, active, inactive, super_admins = db.query(
        func.count(Admin.id),
        func.sum(case((Admin.status == RecordStatus.ACTIVE, 1), else_=0)),
        func.sum(case((Admin.status == RecordStatus.INACTIVE, 1), else_=0)),
        func.sum(case((Admin.role == AdminRole.SUPER_ADMIN, 1), else_=0)),
    ).one()
    return {
        "total_admins": total or 0,
        "active_admins": int(active or 0),
        "inactive_admins": int(inactive or 0),
        "super_admins": int(super_admins or 0),
    }
