from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import case, func
from sqlalchemy.orm import Session

from app.crud.listing import apply_filters, apply_search, paginate
from app.models import RecordStatus, User


def get_user(db: Session, user_id: int) -> Optional[User]:
    return db.query(User).filter(User.id == user_id).first()


def lock_user(db: Session, user_id: int) -> Optional[User]:
    """Fetch the user row with a row lock held until the transaction ends."""
    return db.query(User).filter(User.id == user_id).with_for_update().first()


def get_user_by_email(db: Session, email: str) -> Optional[User]:
    return db.query(User).filter(func.lower(User.email) == email.strip().lower()).first()


def create_user(db: Session, **fields: Any) -> User:
    user = User(**fields)
    db.add(user)
    db.flush()
    return user


def update_user(db: Session, user: User, changes: Dict[str, Any]) -> User:
    for attr, value in changes.items():
        setattr(user, attr, value)
    db.flush()
    return user


def list_users(
    db: Session,
    filters: Optional[Dict[str, Any]] = None,
    search: Optional[str] = None,
    limit: int = 10,
    offset: int = 0,
) -> Tuple[List[User], int]:
    query = apply_filters(db.query(User), User, filters)
    query = apply_search(query, [User.name, User.email, User.phone], search)
    return paginate(query, [User.added_at.desc(), User.id.desc()], limit, offset)


def get_user_stats(db: Session) -> Dict[str, int]:
    total, active, inactive = db.query(
        func.count(User.id),
        func.sum(case((User.status == RecordStatus.ACTIVE, 1), else_=0)),
        func.sum(case((User.status == RecordStatus.INACTIVE, 1), else_=0)),
    ).one()
    return {
        "total_users": total or 0,
        "active_users": int(active or 0),
        "inactive_users": int(inactive or 0),
    }
