from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional

from sqlalchemy.orm import Session, joinedload

from app.models import Skill, UserEducation, UserExperience, UserProfile, UserSkill


def get_profile(db: Session, user_id: int) -> Optional[UserProfile]:
    return db.query(UserProfile).filter(UserProfile.user_id == user_id).first()


def get_profile_with_location(db: Session, user_id: int) -> Optional[UserProfile]:
    return (
        db.query(UserProfile)
        .options(joinedload(UserProfile.country), joinedload(UserProfile.state), joinedload(UserProfile.city))
        .filter(UserProfile.user_id == user_id)
        .first()
    )


def upsert_profile(db: Session, user_id: int, values: Dict[str, Any], actor_id: Optional[int]) -> UserProfile:
    """Update the user's profile in place, or insert it when missing."""
    profile = get_profile(db, user_id)
    now = datetime.utcnow()
    if profile is None:
        profile = UserProfile(user_id=user_id, added_at=now, added_by=actor_id, **values)
        db.add(profile)
    else:
        for attr, value in values.items():
            setattr(profile, attr, value)
        profile.updated_at = now
        profile.updated_by = actor_id
    db.flush()
    return profile


def get_education(db: Session, user_id: int) -> List[UserEducation]:
    return db.query(UserEducation).filter(UserEducation.user_id == user_id).order_by(UserEducation.id).all()


def replace_education(db: Session, user_id: int, rows: Iterable[Dict[str, Any]], actor_id: Optional[int]) -> int:
    db.query(UserEducation).filter(UserEducation.user_id == user_id).delete()
    now = datetime.utcnow()
    entries = [UserEducation(user_id=user_id, added_at=now, added_by=actor_id, **row) for row in rows]
    db.add_all(entries)
    db.flush()
    return len(entries)


def get_experience(db: Session, user_id: int, with_location: bool = False) -> List[UserExperience]:
    query = db.query(UserExperience).filter(UserExperience.user_id == user_id)
    if with_location:
        query = query.options(
            joinedload(UserExperience.country),
            joinedload(UserExperience.state),
            joinedload(UserExperience.city),
        )
    return query.order_by(UserExperience.id).all()


def replace_experience(db: Session, user_id: int, rows: Iterable[Dict[str, Any]], actor_id: Optional[int]) -> int:
    db.query(UserExperience).filter(UserExperience.user_id == user_id).delete()
    now = datetime.utcnow()
    entries = [UserExperience(user_id=user_id, added_at=now, added_by=actor_id, **row) for row in rows]
    db.add_all(entries)
    db.flush()
    return len(entries)


def get_skills(db: Session, user_id: int) -> List[Skill]:
    return (
        db.query(Skill)
        .join(UserSkill, UserSkill.skill_id == Skill.id)
        .filter(UserSkill.user_id == user_id)
        .order_by(UserSkill.id)
        .all()
    )


def replace_skills(db: Session, user_id: int, skill_ids: Iterable[int], actor_id: Optional[int]) -> int:
    db.query(UserSkill).filter(UserSkill.user_id == user_id).delete()
    now = datetime.utcnow()
    entries = [UserSkill(user_id=user_id, skill_id=skill_id, added_at=now, added_by=actor_id) for skill_id in skill_ids]
    db.add_all(entries)
    db.flush()
    return len(entries)
