from datetime import datetime

from sqlalchemy import (
    Boolean,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import relationship

from app.db.session import Base
from app.models.enums import Gender, RecordStatus, enum_column_type


class Country(Base):
    __tablename__ = "countries"

    id = Column(Integer, primary_key=True)
    name = Column(String(100), nullable=False)


class State(Base):
    __tablename__ = "states"

    id = Column(Integer, primary_key=True)
    country_id = Column(Integer, ForeignKey("countries.id"), nullable=False, index=True)
    name = Column(String(100), nullable=False)


class City(Base):
    __tablename__ = "cities"

    id = Column(Integer, primary_key=True)
    state_id = Column(Integer, ForeignKey("states.id"), nullable=False, index=True)
    name = Column(String(100), nullable=False)


class Skill(Base):
    """Skill catalog entry users pick from."""
    __tablename__ = "skills"

    id = Column(Integer, primary_key=True)
    name = Column(String(100), nullable=False)
    code = Column(String(30), nullable=True)
    status = Column(enum_column_type(RecordStatus, "skill_status"), nullable=False, default=RecordStatus.ACTIVE)


class UserProfile(Base):
    __tablename__ = "user_profiles"

    id = Column(Integer, primary_key=True)
    # at most one profile per user
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False)
    date_of_birth = Column(Date, nullable=True)
    gender = Column(enum_column_type(Gender, "profile_gender"), nullable=True)
    current_salary = Column(Numeric(14, 2), nullable=True)
    is_annually = Column(Boolean, nullable=False, default=True)
    country_id = Column(Integer, ForeignKey("countries.id"), nullable=True)
    state_id = Column(Integer, ForeignKey("states.id"), nullable=True)
    city_id = Column(Integer, ForeignKey("cities.id"), nullable=True)
    zipcode = Column(String(20), nullable=True)
    address = Column(Text, nullable=True)
    added_at = Column(DateTime, default=datetime.utcnow, server_default=func.now(), nullable=False)
    updated_at = Column(DateTime, nullable=True)
    added_by = Column(Integer, nullable=True)
    updated_by = Column(Integer, nullable=True)

    user = relationship("User", back_populates="profile")
    country = relationship("Country")
    state = relationship("State")
    city = relationship("City")


class UserEducation(Base):
    __tablename__ = "user_education"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    degree_name = Column(String(150), nullable=False)
    institute_name = Column(String(200), nullable=False)
    start_date = Column(Date, nullable=True)
    end_date = Column(Date, nullable=True)
    percentage = Column(Numeric(5, 2), nullable=True)
    cgpa = Column(Numeric(4, 2), nullable=True)
    added_at = Column(DateTime, default=datetime.utcnow, server_default=func.now(), nullable=False)
    added_by = Column(Integer, nullable=True)


class UserExperience(Base):
    __tablename__ = "user_experience"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    company_name = Column(String(200), nullable=False)
    job_title = Column(String(150), nullable=False)
    is_current_job = Column(Boolean, nullable=False, default=False)
    start_date = Column(Date, nullable=True)
    end_date = Column(Date, nullable=True)
    description = Column(Text, nullable=True)
    country_id = Column(Integer, ForeignKey("countries.id"), nullable=True)
    state_id = Column(Integer, ForeignKey("states.id"), nullable=True)
    city_id = Column(Integer, ForeignKey("cities.id"), nullable=True)
    added_at = Column(DateTime, default=datetime.utcnow, server_default=func.now(), nullable=False)
    added_by = Column(Integer, nullable=True)

    country = relationship("Country")
    state = relationship("State")
    city = relationship("City")


class UserSkill(Base):
    __tablename__ = "user_skills"
    __table_args__ = (
        UniqueConstraint("user_id", "skill_id", name="uq_user_skill"),
    )

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    skill_id = Column(Integer, ForeignKey("skills.id"), nullable=False)
    added_at = Column(DateTime, default=datetime.utcnow, server_default=func.now(), nullable=False)
    added_by = Column(Integer, nullable=True)

    skill = relationship("Skill")
