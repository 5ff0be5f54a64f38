from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, func
from sqlalchemy.orm import relationship

from app.db.session import Base
from app.models.enums import RecordStatus, enum_column_type


class Resume(Base):
    """A named resume owned by a user, optionally bound to a template."""
    __tablename__ = "user_resumes"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    template_id = Column(Integer, ForeignKey("resume_templates.id", ondelete="RESTRICT"), nullable=True, index=True)
    name = Column(String(150), nullable=False)
    status = Column(enum_column_type(RecordStatus, "resume_status"), nullable=False, default=RecordStatus.ACTIVE)
    added_at = Column(DateTime, default=datetime.utcnow, server_default=func.now(), nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, server_default=func.now(), onupdate=datetime.utcnow)

    user = relationship("User", back_populates="resumes")
    template = relationship("ResumeTemplate")
