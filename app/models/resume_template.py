from datetime import datetime

from sqlalchemy import Column, DateTime, Integer, String, Text, func

from app.db.session import Base
from app.models.enums import RecordStatus, TemplateCategory, enum_column_type


class ResumeTemplate(Base):
    __tablename__ = "resume_templates"

    id = Column(Integer, primary_key=True, index=True)
    # globally unique; case-insensitive uniqueness is checked before writes
    name = Column(String(100), unique=True, nullable=False)
    description = Column(String(500), nullable=True)
    html = Column(Text, nullable=False)
    css = Column(Text, nullable=True)
    category = Column(
        enum_column_type(TemplateCategory, "template_category"),
        nullable=False,
        default=TemplateCategory.PROFESSIONAL,
    )
    status = Column(enum_column_type(RecordStatus, "template_status"), nullable=False, default=RecordStatus.ACTIVE)
    # Timestamps: prefer server-managed, but also provide client-side defaults
    added_at = Column(DateTime, default=datetime.utcnow, server_default=func.now(), nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, server_default=func.now(), onupdate=datetime.utcnow)
    added_by = Column(Integer, nullable=True)
    updated_by = Column(Integer, nullable=True)
