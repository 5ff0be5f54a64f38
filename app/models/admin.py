from datetime import datetime

from sqlalchemy import Column, DateTime, Integer, String, func

from app.db.session import Base
from app.models.enums import AdminRole, RecordStatus, enum_column_type


class Admin(Base):
    __tablename__ = "admins"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    phone = Column(String(20), nullable=True)
    role = Column(enum_column_type(AdminRole, "admin_role"), nullable=False, default=AdminRole.ADMIN)
    status = Column(enum_column_type(RecordStatus, "admin_status"), nullable=False, default=RecordStatus.ACTIVE)
    added_at = Column(DateTime, default=datetime.utcnow, server_default=func.now(), nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, server_default=func.now(), onupdate=datetime.utcnow)
    added_by = Column(Integer, nullable=True)
    updated_by = Column(Integer, nullable=True)

    @property
    def is_active(self) -> bool:
        return self.status == RecordStatus.ACTIVE
