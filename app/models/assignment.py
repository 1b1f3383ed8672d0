from sqlalchemy import Boolean, Column, Integer, String
from sqlalchemy.types import DateTime

from app.core.database import Base


class Assignment(Base):
    __tablename__ = "assignment"

    assignment_id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String(64), nullable=False, index=True)
    course_id = Column(Integer, nullable=False, index=True)
    assigned_at = Column(DateTime(timezone=True), nullable=True)
    is_active = Column(Boolean, default=False, nullable=False)
    is_verify = Column(Boolean, default=False, nullable=False)
