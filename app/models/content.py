from sqlalchemy import Boolean, Column, Integer, String, Text

from app.core.database import Base


class Content(Base):
    __tablename__ = "content"

    content_id = Column(String(64), primary_key=True, index=True)
    course_id = Column(Integer, nullable=False, index=True)
    # video | quiz | text
    content_type = Column(String(20), nullable=False)
    title = Column(String(100), nullable=False)
    url = Column(String(500), nullable=True)
    description = Column(Text, nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
