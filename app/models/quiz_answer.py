from sqlalchemy import Column, Float, Integer, String
from sqlalchemy.types import DateTime

from app.core.database import Base


class QuizAnswer(Base):
    __tablename__ = "quiz_answer"

    quiz_answer_id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    content_id = Column(String(64), nullable=False, index=True)
    user_id = Column(String(64), nullable=False, index=True)
    start_time = Column(DateTime(timezone=True), nullable=False)
    end_time = Column(DateTime(timezone=True), nullable=False)
    # Nullable until graded
    grade = Column(Float, nullable=True)
    total_points = Column(Integer, nullable=True)
    # Null while a free-text answer is waiting for manual review
    reviewed_at = Column(DateTime(timezone=True), nullable=True)
    quiz_url = Column(String(500), nullable=False)
    quiz_answer_url = Column(String(500), nullable=False)
