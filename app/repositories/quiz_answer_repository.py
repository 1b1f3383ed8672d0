from typing import List, Optional

from sqlalchemy.orm import Session

from app.models.content import Content
from app.models.quiz_answer import QuizAnswer


class QuizAnswerRepository:
    """Repository for QuizAnswer (graded attempt) database operations"""

    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, quiz_answer_id: int) -> Optional[QuizAnswer]:
        """Get a quiz attempt by ID"""
        return (
            self.db.query(QuizAnswer)
            .filter(QuizAnswer.quiz_answer_id == quiz_answer_id)
            .first()
        )

    def create(self, quiz_answer_data: dict) -> QuizAnswer:
        """Create a new quiz attempt"""
        db_quiz_answer = QuizAnswer(**quiz_answer_data)
        self.db.add(db_quiz_answer)
        self.db.commit()
        self.db.refresh(db_quiz_answer)
        return db_quiz_answer

    def update(self, quiz_answer: QuizAnswer, update_data: dict) -> QuizAnswer:
        """Update a quiz attempt"""
        for field, value in update_data.items():
            setattr(quiz_answer, field, value)
        self.db.commit()
        self.db.refresh(quiz_answer)
        return quiz_answer

    def get_by_user(self, user_id: str) -> List[QuizAnswer]:
        """Get every quiz attempt of a student, oldest first"""
        return (
            self.db.query(QuizAnswer)
            .filter(QuizAnswer.user_id == user_id)
            .order_by(QuizAnswer.quiz_answer_id)
            .all()
        )

    def get_by_course(self, course_id: int) -> List[QuizAnswer]:
        """Get every quiz attempt on content that belongs to a course"""
        return (
            self.db.query(QuizAnswer)
            .join(Content, QuizAnswer.content_id == Content.content_id)
            .filter(Content.course_id == course_id)
            .order_by(QuizAnswer.quiz_answer_id)
            .all()
        )
