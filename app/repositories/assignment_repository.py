from typing import Optional

from sqlalchemy.orm import Session

from app.models.assignment import Assignment


class AssignmentRepository:
    """Repository for Assignment lookups needed by the grading pipeline"""

    def __init__(self, db: Session):
        self.db = db

    def get_by_student_and_course(
        self, user_id: str, course_id: int
    ) -> Optional[Assignment]:
        """Get the active assignment of a student to a course, if any"""
        return (
            self.db.query(Assignment)
            .filter(
                Assignment.user_id == user_id,
                Assignment.course_id == course_id,
                Assignment.is_active.is_(True),
            )
            .first()
        )
