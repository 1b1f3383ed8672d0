from typing import List, Optional

from sqlalchemy.orm import Session

from app.models.content import Content


class ContentRepository:
    """Repository for Content lookups needed by the grading pipeline"""

    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, content_id: str) -> Optional[Content]:
        """Get a content entry by ID"""
        return self.db.query(Content).filter(Content.content_id == content_id).first()

    def get_by_ids(self, content_ids: List[str]) -> List[Content]:
        """Get every content entry whose ID is in the given list"""
        if not content_ids:
            return []
        return self.db.query(Content).filter(Content.content_id.in_(content_ids)).all()

    def count_by_course_and_type(self, course_id: int, content_type: str) -> int:
        """Count the content entries of a given type within a course"""
        return (
            self.db.query(Content)
            .filter(Content.course_id == course_id, Content.content_type == content_type)
            .count()
        )
