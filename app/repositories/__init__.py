from .assignment_repository import AssignmentRepository
from .content_repository import ContentRepository
from .quiz_answer_repository import QuizAnswerRepository

__all__ = ["AssignmentRepository", "ContentRepository", "QuizAnswerRepository"]
