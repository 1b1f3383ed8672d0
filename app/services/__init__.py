from .quiz_answer import QuizAnswerService
from .storage import QuizStorage

__all__ = ["QuizAnswerService", "QuizStorage"]
