from .assignment import Assignment
from .content import Content
from .quiz_answer import QuizAnswer

__all__ = ["Assignment", "Content", "QuizAnswer"]
