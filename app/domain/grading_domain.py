import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple

from app.schemas.quiz_answer import (
    BooleanQuestion,
    CheckboxQuestion,
    MultipleQuestion,
    QuizDefinition,
    TextQuestion,
)

logger = logging.getLogger(__name__)

TRUE_SYNONYMS = ("true", "verdadero")
FALSE_SYNONYMS = ("false", "falso")


def parse_bool(value: Any) -> Optional[bool]:
    """
    Read a native boolean or one of its string synonyms (case-insensitive).
    Returns None when the value cannot be read as a boolean.
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.lower()
        if lowered in TRUE_SYNONYMS:
            return True
        if lowered in FALSE_SYNONYMS:
            return False
    return None


def _as_string_list(value: Any) -> Optional[List[str]]:
    """A list of strings, or None if the value is not a list or holds a non-string"""
    if not isinstance(value, (list, tuple)):
        return None
    for i, item in enumerate(value):
        if not isinstance(item, str):
            logger.debug(f"Checkbox element {i} is not a string: {type(item).__name__}")
            return None
    return list(value)


class GradingDomain:
    """Scoring rules for a student's answers against a quiz definition"""

    @staticmethod
    def grade_question(question, answer: Any) -> float:
        """
        Points earned for one question. Each question is all-or-nothing, and
        answers that cannot be interpreted for the question type earn zero.
        """
        if isinstance(question, TextQuestion):
            expected = question.correct_answer
            if not isinstance(expected, str) or not isinstance(answer, str):
                return 0.0
            if answer.strip().casefold() == expected.strip().casefold():
                return float(question.points)
            return 0.0

        if isinstance(question, MultipleQuestion):
            expected = question.correct_answer
            if isinstance(expected, str) and isinstance(answer, str) and answer == expected:
                return float(question.points)
            return 0.0

        if isinstance(question, CheckboxQuestion):
            selected = _as_string_list(answer)
            if selected is None:
                return 0.0
            expected = question.correct_answers
            if len(selected) == len(expected) and set(selected) == set(expected):
                return float(question.points)
            return 0.0

        if isinstance(question, BooleanQuestion):
            expected = parse_bool(question.correct_answer)
            if expected is None:
                # Unreadable answer key: the question can never be earned
                logger.warning(
                    f"Boolean question '{question.id}' has an unreadable correct answer: "
                    f"{question.correct_answer!r}"
                )
                return 0.0
            submitted = parse_bool(answer)
            if submitted is not None and submitted == expected:
                return float(question.points)
            return 0.0

        return 0.0

    @staticmethod
    def grade_quiz(
        definition: QuizDefinition, answers: Dict[str, Any]
    ) -> Tuple[float, int]:
        """
        Grade a full answer set.

        Returns (earned_points, total_points). Every question counts toward the
        total whether or not it was answered.
        """
        earned_points = 0.0
        total_points = 0

        for question in definition.questions:
            total_points += question.points
            earned_points += GradingDomain.grade_question(
                question, answers.get(question.id)
            )

        logger.info(f"Grading finished: {earned_points} / {total_points} points")
        return earned_points, total_points

    @staticmethod
    def total_points(definition: QuizDefinition) -> int:
        return sum(question.points for question in definition.questions)

    @staticmethod
    def needs_review(definition: QuizDefinition) -> bool:
        """Free-text questions need a teacher; every other type is graded automatically"""
        return any(isinstance(q, TextQuestion) for q in definition.questions)

    @staticmethod
    def resolve_reviewed_at(
        definition: QuizDefinition, now: Optional[datetime] = None
    ) -> Optional[datetime]:
        if GradingDomain.needs_review(definition):
            return None
        return now or datetime.now(timezone.utc)
