from typing import Any, Callable, Dict, List, Optional, Set

from app.models.content import Content
from app.models.quiz_answer import QuizAnswer
from app.schemas.quiz_answer import QuizAttemptResponse, QuizAttemptsGroup

# Key of the archived answers document that holds manual review entries
EXTRA_REVIEW_KEY = "extra_review"


class QuizAnswerDomain:
    """Domain logic for archived answers and QuizAnswer entities"""

    @staticmethod
    def review_entries(document: Dict[str, Any]) -> List[Dict[str, Any]]:
        """Review entries stored in an archived answers document, malformed ones dropped"""
        existing = document.get(EXTRA_REVIEW_KEY)
        if not isinstance(existing, list):
            return []
        return [item for item in existing if isinstance(item, dict)]

    @staticmethod
    def latest_award(
        entries: List[Dict[str, Any]], question_id: str
    ) -> Optional[float]:
        """Points from the most recent review of a question, if it was reviewed"""
        for entry in reversed(entries):
            review = entry.get(question_id)
            if not isinstance(review, dict):
                continue
            points = review.get("points_awarded")
            if isinstance(points, (int, float)) and not isinstance(points, bool):
                return float(points)
        return None

    @staticmethod
    def reviewed_question_ids(entries: List[Dict[str, Any]]) -> Set[str]:
        reviewed = set()
        for entry in entries:
            reviewed.update(key for key, value in entry.items() if isinstance(value, dict))
        return reviewed

    @staticmethod
    def append_review(
        document: Dict[str, Any],
        question_id: str,
        is_correct: bool,
        points_awarded: float,
    ) -> Dict[str, Any]:
        """Return a copy of the document with one more review entry"""
        entries = QuizAnswerDomain.review_entries(document)
        value = document.get(question_id)
        entries.append(
            {
                question_id: {
                    "value": "" if value is None else value,
                    "is_correct": is_correct,
                    "points_awarded": points_awarded,
                }
            }
        )
        updated = dict(document)
        updated[EXTRA_REVIEW_KEY] = entries
        return updated

    @staticmethod
    def to_attempt_response(
        quiz_answer: QuizAnswer, quiz_answer_url: Optional[str] = None
    ) -> QuizAttemptResponse:
        """Convert QuizAnswer model to QuizAttemptResponse schema"""
        return QuizAttemptResponse(
            quiz_answer_id=quiz_answer.quiz_answer_id,
            user_id=quiz_answer.user_id,
            grade=quiz_answer.grade,
            total_points=quiz_answer.total_points,
            needs_review=quiz_answer.reviewed_at is None,
            reviewed_at=quiz_answer.reviewed_at,
            quiz_answer_url=quiz_answer_url or quiz_answer.quiz_answer_url,
            start_time=quiz_answer.start_time,
            end_time=quiz_answer.end_time,
        )

    @staticmethod
    def group_by_content(
        attempts: List[QuizAnswer],
        contents: Dict[str, Content],
        sign_url: Callable[[str], str],
    ) -> List[QuizAttemptsGroup]:
        """
        Group attempts per quiz, keeping the order in which each quiz first
        appears. Stored URLs are passed through sign_url once each.
        """
        groups: Dict[str, QuizAttemptsGroup] = {}
        signed: Dict[str, str] = {}

        def sign_once(url: str) -> str:
            if url not in signed:
                signed[url] = sign_url(url)
            return signed[url]

        for attempt in attempts:
            group = groups.get(attempt.content_id)
            if group is None:
                content = contents.get(attempt.content_id)
                group = QuizAttemptsGroup(
                    content_id=attempt.content_id,
                    quiz_title=content.title if content else None,
                    quiz_description=content.description if content else None,
                    quiz_url=sign_once(attempt.quiz_url),
                    attempts=[],
                )
                groups[attempt.content_id] = group
            group.attempts.append(
                QuizAnswerDomain.to_attempt_response(
                    attempt, sign_once(attempt.quiz_answer_url)
                )
            )

        return list(groups.values())
