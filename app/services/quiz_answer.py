import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Tuple

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.exceptions import (
    ArchiveFailure,
    AttemptNotFound,
    ContentNotFound,
    KeyFetchFailure,
    KeyParseFailure,
    MalformedContentURL,
    NotAQuiz,
    NotAssigned,
    NotATextQuestion,
    PersistFailure,
    PointsExceedMaximum,
    QuestionNotFound,
    StorageError,
)
from app.domain.grading_domain import GradingDomain
from app.domain.quiz_answer_domain import QuizAnswerDomain
from app.models.quiz_answer import QuizAnswer
from app.repositories.assignment_repository import AssignmentRepository
from app.repositories.content_repository import ContentRepository
from app.repositories.quiz_answer_repository import QuizAnswerRepository
from app.schemas.quiz_answer import (
    CourseQuizzesResponse,
    QuizDefinition,
    QuizSubmission,
    QuizSubmitResponse,
    StudentQuizzesResponse,
    TextAnswerReviewRequest,
    TextAnswerReviewResponse,
    TextQuestion,
)
from app.services.storage import QuizStorage

# Set up logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def extract_course_id(url: str) -> int:
    """Course ID from a stored content URL of the form .../focused/<courseID>/..."""
    parts = url.split("/focused/", 1) if url else []
    if len(parts) < 2:
        raise MalformedContentURL(f"Malformed content URL: '{url}'")
    segment = parts[1].split("/", 1)[0]
    if not (segment.isascii() and segment.isdigit()):
        raise MalformedContentURL(
            f"Malformed content URL: course segment '{segment}' is not an ID"
        )
    return int(segment)


class QuizAnswerService:
    """Submission, grading and review of quiz attempts"""

    def __init__(
        self,
        db: Session,
        storage: Optional[QuizStorage] = None,
        quiz_content_type: Optional[str] = None,
    ):
        self.db = db
        self.storage = storage or QuizStorage.from_settings()
        self.quiz_content_type = quiz_content_type or settings.QUIZ_CONTENT_TYPE

        self.content_repository = ContentRepository(db)
        self.assignment_repository = AssignmentRepository(db)
        self.quiz_answer_repository = QuizAnswerRepository(db)

    # =====================================================
    # Pipeline steps
    # =====================================================
    def validate_eligibility(self, user_id: str, content_id: str) -> Tuple[str, int]:
        """
        Check that the student may submit this content.

        Returns the stored quiz URL and the ID of the course that owns it.
        """
        content = self.content_repository.get_by_id(content_id)
        if content is None:
            raise ContentNotFound(f"Content with ID {content_id} not found")

        course_id = extract_course_id(content.url)

        assignment = self.assignment_repository.get_by_student_and_course(
            user_id, course_id
        )
        if assignment is None:
            logger.warning(f"🚫 User {user_id} is not assigned to course {course_id}")
            raise NotAssigned("This student is not assigned to this course")

        if content.content_type != self.quiz_content_type:
            logger.warning(
                f"🚫 Content {content_id} is of type '{content.content_type}', not a quiz"
            )
            raise NotAQuiz("The content_id does not correspond to a quiz")

        return content.url, course_id

    def _fetch_bytes(self, url: str) -> bytes:
        key = self.storage.key_from_url(url)
        try:
            return self.storage.get_object(key)
        except StorageError as e:
            logger.error(f"❌ Could not fetch '{key}': {e}")
            raise KeyFetchFailure(f"Error fetching '{key}' from storage: {e.message}") from e

    def fetch_answer_key(self, quiz_url: str) -> QuizDefinition:
        """Retrieve and parse the teacher's quiz definition"""
        raw = self._fetch_bytes(quiz_url)
        try:
            return QuizDefinition.model_validate_json(raw)
        except ValidationError as e:
            logger.error(f"❌ Could not parse quiz definition at {quiz_url}: {e}")
            raise KeyParseFailure(f"Error parsing the teacher's quiz: {str(e)}") from e

    def fetch_answers_document(self, answers_url: str) -> Dict[str, Any]:
        """Retrieve the archived answers of an attempt"""
        raw = self._fetch_bytes(answers_url)
        try:
            document = json.loads(raw)
        except ValueError as e:
            raise KeyParseFailure(f"Error parsing the student's answers: {str(e)}") from e
        if document is None:
            return {}
        if not isinstance(document, dict):
            raise KeyParseFailure("The student's answers document is not an object")
        return document

    def archive_answers(
        self, answers: Dict[str, Any], user_id: str, content_id: str
    ) -> str:
        """Upload the raw answers and return their public URL"""
        key = self.storage.answers_key(user_id, content_id)
        try:
            return self.storage.put_json(key, answers)
        except StorageError as e:
            logger.error(f"❌ Could not archive answers: {e}")
            raise ArchiveFailure(
                f"Error uploading the student's answers: {e.message}"
            ) from e

    def persist_attempt(self, attempt_data: Dict[str, Any]) -> QuizAnswer:
        """Insert a graded attempt"""
        try:
            return self.quiz_answer_repository.create(attempt_data)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"❌ Could not save quiz attempt: {e}")
            raise PersistFailure(f"Error saving the quiz attempt: {str(e)}") from e

    # =====================================================
    # Use cases
    # =====================================================
    def submit_quiz(self, user_id: str, submission: QuizSubmission) -> QuizSubmitResponse:
        """Validate, grade, archive and persist one quiz submission"""
        logger.info(f"📝 Quiz submission from {user_id} for {submission.content_id}")

        quiz_url, _ = self.validate_eligibility(user_id, submission.content_id)
        definition = self.fetch_answer_key(quiz_url)

        score, total_points = GradingDomain.grade_quiz(definition, submission.answers)
        reviewed_at = GradingDomain.resolve_reviewed_at(definition)

        answers_url = self.archive_answers(
            submission.answers, user_id, submission.content_id
        )

        attempt = self.persist_attempt(
            {
                "content_id": submission.content_id,
                "user_id": user_id,
                "start_time": submission.start_time,
                "end_time": submission.end_time,
                "grade": score,
                "total_points": total_points,
                "reviewed_at": reviewed_at,
                "quiz_url": quiz_url,
                "quiz_answer_url": answers_url,
            }
        )

        logger.info(
            f"✅ Quiz attempt {attempt.quiz_answer_id} saved: {score}/{total_points}"
        )
        return QuizSubmitResponse(
            message="Quiz graded successfully",
            score=score,
            total_points=total_points,
            quiz_answer_id=attempt.quiz_answer_id,
            student_answers_url=answers_url,
            reviewed_at=reviewed_at,
            quiz_teacher_response=definition,
        )

    def review_text_answer(
        self, request: TextAnswerReviewRequest
    ) -> TextAnswerReviewResponse:
        """Record a teacher's grade for one free-text answer of an attempt"""
        attempt = self.quiz_answer_repository.get_by_id(request.quiz_answer_id)
        if attempt is None:
            raise AttemptNotFound(
                f"Quiz attempt with ID {request.quiz_answer_id} not found"
            )

        document = self.fetch_answers_document(attempt.quiz_answer_url)
        definition = self.fetch_answer_key(attempt.quiz_url)

        question = next(
            (q for q in definition.questions if q.id == request.question_id), None
        )
        if question is None:
            raise QuestionNotFound(f"Question with ID {request.question_id} not found")
        if not isinstance(question, TextQuestion):
            raise NotATextQuestion(
                f"Question {request.question_id} is of type '{question.type}', not text"
            )
        if request.points_awarded > question.points:
            raise PointsExceedMaximum(
                f"Points awarded ({request.points_awarded}) exceed the maximum "
                f"({question.points})"
            )

        entries = QuizAnswerDomain.review_entries(document)
        previous_award = QuizAnswerDomain.latest_award(entries, question.id)
        if previous_award is None:
            previous_award = GradingDomain.grade_question(
                question, document.get(question.id)
            )

        updated = QuizAnswerDomain.append_review(
            document, question.id, request.is_correct, request.points_awarded
        )
        key = self.storage.key_from_url(attempt.quiz_answer_url)
        try:
            self.storage.put_json(key, updated)
        except StorageError as e:
            raise ArchiveFailure(
                f"Error uploading the reviewed answers: {e.message}"
            ) from e

        total_points = GradingDomain.total_points(definition)
        current_grade = attempt.grade or 0.0
        new_grade = max(0.0, current_grade - previous_award) + request.points_awarded

        text_ids = {q.id for q in definition.questions if isinstance(q, TextQuestion)}
        reviewed = QuizAnswerDomain.reviewed_question_ids(
            QuizAnswerDomain.review_entries(updated)
        )
        reviewed_at = datetime.now(timezone.utc) if text_ids <= reviewed else None

        try:
            self.quiz_answer_repository.update(
                attempt,
                {
                    "grade": new_grade,
                    "total_points": total_points,
                    "reviewed_at": reviewed_at,
                },
            )
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"❌ Could not update quiz attempt {attempt.quiz_answer_id}: {e}")
            # The review entry must not outlive a grade that was never saved
            try:
                self.storage.put_json(key, document)
            except StorageError as restore_error:
                logger.error(
                    f"❌ Could not restore answers at '{key}' after failed update: "
                    f"{restore_error}"
                )
            raise PersistFailure(f"Error updating the quiz attempt: {str(e)}") from e

        logger.info(
            f"✅ Reviewed question {question.id} of attempt {request.quiz_answer_id}: "
            f"{current_grade} -> {new_grade}"
        )
        return TextAnswerReviewResponse(
            message="Text answer reviewed successfully",
            quiz_answer_id=request.quiz_answer_id,
            question_id=question.id,
            score=new_grade,
            total_points=total_points,
            reviewed_at=reviewed_at,
        )

    def _sign(self, url: str) -> str:
        return self.storage.presigned_url(self.storage.key_from_url(url))

    def get_quizzes_by_student(self, user_id: str) -> StudentQuizzesResponse:
        attempts = self.quiz_answer_repository.get_by_user(user_id)
        contents = {
            c.content_id: c
            for c in self.content_repository.get_by_ids(
                list({a.content_id for a in attempts})
            )
        }
        return StudentQuizzesResponse(
            user_id=user_id,
            quizzes=QuizAnswerDomain.group_by_content(attempts, contents, self._sign),
        )

    def get_quizzes_by_course(self, course_id: int) -> CourseQuizzesResponse:
        attempts = self.quiz_answer_repository.get_by_course(course_id)
        contents = {
            c.content_id: c
            for c in self.content_repository.get_by_ids(
                list({a.content_id for a in attempts})
            )
        }
        return CourseQuizzesResponse(
            course_id=course_id,
            total_quizzes=self.content_repository.count_by_course_and_type(
                course_id, self.quiz_content_type
            ),
            quizzes=QuizAnswerDomain.group_by_content(attempts, contents, self._sign),
        )
