from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.exceptions import QuizAnswerError
from app.core.security import STUDENT_ROLE, TEACHER_ROLE, CurrentUser, require_role
from app.schemas.quiz_answer import (
    CourseQuizzesResponse,
    QuizSubmission,
    QuizSubmitResponse,
    StudentQuizzesResponse,
    TextAnswerReviewRequest,
    TextAnswerReviewResponse,
)
from app.services.quiz_answer import QuizAnswerService
from app.services.storage import QuizStorage, get_quiz_storage

router = APIRouter(prefix="/quiz", tags=["quiz"])


@router.post(
    "/submit",
    response_model=QuizSubmitResponse,
    status_code=status.HTTP_200_OK,
)
def submit_quiz(
    submission: QuizSubmission,
    user: CurrentUser = Depends(require_role(STUDENT_ROLE)),
    db: Session = Depends(get_db),
    storage: QuizStorage = Depends(get_quiz_storage),
):
    """
    Submit and grade a quiz attempt

    The student must be assigned to the course that owns the quiz. The raw
    answers are archived to object storage before the graded attempt is saved.
    `reviewed_at` is null while a free-text question is waiting for a teacher.
    """
    try:
        service = QuizAnswerService(db, storage)
        return service.submit_quiz(user.user_id, submission)
    except QuizAnswerError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Internal server error: {str(e)}",
        )


@router.post(
    "/review-text-answer",
    response_model=TextAnswerReviewResponse,
    status_code=status.HTTP_200_OK,
)
def review_text_answer(
    request: TextAnswerReviewRequest,
    user: CurrentUser = Depends(require_role(TEACHER_ROLE)),
    db: Session = Depends(get_db),
    storage: QuizStorage = Depends(get_quiz_storage),
):
    """Grade one free-text answer of an existing attempt"""
    try:
        service = QuizAnswerService(db, storage)
        return service.review_text_answer(request)
    except QuizAnswerError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Internal server error: {str(e)}",
        )


@router.get(
    "/teacher/courses/{course_id}",
    response_model=CourseQuizzesResponse,
    status_code=status.HTTP_200_OK,
)
def get_quizzes_by_course(
    course_id: int,
    user: CurrentUser = Depends(require_role(TEACHER_ROLE)),
    db: Session = Depends(get_db),
    storage: QuizStorage = Depends(get_quiz_storage),
):
    """List every attempt on the quizzes of a course, grouped by quiz"""
    try:
        service = QuizAnswerService(db, storage)
        return service.get_quizzes_by_course(course_id)
    except QuizAnswerError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Error retrieving quiz attempts: {str(e)}",
        )


@router.get(
    "/student",
    response_model=StudentQuizzesResponse,
    status_code=status.HTTP_200_OK,
)
def get_quizzes_by_student(
    user: CurrentUser = Depends(require_role(STUDENT_ROLE, TEACHER_ROLE)),
    db: Session = Depends(get_db),
    storage: QuizStorage = Depends(get_quiz_storage),
):
    """List the calling user's quiz attempts, grouped by quiz"""
    try:
        service = QuizAnswerService(db, storage)
        return service.get_quizzes_by_student(user.user_id)
    except QuizAnswerError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Error retrieving quiz attempts: {str(e)}",
        )
