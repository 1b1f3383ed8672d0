"""Errors raised by the quiz submission and grading pipeline.

Each error carries the HTTP status the routers answer with. Client errors
(4xx) are never retried; server errors (5xx) are surfaced to the caller as-is.
"""

from fastapi import status


class QuizAnswerError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ContentNotFound(QuizAnswerError):
    status_code = status.HTTP_404_NOT_FOUND


class MalformedContentURL(QuizAnswerError):
    status_code = status.HTTP_400_BAD_REQUEST


class NotAssigned(QuizAnswerError):
    status_code = status.HTTP_403_FORBIDDEN


class NotAQuiz(QuizAnswerError):
    status_code = status.HTTP_400_BAD_REQUEST


class KeyFetchFailure(QuizAnswerError):
    """The stored quiz definition (or answers document) could not be retrieved"""


class KeyParseFailure(QuizAnswerError):
    """The stored document was retrieved but is not valid"""


class ArchiveFailure(QuizAnswerError):
    pass


class PersistFailure(QuizAnswerError):
    pass


class StorageError(QuizAnswerError):
    pass


class AttemptNotFound(QuizAnswerError):
    status_code = status.HTTP_404_NOT_FOUND


class QuestionNotFound(QuizAnswerError):
    status_code = status.HTTP_404_NOT_FOUND


class NotATextQuestion(QuizAnswerError):
    status_code = status.HTTP_400_BAD_REQUEST


class PointsExceedMaximum(QuizAnswerError):
    status_code = status.HTTP_400_BAD_REQUEST
