from datetime import datetime
from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import AliasChoices, BaseModel, Field, field_validator

# Authored answers are kept as written; grading zeroes values it cannot read
CorrectAnswer = Optional[Any]


class QuestionBase(BaseModel):
    id: str = Field(..., min_length=1, description="Question ID, unique per quiz")
    points: int = Field(0, ge=0, description="Points awarded for a correct answer")
    prompt: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("prompt", "question"),
        description="Question text shown to the student",
    )

    class Config:
        populate_by_name = True


class TextQuestion(QuestionBase):
    type: Literal["text"]
    correct_answer: CorrectAnswer = Field(None, alias="correctAnswer")


class MultipleQuestion(QuestionBase):
    type: Literal["multiple"]
    correct_answer: CorrectAnswer = Field(None, alias="correctAnswer")


class BooleanQuestion(QuestionBase):
    type: Literal["boolean"]
    correct_answer: CorrectAnswer = Field(None, alias="correctAnswer")


class CheckboxQuestion(QuestionBase):
    type: Literal["checkbox"]
    correct_answers: List[str] = Field(default_factory=list, alias="correctAnswers")


Question = Annotated[
    Union[TextQuestion, MultipleQuestion, CheckboxQuestion, BooleanQuestion],
    Field(discriminator="type"),
]


class QuizDefinition(BaseModel):
    """Teacher-authored quiz, including the answer key"""

    title: Optional[str] = None
    description: Optional[str] = None
    questions: List[Question] = Field(default_factory=list)

    @field_validator("questions")
    @classmethod
    def validate_unique_ids(cls, v):
        seen = set()
        for question in v:
            if question.id in seen:
                raise ValueError(f"Duplicate question id '{question.id}'")
            seen.add(question.id)
        return v


class QuizSubmission(BaseModel):
    content_id: str = Field(..., description="ID of the quiz content", min_length=1)
    start_time: datetime = Field(..., description="When the student opened the quiz")
    end_time: datetime = Field(..., description="When the student submitted the quiz")
    answers: Dict[str, Any] = Field(
        ..., description="Mapping of question ID to the student's answer"
    )

    @field_validator("content_id")
    @classmethod
    def validate_content_id(cls, v):
        if not v.strip():
            raise ValueError("content_id cannot be empty")
        return v.strip()


class QuizSubmitResponse(BaseModel):
    message: str
    score: float
    total_points: int
    quiz_answer_id: int
    student_answers_url: str
    reviewed_at: Optional[datetime] = None
    quiz_teacher_response: QuizDefinition = Field(..., alias="quizTeacherResponse")

    class Config:
        populate_by_name = True


class TextAnswerReviewRequest(BaseModel):
    quiz_answer_id: int = Field(..., description="ID of the quiz attempt", gt=0)
    question_id: str = Field(..., description="ID of the text question", min_length=1)
    is_correct: bool
    points_awarded: float = Field(..., description="Points given by the teacher", ge=0)


class TextAnswerReviewResponse(BaseModel):
    message: str
    quiz_answer_id: int
    question_id: str
    score: float
    total_points: int
    reviewed_at: Optional[datetime] = None


class QuizAttemptResponse(BaseModel):
    quiz_answer_id: int
    user_id: str
    grade: Optional[float] = None
    total_points: Optional[int] = None
    needs_review: bool
    reviewed_at: Optional[datetime] = None
    quiz_answer_url: str
    start_time: datetime
    end_time: datetime


class QuizAttemptsGroup(BaseModel):
    content_id: str
    quiz_title: Optional[str] = None
    quiz_description: Optional[str] = None
    quiz_url: Optional[str] = None
    attempts: List[QuizAttemptResponse] = []


class StudentQuizzesResponse(BaseModel):
    user_id: str
    quizzes: List[QuizAttemptsGroup] = []


class CourseQuizzesResponse(BaseModel):
    course_id: int
    total_quizzes: int = 0
    quizzes: List[QuizAttemptsGroup] = []
