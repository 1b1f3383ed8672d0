"""Shared test fixtures: in-memory database and an in-memory S3 bucket."""

from unittest.mock import Mock

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import app.models  # noqa: F401  (registers tables on Base.metadata)
from app.core.database import Base
from app.models.assignment import Assignment
from app.models.content import Content
from app.services.storage import QuizStorage
from helpers import (
    ACCOUNT_ID,
    BUCKET,
    COLORS_QUIZ,
    COURSE_ID,
    QUIZ_CONTENT_ID,
    QUIZ_URL,
    STUDENT_ID,
    InMemoryS3,
    put_quiz,
)


@pytest.fixture
def db_session():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def s3_client():
    return Mock(wraps=InMemoryS3())


@pytest.fixture
def storage(s3_client):
    return QuizStorage(account_id=ACCOUNT_ID, bucket=BUCKET, s3_client=s3_client)


@pytest.fixture
def seeded_db(db_session, s3_client):
    """A course with one quiz and one video, and a student assigned to it"""
    db_session.add_all(
        [
            Content(
                content_id=QUIZ_CONTENT_ID,
                course_id=COURSE_ID,
                content_type="quiz",
                title="Colors",
                description="Basic colors",
                url=QUIZ_URL,
            ),
            Content(
                content_id="video-1",
                course_id=COURSE_ID,
                content_type="video",
                title="Intro",
                url=f"https://{ACCOUNT_ID}.r2.cloudflarestorage.com/focused/{COURSE_ID}/video/intro.mp4",
            ),
            Content(
                content_id="broken-1",
                course_id=COURSE_ID,
                content_type="quiz",
                title="Broken",
                url=f"https://{ACCOUNT_ID}.r2.cloudflarestorage.com/courses/{COURSE_ID}/broken.json",
            ),
            Assignment(user_id=STUDENT_ID, course_id=COURSE_ID, is_active=True),
        ]
    )
    db_session.commit()
    put_quiz(s3_client, COLORS_QUIZ)
    s3_client.reset_mock()
    return db_session
