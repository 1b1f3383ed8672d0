from typing import List

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    ENVIRONMENT: str = "development"

    DATABASE_URL: str = "sqlite:///./app.db"
    PROJECT_NAME: str = "Focused Quiz Grading Backend"

    CORS_ORIGINS: List[str] = ["http://localhost:3000"]

    # Cloudflare R2 (S3 compatible)
    R2_ACCOUNT_ID: str = ""
    R2_ACCESS_KEY: str = ""
    R2_SECRET_KEY: str = ""
    R2_BUCKET: str = "zeppelin"
    PRESIGNED_URL_EXPIRES: int = 900

    # Content type classification that identifies a quiz
    QUIZ_CONTENT_TYPE: str = "quiz"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()
