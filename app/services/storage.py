import json
import logging
from typing import Any, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from app.core.config import settings
from app.core.exceptions import StorageError

# Set up logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


class QuizStorage:
    """
    Object storage for quiz documents on Cloudflare R2 (S3 API).

    Objects are addressed by key inside one bucket; the public URL of an object
    is the account endpoint followed by the key.
    """

    def __init__(
        self,
        account_id: str,
        bucket: str,
        s3_client: Any = None,
        access_key: str = "",
        secret_key: str = "",
        presign_expires: int = 900,
    ):
        self.account_id = account_id
        self.bucket = bucket
        self.presign_expires = presign_expires

        # Initialize S3 client against the R2 endpoint
        if s3_client is None and account_id and access_key and secret_key:
            s3_client = boto3.client(
                "s3",
                endpoint_url=self.endpoint_url,
                aws_access_key_id=access_key,
                aws_secret_access_key=secret_key,
                region_name="auto",
            )
        self.s3_client = s3_client

    @classmethod
    def from_settings(cls) -> "QuizStorage":
        return cls(
            account_id=settings.R2_ACCOUNT_ID,
            bucket=settings.R2_BUCKET,
            access_key=settings.R2_ACCESS_KEY,
            secret_key=settings.R2_SECRET_KEY,
            presign_expires=settings.PRESIGNED_URL_EXPIRES,
        )

    @property
    def endpoint_url(self) -> str:
        return f"https://{self.account_id}.r2.cloudflarestorage.com"

    @property
    def public_base_url(self) -> str:
        return f"{self.endpoint_url}/"

    def key_from_url(self, url: str) -> str:
        """Strip the public base prefix from an object URL"""
        return url.replace(self.public_base_url, "", 1)

    def public_url(self, key: str) -> str:
        return f"{self.public_base_url}{key}"

    def answers_key(self, user_id: str, content_id: str) -> str:
        return f"focused/{self.account_id}/quiz/answer/{user_id}/{content_id}.json"

    def _require_client(self):
        if not self.s3_client:
            raise StorageError(
                "R2 credentials are not configured. "
                "Please set R2_ACCOUNT_ID, R2_ACCESS_KEY and R2_SECRET_KEY in your environment variables."
            )
        return self.s3_client

    def get_object(self, key: str) -> bytes:
        """Download an object and return its raw bytes"""
        client = self._require_client()
        logger.info(f"📥 Fetching object from R2: {self.bucket}/{key}")
        try:
            response = client.get_object(Bucket=self.bucket, Key=key)
            return response["Body"].read()
        except (ClientError, BotoCoreError) as e:
            raise StorageError(f"Failed to get object '{key}' from R2: {str(e)}") from e

    def put_json(self, key: str, payload: Any) -> str:
        """Serialize payload as JSON, upload it and return the object's public URL"""
        client = self._require_client()
        body = json.dumps(payload, ensure_ascii=False, default=str).encode("utf-8")
        logger.info(f"📤 Uploading JSON to R2: {self.bucket}/{key}")
        try:
            client.put_object(
                Bucket=self.bucket,
                Key=key,
                Body=body,
                ContentType="application/json",
            )
        except (ClientError, BotoCoreError) as e:
            raise StorageError(f"Failed to upload '{key}' to R2: {str(e)}") from e
        return self.public_url(key)

    def presigned_url(self, key: str, expires_in: Optional[int] = None) -> str:
        """Generate a presigned GET URL for an object"""
        client = self._require_client()
        try:
            return client.generate_presigned_url(
                "get_object",
                Params={"Bucket": self.bucket, "Key": key},
                ExpiresIn=expires_in or self.presign_expires,
            )
        except (ClientError, BotoCoreError) as e:
            raise StorageError(
                f"Failed to generate presigned URL for '{key}': {str(e)}"
            ) from e


def get_quiz_storage() -> QuizStorage:
    return QuizStorage.from_settings()
