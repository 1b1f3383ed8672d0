#!/usr/bin/env python3
"""
Pytest tests for QuizStorage
"""

from unittest.mock import Mock, patch

import pytest
from botocore.exceptions import ClientError

from app.core.exceptions import StorageError
from app.services.storage import QuizStorage


class TestQuizStorage:
    """Test key conventions and S3 calls of QuizStorage"""

    def setup_method(self):
        """Set up test fixtures"""
        self.s3_client = Mock()
        self.storage = QuizStorage(
            account_id="acct123", bucket="zeppelin", s3_client=self.s3_client
        )

    def test_key_conventions(self):
        assert self.storage.answers_key("u1", "c1") == (
            "focused/acct123/quiz/answer/u1/c1.json"
        )
        url = "https://acct123.r2.cloudflarestorage.com/focused/7/quiz/teacher/c1.json"
        assert self.storage.key_from_url(url) == "focused/7/quiz/teacher/c1.json"
        assert self.storage.public_url("focused/7/quiz/teacher/c1.json") == url

    def test_foreign_url_is_left_as_is(self):
        """Only the account's own prefix is stripped"""
        url = "https://other.r2.cloudflarestorage.com/focused/7/x.json"
        assert self.storage.key_from_url(url) == url

    def test_put_json(self):
        url = self.storage.put_json("focused/acct123/quiz/answer/u1/c1.json", {"q": "á"})

        assert url == (
            "https://acct123.r2.cloudflarestorage.com/focused/acct123/quiz/answer/u1/c1.json"
        )
        kwargs = self.s3_client.put_object.call_args.kwargs
        assert kwargs["Bucket"] == "zeppelin"
        assert kwargs["ContentType"] == "application/json"
        assert kwargs["Body"] == '{"q": "á"}'.encode("utf-8")

    def test_get_object_error(self):
        self.s3_client.get_object.side_effect = ClientError(
            {"Error": {"Code": "AccessDenied", "Message": "denied"}}, "GetObject"
        )

        with pytest.raises(StorageError):
            self.storage.get_object("focused/7/quiz/teacher/c1.json")

    def test_presigned_url_uses_default_expiry(self):
        self.s3_client.generate_presigned_url.return_value = "https://signed"

        assert self.storage.presigned_url("k") == "https://signed"
        self.s3_client.generate_presigned_url.assert_called_once_with(
            "get_object",
            Params={"Bucket": "zeppelin", "Key": "k"},
            ExpiresIn=900,
        )

    def test_unconfigured_client(self):
        storage = QuizStorage(account_id="", bucket="zeppelin")

        with pytest.raises(StorageError):
            storage.put_json("k", {})

    @patch("app.services.storage.boto3.client")
    def test_client_points_at_account_endpoint(self, mock_client):
        QuizStorage(
            account_id="acct123",
            bucket="zeppelin",
            access_key="key",
            secret_key="secret",
        )

        mock_client.assert_called_once_with(
            "s3",
            endpoint_url="https://acct123.r2.cloudflarestorage.com",
            aws_access_key_id="key",
            aws_secret_access_key="secret",
            region_name="auto",
        )
