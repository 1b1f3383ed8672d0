"""Constants and doubles shared by the test modules"""

import io
import json

from botocore.exceptions import ClientError

ACCOUNT_ID = "acct123"
BUCKET = "zeppelin"
COURSE_ID = 7
STUDENT_ID = "student-1"
QUIZ_CONTENT_ID = "quiz-1"
QUIZ_KEY = f"focused/{COURSE_ID}/quiz/teacher/{QUIZ_CONTENT_ID}.json"
QUIZ_URL = f"https://{ACCOUNT_ID}.r2.cloudflarestorage.com/{QUIZ_KEY}"
ANSWERS_KEY = f"focused/{ACCOUNT_ID}/quiz/answer/{STUDENT_ID}/{QUIZ_CONTENT_ID}.json"

COLORS_QUIZ = {
    "title": "Colors",
    "description": "Basic colors",
    "questions": [
        {
            "id": "Q1",
            "type": "text",
            "points": 10,
            "question": "Color of the sky?",
            "correctAnswer": "blue",
        },
        {
            "id": "Q2",
            "type": "boolean",
            "points": 5,
            "question": "Grass is green",
            "correctAnswer": True,
        },
    ],
}


class InMemoryS3:
    """Minimal stand-in for the boto3 S3 client calls the service makes"""

    def __init__(self):
        self.objects = {}

    def get_object(self, Bucket, Key):
        if (Bucket, Key) not in self.objects:
            raise ClientError(
                {"Error": {"Code": "NoSuchKey", "Message": "Not Found"}}, "GetObject"
            )
        return {"Body": io.BytesIO(self.objects[(Bucket, Key)])}

    def put_object(self, Bucket, Key, Body, ContentType=None):
        self.objects[(Bucket, Key)] = Body

    def generate_presigned_url(self, ClientMethod, Params, ExpiresIn):
        return f"https://signed.example/{Params['Key']}?expires={ExpiresIn}"

    def load_json(self, key):
        return json.loads(self.objects[(BUCKET, key)])


def put_quiz(s3_client, quiz, key=QUIZ_KEY):
    body = quiz if isinstance(quiz, bytes) else json.dumps(quiz).encode("utf-8")
    s3_client.put_object(Bucket=BUCKET, Key=key, Body=body)
