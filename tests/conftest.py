"""
Shared fixtures: an in-memory Mongo database injected through `get_db`,
and helpers to act as a user of a given role without real tokens.
"""
import pytest
from fastapi.testclient import TestClient
from mongomock_motor import AsyncMongoMockClient

from main import app
from database import get_db
from routes.auth import get_current_user

ADMIN = {"id": "admin-1", "email": "admin@example.com", "fullName": "Ada Admin", "role": "admin", "isActive": True}
STUDENT = {"id": "student-1", "email": "sam@example.com", "fullName": "Sam Student", "role": "student", "isActive": True}
OTHER_STUDENT = {"id": "student-2", "email": "kim@example.com", "fullName": "Kim Student", "role": "student", "isActive": True}

EXAM_PAYLOAD = {
    "title": "JEE Main Practice Test 1",
    "description": "Full syllabus",
    "examType": "mains",
    "duration": 180,
    "totalQuestions": 3,
    "totalMarks": 12,
    "startDate": "2020-01-01T00:00:00",
    "endDate": "2099-01-01T00:00:00",
}


@pytest.fixture
def mock_db():
    return AsyncMongoMockClient()["exam_platform_test"]


@pytest.fixture
def client(mock_db):
    app.dependency_overrides[get_db] = lambda: mock_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def act_as(client):
    """Switch the authenticated user for subsequent requests."""
    def _act_as(user):
        app.dependency_overrides[get_current_user] = lambda: user
        return client
    return _act_as


@pytest.fixture
def exam_with_questions(act_as):
    """An exam with one maths mcq, one physics multiple and one chemistry integer question."""
    client = act_as(ADMIN)
    exam = client.post("/api/admin/exams/", json=EXAM_PAYLOAD).json()
    questions = [
        {
            "questionText": "2 + 2 = ?",
            "questionType": "mcq",
            "options": [{"text": "3", "isCorrect": False}, {"text": "4", "isCorrect": True}],
            "correctAnswer": "4",
            "marks": 4,
            "negativeMarks": 1,
            "subject": "maths",
        },
        {
            "questionText": "Which are vector quantities?",
            "questionType": "multiple",
            "options": [
                {"text": "Velocity", "isCorrect": True},
                {"text": "Speed", "isCorrect": False},
                {"text": "Force", "isCorrect": True},
            ],
            "correctAnswer": ["Velocity", "Force"],
            "marks": 4,
            "negativeMarks": 1,
            "subject": "physics",
        },
        {
            "questionText": "Atomic number of carbon?",
            "questionType": "integer",
            "correctAnswer": 6,
            "marks": 4,
            "negativeMarks": 1,
            "subject": "chemistry",
        },
    ]
    created = []
    for payload in questions:
        response = client.post(f"/api/admin/exams/{exam['id']}/questions", json=payload)
        assert response.status_code == 201, response.text
        created.append(response.json())
    return exam["id"], created
