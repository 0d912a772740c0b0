# models/result.py
from pydantic import BaseModel, Field
from datetime import datetime
from typing import Any, Dict, Optional


class SubjectScore(BaseModel):
    correct: int = 0
    total: int = 0
    marks: float = 0


class ExamSubmission(BaseModel):
    examId: str
    answers: Dict[str, Any]  # questionId -> str | list[str] | number
    timeTakenSeconds: int = Field(..., ge=0)


class ExamResult(BaseModel):
    examId: str
    totalQuestions: int = 0
    correctAnswers: int = 0
    wrongAnswers: int = 0
    unattempted: int = 0
    totalMarks: float = 0
    obtainedMarks: float = 0
    percentage: float = 0
    timeTaken: int = 0
    subjectWiseScore: Dict[str, SubjectScore] = {}


class StoredExamResult(ExamResult):
    id: Optional[str] = None
    userId: str
    examTitle: Optional[str] = None
    completedAt: datetime
