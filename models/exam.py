# models/exam.py
from pydantic import BaseModel, ConfigDict, Field, model_validator
from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional

from .question import Question, StudentQuestion


class ExamType(str, Enum):
    WEEKEND = "weekend"
    MAINS = "mains"
    ADVANCED = "advanced"
    PRACTICE = "practice"


def naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Stored dates are naive UTC, the way the Mongo driver returns them."""
    if value is not None and value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


class ExamCreate(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    title: str = Field(..., min_length=1)
    description: Optional[str] = None
    examType: ExamType = ExamType.WEEKEND.value
    duration: int = Field(..., gt=0)  # minutes
    totalQuestions: int = Field(..., ge=0)
    totalMarks: float = Field(..., ge=0)
    instructions: Optional[str] = None
    isActive: bool = True
    startDate: datetime
    endDate: datetime

    @model_validator(mode="after")
    def check_window(self):
        self.title = self.title.strip()
        if not self.title:
            raise ValueError("title must not be blank")
        self.startDate = naive_utc(self.startDate)
        self.endDate = naive_utc(self.endDate)
        if self.endDate < self.startDate:
            raise ValueError("endDate must not be before startDate")
        return self


class ExamUpdate(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    title: Optional[str] = None
    description: Optional[str] = None
    examType: Optional[ExamType] = None
    duration: Optional[int] = Field(None, gt=0)
    totalQuestions: Optional[int] = Field(None, ge=0)
    totalMarks: Optional[float] = Field(None, ge=0)
    instructions: Optional[str] = None
    isActive: Optional[bool] = None
    startDate: Optional[datetime] = None
    endDate: Optional[datetime] = None

    @model_validator(mode="after")
    def normalize_fields(self):
        # Only touch fields that were sent, partial updates rely on exclude_unset
        if self.title is not None:
            self.title = self.title.strip()
            if not self.title:
                raise ValueError("title must not be blank")
        if self.startDate is not None:
            self.startDate = naive_utc(self.startDate)
        if self.endDate is not None:
            self.endDate = naive_utc(self.endDate)
        if self.startDate and self.endDate and self.endDate < self.startDate:
            raise ValueError("endDate must not be before startDate")
        return self


class Exam(BaseModel):
    id: str
    title: str
    description: Optional[str] = None
    examType: ExamType = ExamType.WEEKEND
    duration: int
    totalQuestions: int = 0
    totalMarks: float = 0
    instructions: Optional[str] = None
    isActive: bool = True
    startDate: datetime
    endDate: datetime
    createdBy: Optional[str] = None
    questions: List[Question] = []
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None

    def is_open(self, at: datetime) -> bool:
        """Whether students may attempt the exam at `at`."""
        return self.isActive and self.startDate <= at <= self.endDate


class StudentExam(BaseModel):
    id: str
    title: str
    description: Optional[str] = None
    examType: ExamType = ExamType.WEEKEND
    duration: int
    totalQuestions: int = 0
    totalMarks: float = 0
    instructions: Optional[str] = None
    startDate: datetime
    endDate: datetime
    questions: List[StudentQuestion] = []

    @classmethod
    def from_exam(cls, exam: Exam) -> "StudentExam":
        data = exam.model_dump(include=set(cls.model_fields) - {"questions"})
        return cls(**data, questions=[StudentQuestion.from_question(q) for q in exam.questions])
