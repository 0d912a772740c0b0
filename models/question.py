# models/question.py
from pydantic import BaseModel, ConfigDict, Field, model_validator
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Union


class QuestionType(str, Enum):
    SINGLE = "mcq"
    MULTIPLE = "multiple"
    INTEGER = "integer"


class Subject(str, Enum):
    MATHS = "maths"
    PHYSICS = "physics"
    CHEMISTRY = "chemistry"


SUBJECTS = [s.value for s in Subject]
CHOICE_TYPES = {QuestionType.SINGLE, QuestionType.MULTIPLE}


class QuestionOption(BaseModel):
    # Options coming from older clients may carry label/value instead of text
    model_config = ConfigDict(extra="allow")

    text: Optional[str] = None
    isCorrect: bool = False


class QuestionCreate(BaseModel):
    questionText: Optional[str] = None
    questionImage: Optional[str] = None
    questionType: QuestionType
    options: List[QuestionOption] = []
    correctAnswer: Union[List[str], str, int, float]
    marks: float = Field(1, gt=0)
    negativeMarks: float = Field(0, ge=0)
    explanation: Optional[str] = None
    subject: Subject = Subject.MATHS

    @model_validator(mode="after")
    def check_content(self):
        self.questionText = (self.questionText or "").strip()
        if not self.questionText and not self.questionImage:
            raise ValueError("Either question text or image is required")
        if self.questionType in CHOICE_TYPES and not self.options:
            raise ValueError("Options are required for MCQ and Multiple Choice questions")
        if self.questionType == QuestionType.INTEGER:
            self.options = []
        return self


class QuestionUpdate(BaseModel):
    questionText: Optional[str] = None
    questionImage: Optional[str] = None
    questionType: Optional[QuestionType] = None
    options: Optional[List[QuestionOption]] = None
    correctAnswer: Optional[Union[List[str], str, int, float]] = None
    marks: Optional[float] = Field(None, gt=0)
    negativeMarks: Optional[float] = Field(None, ge=0)
    explanation: Optional[str] = None
    subject: Optional[Subject] = None
    isActive: Optional[bool] = None


class Question(BaseModel):
    """A question as stored, used as grading input.

    `options` and `correctAnswer` are kept loose: stored payloads are not
    always shaped like `QuestionOption`, and grading normalizes them.
    `subject` is a plain string so that documents with a missing or
    unknown subject still load.
    """
    id: str
    questionText: Optional[str] = ""
    questionImage: Optional[str] = None
    questionType: QuestionType
    options: List[Any] = []
    correctAnswer: Any = None
    marks: float = 1
    negativeMarks: float = 0
    explanation: Optional[str] = None
    subject: Optional[str] = None
    exam: Optional[str] = None
    createdBy: Optional[str] = None
    isActive: bool = True
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None


class StudentQuestion(BaseModel):
    """A question as shown to a student taking the exam: no answer key."""
    id: str
    questionText: Optional[str] = ""
    questionImage: Optional[str] = None
    questionType: QuestionType
    options: List[Any] = []
    marks: float = 1
    negativeMarks: float = 0
    subject: Optional[str] = None

    @classmethod
    def from_question(cls, question: Question) -> "StudentQuestion":
        options = []
        for option in question.options:
            if isinstance(option, dict):
                option = {k: v for k, v in option.items() if k != "isCorrect"}
            options.append(option)
        return cls(
            id=question.id,
            questionText=question.questionText,
            questionImage=question.questionImage,
            questionType=question.questionType,
            options=options,
            marks=question.marks,
            negativeMarks=question.negativeMarks,
            subject=question.subject,
        )


def question_document(question: QuestionCreate, exam_id, created_by: str) -> Dict[str, Any]:
    now = datetime.utcnow()
    doc = question.model_dump(mode="json")
    doc["exam"] = exam_id
    doc["createdBy"] = created_by
    doc["isActive"] = True
    doc["createdAt"] = now
    doc["updatedAt"] = now
    return doc
