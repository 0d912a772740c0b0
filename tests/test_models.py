"""
Test: question and exam payload validation.
"""
from datetime import datetime

import pytest
from pydantic import ValidationError

from models.exam import ExamCreate, ExamUpdate
from models.question import QuestionCreate


class TestQuestionCreate:
    def test_text_or_image_required(self):
        with pytest.raises(ValidationError):
            QuestionCreate(questionText="   ", questionType="integer", correctAnswer=3)

    def test_image_only_is_fine(self):
        question = QuestionCreate(questionImage="/uploads/q1.png", questionType="integer", correctAnswer=3)
        assert question.questionText == ""

    def test_choice_needs_options(self):
        with pytest.raises(ValidationError):
            QuestionCreate(questionText="Pick one", questionType="mcq", correctAnswer="A")

    def test_integer_drops_options(self):
        question = QuestionCreate(
            questionText="How many?", questionType="integer", correctAnswer=3, options=[{"text": "3"}]
        )
        assert question.options == []

    def test_defaults(self):
        question = QuestionCreate(questionText=" Q ", questionType="integer", correctAnswer="3")
        assert question.questionText == "Q"
        assert question.marks == 1
        assert question.negativeMarks == 0
        assert question.subject.value == "maths"

    def test_negative_marks_not_negative(self):
        with pytest.raises(ValidationError):
            QuestionCreate(questionText="Q", questionType="integer", correctAnswer=3, negativeMarks=-1)

    def test_unknown_subject_rejected(self):
        with pytest.raises(ValidationError):
            QuestionCreate(questionText="Q", questionType="integer", correctAnswer=3, subject="biology")

    def test_option_extra_fields_kept(self):
        question = QuestionCreate(
            questionText="Capital?",
            questionType="mcq",
            options=[{"label": "Paris", "isCorrect": True}],
            correctAnswer="Paris",
        )
        assert question.model_dump()["options"][0]["label"] == "Paris"


class TestExamCreate:
    def base(self, **overrides):
        data = {
            "title": "Mock",
            "duration": 60,
            "totalQuestions": 0,
            "totalMarks": 0,
            "startDate": "2024-01-01T00:00:00",
            "endDate": "2024-02-01T00:00:00",
        }
        data.update(overrides)
        return data

    def test_defaults(self):
        exam = ExamCreate(**self.base())
        assert exam.examType == "weekend"
        assert exam.isActive is True

    def test_window_order(self):
        with pytest.raises(ValidationError):
            ExamCreate(**self.base(endDate="2023-12-01T00:00:00"))

    def test_aware_dates_stored_naive(self):
        exam = ExamCreate(**self.base(startDate="2024-01-01T05:30:00+05:30"))
        assert exam.startDate == datetime(2024, 1, 1, 0, 0)
        assert exam.startDate.tzinfo is None

    @pytest.mark.parametrize("title", ["", "   "])
    def test_blank_title_rejected(self, title):
        with pytest.raises(ValidationError):
            ExamCreate(**self.base(title=title))

    def test_title_trimmed(self):
        assert ExamCreate(**self.base(title="  Mock  ")).title == "Mock"

    def test_invalid_type(self):
        with pytest.raises(ValidationError):
            ExamCreate(**self.base(examType="monthly"))

    def test_update_blank_title_rejected(self):
        with pytest.raises(ValidationError):
            ExamUpdate(title="   ")

    def test_partial_update_only_sets_sent_fields(self):
        update = ExamUpdate(title="Renamed")
        assert update.model_dump(exclude_unset=True, exclude_none=True) == {"title": "Renamed"}
