# services/grading.py
"""Exam attempt grading.

`grade_attempt` scores one submission against an exam in a single pass
over the exam's questions. It is a pure function: the same exam,
answers and elapsed time always produce the same `ExamResult`, and
nothing outside the returned result is touched.

Rules per question:

* unattempted (missing, None, empty string or empty collection):
  no marks, counted in `unattempted`
* correct: `+marks`, counted in `correctAnswers` and the subject's `correct`
* attempted but wrong: `-negativeMarks`, counted in `wrongAnswers`;
  `obtainedMarks` is not floored at zero

Every question with a known subject adds one to that subject's `total`.
Questions with a missing or unknown subject still count globally but are
left out of `subjectWiseScore`. Submitted ids that do not belong to the
exam are ignored.
"""
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Optional
import logging

from models.exam import Exam
from models.question import Question, QuestionType, SUBJECTS
from models.result import ExamResult, SubjectScore
from services.option_text import get_option_text, option_texts

logger = logging.getLogger(__name__)


def is_attempted(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return value.strip() != ""
    if isinstance(value, (list, tuple, dict, set)):
        return len(value) > 0
    return True


def choice_texts(value: Any) -> list:
    """Option texts of a multi-choice value; a string is a ", " joined list."""
    if isinstance(value, str):
        return [part.strip() for part in value.split(",")]
    return option_texts(value)


def correct_option_texts(question: Question) -> list:
    """Answer key of a choice question as stripped option texts.

    The stored `correctAnswer` wins; options flagged `isCorrect` are the
    fallback when no key was stored.
    """
    if is_attempted(question.correctAnswer):
        if question.questionType == QuestionType.MULTIPLE:
            return choice_texts(question.correctAnswer)
        return option_texts(question.correctAnswer)
    return [
        get_option_text(option).strip()
        for option in question.options
        if isinstance(option, dict) and option.get("isCorrect") is True
    ]


def _as_number(text: str) -> Optional[Decimal]:
    try:
        number = Decimal(text)
    except InvalidOperation:
        return None
    return number if number.is_finite() else None


def integer_answers_match(submitted: Any, correct: Any) -> bool:
    submitted_text = get_option_text(submitted).strip()
    correct_text = get_option_text(correct).strip()
    submitted_number = _as_number(submitted_text)
    correct_number = _as_number(correct_text)
    if submitted_number is not None and correct_number is not None:
        return submitted_number == correct_number
    return submitted_text == correct_text


def is_correct(question: Question, submitted: Any) -> bool:
    """Compare an attempted answer with the question's answer key."""
    if question.questionType == QuestionType.SINGLE:
        expected = correct_option_texts(question)
        if not expected:
            return False
        return get_option_text(submitted).strip() == expected[0]

    if question.questionType == QuestionType.MULTIPLE:
        # No partial credit: the sorted texts must match exactly
        return sorted(choice_texts(submitted)) == sorted(correct_option_texts(question))

    if question.questionType == QuestionType.INTEGER:
        return integer_answers_match(submitted, question.correctAnswer)

    raise ValueError(f"Unsupported question type: {question.questionType}")


def grade_attempt(exam: Exam, answers: Dict[str, Any], elapsed_seconds: int) -> ExamResult:
    subject_scores = {subject: SubjectScore() for subject in SUBJECTS}
    correct = wrong = unattempted = 0
    obtained = 0.0
    total_marks = 0.0

    for question in exam.questions:
        total_marks += question.marks
        subject_score = subject_scores.get(question.subject)
        if subject_score is not None:
            subject_score.total += 1

        submitted = answers.get(question.id)
        if not is_attempted(submitted):
            unattempted += 1
            continue

        if is_correct(question, submitted):
            correct += 1
            obtained += question.marks
            if subject_score is not None:
                subject_score.correct += 1
                subject_score.marks += question.marks
        else:
            wrong += 1
            obtained -= question.negativeMarks

    percentage = obtained / total_marks * 100 if total_marks > 0 else 0.0

    logger.debug(
        f"Graded exam {exam.id}: correct={correct} wrong={wrong} "
        f"unattempted={unattempted} obtained={obtained}/{total_marks}"
    )
    return ExamResult(
        examId=exam.id,
        totalQuestions=len(exam.questions),
        correctAnswers=correct,
        wrongAnswers=wrong,
        unattempted=unattempted,
        totalMarks=total_marks,
        obtainedMarks=obtained,
        percentage=percentage,
        timeTaken=elapsed_seconds,
        subjectWiseScore=subject_scores,
    )
