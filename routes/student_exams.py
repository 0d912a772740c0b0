# routes/student_exams.py
from fastapi import APIRouter, HTTPException, Depends
from datetime import datetime
from typing import List
import logging

import config
from models.exam import Exam, StudentExam
from models.result import ExamResult, ExamSubmission, StoredExamResult
from services.exam_repository import ExamRepository, InvalidIdError, get_exam_repository
from services.grading import grade_attempt
from .auth import get_current_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/student", tags=["student-exams"])


async def load_exam(repo: ExamRepository, exam_id: str) -> Exam:
    try:
        exam = await repo.find_exam_by_id(exam_id)
    except InvalidIdError:
        raise HTTPException(status_code=400, detail="Invalid exam ID format")
    if not exam:
        raise HTTPException(status_code=404, detail="Exam not found")
    return exam


@router.get("/exams", response_model=List[StudentExam])
async def get_student_exams(current_user: dict = Depends(get_current_user), repo: ExamRepository = Depends(get_exam_repository)):
    exams = await repo.list_exams(active_only=True)
    logger.info(f"Found {len(exams)} active exams for user {current_user['id']}")
    return [StudentExam.from_exam(exam) for exam in exams]


@router.get("/exams/{exam_id}", response_model=StudentExam)
async def get_student_exam(exam_id: str, current_user: dict = Depends(get_current_user), repo: ExamRepository = Depends(get_exam_repository)):
    return StudentExam.from_exam(await load_exam(repo, exam_id))


@router.post("/exam-results", response_model=ExamResult, status_code=201)
async def submit_exam(
    submission: ExamSubmission,
    current_user: dict = Depends(get_current_user),
    repo: ExamRepository = Depends(get_exam_repository),
):
    exam = await load_exam(repo, submission.examId)

    completed_at = datetime.utcnow()
    if not exam.is_open(completed_at):
        if config.ENFORCE_EXAM_WINDOW:
            raise HTTPException(status_code=403, detail="Exam is not currently available")
        logger.warning(f"User {current_user['id']} submitted exam {exam.id} outside its activity window")

    result = grade_attempt(exam, submission.answers, submission.timeTakenSeconds)
    logger.info(
        f"User {current_user['id']} scored {result.obtainedMarks}/{result.totalMarks} "
        f"on exam {exam.id} ({result.correctAnswers} correct, {result.wrongAnswers} wrong, {result.unattempted} unattempted)"
    )

    stored = StoredExamResult(
        **result.model_dump(),
        userId=current_user["id"],
        examTitle=exam.title,
        completedAt=completed_at,
    )
    await repo.save_result(stored.model_dump(exclude={"id"}))
    return result


@router.get("/exam-results", response_model=List[StoredExamResult])
async def get_student_results(current_user: dict = Depends(get_current_user), repo: ExamRepository = Depends(get_exam_repository)):
    return await repo.find_results_for_user(current_user["id"])
