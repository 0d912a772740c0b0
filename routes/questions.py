# routes/questions.py
from fastapi import APIRouter, HTTPException, Depends
from typing import List
import logging

from models.question import CHOICE_TYPES, Question, QuestionCreate, QuestionType, QuestionUpdate, question_document
from services.exam_repository import ExamRepository, InvalidIdError, get_exam_repository
from .auth import require_admin

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/admin", tags=["questions"])


@router.get("/exams/{exam_id}/questions", response_model=List[Question])
async def get_exam_questions(exam_id: str, current_user: dict = Depends(require_admin), repo: ExamRepository = Depends(get_exam_repository)):
    try:
        questions = await repo.find_questions_by_exam(exam_id)
    except InvalidIdError:
        raise HTTPException(status_code=400, detail="Invalid exam ID format")
    logger.info(f"Found {len(questions)} questions for exam {exam_id}")
    return questions


@router.post("/exams/{exam_id}/questions", response_model=Question, status_code=201)
async def add_question(
    exam_id: str,
    question: QuestionCreate,
    current_user: dict = Depends(require_admin),
    repo: ExamRepository = Depends(get_exam_repository),
):
    try:
        exam = await repo.find_exam_by_id(exam_id)
    except InvalidIdError:
        raise HTTPException(status_code=400, detail="Invalid exam ID format")
    if not exam:
        raise HTTPException(status_code=404, detail="Exam not found")

    logger.info(f"Creating {question.questionType.value} question for exam {exam_id}, current_user: {current_user['id']}")
    return await repo.add_question(exam_id, question_document(question, exam_id, current_user["id"]))


@router.put("/questions/{question_id}", response_model=Question)
async def update_question(
    question_id: str,
    update_data: QuestionUpdate,
    current_user: dict = Depends(require_admin),
    repo: ExamRepository = Depends(get_exam_repository),
):
    try:
        existing = await repo.find_question_by_id(question_id)
    except InvalidIdError:
        raise HTTPException(status_code=400, detail="Invalid question ID format")
    if not existing:
        raise HTTPException(status_code=404, detail="Question not found")

    update_dict = update_data.model_dump(mode="json", exclude_unset=True, exclude_none=True)
    if "questionText" in update_dict:
        update_dict["questionText"] = (update_dict["questionText"] or "").strip()
    text = update_dict.get("questionText", existing.questionText)
    image = update_dict.get("questionImage", existing.questionImage)
    if not (text or "").strip() and not image:
        raise HTTPException(status_code=400, detail="Either question text or image is required")
    question_type = QuestionType(update_dict.get("questionType", existing.questionType))
    options = update_dict.get("options", existing.options)
    if question_type in CHOICE_TYPES and not options:
        raise HTTPException(status_code=400, detail="Options are required for MCQ and Multiple Choice questions")

    return await repo.update_question(question_id, update_dict)


@router.delete("/questions/{question_id}")
async def delete_question(question_id: str, current_user: dict = Depends(require_admin), repo: ExamRepository = Depends(get_exam_repository)):
    try:
        deleted = await repo.delete_question(question_id)
    except InvalidIdError:
        raise HTTPException(status_code=400, detail="Invalid question ID format")
    if not deleted:
        raise HTTPException(status_code=404, detail="Question not found")
    return {"message": "Question deleted successfully"}
