# routes/exams.py
from fastapi import APIRouter, HTTPException, Depends
from typing import List
import logging

from models.exam import Exam, ExamCreate, ExamUpdate
from services.exam_repository import ExamRepository, InvalidIdError, get_exam_repository
from .auth import require_admin

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/admin/exams", tags=["exams"])


@router.get("/", response_model=List[Exam])
async def get_exams(current_user: dict = Depends(require_admin), repo: ExamRepository = Depends(get_exam_repository)):
    return await repo.list_exams()


@router.post("/", response_model=Exam, status_code=201)
async def create_exam(exam: ExamCreate, current_user: dict = Depends(require_admin), repo: ExamRepository = Depends(get_exam_repository)):
    logger.info(f"Creating exam '{exam.title}', current_user: {current_user['id']}")
    return await repo.create_exam(exam.model_dump(), created_by=current_user["id"])


@router.put("/{exam_id}", response_model=Exam)
async def update_exam(
    exam_id: str,
    update_data: ExamUpdate,
    current_user: dict = Depends(require_admin),
    repo: ExamRepository = Depends(get_exam_repository),
):
    try:
        existing = await repo.find_exam_by_id(exam_id)
    except InvalidIdError:
        raise HTTPException(status_code=400, detail="Invalid exam ID format")
    if not existing:
        raise HTTPException(status_code=404, detail="Exam not found")

    update_dict = update_data.model_dump(exclude_unset=True, exclude_none=True)
    start = update_dict.get("startDate", existing.startDate)
    end = update_dict.get("endDate", existing.endDate)
    if start and end and end < start:
        raise HTTPException(status_code=400, detail="endDate must not be before startDate")

    logger.info(f"Updating exam {exam_id} fields={sorted(update_dict)}, current_user: {current_user['id']}")
    return await repo.update_exam(exam_id, update_dict)


@router.delete("/{exam_id}")
async def delete_exam(exam_id: str, current_user: dict = Depends(require_admin), repo: ExamRepository = Depends(get_exam_repository)):
    try:
        deleted = await repo.delete_exam(exam_id)
    except InvalidIdError:
        raise HTTPException(status_code=400, detail="Invalid exam ID format")
    if not deleted:
        raise HTTPException(status_code=404, detail="Exam not found")
    return {"message": "Exam deleted successfully"}
