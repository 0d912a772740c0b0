# routes/debug.py
from fastapi import APIRouter, HTTPException, Depends
import logging

from services.exam_repository import ExamRepository, InvalidIdError, get_exam_repository
from .auth import require_admin

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/debug", tags=["debug"])


@router.get("/exams")
async def debug_exams(current_user: dict = Depends(require_admin), repo: ExamRepository = Depends(get_exam_repository)):
    exams = await repo.list_exams()
    return {
        "totalExams": len(exams),
        "activeExams": sum(1 for exam in exams if exam.isActive),
        "exams": [
            {
                "id": exam.id,
                "title": exam.title,
                "examType": exam.examType,
                "isActive": exam.isActive,
                "questionsCount": len(exam.questions),
                "createdAt": exam.createdAt,
            }
            for exam in exams
        ],
    }


@router.get("/exam-answers/{exam_id}")
async def debug_exam_answers(exam_id: str, current_user: dict = Depends(require_admin), repo: ExamRepository = Depends(get_exam_repository)):
    try:
        exam = await repo.find_exam_by_id(exam_id)
    except InvalidIdError:
        raise HTTPException(status_code=400, detail="Invalid exam ID format")
    if not exam:
        raise HTTPException(status_code=404, detail="Exam not found")

    return {
        "examId": exam.id,
        "examTitle": exam.title,
        "examType": exam.examType,
        "totalQuestions": len(exam.questions),
        "questions": [
            {
                "questionNumber": index + 1,
                "questionId": question.id,
                "questionText": question.questionText,
                "questionImage": question.questionImage,
                "questionType": question.questionType,
                "options": question.options,
                "correctAnswer": question.correctAnswer,
                "marks": question.marks,
                "negativeMarks": question.negativeMarks,
                "subject": question.subject,
            }
            for index, question in enumerate(exam.questions)
        ],
    }
