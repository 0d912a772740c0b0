# services/exam_repository.py
from bson import ObjectId
from datetime import datetime
from fastapi import Depends
from pymongo import DESCENDING
from typing import Any, Dict, List, Optional
import logging

from database import get_db, to_str_id
from models.exam import Exam
from models.question import Question

logger = logging.getLogger(__name__)


class InvalidIdError(ValueError):
    """Raised when an identifier is not a valid ObjectId."""


def parse_object_id(value: str) -> ObjectId:
    if not isinstance(value, str) or not ObjectId.is_valid(value):
        raise InvalidIdError(value)
    return ObjectId(value)


class ExamRepository:
    """Exam, question and result storage on top of a Motor database."""

    def __init__(self, db):
        self.db = db

    # Exams

    async def _populate(self, exam: Dict[str, Any]) -> Dict[str, Any]:
        """Replace the exam's question ids with question documents, in exam order."""
        question_ids = exam.get("questions", [])
        if not question_ids:
            exam["questions"] = []
            return exam
        docs = await self.db.questions.find({"_id": {"$in": question_ids}}).to_list(None)
        by_id = {doc["_id"]: doc for doc in docs}
        exam["questions"] = [by_id[qid] for qid in question_ids if qid in by_id]
        return exam

    async def find_exam_by_id(self, exam_id: str) -> Optional[Exam]:
        oid = parse_object_id(exam_id)
        exam = await self.db.exams.find_one({"_id": oid})
        if not exam:
            return None
        exam = await self._populate(exam)
        return Exam(**to_str_id(exam))

    async def list_exams(self, active_only: bool = False) -> List[Exam]:
        query = {"isActive": True} if active_only else {}
        exams = await self.db.exams.find(query).sort("createdAt", DESCENDING).to_list(None)
        return [Exam(**to_str_id(await self._populate(exam))) for exam in exams]

    async def create_exam(self, data: Dict[str, Any], created_by: str) -> Exam:
        now = datetime.utcnow()
        doc = {**data, "createdBy": created_by, "questions": [], "createdAt": now, "updatedAt": now}
        result = await self.db.exams.insert_one(doc)
        logger.info(f"Created exam {result.inserted_id} by {created_by}")
        return await self.find_exam_by_id(str(result.inserted_id))

    async def update_exam(self, exam_id: str, data: Dict[str, Any]) -> Optional[Exam]:
        oid = parse_object_id(exam_id)
        result = await self.db.exams.update_one(
            {"_id": oid}, {"$set": {**data, "updatedAt": datetime.utcnow()}}
        )
        if result.matched_count == 0:
            return None
        return await self.find_exam_by_id(exam_id)

    async def delete_exam(self, exam_id: str) -> bool:
        """Delete an exam and every question it owns."""
        oid = parse_object_id(exam_id)
        if not await self.db.exams.find_one({"_id": oid}):
            return False
        deleted = await self.db.questions.delete_many({"exam": oid})
        await self.db.exams.delete_one({"_id": oid})
        logger.info(f"Deleted exam {exam_id} and {deleted.deleted_count} questions")
        return True

    # Questions

    async def find_questions_by_exam(self, exam_id: str) -> List[Question]:
        oid = parse_object_id(exam_id)
        docs = await self.db.questions.find({"exam": oid}).sort("createdAt", DESCENDING).to_list(None)
        return [Question(**to_str_id(doc)) for doc in docs]

    async def find_question_by_id(self, question_id: str) -> Optional[Question]:
        doc = await self.db.questions.find_one({"_id": parse_object_id(question_id)})
        return Question(**to_str_id(doc)) if doc else None

    async def add_question(self, exam_id: str, doc: Dict[str, Any]) -> Question:
        oid = parse_object_id(exam_id)
        doc = {**doc, "exam": oid}
        result = await self.db.questions.insert_one(doc)
        await self.db.exams.update_one(
            {"_id": oid},
            {"$push": {"questions": result.inserted_id}, "$set": {"updatedAt": datetime.utcnow()}},
        )
        logger.info(f"Added question {result.inserted_id} to exam {exam_id}")
        return await self.find_question_by_id(str(result.inserted_id))

    async def update_question(self, question_id: str, data: Dict[str, Any]) -> Optional[Question]:
        oid = parse_object_id(question_id)
        result = await self.db.questions.update_one(
            {"_id": oid}, {"$set": {**data, "updatedAt": datetime.utcnow()}}
        )
        if result.matched_count == 0:
            return None
        return await self.find_question_by_id(question_id)

    async def delete_question(self, question_id: str) -> bool:
        oid = parse_object_id(question_id)
        question = await self.db.questions.find_one({"_id": oid})
        if not question:
            return False
        await self.db.exams.update_one({"_id": question["exam"]}, {"$pull": {"questions": oid}})
        await self.db.questions.delete_one({"_id": oid})
        logger.info(f"Deleted question {question_id} from exam {question['exam']}")
        return True

    # Results

    async def save_result(self, result: Dict[str, Any]) -> str:
        inserted = await self.db.exam_results.insert_one(dict(result))
        return str(inserted.inserted_id)

    async def find_results_for_user(self, user_id: str) -> List[Dict[str, Any]]:
        docs = await self.db.exam_results.find({"userId": user_id}).sort("completedAt", DESCENDING).to_list(None)
        return [to_str_id(doc) for doc in docs]


def get_exam_repository(db=Depends(get_db)) -> ExamRepository:
    return ExamRepository(db)
