# routes/users.py
from fastapi import APIRouter, HTTPException, Depends
from datetime import datetime
from pymongo.errors import DuplicateKeyError
from typing import Optional
import logging
import re
import uuid

from database import get_db
from models.user import UserCreate, UserRole, UserUpdate
from .auth import hash_password, public_user, require_admin

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/admin/users", tags=["users"])

VALID_ROLES = {role.value for role in UserRole}


@router.get("/")
async def get_users(
    role: Optional[str] = None,
    search: Optional[str] = None,
    page: int = 1,
    limit: int = 10,
    current_user: dict = Depends(require_admin),
    db=Depends(get_db),
):
    logger.info(f"Fetching users with role={role}, search={search}, page={page}, limit={limit}, current_user={current_user['id']}")
    if role and role not in VALID_ROLES:
        raise HTTPException(status_code=400, detail=f"Invalid role. Must be one of {', '.join(sorted(VALID_ROLES))}")
    if page < 1 or limit < 1:
        raise HTTPException(status_code=400, detail="page and limit must be positive")

    query = {"role": role} if role else {}
    if search:
        pattern = re.escape(search)
        query["$or"] = [
            {"fullName": {"$regex": pattern, "$options": "i"}},
            {"email": {"$regex": pattern, "$options": "i"}},
        ]

    total = await db.users.count_documents(query)
    users = await db.users.find(query).sort("email", 1).skip((page - 1) * limit).limit(limit).to_list(None)
    return {"users": [public_user(user) for user in users], "total": total}


@router.post("/", status_code=201)
async def add_user(user: UserCreate, current_user: dict = Depends(require_admin), db=Depends(get_db)):
    email = user.email.strip().lower()
    logger.info(f"Adding user {email}, role: {user.role.value}, current_user: {current_user['id']}")
    if await db.users.find_one({"email": email}):
        raise HTTPException(status_code=400, detail="User already exists")

    user_dict = {
        "id": str(uuid.uuid4()),
        "email": email,
        "password": hash_password(user.password),
        "fullName": user.fullName,
        "role": user.role.value,
        "isActive": user.isActive,
        "createdAt": datetime.utcnow(),
    }
    try:
        await db.users.insert_one(user_dict)
    except DuplicateKeyError as e:
        raise HTTPException(status_code=400, detail=f"Duplicate key error: {str(e)}")
    return public_user(user_dict)


@router.put("/{user_id}")
async def update_user(user_id: str, update_data: UserUpdate, current_user: dict = Depends(require_admin), db=Depends(get_db)):
    logger.info(f"Updating user {user_id}, current_user: {current_user['id']}")
    existing_user = await db.users.find_one({"id": user_id})
    if not existing_user:
        raise HTTPException(status_code=404, detail="User not found")

    update_dict = update_data.model_dump(exclude_unset=True, exclude_none=True)
    if "role" in update_dict:
        update_dict["role"] = update_dict["role"].value
    if "email" in update_dict:
        update_dict["email"] = update_dict["email"].strip().lower()
        other = await db.users.find_one({"email": update_dict["email"], "id": {"$ne": user_id}})
        if other:
            raise HTTPException(status_code=400, detail="Email already in use")
    if "password" in update_dict:
        update_dict["password"] = hash_password(update_dict["password"])

    if update_dict:
        await db.users.update_one({"id": user_id}, {"$set": update_dict})
    updated = await db.users.find_one({"id": user_id})
    return public_user(updated)


@router.patch("/{user_id}/toggle-status")
async def toggle_user_status(user_id: str, current_user: dict = Depends(require_admin), db=Depends(get_db)):
    user = await db.users.find_one({"id": user_id})
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    is_active = not user.get("isActive", True)
    await db.users.update_one({"id": user_id}, {"$set": {"isActive": is_active}})
    logger.info(f"User {user_id} isActive={is_active}, current_user: {current_user['id']}")
    return {"message": f"User {'activated' if is_active else 'deactivated'} successfully", "isActive": is_active}


@router.delete("/{user_id}")
async def delete_user(user_id: str, current_user: dict = Depends(require_admin), db=Depends(get_db)):
    logger.info(f"Deleting user {user_id}, current_user: {current_user['id']}")
    if user_id == current_user["id"]:
        raise HTTPException(status_code=400, detail="Cannot delete your own account")
    result = await db.users.delete_one({"id": user_id})
    if result.deleted_count == 0:
        raise HTTPException(status_code=404, detail="User not found")
    return {"message": "User deleted successfully"}
