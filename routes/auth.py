# routes/auth.py
from fastapi import APIRouter, HTTPException, Depends
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt
from datetime import datetime, timedelta
import bcrypt
import logging
import uuid

import config
from database import get_db
from models.user import ADMIN_ROLES, LoginRequest, RegisterRequest, UserRole

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login", auto_error=False)


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, hashed: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        return False


def create_access_token(user: dict) -> str:
    expire = datetime.utcnow() + timedelta(minutes=config.ACCESS_TOKEN_EXPIRE_MINUTES)
    payload = {"id": user["id"], "role": user["role"], "exp": expire}
    return jwt.encode(payload, config.JWT_SECRET, algorithm=config.JWT_ALGORITHM)


def public_user(user: dict) -> dict:
    return {
        "id": user["id"],
        "email": user["email"],
        "fullName": user.get("fullName", ""),
        "role": user["role"],
        "isActive": user.get("isActive", True),
    }


async def get_user_by_id(db, user_id: str):
    user = await db.users.find_one({"id": user_id})
    if not user:
        logger.warning(f"User not found for id: {user_id}")
    return user


async def get_current_user(token: str = Depends(oauth2_scheme), db=Depends(get_db)) -> dict:
    if not token:
        raise HTTPException(status_code=401, detail="Not authenticated")
    try:
        payload = jwt.decode(token, config.JWT_SECRET, algorithms=[config.JWT_ALGORITHM])
    except JWTError as e:
        logger.warning(f"JWTError: {str(e)}")
        raise HTTPException(status_code=401, detail="Invalid token")
    user_id = payload.get("id")
    if not user_id or not payload.get("role"):
        logger.warning("Invalid token: missing id or role")
        raise HTTPException(status_code=401, detail="Invalid token")
    user = await get_user_by_id(db, user_id)
    if not user or not user.get("isActive", True):
        raise HTTPException(status_code=401, detail="User not found")
    return public_user(user)


def require_roles(*roles):
    """Dependency factory rejecting users whose role is not in `roles`."""
    allowed = {r.value if isinstance(r, UserRole) else r for r in roles}

    async def role_checker(current_user: dict = Depends(get_current_user)) -> dict:
        if current_user["role"] not in allowed:
            logger.warning(
                f"User {current_user['id']} with role {current_user['role']} attempted to access restricted endpoint"
            )
            raise HTTPException(status_code=403, detail="Access denied")
        return current_user

    return role_checker


require_admin = require_roles(*ADMIN_ROLES)


@router.post("/register", status_code=201)
async def register(request: RegisterRequest, db=Depends(get_db)):
    email = request.email.strip().lower()
    if await db.users.find_one({"email": email}):
        raise HTTPException(status_code=400, detail="User already exists")
    user = {
        "id": str(uuid.uuid4()),
        "email": email,
        "password": hash_password(request.password),
        "fullName": request.fullName,
        "role": UserRole.STUDENT.value,
        "isActive": True,
        "createdAt": datetime.utcnow(),
    }
    await db.users.insert_one(user)
    logger.info(f"Registered student {user['id']}")
    return {"message": "Registration successful", "user": public_user(user)}


@router.post("/login")
async def login(request: LoginRequest, db=Depends(get_db)):
    email = request.email.strip().lower()
    logger.info(f"Login attempt for email: {email}")
    user = await db.users.find_one({"email": email})
    if not user or not verify_password(request.password, user["password"]):
        raise HTTPException(status_code=401, detail="Invalid credentials")
    if not user.get("isActive", True):
        raise HTTPException(status_code=403, detail="Account is deactivated")
    return {
        "access_token": create_access_token(user),
        "token_type": "bearer",
        "user": public_user(user),
    }


@router.get("/me")
async def get_current_user_endpoint(current_user: dict = Depends(get_current_user)):
    return {"user": current_user}
