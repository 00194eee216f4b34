# summarizer_api/auth.py
from datetime import datetime, timedelta, timezone
from typing import Any, Dict

import bcrypt
from fastapi import Depends, HTTPException, Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from jose import jwt, JWTError
from sqlalchemy.orm import Session

from .config import settings
from .db import get_db
from .models import User

SESSION_COOKIE = "session"

def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode()

def check_password(password: str, password_hash: str) -> bool:
    return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))

def make_jwt(payload: Dict[str, Any]) -> str:
    exp = datetime.now(timezone.utc) + timedelta(minutes=settings.JWT_EXPIRE_MINUTES)
    return jwt.encode({**payload, "exp": exp}, settings.JWT_SECRET, algorithm=settings.JWT_ALGO)

def decode_cookie(req: Request) -> Dict[str, Any]:
    token = req.cookies.get(SESSION_COOKIE)
    if not token:
        raise HTTPException(401, "Not authenticated")
    try:
        return jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGO])
    except JWTError:
        raise HTTPException(401, "Invalid or expired token")

def user_payload(user: User) -> Dict[str, Any]:
    return {
        "id": user.id,
        "email": user.email,
        "name": user.name,
        "created_at": user.created_at,
        "last_login": user.last_login,
    }

def set_session_and_return_user(user: User) -> JSONResponse:
    token = make_jwt({"uid": user.id, "email": user.email, "name": user.name})
    resp = JSONResponse(jsonable_encoder(user_payload(user)))
    resp.set_cookie(
        SESSION_COOKIE,
        token,
        httponly=True,
        secure=settings.COOKIE_SECURE,
        samesite="Lax",
        path="/",
        max_age=settings.JWT_EXPIRE_MINUTES * 60,
    )
    return resp

def get_current_user(req: Request, db: Session = Depends(get_db)) -> User:
    payload = decode_cookie(req)
    uid = payload.get("uid")
    user = db.get(User, uid) if uid is not None else None
    if not user:
        raise HTTPException(401, "User not found")
    return user
