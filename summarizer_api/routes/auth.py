# summarizer_api/routes/auth.py
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from ..auth import (
    SESSION_COOKIE,
    check_password,
    get_current_user,
    hash_password,
    set_session_and_return_user,
)
from ..db import get_db
from ..models import User
from ..schemas import LoginIn, SignupIn, UserMeOut
from ..utils.timefmt import utcnow

logger = logging.getLogger("auth")

router = APIRouter(tags=["auth"])

EMAIL_IN_USE = "This email address is already in use."

def email_taken(db: Session, email: str) -> bool:
    return db.query(User).filter(User.email == email).first() is not None

@router.post("/auth/signup", response_model=UserMeOut)
def signup(body: SignupIn, db: Session = Depends(get_db)):
    email = body.email.strip().lower()
    full_name = body.full_name.strip()

    if email_taken(db, email):
        raise HTTPException(409, EMAIL_IN_USE)

    now = utcnow()
    user = User(
        email=email,
        name=full_name or None,
        password_hash=hash_password(body.password),
        created_at=now,
        last_login=now,
    )
    try:
        db.add(user); db.commit(); db.refresh(user)
    except IntegrityError:
        # lost a race with a concurrent signup for the same email
        db.rollback()
        raise HTTPException(409, EMAIL_IN_USE)
    except SQLAlchemyError as e:
        db.rollback()
        raise HTTPException(500, f"Signup failed: {e}")

    logger.info(f"[auth] signup uid={user.id}")
    return set_session_and_return_user(user)

@router.post("/auth/login")
def login(body: LoginIn, db: Session = Depends(get_db)):
    email = body.email.strip().lower()
    user = db.query(User).filter(User.email == email).first()
    if not user or not check_password(body.password, user.password_hash):
        raise HTTPException(401, "Invalid credentials")

    try:
        user.last_login = utcnow(); db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.warning(f"[auth] last_login update failed uid={user.id}: {e}")
    return set_session_and_return_user(user)

@router.post("/auth/logout")
def logout():
    resp = JSONResponse({"ok": True})
    resp.delete_cookie(SESSION_COOKIE, path="/")
    return resp

@router.get("/me", response_model=UserMeOut)
def me(current: User = Depends(get_current_user)):
    return current
