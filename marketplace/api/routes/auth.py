# marketplace/api/routes/auth.py
from fastapi import APIRouter, Body, Depends, Response, status
from sqlalchemy.orm import Session
from typing import List

from marketplace.core.config import settings
from marketplace.core.security import get_current_user, get_session_tokens
from marketplace.db.base import get_db
from marketplace.db.models.user import User
from marketplace.schemas.user import LoginRequest, LoginResponse, UserRegister, UserResponse
from marketplace.services import auth_service

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def register(
    data: UserRegister = Body(..., discriminator="role"),
    db: Session = Depends(get_db),
):
    return auth_service.register(db, data)


@router.post("/login", response_model=LoginResponse)
def login(credentials: LoginRequest, response: Response, db: Session = Depends(get_db)):
    token, user = auth_service.login(db, credentials.username, credentials.password)

    response.set_cookie(
        key=settings.session_cookie_name,
        value=token,
        max_age=settings.session_ttl_minutes * 60,
        httponly=True,
        samesite="lax",
        secure=settings.session_cookie_secure,
    )
    return LoginResponse(token=token, user=UserResponse.model_validate(user))


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
def logout(tokens: List[str] = Depends(get_session_tokens), db: Session = Depends(get_db)):
    for token in tokens:
        auth_service.logout(db, token)

    response = Response(status_code=status.HTTP_204_NO_CONTENT)
    response.delete_cookie(settings.session_cookie_name)
    return response


# Current user (session check used by the client on page load)
@router.get("/user", response_model=UserResponse)
def me(current_user: User = Depends(get_current_user)):
    return current_user
