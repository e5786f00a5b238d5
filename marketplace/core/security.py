# marketplace/core/security.py
"""
Password hashing, session tokens and the FastAPI auth dependencies.

Passwords are hashed with PBKDF2-HMAC-SHA256 and a per-password salt.
Sessions are opaque random tokens handed to the client in an HTTP-only
cookie (or an ``Authorization: Bearer`` header for non-browser clients);
the database only stores an HMAC of the token keyed with
``settings.secret_key``, so a leaked sessions table cannot be replayed.
"""

import hashlib
import hmac
import os
import secrets
from typing import Callable, List, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from marketplace.core.config import settings
from marketplace.core.errors import Forbidden, Unauthenticated
from marketplace.db.base import get_db
from marketplace.db.models.user import User

PBKDF2_ITERATIONS = 100_000


def hash_password(password: str) -> str:
    """Return ``"<salt hex>$<digest hex>"`` for the given password."""
    salt = os.urandom(16)
    dk = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, PBKDF2_ITERATIONS)
    return f"{salt.hex()}${dk.hex()}"


def verify_password(plain_password: str, hashed_password: str) -> bool:
    try:
        salt_hex, hash_hex = hashed_password.split("$", 1)
        salt = bytes.fromhex(salt_hex)
        stored_hash = bytes.fromhex(hash_hex)
    except ValueError:
        # malformed credential never verifies
        return False
    dk = hashlib.pbkdf2_hmac("sha256", plain_password.encode("utf-8"), salt, PBKDF2_ITERATIONS)
    return hmac.compare_digest(dk, stored_hash)


def new_session_token() -> str:
    return secrets.token_urlsafe(32)


def hash_session_token(token: str) -> str:
    return hmac.new(settings.secret_key.encode("utf-8"), token.encode("utf-8"), hashlib.sha256).hexdigest()


bearer = HTTPBearer(auto_error=False)


def get_session_tokens(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer),
) -> List[str]:
    """Candidate session tokens, cookie first, then the bearer header."""
    tokens = []
    cookie = request.cookies.get(settings.session_cookie_name)
    if cookie:
        tokens.append(cookie)
    if credentials is not None and credentials.credentials not in tokens:
        tokens.append(credentials.credentials)
    return tokens


def get_optional_user(
    tokens: List[str] = Depends(get_session_tokens),
    db: Session = Depends(get_db),
) -> Optional[User]:
    from marketplace.services import auth_service
    # a stale cookie must not shadow a valid bearer token
    for token in tokens:
        user = auth_service.current_user(db, token)
        if user is not None:
            return user
    return None


def get_current_user(user: Optional[User] = Depends(get_optional_user)) -> User:
    """Dependency returning the logged-in user; 401 when there is no valid session."""
    if user is None:
        raise Unauthenticated("You must be logged in")
    return user


def require_role(role: str) -> Callable[[User], User]:
    """Dependency factory restricting a route to users with the given role.

    Use as ``Depends(require_role(Role.CUSTOMER))``.
    """

    def _role_dependency(current_user: User = Depends(get_current_user)) -> User:
        if current_user.role != role:
            raise Forbidden(f"Only {role}s can perform this action")
        return current_user

    return _role_dependency
