# marketplace/services/auth_service.py
"""
Registration, login and session handling.

Sessions live in the ``user_sessions`` table; the token given to the
client is never stored, only its HMAC (see ``core.security``).  Expiry is
sliding: every successful lookup pushes ``expires_at`` forward by
``settings.session_ttl_minutes``.
"""

import logging
from datetime import datetime, timedelta
from typing import Optional, Tuple, Union

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from marketplace.core.config import settings
from marketplace.core.errors import DuplicateIdentity, InvalidCredentials, NotFound
from marketplace.core.security import hash_password, hash_session_token, new_session_token, verify_password
from marketplace.db.models.category import ServiceCategory
from marketplace.db.models.provider import ServiceProvider
from marketplace.db.models.session import UserSession
from marketplace.db.models.user import Role, User
from marketplace.schemas.user import CustomerRegister, ProviderRegister

logger = logging.getLogger(__name__)


def _session_expiry() -> datetime:
    return datetime.utcnow() + timedelta(minutes=settings.session_ttl_minutes)


def register(db: Session, data: Union[CustomerRegister, ProviderRegister]) -> User:
    """Create a user, plus the provider profile when ``data.role`` is "provider".

    Raises ``DuplicateIdentity`` when the username or email is taken and
    ``NotFound`` when a provider names an unknown category.
    """
    email = data.email.lower()
    existing = db.query(User).filter(or_(User.username == data.username, User.email == email)).first()
    if existing:
        field = "Username" if existing.username == data.username else "Email"
        logger.warning("Registration rejected, %s already in use: %s", field.lower(), data.username)
        raise DuplicateIdentity(f"{field} already registered")

    if data.role == Role.PROVIDER:
        category = db.query(ServiceCategory).filter(ServiceCategory.id == data.category_id).first()
        if not category:
            raise NotFound("Category not found")

    user = User(
        username=data.username,
        email=email,
        full_name=data.full_name,
        phone=data.phone,
        role=data.role,
        password_hash=hash_password(data.password),
    )
    db.add(user)

    try:
        if data.role == Role.PROVIDER:
            db.flush()
            db.add(ServiceProvider(
                user_id=user.id,
                category_id=data.category_id,
                company_name=data.company_name,
                description=data.description,
                location=data.location,
                experience=data.experience,
                contact_info=data.contact_info,
                tags=list(data.tags),
                image_url=data.image_url,
                rating=0.0,
                review_count=0,
            ))
        db.commit()
    except IntegrityError:
        # lost a race against a concurrent registration with the same identity
        db.rollback()
        raise DuplicateIdentity("Username or email already registered")

    db.refresh(user)
    logger.info("Registered %s %s (id=%s)", user.role, user.username, user.id)
    return user


def login(db: Session, username: str, password: str) -> Tuple[str, User]:
    """Verify credentials and open a session. Returns ``(token, user)``."""
    user = db.query(User).filter(User.username == username).first()
    if not user or not verify_password(password, user.password_hash):
        logger.warning("Failed login for %s", username)
        raise InvalidCredentials("Invalid username or password")

    purge_expired_sessions(db)

    token = new_session_token()
    db.add(UserSession(token_hash=hash_session_token(token), user_id=user.id, expires_at=_session_expiry()))
    db.commit()

    logger.info("User %s logged in", user.id)
    return token, user


def current_user(db: Session, token: str) -> Optional[User]:
    session = db.query(UserSession).filter(UserSession.token_hash == hash_session_token(token)).first()
    if not session or session.expires_at <= datetime.utcnow():
        return None

    session.expires_at = _session_expiry()
    db.commit()
    return db.query(User).filter(User.id == session.user_id).first()


def logout(db: Session, token: Optional[str]) -> None:
    # idempotent: unknown or missing tokens are ignored
    if not token:
        return
    deleted = db.query(UserSession).filter(UserSession.token_hash == hash_session_token(token)).delete()
    db.commit()
    if deleted:
        logger.info("Session closed")


def purge_expired_sessions(db: Session) -> int:
    return db.query(UserSession).filter(UserSession.expires_at <= datetime.utcnow()).delete()
