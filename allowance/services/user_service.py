import logging
import secrets
from datetime import datetime, timedelta, timezone

from sqlalchemy import select
from sqlalchemy.orm import Session

from ..core.config import settings
from ..core.errors import IntegrityViolation, NotFoundError, ValidationError
from ..db import store
from ..models.auth import RefreshToken
from ..models.user import User
from .security import create_access_token, hash_password, verify_password

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


def _check_password(password: str) -> None:
    if not password or len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError("Password is too short")


def get_by_email(db: Session, email: str) -> User | None:
    return db.execute(select(User).where(User.email == email)).scalar_one_or_none()


def create_user(db: Session, *, email: str, password: str) -> User:
    _check_password(password)
    if get_by_email(db, email):
        logger.warning(f"Signup failed: email already registered - {email}")
        raise ValidationError("Email already in use")
    try:
        user = store.save(db, User(email=email, hashed_password=hash_password(password)))
    except IntegrityViolation as e:
        raise ValidationError("Email already in use") from e
    logger.info(f"User created successfully: id={user.id}, email={user.email}")
    return user


def update_user(db: Session, user: User, *, email: str | None = None, password: str | None = None) -> User:
    if email is not None and email != user.email:
        if get_by_email(db, email):
            raise ValidationError("Email already in use")
        user.email = email
    if password is not None:
        _check_password(password)
        user.hashed_password = hash_password(password)
    try:
        return store.save(db, user)
    except IntegrityViolation as e:
        raise ValidationError("Email already in use") from e


def delete_user(db: Session, user_id: str) -> None:
    if not store.delete(db, User, user_id):
        raise NotFoundError("User not found")
    logger.info(f"User deleted: id={user_id}")


def authenticate(db: Session, email: str, password: str) -> User | None:
    user = get_by_email(db, email)
    if not user or not user.is_active:
        return None
    if not verify_password(password, user.hashed_password):
        return None
    return user


def issue_tokens(db: Session, user: User) -> tuple[str, str]:
    """Return ``(access_token, refresh_token)`` for a logged-in user."""
    access = create_access_token(user.id, user.email)
    refresh_plain = secrets.token_urlsafe(48)
    store.save(db, RefreshToken(
        user_id=user.id,
        token=refresh_plain,
        expires_at=datetime.now(timezone.utc) + timedelta(days=settings.REFRESH_TOKEN_DAYS),
    ))
    return access, refresh_plain


def _find_refresh(db: Session, refresh_token: str) -> RefreshToken | None:
    return db.execute(
        select(RefreshToken).where(RefreshToken.token == refresh_token, RefreshToken.is_revoked.is_(False))
    ).scalar_one_or_none()


def refresh_access_token(db: Session, refresh_token: str) -> tuple[str, str] | None:
    """
    Exchange a refresh token for a new ``(access_token, refresh_token)`` pair.

    The presented token is revoked, so it works only once.
    """
    rt = _find_refresh(db, refresh_token)
    if not rt:
        return None

    # normalize tz to avoid "offset-naive vs offset-aware" (SQLite drops tzinfo)
    if rt.expires_at:
        exp = rt.expires_at
        exp = exp.replace(tzinfo=timezone.utc) if exp.tzinfo is None else exp.astimezone(timezone.utc)
        if exp < datetime.now(timezone.utc):
            return None

    user = store.get(db, User, rt.user_id)
    if not user or not user.is_active:
        return None
    rt.revoke()
    store.save(db, rt)
    return issue_tokens(db, user)


def revoke_refresh_token(db: Session, refresh_token: str) -> bool:
    rt = _find_refresh(db, refresh_token)
    if not rt:
        return False
    rt.revoke()
    store.save(db, rt)
    logger.info(f"Refresh token revoked for user {rt.user_id}")
    return True
