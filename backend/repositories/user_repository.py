"""User repository: lookup by id/email, create."""
from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from models.user import User


def normalize_email(email: str) -> str:
    return email.strip().lower()


def get_user(session: Session, user_id: str) -> Optional[User]:
    """Return a user by id or None."""
    return session.get(User, user_id)


def get_user_by_email(session: Session, email: str) -> Optional[User]:
    """Return a user by email (case-insensitive) or None."""
    return session.execute(
        select(User).where(func.lower(User.email) == normalize_email(email))
    ).scalar_one_or_none()


def create_user(
    session: Session,
    *,
    name: str,
    email: str,
    password_hash: str,
    role: str = "user",
) -> User:
    """Create a user, commit, and return it. Email is stored lower-cased."""
    user = User(name=name, email=normalize_email(email), password_hash=password_hash, role=role)
    session.add(user)
    session.commit()
    session.refresh(user)
    return user
