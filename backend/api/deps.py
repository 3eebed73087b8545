"""Shared route dependencies: bearer token verification."""
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from db import get_db
from models.user import User
from repositories.user_repository import get_user
from utils.errors import AuthError
from utils.security import decode_access_token

# auto_error=False so a missing header surfaces as our AuthError (401), not FastAPI's default.
bearer_scheme = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> User:
    """Verify the Authorization: Bearer token and return its user, or raise AuthError."""
    if credentials is None or not credentials.credentials:
        raise AuthError("Authentication required")
    payload = decode_access_token(credentials.credentials)
    user = get_user(db, payload["sub"])
    if user is None:
        raise AuthError("Invalid token")
    return user
