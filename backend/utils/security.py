"""Password hashing and bearer token issue/verify."""
import logging
from datetime import datetime, timedelta, timezone

import jwt
from passlib.context import CryptContext

from utils.config import ACCESS_TOKEN_EXPIRE_MINUTES, JWT_ALGORITHM, JWT_SECRET
from utils.errors import AuthError

LOG = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, hashed: str) -> bool:
    """True if password matches hashed. A corrupt hash counts as a mismatch."""
    try:
        return pwd_context.verify(password, hashed)
    except (ValueError, TypeError):
        LOG.warning("Unreadable password hash encountered during verify")
        return False


def create_access_token(user_id: str, role: str, expires_delta: timedelta | None = None) -> str:
    """Issue a signed token carrying user id (sub) and role."""
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES))
    payload = {"sub": user_id, "role": role, "iat": now, "exp": expire}
    return jwt.encode(payload, JWT_SECRET, algorithm=JWT_ALGORITHM)


def decode_access_token(token: str) -> dict:
    """Return the token claims or raise AuthError if expired, tampered or malformed."""
    try:
        payload = jwt.decode(token, JWT_SECRET, algorithms=[JWT_ALGORITHM])
    except jwt.ExpiredSignatureError as e:
        raise AuthError("Token has expired") from e
    except jwt.InvalidTokenError as e:
        raise AuthError("Invalid token") from e
    if not payload.get("sub"):
        raise AuthError("Invalid token")
    return payload
