"""Auth API routes: register, login, current user."""
import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from api.deps import get_current_user
from db import get_db
from models.user import User
from repositories.user_repository import create_user as repo_create_user
from repositories.user_repository import get_user_by_email as repo_get_user_by_email
from schemas.auth import AuthResponse, LoginRequest, RegisterRequest, UserResponse
from utils.errors import AuthError, ValidationError
from utils.security import create_access_token, hash_password, verify_password

LOG = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


def _user_to_response(user: User) -> UserResponse:
    """Build UserResponse from model instance."""
    return UserResponse(id=user.id, name=user.name, email=user.email, role=user.role)


def _auth_response(user: User) -> AuthResponse:
    return AuthResponse(
        user=_user_to_response(user),
        token=create_access_token(user.id, user.role),
    )


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(body: RegisterRequest, db: Session = Depends(get_db)) -> AuthResponse:
    """Register a user and return it with a fresh token."""
    if repo_get_user_by_email(db, body.email) is not None:
        raise ValidationError.for_field("email", "Email already registered")
    try:
        user = repo_create_user(
            db,
            name=body.name,
            email=body.email,
            password_hash=hash_password(body.password),
        )
    except IntegrityError as e:
        db.rollback()
        raise ValidationError.for_field("email", "Email already registered") from e
    LOG.info("Registered user %s", user.id)
    return _auth_response(user)


@router.post("/login", response_model=AuthResponse)
def login(body: LoginRequest, db: Session = Depends(get_db)) -> AuthResponse:
    """Exchange email + password for a token. Unknown email and wrong password fail identically."""
    user = repo_get_user_by_email(db, body.email)
    if user is None or not verify_password(body.password, user.password_hash):
        LOG.warning("Failed login attempt")
        raise AuthError("Invalid credentials")
    return _auth_response(user)


@router.get("/me", response_model=UserResponse)
def me(current_user: User = Depends(get_current_user)) -> UserResponse:
    """Return the user the bearer token belongs to."""
    return _user_to_response(current_user)
