"""JWT login, registration, verification and auth dependencies (get_current_user, require_admin)."""

from typing import Annotated

import jwt
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.api.v1.errors import service_errors
from app.core.database import get_db
from app.core.security import create_access_token, decode_access_token, user_id_from_claims
from app.models import User
from app.schemas.auth import (
    Caller,
    LoginRequest,
    MeResponse,
    MessageResponse,
    RegisterRequest,
    TokenResponse,
)
from app.services import accounts

router = APIRouter()
security = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


@router.post("/login", response_model=TokenResponse)
def login(
    body: LoginRequest,
    db: Annotated[Session, Depends(get_db)],
) -> TokenResponse:
    """
    Authenticate with email and password; returns a JWT access token.
    Include the token in the Authorization header as: Bearer <accessToken>
    """
    with service_errors("log in"):
        user = accounts.authenticate(db, body.email, body.password)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password.",
        )
    token = create_access_token(sub=user.id)
    return TokenResponse(access_token=token, token_type="bearer")


@router.post("/register", response_model=MeResponse, status_code=status.HTTP_201_CREATED)
def register(
    body: RegisterRequest,
    db: Annotated[Session, Depends(get_db)],
) -> MeResponse:
    """Create an unverified 'Regular User' account. The verification link is delivered out of band."""
    with service_errors("register", email_domain=body.email.split("@")[-1]):
        user = accounts.create_user(db, body.name, body.email, body.password)
    return _me(user)


@router.get("/verify/{token}", response_model=MessageResponse)
def verify(
    token: str,
    db: Annotated[Session, Depends(get_db)],
) -> MessageResponse:
    """Confirm the email address behind a verification token; the account becomes active."""
    with service_errors("verify email"):
        accounts.verify_email(db, token)
    return MessageResponse(message="Email verified successfully")


def _load_user(db: Session, credentials: HTTPAuthorizationCredentials | None) -> User:
    if credentials is None:
        raise _unauthorized("Not authenticated")
    try:
        user_id = user_id_from_claims(decode_access_token(credentials.credentials))
    except jwt.PyJWTError:
        raise _unauthorized("Invalid or expired token")
    user = db.query(User).filter(User.id == user_id).first()
    if user is None:
        raise _unauthorized("User not found")
    return user


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[Session, Depends(get_db)],
) -> Caller:
    """Dependency: require valid Bearer JWT and return the caller with roles. Raises 401 if missing or invalid."""
    return accounts.to_caller(_load_user(db, credentials))


def require_admin(
    current_user: Annotated[Caller, Depends(get_current_user)],
) -> Caller:
    """Dependency: require the Administrator role. Raises 403 for everyone else."""
    if not current_user.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Administrator access required",
        )
    return current_user


def _me(user: User) -> MeResponse:
    return MeResponse(
        id=user.id,
        uuid=user.uuid,
        name=user.name,
        email=user.email,
        email_verified_at=user.email_verified_at,
        roles=user.role_names,
        is_admin=accounts.to_caller(user).is_admin,
    )


@router.get("/me", response_model=MeResponse)
def me(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[Session, Depends(get_db)],
) -> MeResponse:
    """Return the authenticated user with role names."""
    return _me(_load_user(db, credentials))
