"""Account lifecycle: registration, credential checks, email verification, roles."""

import logging
from datetime import datetime, timezone

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.security import generate_verification_token, hash_password, verify_password
from app.models import Role, User
from app.schemas.auth import ADMIN_ROLE, DEFAULT_ROLE, ROLE_NAMES, Caller
from app.services.errors import NotFoundError, ValidationFailed

logger = logging.getLogger(__name__)

EMAIL_TAKEN = "The email has already been taken."

ROLE_DESCRIPTIONS = {
    ADMIN_ROLE: "Full system access with administrative privileges",
    DEFAULT_ROLE: "Standard user with limited access",
}


def normalize_email(email: str) -> str:
    return email.strip().lower()


def get_or_create_role(db: Session, name: str) -> Role:
    """Roles are seeded by migration; create on demand for fresh databases and tests."""
    if name not in ROLE_NAMES:
        raise ValidationFailed.single("role", f"Unknown role: {name}")
    role = db.query(Role).filter(Role.name == name).first()
    if role is None:
        role = Role(name=name, description=ROLE_DESCRIPTIONS.get(name))
        db.add(role)
        db.flush()
    return role


def find_by_email(db: Session, email: str) -> User | None:
    return db.query(User).filter(func.lower(User.email) == normalize_email(email)).first()


def create_user(
    db: Session,
    name: str,
    email: str,
    password: str,
    roles: list[str] | None = None,
    verified: bool = False,
) -> User:
    """Insert a user with the given roles (default 'Regular User'). Email must be unused."""
    if find_by_email(db, email) is not None:
        raise ValidationFailed.single("email", EMAIL_TAKEN)
    user = User(
        name=name.strip(),
        email=normalize_email(email),
        password_hash=hash_password(password),
        email_verified_at=datetime.now(timezone.utc) if verified else None,
        verification_token=None if verified else generate_verification_token(),
    )
    user.roles = [get_or_create_role(db, r) for r in (roles or [DEFAULT_ROLE])]
    db.add(user)
    try:
        db.commit()
    except IntegrityError as e:
        # A concurrent registration took the email between the check and the insert.
        db.rollback()
        raise ValidationFailed.single("email", EMAIL_TAKEN) from e
    db.refresh(user)
    logger.info("User created", extra={"user_id": user.id, "roles": user.role_names})
    return user


def authenticate(db: Session, email: str, password: str) -> User | None:
    """Return the user when the credentials match, else None."""
    user = find_by_email(db, email)
    if user is None or not verify_password(password, user.password_hash):
        return None
    return user


def verify_email(db: Session, token: str) -> User:
    """Mark the account holding this verification token as verified (active)."""
    user = db.query(User).filter(User.verification_token == token).first()
    if user is None:
        raise NotFoundError("Invalid or expired verification token")
    user.email_verified_at = datetime.now(timezone.utc)
    user.verification_token = None
    db.commit()
    db.refresh(user)
    logger.info("Email verified", extra={"user_id": user.id})
    return user


def to_caller(user: User) -> Caller:
    """Identity attached to a request: the role set is resolved once, here."""
    return Caller(
        id=user.id,
        name=user.name,
        email=user.email,
        roles=frozenset(user.role_names),
    )
