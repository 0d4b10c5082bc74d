"""Shared helpers: in-memory SQLite store built from the ORM metadata, and row factories."""

from datetime import datetime, timedelta, timezone

from sqlalchemy.orm import Session, sessionmaker

from app.core.database import build_engine
from app.core.security import hash_password
from app.models import Base, Resource, Role, User
from app.schemas.auth import ADMIN_ROLE, DEFAULT_ROLE, Caller
from app.services.accounts import to_caller

PASSWORD = "correct-horse-battery"
# Hashing is slow by design; hash once for every fixture user.
PASSWORD_HASH = hash_password(PASSWORD)

BASE_TIME = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


def make_session_factory() -> sessionmaker:
    """Fresh in-memory database shared across threads (TestClient runs handlers in a threadpool)."""
    engine = build_engine("sqlite://")
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


def get_role(db: Session, name: str) -> Role:
    role = db.query(Role).filter(Role.name == name).first()
    if role is None:
        role = Role(name=name)
        db.add(role)
        db.flush()
    return role


def add_user(
    db: Session,
    name: str,
    email: str | None = None,
    roles: tuple[str, ...] = (DEFAULT_ROLE,),
    verified: bool = True,
    created_at: datetime | None = None,
) -> User:
    user = User(
        name=name,
        email=email or f"{name.lower().replace(' ', '.')}@example.com",
        password_hash=PASSWORD_HASH,
        email_verified_at=BASE_TIME if verified else None,
        created_at=created_at or BASE_TIME,
        updated_at=created_at or BASE_TIME,
    )
    user.roles = [get_role(db, r) for r in roles]
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def add_admin(db: Session, name: str = "Ada Admin") -> User:
    return add_user(db, name, roles=(ADMIN_ROLE,))


def add_resource(db: Session, owner: User, name: str, minutes: int = 0, **fields: object) -> Resource:
    """Resource owned by owner; minutes offsets created_at/updated_at from BASE_TIME for ordering."""
    stamp = BASE_TIME + timedelta(minutes=minutes)
    values: dict[str, object] = {
        "type": "task",
        "status": "pending",
        "priority": "medium",
        "tags": [],
        "created_at": stamp,
        "updated_at": stamp,
    }
    values.update(fields)
    resource = Resource(name=name, user_id=owner.id, **values)
    db.add(resource)
    db.commit()
    db.refresh(resource)
    return resource


def caller(user: User) -> Caller:
    return to_caller(user)
