"""ORM model for tracked resources (projects, tasks, inventory, documents)."""

from uuid import uuid4

from sqlalchemy import JSON, CheckConstraint, Column, DateTime, ForeignKey, Index, Integer, String, Text, func
from sqlalchemy.orm import relationship

from app.models.base import Base, utcnow
from app.models.user import User


class Resource(Base):
    """
    A unit of work owned by the user who created it (user_id) and optionally
    assigned to another user (assigned_to).

    Soft-deleted rows keep their data and carry deleted_at; every query must
    exclude them (see ``Resource.not_deleted()``).
    """

    __tablename__ = "resources"
    __table_args__ = (
        Index("ix_resources_status_priority", "status", "priority"),
        Index("ix_resources_type_status", "type", "status"),
        CheckConstraint(
            "type IN ('project', 'task', 'inventory', 'document', 'other')",
            name="ck_resources_type",
        ),
        CheckConstraint(
            "status IN ('pending', 'in_progress', 'completed', 'cancelled')",
            name="ck_resources_status",
        ),
        CheckConstraint(
            "priority IN ('low', 'medium', 'high', 'urgent')",
            name="ck_resources_priority",
        ),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    uuid = Column(
        String(36),
        nullable=False,
        unique=True,
        index=True,
        default=lambda: str(uuid4()),
    )
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    type = Column(String(32), nullable=False, default="other")
    status = Column(String(32), nullable=False, default="pending")
    priority = Column(String(32), nullable=False, default="medium")
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    assigned_to = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)
    due_date = Column(DateTime(timezone=True), nullable=True, index=True)
    tags = Column(JSON, nullable=False, default=list)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
        onupdate=utcnow,
    )
    deleted_at = Column(DateTime(timezone=True), nullable=True)

    owner = relationship(User, foreign_keys=[user_id], lazy="joined")
    assignee = relationship(User, foreign_keys=[assigned_to], lazy="joined")

    @classmethod
    def not_deleted(cls):
        """Predicate excluding soft-deleted rows."""
        return cls.deleted_at.is_(None)
