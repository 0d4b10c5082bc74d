"""Resource create / show / update / soft-delete with ownership checks."""

import logging
from datetime import datetime, timezone

from sqlalchemy.orm import Session

from app.models import Resource, User
from app.schemas.auth import Caller
from app.schemas.resource import ResourceCreate, ResourceUpdate
from app.services.access import can_modify_resource, can_view_resource
from app.services.errors import AuthorizationError, NotFoundError, ValidationFailed

logger = logging.getLogger(__name__)

# Fields an update may omit but never set to null.
NON_NULLABLE_FIELDS = ("name", "type", "status", "priority")


def _find_by_uuid(db: Session, resource_uuid: str) -> Resource:
    resource = (
        db.query(Resource)
        .filter(Resource.uuid == resource_uuid, Resource.not_deleted())
        .first()
    )
    if resource is None:
        raise NotFoundError("Resource not found")
    return resource


def _ensure_assignee_exists(db: Session, user_id: int | None) -> None:
    if user_id is None:
        return
    if db.query(User.id).filter(User.id == user_id).first() is None:
        raise ValidationFailed.single("assignedTo", "The selected assigned user does not exist.")


def get_resource(db: Session, caller: Caller, resource_uuid: str) -> Resource:
    """Visible to administrators, the owner and the assignee."""
    resource = _find_by_uuid(db, resource_uuid)
    if not can_view_resource(caller, resource):
        raise AuthorizationError("Unauthorized to access this resource")
    return resource


def create_resource(db: Session, caller: Caller, payload: ResourceCreate) -> Resource:
    """The caller becomes the owner; a fresh UUID is assigned by the model default."""
    _ensure_assignee_exists(db, payload.assigned_to)
    resource = Resource(
        name=payload.name.strip(),
        description=payload.description,
        type=payload.type,
        status=payload.status,
        priority=payload.priority,
        assigned_to=payload.assigned_to,
        due_date=payload.due_date,
        tags=list(payload.tags),
        user_id=caller.id,
    )
    db.add(resource)
    db.commit()
    db.refresh(resource)
    logger.info(
        "Resource created",
        extra={"resource_uuid": resource.uuid, "user_id": caller.id},
    )
    return resource


def update_resource(
    db: Session,
    caller: Caller,
    resource_uuid: str,
    payload: ResourceUpdate,
) -> Resource:
    """Merge only the supplied fields. Ownership never changes."""
    resource = _find_by_uuid(db, resource_uuid)
    if not can_modify_resource(caller, resource):
        raise AuthorizationError("Unauthorized to modify this resource")

    changes = payload.model_dump(exclude_unset=True)
    errors = {
        field: [f"The {field} field cannot be null."]
        for field in NON_NULLABLE_FIELDS
        if field in changes and changes[field] is None
    }
    if errors:
        raise ValidationFailed(errors)
    if "assigned_to" in changes:
        _ensure_assignee_exists(db, changes["assigned_to"])
    if "name" in changes:
        changes["name"] = changes["name"].strip()
    if "tags" in changes and changes["tags"] is None:
        changes["tags"] = []

    for field, value in changes.items():
        setattr(resource, field, value)
    db.commit()
    db.refresh(resource)
    logger.info(
        "Resource updated",
        extra={
            "resource_uuid": resource.uuid,
            "user_id": caller.id,
            "fields": sorted(changes),
        },
    )
    return resource


def delete_resource(db: Session, caller: Caller, resource_uuid: str) -> None:
    """Soft-delete: the row stays but drops out of every query and aggregate."""
    resource = _find_by_uuid(db, resource_uuid)
    if not can_modify_resource(caller, resource):
        raise AuthorizationError("Unauthorized to delete this resource")
    resource.deleted_at = datetime.now(timezone.utc)
    db.commit()
    logger.info(
        "Resource deleted",
        extra={"resource_uuid": resource.uuid, "user_id": caller.id},
    )
