"""
Access scoping: who sees which resources, and who may manage what.

Administrators see and manage everything. Everyone else sees resources they
own or are assigned to, may modify only the ones they own, and is denied the
user directory outright. All functions are pure in (caller, target).
"""

from sqlalchemy import or_
from sqlalchemy.sql.elements import ColumnElement

from app.models import Resource
from app.schemas.auth import Caller
from app.services.errors import AuthorizationError


def resource_visibility(caller: Caller) -> ColumnElement[bool] | None:
    """Visibility predicate for resource queries; None means unrestricted."""
    if caller.is_admin:
        return None
    return or_(Resource.user_id == caller.id, Resource.assigned_to == caller.id)


def visible_resource_conditions(caller: Caller) -> list[ColumnElement[bool]]:
    """WHERE conditions every resource read starts from: not soft-deleted, then visibility."""
    conditions: list[ColumnElement[bool]] = [Resource.not_deleted()]
    predicate = resource_visibility(caller)
    if predicate is not None:
        conditions.append(predicate)
    return conditions


def can_view_resource(caller: Caller, resource: Resource) -> bool:
    if caller.is_admin:
        return True
    return caller.id in (resource.user_id, resource.assigned_to)


def can_modify_resource(caller: Caller, resource: Resource) -> bool:
    """Only the owner or an administrator may update or delete a resource."""
    return caller.is_admin or resource.user_id == caller.id


def require_user_directory_access(caller: Caller) -> None:
    """User listing and statistics are administrator-only; others get an error, not a narrowed result."""
    if not caller.is_admin:
        raise AuthorizationError("Administrator access required")
