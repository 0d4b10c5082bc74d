"""Resource endpoints: filtered listing, scoped statistics, and CRUD by UUID."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.api.v1.auth import get_current_user
from app.api.v1.errors import service_errors
from app.core.config import get_settings
from app.core.database import get_db
from app.schemas.auth import Caller
from app.schemas.pagination import Paginated
from app.schemas.resource import (
    ResourceCreate,
    ResourceDeleted,
    ResourceFilters,
    ResourceRead,
    ResourceUpdate,
)
from app.schemas.stats import ResourceStats
from app.services import resources as resource_service
from app.services.resource_query import list_resources
from app.services.stats import resource_stats

router = APIRouter()


@router.get("", response_model=Paginated[ResourceRead])
def get_resources(
    db: Annotated[Session, Depends(get_db)],
    caller: Annotated[Caller, Depends(get_current_user)],
    search: str | None = None,
    status_: Annotated[list[str] | None, Query(alias="status")] = None,
    priority: Annotated[list[str] | None, Query()] = None,
    type_: Annotated[str | None, Query(alias="type")] = None,
    assigned_to: Annotated[int | None, Query(alias="assignedTo")] = None,
    sort_by: Annotated[str, Query(alias="sortBy")] = "created_at",
    sort_order: Annotated[str, Query(alias="sortOrder")] = "desc",
    page: int = 1,
    per_page: Annotated[int | None, Query(alias="perPage")] = None,
) -> Paginated[ResourceRead]:
    """
    List resources visible to the caller.

    status and priority accept repeated values or a comma-separated list
    (OR within the filter); all filters combine with AND. Defaults: sortBy
    created_at, sortOrder desc, perPage 15.
    """
    settings = get_settings()
    filters = ResourceFilters(
        search=search,
        status=status_ or [],
        priority=priority or [],
        type=type_,
        assigned_to=assigned_to,
        sort_by=sort_by,
        sort_order=sort_order,
        page=page,
        per_page=per_page if per_page is not None else settings.DEFAULT_PER_PAGE,
    )
    with service_errors("fetch resources", user_id=caller.id):
        result = list_resources(db, caller, filters, settings)
        return Paginated[ResourceRead](
            data=[ResourceRead.model_validate(r) for r in result.items],
            pagination=result.meta(),
        )


@router.get("/stats", response_model=ResourceStats)
def get_resource_stats(
    db: Annotated[Session, Depends(get_db)],
    caller: Annotated[Caller, Depends(get_current_user)],
) -> ResourceStats:
    """Dashboard figures: global for administrators, own/assigned resources for everyone else."""
    with service_errors("fetch dashboard statistics", user_id=caller.id):
        return resource_stats(db, caller, get_settings())


@router.post("", response_model=ResourceRead, status_code=status.HTTP_201_CREATED)
def post_resource(
    body: ResourceCreate,
    db: Annotated[Session, Depends(get_db)],
    caller: Annotated[Caller, Depends(get_current_user)],
) -> ResourceRead:
    """Create a resource owned by the caller."""
    with service_errors("create resource", user_id=caller.id):
        resource = resource_service.create_resource(db, caller, body)
        return ResourceRead.model_validate(resource)


@router.get("/{resource_uuid}", response_model=ResourceRead)
def get_resource(
    resource_uuid: str,
    db: Annotated[Session, Depends(get_db)],
    caller: Annotated[Caller, Depends(get_current_user)],
) -> ResourceRead:
    with service_errors("fetch resource", user_id=caller.id, resource_uuid=resource_uuid):
        return ResourceRead.model_validate(resource_service.get_resource(db, caller, resource_uuid))


@router.put("/{resource_uuid}", response_model=ResourceRead)
def put_resource(
    resource_uuid: str,
    body: ResourceUpdate,
    db: Annotated[Session, Depends(get_db)],
    caller: Annotated[Caller, Depends(get_current_user)],
) -> ResourceRead:
    """Partial update; only the owner or an administrator may change a resource."""
    with service_errors("update resource", user_id=caller.id, resource_uuid=resource_uuid):
        resource = resource_service.update_resource(db, caller, resource_uuid, body)
        return ResourceRead.model_validate(resource)


@router.delete("/{resource_uuid}", response_model=ResourceDeleted)
def delete_resource(
    resource_uuid: str,
    db: Annotated[Session, Depends(get_db)],
    caller: Annotated[Caller, Depends(get_current_user)],
) -> ResourceDeleted:
    """Soft-delete; the resource disappears from listings and statistics."""
    with service_errors("delete resource", user_id=caller.id, resource_uuid=resource_uuid):
        resource_service.delete_resource(db, caller, resource_uuid)
    return ResourceDeleted()
