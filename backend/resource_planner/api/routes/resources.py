from typing import List, Optional
from fastapi import APIRouter, Depends

from resource_planner.api.deps import get_organization_scope
from resource_planner.models.resource import Resource, ResourceType
from resource_planner.schemas.resource import ResourceCreate, ResourceUpdate, ResourceResponse
from resource_planner.services.repositories import OrganizationScope
from resource_planner.services.resources import ResourceService

router = APIRouter()


def to_response(resource: Resource) -> ResourceResponse:
    return ResourceResponse(
        id=resource.id,
        organization_id=resource.organization_id,
        name=resource.name,
        type=resource.type,
        hourly_rate=float(resource.hourly_rate),
        daily_work_hours=float(resource.daily_work_hours),
        currency=resource.currency,
        is_active=resource.is_active,
        created_at=resource.created_at,
        updated_at=resource.updated_at,
    )


@router.get("/", response_model=List[ResourceResponse])
async def list_resources(
    type: Optional[ResourceType] = None,
    is_active: Optional[bool] = None,
    scope: OrganizationScope = Depends(get_organization_scope),
):
    """List the organization's resources. Can filter by type and active flag."""
    resources = ResourceService(scope).list(resource_type=type, is_active=is_active)
    return [to_response(r) for r in resources]


@router.post("/", response_model=ResourceResponse, status_code=201)
async def create_resource(
    resource_data: ResourceCreate,
    scope: OrganizationScope = Depends(get_organization_scope),
):
    """Create a new resource."""
    return to_response(ResourceService(scope).create(resource_data))


@router.get("/{resource_id}", response_model=ResourceResponse)
async def get_resource(
    resource_id: int,
    scope: OrganizationScope = Depends(get_organization_scope),
):
    """Get resource by ID."""
    return to_response(ResourceService(scope).get(resource_id))


@router.patch("/{resource_id}", response_model=ResourceResponse)
async def update_resource(
    resource_id: int,
    resource_data: ResourceUpdate,
    scope: OrganizationScope = Depends(get_organization_scope),
):
    """Update a resource. At least one field is required."""
    return to_response(ResourceService(scope).update(resource_id, resource_data))


@router.delete("/{resource_id}", response_model=ResourceResponse)
async def deactivate_resource(
    resource_id: int,
    scope: OrganizationScope = Depends(get_organization_scope),
):
    """Deactivate a resource. Its patterns and exceptions are kept."""
    return to_response(ResourceService(scope).deactivate(resource_id))
