from typing import List, Optional
from datetime import date
from fastapi import APIRouter, Depends, Query

from resource_planner.api.deps import get_organization_scope
from resource_planner.models.availability_exception import ResourceAvailabilityException
from resource_planner.schemas.availability_exception import ExceptionCreate, ExceptionUpdate, ExceptionResponse
from resource_planner.services.availability_exceptions import AvailabilityExceptionService
from resource_planner.services.repositories import OrganizationScope
from resource_planner.services.validators import format_time_of_day

router = APIRouter()


def to_response(exception: ResourceAvailabilityException) -> ExceptionResponse:
    return ExceptionResponse(
        id=exception.id,
        organization_id=exception.organization_id,
        resource_id=exception.resource_id,
        exception_date=exception.exception_date,
        hours_available=float(exception.hours_available),
        exception_type=exception.exception_type,
        hourly_rate=float(exception.hourly_rate) if exception.hourly_rate is not None else None,
        currency=exception.currency,
        start_time=format_time_of_day(exception.start_time) if exception.start_time else None,
        end_time=format_time_of_day(exception.end_time) if exception.end_time else None,
        is_active=exception.is_active,
        notes=exception.notes,
        created_at=exception.created_at,
        updated_at=exception.updated_at,
    )


@router.get("/", response_model=List[ExceptionResponse])
async def list_exceptions(
    resource_id: int = Query(...),
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    include_inactive: bool = Query(False),
    scope: OrganizationScope = Depends(get_organization_scope),
):
    """List a resource's exceptions, optionally within a date range."""
    exceptions = AvailabilityExceptionService(scope).list_for_resource(
        resource_id, start_date, end_date, include_inactive
    )
    return [to_response(e) for e in exceptions]


@router.post("/", response_model=ExceptionResponse, status_code=201)
async def create_exception(
    exception_data: ExceptionCreate,
    scope: OrganizationScope = Depends(get_organization_scope),
):
    """Create an exception. Fails with 409 if one already exists for the resource and date."""
    return to_response(AvailabilityExceptionService(scope).create(exception_data))


@router.get("/{exception_id}", response_model=ExceptionResponse)
async def get_exception(
    exception_id: int,
    scope: OrganizationScope = Depends(get_organization_scope),
):
    """Get exception by ID."""
    return to_response(AvailabilityExceptionService(scope).get(exception_id))


@router.patch("/{exception_id}", response_model=ExceptionResponse)
async def update_exception(
    exception_id: int,
    exception_data: ExceptionUpdate,
    scope: OrganizationScope = Depends(get_organization_scope),
):
    """Update an exception. Moving it to another date re-checks uniqueness."""
    return to_response(AvailabilityExceptionService(scope).update(exception_id, exception_data))


@router.delete("/{exception_id}", response_model=ExceptionResponse)
async def delete_exception(
    exception_id: int,
    scope: OrganizationScope = Depends(get_organization_scope),
):
    """Soft-delete an exception; it no longer affects timelines."""
    return to_response(AvailabilityExceptionService(scope).delete(exception_id))
