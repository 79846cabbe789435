from fastapi import Depends, Header
from sqlalchemy.orm import Session

from resource_planner.core.database import get_db
from resource_planner.services.repositories import OrganizationScope, SqlAvailabilitySource


def get_organization_scope(
    x_organization_id: int = Header(..., description="Organization of the authenticated caller"),
    db: Session = Depends(get_db),
) -> OrganizationScope:
    """Repositories bound to the caller's organization. Authentication happens upstream."""
    return OrganizationScope.load(db, x_organization_id)


def get_availability_source(
    scope: OrganizationScope = Depends(get_organization_scope),
) -> SqlAvailabilitySource:
    return SqlAvailabilitySource(scope)
