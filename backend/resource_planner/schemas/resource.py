from typing import Optional
from datetime import datetime
from decimal import Decimal

from resource_planner.models.resource import ResourceType
from resource_planner.schemas.base import CamelModel


class ResourceBase(CamelModel):
    name: str
    type: ResourceType = ResourceType.HUMAN
    hourly_rate: Decimal
    daily_work_hours: Decimal = Decimal("8")
    currency: str = "USD"


class ResourceCreate(ResourceBase):
    pass


class ResourceUpdate(CamelModel):
    name: Optional[str] = None
    type: Optional[ResourceType] = None
    hourly_rate: Optional[Decimal] = None
    daily_work_hours: Optional[Decimal] = None
    currency: Optional[str] = None
    is_active: Optional[bool] = None


class ResourceResponse(CamelModel):
    id: int
    organization_id: int
    name: str
    type: ResourceType
    hourly_rate: float
    daily_work_hours: float
    currency: str
    is_active: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
