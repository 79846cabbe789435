"""Resource management within one organization."""

import re
from decimal import Decimal
from typing import List, Optional

from resource_planner.core.exceptions import ResourceNotFoundError, ValidationError
from resource_planner.models.resource import Resource
from resource_planner.schemas.resource import ResourceCreate, ResourceUpdate
from resource_planner.services.repositories import OrganizationScope
from resource_planner.services.validators import validate_amount, validate_currency_code

HTML_TAG = re.compile(r"<[^>]*>")
MAX_HOURLY_RATE = Decimal("999999.99")
MAX_DAILY_HOURS = Decimal("24")


def validate_resource_name(name: str) -> str:
    name = (name or "").strip()
    if not name:
        raise ValidationError("Resource name cannot be empty", field="name")
    if len(name) > 256:
        raise ValidationError("Resource name cannot exceed 256 characters", field="name")
    if HTML_TAG.search(name):
        raise ValidationError("Resource name cannot contain HTML tags", field="name")
    return name


class ResourceService:
    def __init__(self, scope: OrganizationScope):
        self.scope = scope
        self.db = scope.db

    def get(self, resource_id: int) -> Resource:
        resource = self.scope.resources.get(resource_id)
        if not resource:
            raise ResourceNotFoundError([resource_id])
        return resource

    def list(self, resource_type: Optional[str] = None, is_active: Optional[bool] = None) -> List[Resource]:
        return self.scope.resources.list(resource_type=resource_type, is_active=is_active)

    def create(self, data: ResourceCreate) -> Resource:
        resource = Resource(
            name=validate_resource_name(data.name),
            type=data.type,
            hourly_rate=validate_amount(data.hourly_rate, "hourly_rate", maximum=MAX_HOURLY_RATE, allow_minimum=False),
            daily_work_hours=validate_amount(
                data.daily_work_hours, "daily_work_hours", maximum=MAX_DAILY_HOURS, allow_minimum=False
            ),
            currency=validate_currency_code(data.currency),
            is_active=True,
        )
        self.scope.resources.add(resource)
        self.db.commit()
        self.db.refresh(resource)
        return resource

    def update(self, resource_id: int, data: ResourceUpdate) -> Resource:
        resource = self.get(resource_id)
        update_data = data.model_dump(exclude_unset=True)
        if not update_data:
            raise ValidationError("At least one field must be provided for update")

        if "name" in update_data:
            update_data["name"] = validate_resource_name(update_data["name"])
        if "hourly_rate" in update_data:
            update_data["hourly_rate"] = validate_amount(
                update_data["hourly_rate"], "hourly_rate", maximum=MAX_HOURLY_RATE, allow_minimum=False
            )
        if "daily_work_hours" in update_data:
            update_data["daily_work_hours"] = validate_amount(
                update_data["daily_work_hours"], "daily_work_hours", maximum=MAX_DAILY_HOURS, allow_minimum=False
            )
        if "currency" in update_data:
            validate_currency_code(update_data["currency"])

        for field, value in update_data.items():
            if value is None:
                raise ValidationError(f"{field} cannot be null", field=field)
            setattr(resource, field, value)

        self.db.commit()
        self.db.refresh(resource)
        return resource

    def deactivate(self, resource_id: int) -> Resource:
        resource = self.get(resource_id)
        resource.is_active = False
        self.db.commit()
        self.db.refresh(resource)
        return resource
