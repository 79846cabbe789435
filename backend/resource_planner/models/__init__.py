from resource_planner.models.organization import Organization
from resource_planner.models.resource import Resource, ResourceType
from resource_planner.models.work_schedule import ResourceWorkSchedule
from resource_planner.models.availability_exception import ResourceAvailabilityException, ExceptionType

__all__ = [
    "Organization",
    "Resource",
    "ResourceType",
    "ResourceWorkSchedule",
    "ResourceAvailabilityException",
    "ExceptionType",
]
