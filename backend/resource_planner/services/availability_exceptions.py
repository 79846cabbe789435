"""
Availability Exceptions

Date-specific overrides of a resource's weekly pattern. At most one
exception exists per resource and date; a second insert fails with
``ExceptionConflictError`` instead of overwriting. Deleting an exception
deactivates it.
"""

import logging
from datetime import date
from decimal import Decimal
from typing import Any, Dict, List, Optional

from sqlalchemy.exc import IntegrityError

from resource_planner.core.exceptions import (
    ExceptionConflictError,
    ExceptionNotFoundError,
    InvalidDateRangeError,
    ValidationError,
)
from resource_planner.models.availability_exception import ResourceAvailabilityException
from resource_planner.schemas.availability_exception import ExceptionCreate, ExceptionUpdate
from resource_planner.services.repositories import OrganizationScope
from resource_planner.services.resources import MAX_HOURLY_RATE, ResourceService
from resource_planner.services.validators import (
    duration_hours,
    parse_time_of_day,
    validate_amount,
    validate_currency_code,
)

logger = logging.getLogger(__name__)

MAX_HOURS_PER_DAY = Decimal("24")
MAX_NOTES_LENGTH = 1000


def validate_exception_fields(values: Dict[str, Any]) -> Dict[str, Any]:
    """Validate and normalize the exception fields present in ``values``."""
    cleaned = dict(values)
    if cleaned.get("hours_available") is not None:
        cleaned["hours_available"] = validate_amount(
            cleaned["hours_available"], "hours_available", maximum=MAX_HOURS_PER_DAY
        )
    if cleaned.get("hourly_rate") is not None:
        cleaned["hourly_rate"] = validate_amount(cleaned["hourly_rate"], "hourly_rate", maximum=MAX_HOURLY_RATE)
    if cleaned.get("currency") is not None:
        validate_currency_code(cleaned["currency"])
    if "notes" in cleaned:
        notes = (cleaned["notes"] or "").strip()
        if len(notes) > MAX_NOTES_LENGTH:
            raise ValidationError(f"Notes cannot exceed {MAX_NOTES_LENGTH} characters", field="notes")
        cleaned["notes"] = notes or None
    for name in ("start_time", "end_time"):
        if cleaned.get(name) is not None:
            cleaned[name] = parse_time_of_day(cleaned[name], name)
    return cleaned


class AvailabilityExceptionService:
    def __init__(self, scope: OrganizationScope):
        self.scope = scope
        self.db = scope.db
        self.resources = ResourceService(scope)

    def get(self, exception_id: int) -> ResourceAvailabilityException:
        exception = self.scope.exceptions.get(exception_id)
        if not exception:
            raise ExceptionNotFoundError(exception_id)
        return exception

    def list_for_resource(
        self,
        resource_id: int,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        include_inactive: bool = False,
    ) -> List[ResourceAvailabilityException]:
        self.resources.get(resource_id)
        if start_date and end_date and end_date < start_date:
            raise InvalidDateRangeError("End date must be after or equal to start date", field="end_date")
        return self.scope.exceptions.list([resource_id], start_date, end_date, include_inactive)

    def create(self, data: ExceptionCreate) -> ResourceAvailabilityException:
        self.resources.get(data.resource_id)
        values = validate_exception_fields(data.model_dump())
        self._check_time_window(values.get("start_time"), values.get("end_time"))

        if self.scope.exceptions.find_for_date(data.resource_id, data.exception_date):
            raise ExceptionConflictError(data.resource_id, data.exception_date)

        exception = ResourceAvailabilityException(**values)
        self.scope.exceptions.add(exception)
        self._commit(data.resource_id, data.exception_date)
        self.db.refresh(exception)
        logger.info(
            f"Created {exception.exception_type.value} exception for resource {exception.resource_id} "
            f"on {exception.exception_date}"
        )
        return exception

    def update(self, exception_id: int, data: ExceptionUpdate) -> ResourceAvailabilityException:
        exception = self.get(exception_id)
        update_data = data.model_dump(exclude_unset=True)
        if not update_data:
            raise ValidationError("At least one field must be provided for update")
        for required in ("exception_date", "hours_available", "exception_type", "is_active"):
            if required in update_data and update_data[required] is None:
                raise ValidationError(f"{required} cannot be null", field=required)

        values = validate_exception_fields(update_data)
        self._check_time_window(
            values.get("start_time", exception.start_time),
            values.get("end_time", exception.end_time),
        )

        new_date = values.get("exception_date")
        if new_date and new_date != exception.exception_date:
            if self.scope.exceptions.find_for_date(exception.resource_id, new_date):
                raise ExceptionConflictError(exception.resource_id, new_date)

        for field, value in values.items():
            setattr(exception, field, value)

        self._commit(exception.resource_id, exception.exception_date)
        self.db.refresh(exception)
        logger.info(f"Updated exception {exception_id} for resource {exception.resource_id}")
        return exception

    def delete(self, exception_id: int) -> ResourceAvailabilityException:
        exception = self.get(exception_id)
        exception.is_active = False
        self.db.commit()
        self.db.refresh(exception)
        logger.info(f"Deactivated exception {exception_id} for resource {exception.resource_id}")
        return exception

    def _check_time_window(self, start, end) -> None:
        if start is not None and end is not None:
            duration_hours(start, end, field="end_time")

    def _commit(self, resource_id: int, exception_date: date) -> None:
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise ExceptionConflictError(resource_id, exception_date)
