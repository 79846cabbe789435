"""
Domain Errors

Every error the availability core can report. Each carries a machine
readable ``code``, a human message and, for input problems, the ``field``
it refers to. The API layer maps the families below onto HTTP statuses.
"""

from typing import Any, Dict, List, Optional


class DomainError(Exception):
    """Base class for errors reported to callers."""

    code = "DOMAIN_ERROR"

    def __init__(self, message: str, field: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.field = field
        self.details = details

    def to_dict(self) -> Dict[str, Any]:
        data = {"detail": self.message, "code": self.code, "field": self.field}
        if self.details:
            data["details"] = self.details
        return data


# Input validation -----------------------------------------------------------

class ValidationError(DomainError):
    code = "VALIDATION_ERROR"


class InvalidFormatError(ValidationError):
    code = "INVALID_FORMAT"


class InvalidRangeError(ValidationError):
    code = "INVALID_RANGE"


class PrecisionError(ValidationError):
    code = "PRECISION_ERROR"


class InvalidCurrencyError(ValidationError):
    code = "INVALID_CURRENCY"


class InvalidDateFormatError(ValidationError):
    code = "INVALID_DATE_FORMAT"


class InvalidDateRangeError(ValidationError):
    code = "INVALID_DATE_RANGE"


class IncompleteWeekError(ValidationError):
    code = "INCOMPLETE_WEEK"


class NoActiveDaysError(ValidationError):
    code = "NO_ACTIVE_DAYS"


# Domain limits --------------------------------------------------------------

class LimitExceededError(DomainError):
    code = "LIMIT_EXCEEDED"


class RangeTooLargeError(LimitExceededError):
    code = "RANGE_TOO_LARGE"

    def __init__(self, days: int, max_days: int):
        super().__init__(
            f"Date range cannot exceed {max_days} days (got {days})",
            field="end_date",
            details={"days": days, "max_days": max_days},
        )


class TooManyResourcesError(LimitExceededError):
    code = "TOO_MANY_RESOURCES"

    def __init__(self, count: int, max_resources: int):
        super().__init__(
            f"Cannot query more than {max_resources} resources at once (got {count})",
            field="resource_ids",
            details={"count": count, "max_resources": max_resources},
        )


# Lookups --------------------------------------------------------------------

class NotFoundError(DomainError):
    code = "NOT_FOUND"


class OrganizationNotFoundError(NotFoundError):
    code = "ORGANIZATION_NOT_FOUND"

    def __init__(self, organization_id: int):
        super().__init__(f"Organization with ID {organization_id} not found")
        self.organization_id = organization_id


class ResourceNotFoundError(NotFoundError):
    code = "RESOURCE_NOT_FOUND"

    def __init__(self, resource_ids: List[int]):
        ids = ", ".join(str(i) for i in resource_ids)
        noun = "Resource" if len(resource_ids) == 1 else "Resources"
        super().__init__(f"{noun} with ID {ids} not found", details={"resource_ids": list(resource_ids)})
        self.resource_ids = list(resource_ids)


class PatternNotFoundError(NotFoundError):
    code = "PATTERN_NOT_FOUND"

    def __init__(self, resource_id: int):
        super().__init__(f"No weekly pattern configured for resource {resource_id}")
        self.resource_id = resource_id


class ExceptionNotFoundError(NotFoundError):
    code = "EXCEPTION_NOT_FOUND"

    def __init__(self, exception_id: int):
        super().__init__(f"Availability exception with ID {exception_id} not found")
        self.exception_id = exception_id


# Uniqueness -----------------------------------------------------------------

class ConflictError(DomainError):
    code = "CONFLICT"


class ExceptionConflictError(ConflictError):
    code = "EXCEPTION_CONFLICT"

    def __init__(self, resource_id: int, exception_date):
        super().__init__(
            f"Exception already exists for resource {resource_id} on date {exception_date}",
            field="exception_date",
            details={"resource_id": resource_id, "exception_date": str(exception_date)},
        )
        self.resource_id = resource_id
        self.exception_date = exception_date
