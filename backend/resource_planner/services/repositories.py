"""
Organization-scoped repositories.

Each repository is bound to one organization id when it is constructed and
every query it issues is filtered by that id, so callers cannot reach rows
of another organization by passing a foreign id.
"""

from datetime import date
from decimal import Decimal
from typing import Dict, Generic, List, Optional, Sequence, Type, TypeVar

from sqlalchemy.orm import Query, Session

from resource_planner.core.exceptions import OrganizationNotFoundError
from resource_planner.models.availability_exception import ResourceAvailabilityException
from resource_planner.models.organization import Organization
from resource_planner.models.resource import Resource
from resource_planner.models.work_schedule import ResourceWorkSchedule
from resource_planner.services.patterns import DailyPattern, DayOfWeek, WeeklyPattern
from resource_planner.services.timeline import ExceptionRecord, ResourceBase
from resource_planner.services.validators import format_time_of_day

ModelT = TypeVar("ModelT")


class ScopedRepository(Generic[ModelT]):
    """Base repository for models carrying an ``organization_id`` column."""

    model: Type[ModelT]

    def __init__(self, db: Session, organization_id: int):
        self.db = db
        self.organization_id = organization_id

    def query(self) -> Query:
        return self.db.query(self.model).filter(self.model.organization_id == self.organization_id)

    def get(self, entity_id: int) -> Optional[ModelT]:
        return self.query().filter(self.model.id == entity_id).first()

    def add(self, entity: ModelT) -> ModelT:
        entity.organization_id = self.organization_id
        self.db.add(entity)
        return entity


class ResourceRepository(ScopedRepository[Resource]):
    model = Resource

    def list(
        self,
        resource_ids: Optional[Sequence[int]] = None,
        resource_type: Optional[str] = None,
        is_active: Optional[bool] = None,
    ) -> List[Resource]:
        query = self.query()
        if resource_ids is not None:
            query = query.filter(Resource.id.in_(list(resource_ids)))
        if resource_type:
            query = query.filter(Resource.type == resource_type)
        if is_active is not None:
            query = query.filter(Resource.is_active == is_active)
        return query.order_by(Resource.name, Resource.id).all()


class WorkScheduleRepository(ScopedRepository[ResourceWorkSchedule]):
    """Pattern rows have no organization column; they are scoped through their resource."""

    model = ResourceWorkSchedule

    def query(self) -> Query:
        return self.db.query(ResourceWorkSchedule).join(Resource).filter(
            Resource.organization_id == self.organization_id
        )

    def add(self, entity: ResourceWorkSchedule) -> ResourceWorkSchedule:
        self.db.add(entity)
        return entity

    def for_resources(self, resource_ids: Sequence[int]) -> List[ResourceWorkSchedule]:
        return self.query().filter(
            ResourceWorkSchedule.resource_id.in_(list(resource_ids))
        ).order_by(ResourceWorkSchedule.resource_id, ResourceWorkSchedule.day_of_week).all()

    def delete_for_resource(self, resource_id: int) -> int:
        rows = self.for_resources([resource_id])
        for row in rows:
            self.db.delete(row)
        return len(rows)


class ExceptionRepository(ScopedRepository[ResourceAvailabilityException]):
    model = ResourceAvailabilityException

    def list(
        self,
        resource_ids: Sequence[int],
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        include_inactive: bool = False,
    ) -> List[ResourceAvailabilityException]:
        query = self.query().filter(ResourceAvailabilityException.resource_id.in_(list(resource_ids)))
        if start_date:
            query = query.filter(ResourceAvailabilityException.exception_date >= start_date)
        if end_date:
            query = query.filter(ResourceAvailabilityException.exception_date <= end_date)
        if not include_inactive:
            query = query.filter(ResourceAvailabilityException.is_active.is_(True))
        return query.order_by(ResourceAvailabilityException.exception_date).all()

    def find_for_date(self, resource_id: int, exception_date: date) -> Optional[ResourceAvailabilityException]:
        return self.query().filter(
            ResourceAvailabilityException.resource_id == resource_id,
            ResourceAvailabilityException.exception_date == exception_date,
        ).first()


class OrganizationScope:
    """Capability object handing out repositories bound to one organization."""

    def __init__(self, db: Session, organization: Organization):
        self.db = db
        self.organization = organization
        self.organization_id = organization.id
        self.resources = ResourceRepository(db, organization.id)
        self.work_schedules = WorkScheduleRepository(db, organization.id)
        self.exceptions = ExceptionRepository(db, organization.id)

    @classmethod
    def load(cls, db: Session, organization_id: int) -> "OrganizationScope":
        organization = db.query(Organization).filter(Organization.id == organization_id).first()
        if not organization:
            raise OrganizationNotFoundError(organization_id)
        return cls(db, organization)


def to_resource_base(resource: Resource) -> ResourceBase:
    return ResourceBase(
        id=resource.id,
        hourly_rate=Decimal(resource.hourly_rate),
        currency=resource.currency,
        is_active=resource.is_active,
        name=resource.name,
        type=resource.type.value if hasattr(resource.type, "value") else resource.type,
    )


def to_weekly_pattern(rows: Sequence[ResourceWorkSchedule]) -> Optional[WeeklyPattern]:
    """Rebuild a pattern from its stored rows; an incomplete set counts as no pattern."""
    if len(rows) != 7:
        return None
    days = tuple(
        DailyPattern(
            day_of_week=DayOfWeek.from_weekday(row.day_of_week),
            is_active=row.is_active,
            start_time=format_time_of_day(row.start_time),
            end_time=format_time_of_day(row.end_time),
            hourly_rate=Decimal(row.hourly_rate) if row.hourly_rate is not None else None,
        )
        for row in sorted(rows, key=lambda r: r.day_of_week)
    )
    return WeeklyPattern(days=days, currency=rows[0].currency)


def to_exception_record(row: ResourceAvailabilityException) -> ExceptionRecord:
    return ExceptionRecord(
        id=row.id,
        resource_id=row.resource_id,
        exception_date=row.exception_date,
        hours_available=Decimal(row.hours_available),
        exception_type=row.exception_type.value if hasattr(row.exception_type, "value") else row.exception_type,
        is_active=row.is_active,
        hourly_rate=Decimal(row.hourly_rate) if row.hourly_rate is not None else None,
        currency=row.currency,
        notes=row.notes,
    )


class SqlAvailabilitySource:
    """Availability source backed by the organization-scoped repositories."""

    def __init__(self, scope: OrganizationScope):
        self.scope = scope
        self.organization_id = scope.organization_id

    def get_resource_base(self, resource_id: int) -> Optional[ResourceBase]:
        resource = self.scope.resources.get(resource_id)
        return to_resource_base(resource) if resource else None

    def get_weekly_pattern(self, resource_id: int) -> Optional[WeeklyPattern]:
        return to_weekly_pattern(self.scope.work_schedules.for_resources([resource_id]))

    def get_exceptions(self, resource_id: int, start_date: date, end_date: date) -> List[ExceptionRecord]:
        rows = self.scope.exceptions.list([resource_id], start_date, end_date)
        return [to_exception_record(row) for row in rows]

    def list_resources(self, resource_ids: Optional[Sequence[int]] = None) -> List[ResourceBase]:
        return [to_resource_base(r) for r in self.scope.resources.list(resource_ids=resource_ids)]

    def get_weekly_patterns(self, resource_ids: Sequence[int]) -> Dict[int, WeeklyPattern]:
        grouped: Dict[int, List[ResourceWorkSchedule]] = {}
        for row in self.scope.work_schedules.for_resources(resource_ids):
            grouped.setdefault(row.resource_id, []).append(row)
        patterns = {}
        for resource_id, rows in grouped.items():
            pattern = to_weekly_pattern(rows)
            if pattern is not None:
                patterns[resource_id] = pattern
        return patterns

    def get_exceptions_for(
        self, resource_ids: Sequence[int], start_date: date, end_date: date
    ) -> Dict[int, List[ExceptionRecord]]:
        grouped: Dict[int, List[ExceptionRecord]] = {}
        for row in self.scope.exceptions.list(resource_ids, start_date, end_date):
            grouped.setdefault(row.resource_id, []).append(to_exception_record(row))
        return grouped

    def get_timezone(self) -> Optional[str]:
        return self.scope.organization.timezone
