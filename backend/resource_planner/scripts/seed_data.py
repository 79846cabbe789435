"""
Sample Data Seeder

Creates a demo organization with:
- Human, material and equipment resources at different rates
- Weekly patterns (defaults, a part-time week, weekend equipment shifts)
- A company holiday and a few individual exceptions

Run with: python -m resource_planner.scripts.seed_data
"""

from datetime import date, timedelta
from decimal import Decimal
from typing import List

from sqlalchemy.orm import Session

from resource_planner.core.database import SessionLocal, engine, Base
from resource_planner.models.organization import Organization
from resource_planner.models.resource import Resource, ResourceType
from resource_planner.models.availability_exception import ExceptionType
from resource_planner.schemas.availability_exception import ExceptionCreate
from resource_planner.schemas.resource import ResourceCreate
from resource_planner.services.availability_exceptions import AvailabilityExceptionService
from resource_planner.services.pattern_service import PatternService
from resource_planner.services.patterns import DAYS_OF_WEEK
from resource_planner.services.repositories import OrganizationScope
from resource_planner.services.resources import ResourceService

DEMO_SLUG = "demo"

RESOURCE_DATA = [
    {"name": "Ana Torres", "type": ResourceType.HUMAN, "hourly_rate": Decimal("50.00")},
    {"name": "Ben Okafor", "type": ResourceType.HUMAN, "hourly_rate": Decimal("42.50")},
    {"name": "Chloe Martin", "type": ResourceType.HUMAN, "hourly_rate": Decimal("38.75"), "currency": "EUR"},
    {"name": "Forklift FL-2", "type": ResourceType.EQUIPMENT, "hourly_rate": Decimal("15.00")},
    {"name": "Scaffolding Set A", "type": ResourceType.MATERIAL, "hourly_rate": Decimal("3.20")},
]


def create_organization(db: Session) -> Organization:
    """Create the demo organization, or return it if it already exists."""
    organization = db.query(Organization).filter(Organization.slug == DEMO_SLUG).first()
    if organization:
        print(f"Organization '{DEMO_SLUG}' already exists (id={organization.id})")
        return organization

    organization = Organization(name="Demo Works", slug=DEMO_SLUG, timezone="America/New_York")
    db.add(organization)
    db.commit()
    db.refresh(organization)
    print(f"Created organization {organization.name} (id={organization.id})")
    return organization


def create_resources(scope: OrganizationScope) -> List[Resource]:
    service = ResourceService(scope)
    resources = [service.create(ResourceCreate(**data)) for data in RESOURCE_DATA]
    print(f"Created {len(resources)} resources")
    return resources


def create_patterns(scope: OrganizationScope, resources: List[Resource]) -> None:
    service = PatternService(scope)
    for resource in resources:
        if resource.name == "Ben Okafor":
            # Part-time: Monday to Wednesday mornings
            days = [
                {"day_of_week": day, "is_active": day.weekday < 3, "start_time": "08:00", "end_time": "12:30"}
                for day in DAYS_OF_WEEK
            ]
            service.replace_pattern(resource.id, days, resource.currency)
        elif resource.type == ResourceType.EQUIPMENT:
            # Runs every day, weekends at a premium rate
            days = [
                {
                    "day_of_week": day,
                    "is_active": True,
                    "start_time": "06:00",
                    "end_time": "18:00",
                    "hourly_rate": Decimal("22.50") if day.weekday >= 5 else None,
                }
                for day in DAYS_OF_WEEK
            ]
            service.replace_pattern(resource.id, days, resource.currency)
        else:
            service.reset_to_defaults(resource.id, resource.currency)
    print(f"Created weekly patterns for {len(resources)} resources")


def create_exceptions(scope: OrganizationScope, resources: List[Resource], start: date) -> None:
    service = AvailabilityExceptionService(scope)
    holiday = start + timedelta(days=(2 - start.weekday()) % 7)  # next Wednesday
    count = 0

    for resource in resources:
        if resource.type != ResourceType.HUMAN:
            continue
        service.create(ExceptionCreate(
            resource_id=resource.id,
            exception_date=holiday,
            hours_available=Decimal("0"),
            exception_type=ExceptionType.HOLIDAY,
            notes="Company holiday",
        ))
        count += 1

    first = resources[0]
    service.create(ExceptionCreate(
        resource_id=first.id,
        exception_date=holiday + timedelta(days=1),
        hours_available=Decimal("4"),
        exception_type=ExceptionType.TRAINING,
        start_time="09:00",
        end_time="13:00",
        hourly_rate=Decimal("60.00"),
        notes="Safety certification",
    ))
    count += 1
    print(f"Created {count} availability exceptions")


def seed_all(db: Session, start: date = None) -> Organization:
    """Run all seed functions."""
    print("\n" + "="*50)
    print("SEEDING RESOURCE PLANNER DATABASE")
    print("="*50 + "\n")

    organization = create_organization(db)
    scope = OrganizationScope(db, organization)
    if scope.resources.list():
        print("Resources already present, skipping")
        return organization

    resources = create_resources(scope)
    create_patterns(scope, resources)
    create_exceptions(scope, resources, start or date.today())

    print("\n" + "="*50)
    print("SEEDING COMPLETE")
    print("="*50)
    print(f"\nUse header X-Organization-Id: {organization.id}\n")
    return organization


def main():
    """Main entry point."""
    # Create tables if they don't exist
    Base.metadata.create_all(bind=engine)

    db = SessionLocal()
    try:
        seed_all(db)
    except Exception as e:
        print(f"Error seeding database: {e}")
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    main()
