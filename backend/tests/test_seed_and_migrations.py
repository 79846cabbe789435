from datetime import date
from pathlib import Path

from alembic import command
from alembic.config import Config
from sqlalchemy import create_engine, inspect

from resource_planner.models.availability_exception import ResourceAvailabilityException
from resource_planner.models.resource import Resource
from resource_planner.models.work_schedule import ResourceWorkSchedule
from resource_planner.scripts.seed_data import seed_all
from resource_planner.services.aggregator import TimelineAggregator
from resource_planner.services.repositories import OrganizationScope, SqlAvailabilitySource

BACKEND_ROOT = Path(__file__).resolve().parents[1]


def test_seed_all_creates_resolvable_data(db):
    organization = seed_all(db, start=date(2024, 1, 1))

    assert db.query(Resource).filter(Resource.organization_id == organization.id).count() == 5
    assert db.query(ResourceWorkSchedule).count() == 35
    assert db.query(ResourceAvailabilityException).count() == 4

    source = SqlAvailabilitySource(OrganizationScope(db, organization))
    timeline = TimelineAggregator(source).resolve_batch(None, "2024-01-01", "2024-01-07")
    assert len(timeline.resources) == 5
    ana = next(item for item in timeline.resources if item.resource.name == "Ana Torres")
    assert ana.days[2].hours_available == 0
    assert ana.days[3].cost == 240


def test_seed_all_is_idempotent(db):
    first = seed_all(db, start=date(2024, 1, 1))
    second = seed_all(db, start=date(2024, 1, 1))
    assert first.id == second.id
    assert db.query(Resource).count() == 5


def test_migration_matches_models(tmp_path):
    url = f"sqlite:///{tmp_path / 'migrated.db'}"
    config = Config(str(BACKEND_ROOT / "alembic.ini"))
    config.set_main_option("script_location", str(BACKEND_ROOT / "alembic"))
    config.set_main_option("sqlalchemy.url", url)

    command.upgrade(config, "head")

    inspector = inspect(create_engine(url))
    tables = set(inspector.get_table_names())
    assert {
        "organizations", "resources", "resource_work_schedules", "resource_availability_exceptions",
    } <= tables
    unique = {c["name"] for c in inspector.get_unique_constraints("resource_availability_exceptions")}
    assert "uq_availability_exception_resource_date" in unique
    unique = {c["name"] for c in inspector.get_unique_constraints("resource_work_schedules")}
    assert "uq_work_schedule_resource_day" in unique

    command.downgrade(config, "base")
    assert "resources" not in inspect(create_engine(url)).get_table_names()
