"""Shared fixtures: an in-memory SQLite database and an API client bound to one organization."""

import os

# Must be set before resource_planner.core.database builds its engine
os.environ["DATABASE_URL"] = "sqlite://"

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from resource_planner.core.database import Base, SessionLocal, engine
from resource_planner.main import app
from resource_planner.models.organization import Organization
from resource_planner.models.resource import Resource, ResourceType
from resource_planner.services.repositories import OrganizationScope


@pytest.fixture
def db():
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def organization(db):
    org = Organization(name="Acme", slug="acme", timezone="Europe/Madrid")
    db.add(org)
    db.commit()
    db.refresh(org)
    return org


@pytest.fixture
def other_organization(db):
    org = Organization(name="Globex", slug="globex")
    db.add(org)
    db.commit()
    db.refresh(org)
    return org


@pytest.fixture
def scope(db, organization):
    return OrganizationScope(db, organization)


@pytest.fixture
def make_resource(db):
    def _make(organization, name="Ana", hourly_rate="20.00", currency="USD", type=ResourceType.HUMAN, is_active=True):
        resource = Resource(
            organization_id=organization.id,
            name=name,
            type=type,
            hourly_rate=Decimal(hourly_rate),
            daily_work_hours=Decimal("8"),
            currency=currency,
            is_active=is_active,
        )
        db.add(resource)
        db.commit()
        db.refresh(resource)
        return resource

    return _make


@pytest.fixture
def resource(make_resource, organization):
    return make_resource(organization)


@pytest.fixture
def client(db, organization):
    with TestClient(app) as test_client:
        test_client.headers.update({"X-Organization-Id": str(organization.id)})
        yield test_client
