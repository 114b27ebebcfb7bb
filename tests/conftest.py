"""
Pytest configuration file for all tests.

Every test gets a fresh in-memory SQLite database seeded with two
organizations and their responsible employees.
"""

from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool
from sqlmodel import Session

from app.database import get_session
from app.main import app
from app.models import (
    Base,
    Employee,
    Organization,
    OrganizationResponsible,
    OrganizationType,
    Tender,
    TenderServiceType,
    TenderStatus,
)


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def people(session):
    """
    Two organizations:
    - acme, represented by alice and anna
    - globex, represented by bob
    carol is a registered employee without an organization.
    """
    acme = Organization(name="Acme", type=OrganizationType.LLC)
    globex = Organization(name="Globex", type=OrganizationType.JSC)
    alice = Employee(username="alice", first_name="Alice")
    anna = Employee(username="anna", first_name="Anna")
    bob = Employee(username="bob", first_name="Bob")
    carol = Employee(username="carol", first_name="Carol")
    session.add_all([acme, globex, alice, anna, bob, carol])
    session.flush()
    session.add_all([
        OrganizationResponsible(organization_id=acme.id, user_id=alice.id),
        OrganizationResponsible(organization_id=acme.id, user_id=anna.id),
        OrganizationResponsible(organization_id=globex.id, user_id=bob.id),
    ])
    ids = SimpleNamespace(
        acme=acme.id,
        globex=globex.id,
        alice=alice.id,
        anna=anna.id,
        bob=bob.id,
        carol=carol.id,
    )
    session.commit()
    return ids


@pytest.fixture
def make_tender(session, people):
    def _make_tender(name="Road repair", organization_id=None, creator="alice",
                     status=TenderStatus.CREATED, service_type=TenderServiceType.CONSTRUCTION,
                     description="Fix the potholes"):
        tender = Tender(
            name=name,
            description=description,
            service_type=service_type,
            status=status,
            organization_id=organization_id or people.acme,
            creator_username=creator,
        )
        session.add(tender)
        session.commit()
        session.refresh(tender)
        return tender

    return _make_tender


@pytest.fixture
def client(engine, people):
    def _get_session():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_session] = _get_session
    yield TestClient(app)
    app.dependency_overrides.clear()
