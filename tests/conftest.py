"""
Pytest configuration and shared fixtures.
"""
from datetime import date

import pytest
from fastapi.testclient import TestClient

from leadtracker.api.deps import get_store
from leadtracker.main import app
from leadtracker.models.lead import Lead, LeadStatus, MobileNumber
from leadtracker.repositories.lead_repo import LeadRepository
from leadtracker.repositories.store import InMemoryStore
from leadtracker.services.lead_service import LeadService

TODAY = date(2024, 1, 15)


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def lead_repo(store):
    return LeadRepository(store)


@pytest.fixture
def lead_service(lead_repo):
    return LeadService(lead_repo)


@pytest.fixture
def client(store):
    """TestClient over the app with the store swapped for an in-memory one."""
    app.dependency_overrides[get_store] = lambda: store
    yield TestClient(app)
    app.dependency_overrides.clear()


def make_lead(**overrides) -> Lead:
    """A minimal admitted lead; keyword overrides use field names."""
    fields = {
        "kva": "100",
        "consumer_number": "31245007891",
        "client_name": "Raj Patel",
        "status": LeadStatus.NEW,
    }
    fields.update(overrides)
    lead = Lead(**fields)
    lead.sync_main_number()
    return lead


def contact(number: str, name: str = "", is_main: bool = False, id: str = "1") -> MobileNumber:
    return MobileNumber(id=id, number=number, name=name, is_main=is_main)
