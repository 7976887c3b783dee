"""
Shared fixtures: an in-memory catalog, a fixed clock and one user per role
"""
from datetime import date, timedelta

import pytest

from bto_allocation.application.services import AllocationEngine
from bto_allocation.domain.entities import Applicant, Manager, Officer, Profile
from bto_allocation.domain.enums import FlatType, MaritalStatus
from bto_allocation.infrastructure.persistence.repositories import new_catalog


TODAY = date(2025, 6, 1)


def make_profile(nric, age, marital_status, password_hash="hashed"):
    return Profile(nric=nric, password_hash=password_hash, age=age, marital_status=marital_status)


def project_request(name="Acacia Breeze", **overrides):
    request = {
        "name": name,
        "neighborhood": "Yishun",
        "flat_units": {FlatType.TWO_ROOM: 2, FlatType.THREE_ROOM: 3},
        "open_date": TODAY - timedelta(days=5),
        "close_date": TODAY + timedelta(days=30),
        "visible": True,
    }
    request.update(overrides)
    return request


@pytest.fixture
def catalog():
    return new_catalog()


@pytest.fixture
def engine(catalog):
    return AllocationEngine.from_catalog(catalog, clock=lambda: TODAY)


@pytest.fixture
def single_applicant(catalog):
    """Single, 35: two-room only"""
    return catalog.users.add(Applicant(make_profile("S1234567A", 35, MaritalStatus.SINGLE)))


@pytest.fixture
def married_applicant(catalog):
    return catalog.users.add(Applicant(make_profile("T7654321B", 40, MaritalStatus.MARRIED)))


@pytest.fixture
def young_single(catalog):
    """Single, 30: nothing"""
    return catalog.users.add(Applicant(make_profile("T2345678D", 30, MaritalStatus.SINGLE)))


@pytest.fixture
def officer(catalog):
    return catalog.users.add(Officer(make_profile("T2109876H", 36, MaritalStatus.MARRIED)))


@pytest.fixture
def second_officer(catalog):
    return catalog.users.add(Officer(make_profile("S6543210I", 28, MaritalStatus.MARRIED)))


@pytest.fixture
def manager(catalog):
    return catalog.users.add(Manager(make_profile("T8765432F", 29, MaritalStatus.SINGLE)))


@pytest.fixture
def other_manager(catalog):
    return catalog.users.add(Manager(make_profile("S5678901G", 26, MaritalStatus.MARRIED)))


@pytest.fixture
def project(engine, manager):
    """Visible project open today: 2 two-room and 3 three-room units"""
    result = engine.create_project(manager, project_request())
    assert result.ok, result.message
    return result.value


@pytest.fixture
def approved_officer(engine, manager, officer, project):
    """Officer approved on the shared project"""
    assert engine.register_officer(officer, project.name).ok
    assert engine.approve_officer(manager, officer.nric, project.name).ok
    return officer
