"""
Pytest configuration and shared fixtures.
"""

import itertools
import uuid

import pytest

from itservices.database import init_database, get_session
from itservices.logger import get_logger, reset_logger
from itservices.models import ItService
from storage.repositories.it_services import ItServiceRepository


@pytest.fixture(autouse=True)
def isolated_logger(tmp_path):
    """Global logger writing to a temporary directory, fresh for each test."""
    reset_logger()
    logger = get_logger(log_dir=tmp_path / "logs", enable_console=False)
    yield logger
    reset_logger()


@pytest.fixture
def id_factory():
    """Deterministic UUID generator: UUID(int=1), UUID(int=2), ..."""
    counter = itertools.count(1)
    return lambda: uuid.UUID(int=next(counter))


@pytest.fixture
def m1():
    return uuid.UUID("11111111-0000-0000-0000-000000000001")


@pytest.fixture
def m2():
    return uuid.UUID("11111111-0000-0000-0000-000000000002")


@pytest.fixture
def s1():
    return uuid.UUID("22222222-0000-0000-0000-000000000001")


@pytest.fixture
def s2():
    return uuid.UUID("22222222-0000-0000-0000-000000000002")


@pytest.fixture
def s3():
    return uuid.UUID("22222222-0000-0000-0000-000000000003")


@pytest.fixture
def stored_services(m1, m2, s1, s2, s3):
    """A small catalogue covering matches, near-misses and unset attributes."""
    return {
        "a": ItService(id=uuid.UUID("aaaaaaaa-0000-0000-0000-000000000001"), manager=m1, subdivision=s1),
        "b": ItService(id=uuid.UUID("aaaaaaaa-0000-0000-0000-000000000002"), manager=m1, subdivision=s2),
        "c": ItService(id=uuid.UUID("aaaaaaaa-0000-0000-0000-000000000003"), manager=m1, subdivision=s3),
        "d": ItService(id=uuid.UUID("aaaaaaaa-0000-0000-0000-000000000004"), manager=m2, subdivision=s1),
        "e": ItService(id=uuid.UUID("aaaaaaaa-0000-0000-0000-000000000005"), manager=None, subdivision=s1),
        "f": ItService(id=uuid.UUID("aaaaaaaa-0000-0000-0000-000000000006"), manager=m1, subdivision=None),
    }


@pytest.fixture
def db_path(tmp_path):
    path = tmp_path / "it_services.db"
    init_database(path)
    return path


@pytest.fixture
def db_session(db_path):
    """Create a temporary database and return a session."""
    session = get_session(db_path)
    yield session
    session.close()


@pytest.fixture
def seeded_db(db_path, stored_services):
    """Temporary database populated with stored_services."""
    session = get_session(db_path)
    ItServiceRepository(session).add_all(stored_services.values())
    session.close()
    return db_path
