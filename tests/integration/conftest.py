"""
Integration test fixtures for grantkit.

Provides a live SAP HANA connection, test user naming and cleanup. Tests
are skipped unless HANA_ADDRESS, HANA_USER and HANA_PASSWORD are set and
hdbcli is installed.
"""

import logging
import os
import uuid
from dataclasses import dataclass, field
from typing import Generator, List

import pytest

from grantkit.executors import DbApiConnection
from grantkit.grammar import quote_identifier

logger = logging.getLogger(__name__)


@dataclass
class ResourceTracker:
    """
    Tracks created principals for cleanup after tests.

    Roles are dropped before users.
    """

    users: List[str] = field(default_factory=list)
    roles: List[str] = field(default_factory=list)

    def add_user(self, name: str) -> None:
        """Track a user for cleanup."""
        if name not in self.users:
            self.users.append(name)

    def add_role(self, name: str) -> None:
        """Track a role for cleanup."""
        if name not in self.roles:
            self.roles.append(name)


@pytest.fixture(scope="session")
def hana_connection() -> Generator[DbApiConnection, None, None]:
    """Session-scoped connection built from HANA_* environment variables."""
    dbapi = pytest.importorskip("hdbcli.dbapi")
    address = os.environ.get("HANA_ADDRESS")
    user = os.environ.get("HANA_USER")
    password = os.environ.get("HANA_PASSWORD")
    if not (address and user and password):
        pytest.skip("HANA_ADDRESS, HANA_USER and HANA_PASSWORD are required")

    try:
        raw = dbapi.connect(
            address=address,
            port=int(os.environ.get("HANA_PORT", "443")),
            user=user,
            password=password,
            encrypt=True,
        )
    except Exception as e:
        pytest.skip(f"Could not connect to SAP HANA: {e}")

    logger.info(f"Connected to SAP HANA at {address} as {user}")
    yield DbApiConnection(raw)
    raw.close()


@pytest.fixture
def resource_tracker() -> ResourceTracker:
    """Fixture that provides a resource tracker for the test."""
    return ResourceTracker()


@pytest.fixture(autouse=True)
def cleanup_resources(
    hana_connection: DbApiConnection,
    resource_tracker: ResourceTracker,
) -> Generator[None, None, None]:
    """
    Autouse fixture that drops tracked principals after each test.

    Failed cleanups are logged but don't fail the test.
    """
    yield

    for role in reversed(resource_tracker.roles):
        try:
            hana_connection.execute(f"DROP ROLE {quote_identifier(role)}")
            logger.info(f"Cleaned up role: {role}")
        except Exception as e:
            logger.warning(f"Failed to cleanup role {role}: {e}")

    for user in reversed(resource_tracker.users):
        try:
            hana_connection.execute(f"DROP USER {quote_identifier(user)} CASCADE")
            logger.info(f"Cleaned up user: {user}")
        except Exception as e:
            logger.warning(f"Failed to cleanup user {user}: {e}")


@pytest.fixture
def test_user(hana_connection: DbApiConnection, resource_tracker: ResourceTracker) -> str:
    """A fresh user with its own schema, dropped after the test."""
    name = f"GRANTKIT_TEST_{uuid.uuid4().hex[:8].upper()}"
    hana_connection.execute(f"CREATE USER {name} PASSWORD \"Grantkit_{uuid.uuid4().hex[:12]}\" NO FORCE_FIRST_PASSWORD_CHANGE")
    resource_tracker.add_user(name)
    return name
