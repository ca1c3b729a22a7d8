"""
Shared pytest fixtures for grantkit tests.

Provides environment management and fake connections.
"""

import os
from typing import Generator

import pytest

from grantkit.config import POLICY_ENV_VAR
from tests.fixtures import FakeConnection


@pytest.fixture
def strict_environment() -> Generator[None, None, None]:
    """
    Fixture that sets GRANTKIT_PRIVILEGE_POLICY to strict for the test duration.

    Restores the original value after the test completes.
    """
    original = os.environ.get(POLICY_ENV_VAR)
    os.environ[POLICY_ENV_VAR] = "strict"
    yield
    if original is not None:
        os.environ[POLICY_ENV_VAR] = original
    elif POLICY_ENV_VAR in os.environ:
        del os.environ[POLICY_ENV_VAR]


@pytest.fixture
def lax_environment() -> Generator[None, None, None]:
    """
    Fixture that sets GRANTKIT_PRIVILEGE_POLICY to lax for the test duration.

    Restores the original value after the test completes.
    """
    original = os.environ.get(POLICY_ENV_VAR)
    os.environ[POLICY_ENV_VAR] = "lax"
    yield
    if original is not None:
        os.environ[POLICY_ENV_VAR] = original
    elif POLICY_ENV_VAR in os.environ:
        del os.environ[POLICY_ENV_VAR]


@pytest.fixture(autouse=True)
def reset_environment() -> Generator[None, None, None]:
    """
    Autouse fixture that ensures tests start without a policy override.

    This prevents environment bleed between tests.
    """
    original = os.environ.pop(POLICY_ENV_VAR, None)
    yield
    if original is not None:
        os.environ[POLICY_ENV_VAR] = original
    elif POLICY_ENV_VAR in os.environ:
        del os.environ[POLICY_ENV_VAR]


@pytest.fixture
def fake_connection() -> FakeConnection:
    """An empty in-memory connection."""
    return FakeConnection()
