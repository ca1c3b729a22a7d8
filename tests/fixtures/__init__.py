"""Test fixtures for grantkit."""

from .fake_connection import FakeConnection, FakeCursor, FakeDbApiConnection, StatementFailed
from .grant_factories import make_grant_spec, make_privilege, make_role

__all__ = [
    "FakeConnection",
    "FakeCursor",
    "FakeDbApiConnection",
    "StatementFailed",
    "make_grant_spec",
    "make_privilege",
    "make_role",
]
