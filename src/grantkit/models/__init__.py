"""
Grant models.

Typed privilege and role entities, the batching units built from them, and
the enums that classify them.
"""

from .base import BaseGrantModel
from .enums import GranteeType, GrantOption, ManagementPolicy, PrivilegeKind
from .privileges import Privilege, PrivilegeGroup, Role, RoleGroup, render_clause

__all__ = [
    # Base
    "BaseGrantModel",
    # Enums
    "GrantOption",
    "GranteeType",
    "ManagementPolicy",
    "PrivilegeKind",
    # Entities
    "Privilege",
    "Role",
    # Batching units
    "PrivilegeGroup",
    "RoleGroup",
    "render_clause",
]
