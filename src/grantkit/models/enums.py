"""
Enum definitions for grant reconciliation models.

This module contains all enumeration types used throughout the grant system.
"""

from enum import Enum


class GrantOption(str, Enum):
    """Suffix that lets a grantee pass a grant on to others."""
    ADMIN = "ADMIN"  # System privileges and roles
    GRANT = "GRANT"  # Every other privilege kind

    @property
    def suffix(self) -> str:
        """SQL text appended to a GRANT statement."""
        return f"WITH {self.value} OPTION"


class PrivilegeKind(str, Enum):
    """
    Identifies the kind of privilege, which decides the ON clause it renders with.

    Kinds map to the single privilege forms of a HANA GRANT statement:
    - SYSTEM: <system_privilege>
    - SOURCE: <source_privilege> ON REMOTE SOURCE <source_name>
    - SCHEMA: <schema_privilege> ON SCHEMA <schema_name>
    - OBJECT: <object_privilege> ON <schema>.<object>
    - USERGROUP: USERGROUP OPERATOR ON USERGROUP <usergroup_name>
    - COLUMN_KEY: USAGE ON CLIENTSIDE ENCRYPTION COLUMN KEY <key_name>
    - STRUCTURED: STRUCTURED PRIVILEGE <structured_privilege>
    """
    SYSTEM = "system"
    SOURCE = "source"
    SCHEMA = "schema"
    OBJECT = "object"
    USERGROUP = "usergroup"
    COLUMN_KEY = "column"
    STRUCTURED = "structured"

    @property
    def grant_option(self) -> GrantOption:
        """The only grant option this kind accepts."""
        if self is PrivilegeKind.SYSTEM:
            return GrantOption.ADMIN
        return GrantOption.GRANT

    @property
    def has_target(self) -> bool:
        """Whether privileges of this kind are granted on something."""
        return self is not PrivilegeKind.SYSTEM


class ManagementPolicy(str, Enum):
    """
    How much of a grantee's privilege set reconciliation may change.

    STRICT owns every observed privilege and drives the set to match exactly.
    LAX only touches privileges that are desired now or were managed before.
    """
    STRICT = "strict"
    LAX = "lax"


class GranteeType(str, Enum):
    """Principal types recorded in the GRANTED_PRIVILEGES and GRANTED_ROLES views."""
    USER = "USER"
    ROLE = "ROLE"
