"""
Privilege and role models.

This module contains the typed grant entities and their canonical rendering.
Rendering is the inverse of grantkit.grammar: a rendered privilege parses back
to an equal entity.
"""

from __future__ import annotations

from typing import Tuple
from typing_extensions import Self

from pydantic import Field, computed_field, model_validator

from .base import BaseGrantModel
from .enums import GrantOption, PrivilegeKind


def render_clause(kind: PrivilegeKind, names: str, target: str) -> str:
    """
    Render the body of a grant: privilege names plus the kind-specific clause.

    Args:
        kind: Privilege kind deciding the ON clause
        names: One privilege name, or several joined by ", "
        target: Schema, object, source, usergroup or key name

    Returns:
        Body text such as "SELECT, INSERT ON SCHEMA X"
    """
    if kind is PrivilegeKind.SYSTEM:
        return names
    if kind is PrivilegeKind.SOURCE:
        return f"{names} ON REMOTE SOURCE {target}"
    if kind is PrivilegeKind.SCHEMA:
        return f"{names} ON SCHEMA {target}"
    if kind is PrivilegeKind.OBJECT:
        return f"{names} ON {target}"
    if kind is PrivilegeKind.USERGROUP:
        return f"{names} ON USERGROUP {target}"
    if kind is PrivilegeKind.COLUMN_KEY:
        return f"{names} ON CLIENTSIDE ENCRYPTION COLUMN KEY {target}"
    return f"{names} {target}"


# =============================================================================
# PRIVILEGE MODEL
# =============================================================================

class Privilege(BaseGrantModel):
    """
    A single privilege held by (or desired for) a grantee.

    System privileges have no target. Every other kind is granted on a target:
    a schema, a schema-qualified object, a remote source, a usergroup, a
    column encryption key or a structured privilege name.
    """
    kind: PrivilegeKind = Field(..., description="Kind of privilege")
    name: str = Field(..., min_length=1, description="Privilege verb, possibly multi-word")
    target: str = Field(default="", description="What the privilege is granted on")
    grantable: bool = Field(default=False, description="Whether the grantee may re-grant")

    @model_validator(mode='after')
    def validate_target(self) -> Self:
        """A target is required for every kind except system privileges."""
        if self.kind.has_target and not self.target:
            raise ValueError(f"{self.kind.value} privilege '{self.name}' requires a target")
        if not self.kind.has_target and self.target:
            raise ValueError(f"system privilege '{self.name}' cannot have target '{self.target}'")
        return self

    @property
    def grant_option(self) -> GrantOption:
        """Option suffix used when this privilege is grantable."""
        return self.kind.grant_option

    def qualified_target(self, default_schema: str = "") -> str:
        """Target with unqualified object names placed in default_schema."""
        if self.kind is PrivilegeKind.OBJECT and default_schema and "." not in self.target:
            return f"{default_schema}.{self.target}"
        return self.target

    def render(self, default_schema: str = "") -> str:
        """
        Render the canonical grant string for this privilege.

        Args:
            default_schema: Schema for object targets that were built unqualified

        Returns:
            Canonical string, e.g. "SELECT ON SCHEMA X WITH GRANT OPTION"
        """
        body = render_clause(self.kind, self.name, self.qualified_target(default_schema))
        if self.grantable:
            return f"{body} {self.grant_option.suffix}"
        return body

    def __str__(self) -> str:
        return self.render()


# =============================================================================
# ROLE MODEL
# =============================================================================

class Role(BaseGrantModel):
    """A role granted to a grantee. Roles only accept WITH ADMIN OPTION."""
    name: str = Field(..., min_length=1, description="Role name, optionally schema.role")
    grantable: bool = Field(default=False, description="Granted WITH ADMIN OPTION")

    def render(self) -> str:
        """Render the canonical role string."""
        if self.grantable:
            return f"{self.name} {GrantOption.ADMIN.suffix}"
        return self.name

    def __str__(self) -> str:
        return self.render()


# =============================================================================
# BATCHING UNITS
# =============================================================================

class PrivilegeGroup(BaseGrantModel):
    """
    Privileges sharing (kind, target, grantable), issued as one statement.

    GRANT a, b ON x is equivalent to two single grants but costs one round trip.
    """
    kind: PrivilegeKind
    target: str = ""
    grantable: bool = False
    names: Tuple[str, ...] = Field(..., min_length=1)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def body(self) -> str:
        """Statement body without grantee or option, e.g. "SELECT, INSERT ON S.T"."""
        return render_clause(self.kind, ", ".join(self.names), self.target)

    def grant_statement(self, grantee: str) -> str:
        """GRANT statement, with the kind's option suffix when grantable."""
        statement = f"GRANT {self.body} TO {grantee}"
        if self.grantable:
            statement += f" {self.kind.grant_option.suffix}"
        return statement

    def revoke_statement(self, grantee: str) -> str:
        """REVOKE statement. Revokes never carry an option suffix."""
        return f"REVOKE {self.body} FROM {grantee}"


class RoleGroup(BaseGrantModel):
    """Roles sharing the same admin option, issued as one statement."""
    grantable: bool = False
    names: Tuple[str, ...] = Field(..., min_length=1)

    def grant_statement(self, grantee: str) -> str:
        statement = f"GRANT {', '.join(self.names)} TO {grantee}"
        if self.grantable:
            statement += f" {GrantOption.ADMIN.suffix}"
        return statement
