"""
Reader for the grants a principal currently holds.

Queries the GRANTED_PRIVILEGES and GRANTED_ROLES system views and renders
each row in the canonical form the grammar produces, so observed and desired
grants compare as plain strings.
"""

import logging
from typing import Any, List, Optional, Sequence, Tuple

from grantkit.grammar import quote_identifier
from grantkit.models import GranteeType, Privilege, PrivilegeKind, Role

from .connection import SqlConnection

logger = logging.getLogger(__name__)

PRIVILEGES_QUERY = (
    "SELECT OBJECT_TYPE, PRIVILEGE, SCHEMA_NAME, OBJECT_NAME, IS_GRANTABLE "
    "FROM GRANTED_PRIVILEGES WHERE GRANTEE_TYPE = ?"
)
ROLES_QUERY = (
    "SELECT ROLE_SCHEMA_NAME, ROLE_NAME, IS_GRANTABLE "
    "FROM GRANTED_ROLES WHERE GRANTEE_TYPE = ?"
)

# OBJECT_TYPE values that are not schema objects
_OBJECT_TYPE_KINDS = {
    "SYSTEMPRIVILEGE": PrivilegeKind.SYSTEM,
    "SCHEMA": PrivilegeKind.SCHEMA,
    "SOURCE": PrivilegeKind.SOURCE,
    "USERGROUP": PrivilegeKind.USERGROUP,
    "CLIENTSIDE ENCRYPTION COLUMN KEY": PrivilegeKind.COLUMN_KEY,
    "STRUCTURED_PRIVILEGE": PrivilegeKind.STRUCTURED,
}


def _as_bool(value: Any) -> bool:
    # drivers report IS_GRANTABLE as bool or as 'TRUE'/'FALSE'
    if isinstance(value, str):
        return value.strip().upper() == "TRUE"
    return bool(value)


def grantee_filter(query: str, grantee: str, grantee_type: GranteeType) -> Tuple[str, List[str]]:
    """
    Append grantee conditions to a GRANTED_* query.

    A schema-qualified grantee (SCHEMA.NAME) also filters on GRANTEE_SCHEMA_NAME.

    Returns:
        (query, params) for qmark parameter binding
    """
    params = [GranteeType(grantee_type).value]
    query += " AND GRANTEE = ?"
    schema, sep, name = grantee.partition(".")
    if sep:
        query += " AND GRANTEE_SCHEMA_NAME = ?"
        params.extend([name, schema])
    else:
        params.append(grantee)
    return query, params


def privilege_from_row(
    object_type: str,
    privilege: str,
    schema_name: Optional[str],
    object_name: Optional[str],
    is_grantable: Any,
) -> Privilege:
    """
    Build a Privilege from one GRANTED_PRIVILEGES row.

    Object types without a dedicated kind (TABLE, VIEW, PROCEDURE, ...) become
    object privileges on SCHEMA.OBJECT.
    """
    grantable = _as_bool(is_grantable)
    kind = _OBJECT_TYPE_KINDS.get(object_type, PrivilegeKind.OBJECT)

    if kind is PrivilegeKind.SYSTEM:
        return Privilege(kind=kind, name=privilege, grantable=grantable)
    if kind is PrivilegeKind.SCHEMA:
        return Privilege(kind=kind, name=privilege, target=quote_identifier(schema_name or ""), grantable=grantable)
    if kind is PrivilegeKind.USERGROUP:
        # the view reports OPERATOR; the grammar spells it USERGROUP OPERATOR
        return Privilege(kind=kind, name="USERGROUP OPERATOR", target=quote_identifier(object_name or ""), grantable=grantable)
    if kind is PrivilegeKind.STRUCTURED:
        return Privilege(kind=kind, name="STRUCTURED PRIVILEGE", target=quote_identifier(object_name or ""), grantable=grantable)
    if kind is PrivilegeKind.OBJECT:
        return Privilege(kind=kind, name=privilege, target=f"{quote_identifier(schema_name or '')}.{quote_identifier(object_name or '')}", grantable=grantable)
    return Privilege(kind=kind, name=privilege, target=quote_identifier(object_name or ""), grantable=grantable)


def role_from_row(role_schema_name: Optional[str], role_name: str, is_grantable: Any) -> Role:
    """Build a Role from one GRANTED_ROLES row."""
    name = quote_identifier(role_name)
    if role_schema_name:
        name = f"{quote_identifier(role_schema_name)}.{name}"
    return Role(name=name, grantable=_as_bool(is_grantable))


class GrantReader:
    """Reads the privileges and roles a grantee holds."""

    def __init__(self, connection: SqlConnection):
        self.connection = connection

    def query_privileges(self, grantee: str, grantee_type: GranteeType = GranteeType.USER) -> List[str]:
        """
        Query the privileges held by a grantee.

        Args:
            grantee: User or role name, optionally SCHEMA.NAME
            grantee_type: USER or ROLE

        Returns:
            Canonical privilege strings
        """
        query, params = grantee_filter(PRIVILEGES_QUERY, grantee, grantee_type)
        rows = self.connection.query(query, params)
        observed = [privilege_from_row(*row).render() for row in rows]
        logger.debug(f"Observed {len(observed)} privilege(s) for {grantee}")
        return observed

    def query_roles(self, grantee: str, grantee_type: GranteeType = GranteeType.USER) -> List[str]:
        """Query the roles held by a grantee as canonical strings."""
        query, params = grantee_filter(ROLES_QUERY, grantee, grantee_type)
        rows: Sequence[Tuple[Any, ...]] = self.connection.query(query, params)
        observed = [role_from_row(*row).render() for row in rows]
        logger.debug(f"Observed {len(observed)} role(s) for {grantee}")
        return observed
