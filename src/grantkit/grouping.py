"""
Batching of privileges and roles into minimal statement sets.

A single GRANT a, b ON x costs one round trip instead of two. Privileges are
only merged when kind, target and grantable all match, because the option
suffix applies to the whole statement.
"""

import logging
from typing import Dict, Iterable, List, Tuple

from grantkit.grammar import parse_privileges
from grantkit.models import Privilege, PrivilegeGroup, PrivilegeKind, Role, RoleGroup

logger = logging.getLogger(__name__)

GroupKey = Tuple[PrivilegeKind, str, bool]


def group_privileges(privileges: Iterable[Privilege]) -> List[PrivilegeGroup]:
    """
    Group privileges by (kind, target, grantable).

    Groups come out in the order their key was first seen and names keep
    first-seen order within a group. Repeated names collapse.

    Args:
        privileges: Parsed privileges

    Returns:
        One PrivilegeGroup per distinct key
    """
    # dicts keep insertion order, which makes statement order reproducible
    by_key: Dict[GroupKey, List[str]] = {}

    for priv in privileges:
        key = (priv.kind, priv.target, priv.grantable)
        names = by_key.setdefault(key, [])
        if priv.name not in names:
            names.append(priv.name)

    groups = [
        PrivilegeGroup(kind=kind, target=target, grantable=grantable, names=tuple(names))
        for (kind, target, grantable), names in by_key.items()
    ]
    logger.debug(f"Grouped privileges into {len(groups)} statement(s)")
    return groups


def group_privilege_strings(raws: Iterable[str], default_schema: str) -> List[PrivilegeGroup]:
    """Parse privilege strings and group them."""
    return group_privileges(parse_privileges(raws, default_schema))


def group_roles(roles: Iterable[Role]) -> List[RoleGroup]:
    """
    Group roles by admin option. Roles have no target.

    The plain group, when present, comes before the WITH ADMIN OPTION group.
    """
    by_grantable: Dict[bool, List[str]] = {False: [], True: []}
    for role in roles:
        names = by_grantable[role.grantable]
        if role.name not in names:
            names.append(role.name)

    return [
        RoleGroup(grantable=grantable, names=tuple(names))
        for grantable, names in by_grantable.items()
        if names
    ]
