"""
Ownership policies deciding which observed privileges reconciliation may touch.

Under the strict policy every privilege a grantee holds is owned: anything
observed but not desired gets revoked. Under the lax policy only privileges
that are desired now, or were managed on the previous successful pass, take
part in the diff. Everything else was granted by someone else and is left
alone.
"""

import logging
from typing import List, Optional, Sequence, Tuple, Union

from grantkit.errors import ObservationMissingError, UnknownPolicyError
from grantkit.grammar import quote_identifier
from grantkit.models import ManagementPolicy

logger = logging.getLogger(__name__)

PUBLIC_ROLE = "PUBLIC"


def default_privilege(default_schema: str) -> str:
    """
    The privilege a grantee implicitly holds on its own schema.

    Args:
        default_schema: The grantee's default schema

    Returns:
        Canonical string, e.g. 'CREATE ANY ON SCHEMA "ALICE" WITH GRANT OPTION'
    """
    escaped = default_schema.replace('"', '""')
    return f'CREATE ANY ON SCHEMA "{escaped}" WITH GRANT OPTION'


def resolve_policy(policy: Union[str, ManagementPolicy]) -> ManagementPolicy:
    """
    Convert a policy name to ManagementPolicy.

    Raises:
        UnknownPolicyError: If the name is not strict or lax
    """
    try:
        return ManagementPolicy(policy)
    except ValueError:
        raise UnknownPolicyError(policy) from None


def filter_managed_privileges(
    observed: Optional[Sequence[str]],
    desired: Sequence[str],
    previously_managed: Sequence[str],
    policy: Union[str, ManagementPolicy],
    default_schema: str,
) -> List[str]:
    """
    Restrict observed privileges to the ones this pass is allowed to manage.

    Args:
        observed: Canonical privileges the grantee holds
        desired: Canonical privileges the grantee should hold
        previously_managed: Privileges recorded as managed by the last successful pass
        policy: "strict" or "lax"
        default_schema: Grantee's default schema, used for the lax baseline

    Returns:
        The observed privileges to diff against desired

    Raises:
        ObservationMissingError: If observed is None
        UnknownPolicyError: If policy is not strict or lax; the unchanged
            observed list is attached as .observed
    """
    if observed is None:
        raise ObservationMissingError()

    try:
        resolved = resolve_policy(policy)
    except UnknownPolicyError as e:
        e.observed = list(observed)
        raise

    if resolved is ManagementPolicy.STRICT:
        return list(observed)

    # the catalog reports the baseline without quotes when the schema name allows it
    baseline = {
        default_privilege(default_schema),
        f"CREATE ANY ON SCHEMA {quote_identifier(default_schema)} WITH GRANT OPTION",
    }
    candidates = set(desired) | set(previously_managed)
    managed = [p for p in observed if p not in baseline and p in candidates]

    if len(managed) < len(observed):
        logger.debug(f"Lax policy leaves {len(observed) - len(managed)} unmanaged privilege(s) untouched")
    return managed


def apply_grant_defaults(
    privileges: Sequence[str],
    roles: Sequence[str],
    policy: Union[str, ManagementPolicy],
    default_schema: str,
    restricted: bool = False,
) -> Tuple[List[str], List[str]]:
    """
    Add the grants every unrestricted grantee holds implicitly.

    The database gives each new user CREATE ANY on its own schema and the
    PUBLIC role. Under the strict policy the baseline privilege must be
    desired, or it would be revoked. PUBLIC is always expected. Restricted
    grantees get neither.

    Returns:
        (privileges, roles) with the defaults appended where missing
    """
    privileges = list(privileges)
    roles = list(roles)
    if restricted:
        return privileges, roles

    baseline = default_privilege(default_schema)
    if resolve_policy(policy) is ManagementPolicy.STRICT and baseline not in privileges:
        privileges.append(baseline)
    if PUBLIC_ROLE not in roles:
        roles.append(PUBLIC_ROLE)
    return privileges, roles
