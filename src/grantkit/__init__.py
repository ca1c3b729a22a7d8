"""
Grantkit - Declarative privilege and role reconciliation for SAP HANA.

This library converges the privileges and roles a database user or role
holds towards a declared set, issuing the fewest GRANT and REVOKE
statements needed.

Key Features:
- Grammar for every HANA privilege form, with grant option validation
- Canonical rendering so desired and observed grants compare as strings
- Batching of privileges sharing a target into one statement
- Strict or lax ownership of a grantee's privilege set
- Dry-run planning and fail-fast execution

Quick Start:
    from grantkit import GrantReconciler, GrantSpec
    from grantkit.executors import DbApiConnection

    spec = GrantSpec(
        grantee="ALICE",
        policy="lax",
        privileges=[
            "CATALOG READ",
            "SELECT ON SCHEMA SALES WITH GRANT OPTION",
            "INSERT ON ORDERS",
        ],
        roles=["MONITORING"],
    )

    reconciler = GrantReconciler(DbApiConnection(hdbcli_connection))
    print(reconciler.plan(spec))

    result = reconciler.reconcile(spec, previously_managed=last_managed)
    last_managed = result.managed_privileges
"""

__version__ = "0.1.0"

# =============================================================================
# Models
# =============================================================================

from grantkit.models import (
    GranteeType,
    GrantOption,
    ManagementPolicy,
    Privilege,
    PrivilegeGroup,
    PrivilegeKind,
    Role,
    RoleGroup,
)

# =============================================================================
# Core
# =============================================================================
from grantkit.diff import GrantDiff, diff
from grantkit.grammar import (
    format_privilege_strings,
    format_role_strings,
    parse_privilege,
    parse_privileges,
    parse_role,
    parse_roles,
)
from grantkit.grouping import group_privilege_strings, group_privileges, group_roles
from grantkit.policy import (
    PUBLIC_ROLE,
    apply_grant_defaults,
    default_privilege,
    filter_managed_privileges,
)

# =============================================================================
# Errors
# =============================================================================
from grantkit.errors import (
    GrammarError,
    GrantError,
    InvalidAdminOptionError,
    InvalidGrantOptionError,
    InvalidOptionError,
    ObservationMissingError,
    PolicyError,
    UnknownPolicyError,
    UnknownPrivilegeError,
    UnknownRoleError,
    is_terminal,
)

# =============================================================================
# Configuration and reconciliation
# =============================================================================
from grantkit.config import GrantSpec, get_default_policy, load_grant_spec, load_grant_specs
from grantkit.reconciler import GrantReconciler, ReconcileResult

__all__ = [
    "__version__",
    # Models
    "GrantOption",
    "GranteeType",
    "ManagementPolicy",
    "Privilege",
    "PrivilegeGroup",
    "PrivilegeKind",
    "Role",
    "RoleGroup",
    # Grammar
    "parse_privilege",
    "parse_privileges",
    "parse_role",
    "parse_roles",
    "format_privilege_strings",
    "format_role_strings",
    # Grouping
    "group_privileges",
    "group_privilege_strings",
    "group_roles",
    # Diff
    "GrantDiff",
    "diff",
    # Policy
    "PUBLIC_ROLE",
    "apply_grant_defaults",
    "default_privilege",
    "filter_managed_privileges",
    # Errors
    "GrantError",
    "GrammarError",
    "InvalidOptionError",
    "InvalidAdminOptionError",
    "InvalidGrantOptionError",
    "ObservationMissingError",
    "PolicyError",
    "UnknownPolicyError",
    "UnknownPrivilegeError",
    "UnknownRoleError",
    "is_terminal",
    # Configuration
    "GrantSpec",
    "get_default_policy",
    "load_grant_spec",
    "load_grant_specs",
    # Reconciliation
    "GrantReconciler",
    "ReconcileResult",
]
