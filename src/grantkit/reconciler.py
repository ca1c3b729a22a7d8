"""
One reconciliation pass for a grantee.

Wires the grammar, ownership filter, diff engine and executor together:

    defaults -> canonicalize desired -> query observed -> filter -> diff -> execute

Usage:
    from grantkit import GrantReconciler, load_grant_spec
    from grantkit.executors import DbApiConnection

    spec = load_grant_spec("grants.yml")
    reconciler = GrantReconciler(DbApiConnection(hdbcli_connection))
    result = reconciler.reconcile(spec, previously_managed=state.get("managed", []))
    state["managed"] = result.managed_privileges
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from grantkit.config import GrantSpec
from grantkit.diff import GrantDiff, diff
from grantkit.executors.base import ExecutionPlan, ExecutionResult
from grantkit.executors.connection import SqlConnection
from grantkit.executors.grant_executor import GrantExecutor
from grantkit.executors.grant_reader import GrantReader
from grantkit.grammar import format_privilege_strings, format_role_strings
from grantkit.models import GranteeType
from grantkit.policy import apply_grant_defaults, filter_managed_privileges, resolve_policy

logger = logging.getLogger(__name__)


@dataclass
class ReconcileResult:
    """Outcome of one reconciliation pass."""

    grantee: str
    desired_privileges: List[str]
    observed_privileges: List[str]
    filtered_privileges: List[str]
    privilege_diff: GrantDiff
    desired_roles: List[str]
    observed_roles: List[str]
    role_diff: GrantDiff
    results: List[ExecutionResult] = field(default_factory=list)

    @property
    def managed_privileges(self) -> List[str]:
        """Privileges to persist as previously managed for the next pass."""
        return list(dict.fromkeys(self.desired_privileges))

    @property
    def changed(self) -> bool:
        return not (self.privilege_diff.equal and self.role_diff.equal)

    @property
    def statements(self) -> List[str]:
        return [r.statement for r in self.results]

    def __str__(self) -> str:
        return f"{self.grantee}: privileges {self.privilege_diff}, roles {self.role_diff}"


class GrantReconciler:
    """
    Converges the grants a grantee holds towards a GrantSpec.

    Privileges follow the GrantSpec management policy. Roles are always owned
    in full: every observed role that is not desired gets revoked.
    """

    def __init__(self, connection: SqlConnection, dry_run: bool = False):
        self.connection = connection
        self.dry_run = dry_run
        self.reader = GrantReader(connection)
        self.executor = GrantExecutor(connection, dry_run=dry_run)

    def _compare(self, spec: GrantSpec, previously_managed: Sequence[str]) -> ReconcileResult:
        policy = resolve_policy(spec.privilege_management_policy)
        default_schema = spec.default_schema or ""

        # only users hold the implicit baseline and PUBLIC
        restricted = spec.restricted or spec.grantee_type is not GranteeType.USER
        privileges, roles = apply_grant_defaults(
            spec.privileges, spec.roles, policy, default_schema, restricted=restricted
        )
        # parse everything before the first query so a bad entry touches nothing
        desired_privileges = format_privilege_strings(privileges, default_schema)
        desired_roles = format_role_strings(roles)

        observed_privileges = self.reader.query_privileges(spec.grantee, spec.grantee_type)
        observed_roles = self.reader.query_roles(spec.grantee, spec.grantee_type)

        filtered = filter_managed_privileges(
            observed_privileges, desired_privileges, previously_managed, policy, default_schema
        )
        return ReconcileResult(
            grantee=spec.grantee,
            desired_privileges=desired_privileges,
            observed_privileges=observed_privileges,
            filtered_privileges=filtered,
            privilege_diff=diff(desired_privileges, filtered),
            desired_roles=desired_roles,
            observed_roles=observed_roles,
            role_diff=diff(desired_roles, observed_roles),
        )

    def plan(self, spec: GrantSpec, previously_managed: Optional[Sequence[str]] = None) -> ExecutionPlan:
        """
        Build the statements a pass would run, without running them.

        Args:
            spec: Desired grants
            previously_managed: Privileges managed by the last successful pass

        Returns:
            ExecutionPlan in execution order
        """
        state = self._compare(spec, previously_managed or [])
        return self.executor.plan(
            spec.grantee,
            spec.default_schema or "",
            privileges_to_grant=state.privilege_diff.to_add,
            privileges_to_revoke=state.privilege_diff.to_remove,
            roles_to_grant=state.role_diff.to_add,
            roles_to_revoke=state.role_diff.to_remove,
        )

    def reconcile(self, spec: GrantSpec, previously_managed: Optional[Sequence[str]] = None) -> ReconcileResult:
        """
        Run one reconciliation pass.

        Args:
            spec: Desired grants
            previously_managed: Privileges managed by the last successful pass.
                Only consulted under the lax policy.

        Returns:
            ReconcileResult; persist its managed_privileges for the next pass

        Raises:
            GrammarError: If a desired privilege or role cannot be parsed
            PolicyError: If the management policy is invalid
            Exception: Whatever the connection raised, after the failed
                statement has been recorded
        """
        result = self._compare(spec, previously_managed or [])
        default_schema = spec.default_schema or ""

        if not result.privilege_diff.equal:
            result.results.extend(self.executor.update_privileges(
                spec.grantee,
                result.privilege_diff.to_add,
                result.privilege_diff.to_remove,
                default_schema,
            ))
        if not result.role_diff.equal:
            result.results.extend(self.executor.update_roles(
                spec.grantee,
                result.role_diff.to_add,
                result.role_diff.to_remove,
            ))

        if result.changed:
            logger.info(f"Reconciled {result} with {len(result.results)} statement(s)")
        else:
            logger.info(f"{spec.grantee} is up to date")
        return result
