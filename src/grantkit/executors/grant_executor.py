"""
Grant executor for privilege and role management.

Turns grant strings into grouped GRANT/REVOKE statements and runs them
through a SqlConnection.
"""

import logging
from typing import List, Sequence

from grantkit.grammar import parse_roles
from grantkit.grouping import group_privilege_strings, group_roles

from .base import BaseExecutor, ExecutionPlan, ExecutionResult, OperationType

logger = logging.getLogger(__name__)


class GrantExecutor(BaseExecutor):
    """
    Executor for privilege and role grants.

    Every input list is parsed and grouped before the first statement runs, so
    a malformed entry aborts the operation without touching the database.
    """

    # =========================================================================
    # STATEMENT PLANNING
    # =========================================================================

    def plan_privilege_grants(self, grantee: str, privileges: Sequence[str], default_schema: str) -> List[str]:
        """
        Build GRANT statements for privilege strings.

        Args:
            grantee: User or role receiving the privileges
            privileges: Privilege strings
            default_schema: Schema for unqualified object names

        Returns:
            One statement per (kind, target, grantable) group
        """
        return [g.grant_statement(grantee) for g in group_privilege_strings(privileges, default_schema)]

    def plan_privilege_revokes(self, grantee: str, privileges: Sequence[str], default_schema: str) -> List[str]:
        """Build REVOKE statements for privilege strings."""
        return [g.revoke_statement(grantee) for g in group_privilege_strings(privileges, default_schema)]

    def plan_role_grants(self, grantee: str, roles: Sequence[str]) -> List[str]:
        """Build GRANT statements for roles: plain roles first, then WITH ADMIN OPTION."""
        return [g.grant_statement(grantee) for g in group_roles(parse_roles(roles))]

    def plan_role_revokes(self, grantee: str, roles: Sequence[str]) -> List[str]:
        """Build a single REVOKE statement for roles, whatever their admin option."""
        names = list(dict.fromkeys(role.name for role in parse_roles(roles)))
        if not names:
            return []
        return [f"REVOKE {', '.join(names)} FROM {grantee}"]

    def plan(
        self,
        grantee: str,
        default_schema: str,
        privileges_to_grant: Sequence[str] = (),
        privileges_to_revoke: Sequence[str] = (),
        roles_to_grant: Sequence[str] = (),
        roles_to_revoke: Sequence[str] = (),
    ) -> ExecutionPlan:
        """
        Build the ordered statement plan for one update.

        Privileges come before roles; within each, grants come before revokes.
        """
        plan = ExecutionPlan()
        plan.extend(self.plan_privilege_grants(grantee, privileges_to_grant, default_schema))
        plan.extend(self.plan_privilege_revokes(grantee, privileges_to_revoke, default_schema))
        plan.extend(self.plan_role_grants(grantee, roles_to_grant))
        plan.extend(self.plan_role_revokes(grantee, roles_to_revoke))
        return plan

    # =========================================================================
    # EXECUTION
    # =========================================================================

    def grant_privileges(self, grantee: str, privileges: Sequence[str], default_schema: str) -> List[ExecutionResult]:
        """
        Grant privileges with as few statements as possible.

        Args:
            grantee: User or role receiving the privileges
            privileges: Privilege strings
            default_schema: Schema for unqualified object names

        Returns:
            One ExecutionResult per statement (empty when there is nothing to grant)
        """
        statements = self.plan_privilege_grants(grantee, privileges, default_schema)
        return self.run_statements(OperationType.GRANT, grantee, statements)

    def revoke_privileges(self, grantee: str, privileges: Sequence[str], default_schema: str) -> List[ExecutionResult]:
        """Revoke privileges with as few statements as possible."""
        statements = self.plan_privilege_revokes(grantee, privileges, default_schema)
        return self.run_statements(OperationType.REVOKE, grantee, statements)

    def grant_roles(self, grantee: str, roles: Sequence[str]) -> List[ExecutionResult]:
        """Grant roles, at most one statement per admin option."""
        statements = self.plan_role_grants(grantee, roles)
        return self.run_statements(OperationType.GRANT, grantee, statements)

    def revoke_roles(self, grantee: str, roles: Sequence[str]) -> List[ExecutionResult]:
        """Revoke roles in a single statement."""
        statements = self.plan_role_revokes(grantee, roles)
        return self.run_statements(OperationType.REVOKE, grantee, statements)

    def update_privileges(
        self,
        grantee: str,
        to_grant: Sequence[str],
        to_revoke: Sequence[str],
        default_schema: str,
    ) -> List[ExecutionResult]:
        """
        Grant missing privileges, then revoke unwanted ones.

        Both lists are parsed before any statement runs.

        Returns:
            ExecutionResults of all statements run
        """
        grants = self.plan_privilege_grants(grantee, to_grant, default_schema)
        revokes = self.plan_privilege_revokes(grantee, to_revoke, default_schema)
        if grants or revokes:
            logger.info(f"Updating privileges of {grantee}: {len(to_grant)} to grant, {len(to_revoke)} to revoke")
        results = self.run_statements(OperationType.GRANT, grantee, grants)
        results.extend(self.run_statements(OperationType.REVOKE, grantee, revokes))
        return results

    def update_roles(self, grantee: str, to_grant: Sequence[str], to_revoke: Sequence[str]) -> List[ExecutionResult]:
        """Grant missing roles, then revoke unwanted ones."""
        grants = self.plan_role_grants(grantee, to_grant)
        revokes = self.plan_role_revokes(grantee, to_revoke)
        if grants or revokes:
            logger.info(f"Updating roles of {grantee}: {len(to_grant)} to grant, {len(to_revoke)} to revoke")
        results = self.run_statements(OperationType.GRANT, grantee, grants)
        results.extend(self.run_statements(OperationType.REVOKE, grantee, revokes))
        return results
