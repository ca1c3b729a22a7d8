"""
YAML Specification Example

Loads grantee specifications from grants.yml and prints the statements a
reconciliation pass would run. Connects to SAP HANA through hdbcli when
HANA_ADDRESS is set; otherwise plans against an empty observed state.
"""

import logging
import os
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent.parent / "src"))

from grantkit import GrantReconciler, load_grant_specs
from grantkit.executors import DbApiConnection

logging.basicConfig(level=logging.INFO)


class EmptyConnection:
    """Connection reporting no grants and refusing to execute."""

    def execute(self, statement):
        raise RuntimeError(f"not connected: {statement}")

    def query(self, sql, params=()):
        return []


if os.environ.get("HANA_ADDRESS"):
    from hdbcli import dbapi

    connection = DbApiConnection(dbapi.connect(
        address=os.environ["HANA_ADDRESS"],
        port=int(os.environ.get("HANA_PORT", "443")),
        user=os.environ["HANA_USER"],
        password=os.environ["HANA_PASSWORD"],
        encrypt=True,
    ))
else:
    connection = EmptyConnection()

reconciler = GrantReconciler(connection, dry_run=True)

for spec in load_grant_specs(Path(__file__).parent / "grants.yml"):
    print(f"\n{spec.grantee} ({spec.privilege_management_policy.value}):")
    print(reconciler.plan(spec))
