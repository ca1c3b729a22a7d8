"""
Ownership Policy Example

Compares desired and observed privileges under the strict and lax
policies. Strict revokes everything not desired; lax only touches what it
manages.
"""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent.parent / "src"))

from grantkit.diff import diff
from grantkit.grammar import format_privilege_strings
from grantkit.policy import filter_managed_privileges

desired = format_privilege_strings(["SELECT ON SCHEMA SALES"], "ALICE")
observed = [
    "SELECT ON SCHEMA SALES",
    "AUDIT ADMIN",  # granted by a DBA
    "CREATE ANY ON SCHEMA ALICE WITH GRANT OPTION",  # implicit on the user's own schema
    "INSERT ON SCHEMA SALES",  # managed by the previous pass, no longer desired
]
previously_managed = ["SELECT ON SCHEMA SALES", "INSERT ON SCHEMA SALES"]

for policy in ("strict", "lax"):
    managed = filter_managed_privileges(observed, desired, previously_managed, policy, "ALICE")
    result = diff(desired, managed)
    print(f"{policy}: grant {result.to_add}, revoke {result.to_remove}")

# Output:
# strict: grant [], revoke ['AUDIT ADMIN', 'CREATE ANY ON SCHEMA ALICE WITH GRANT OPTION', 'INSERT ON SCHEMA SALES']
# lax: grant [], revoke ['INSERT ON SCHEMA SALES']
