"""
Parse and Group Example

Parses privilege strings, shows their canonical form and the grouped
GRANT statements they turn into. No database is needed.
"""

import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent.parent / "src"))

from grantkit.errors import GrammarError
from grantkit.grammar import parse_privilege
from grantkit.grouping import group_privilege_strings

privileges = [
    "catalog read",
    "SELECT ON SCHEMA SALES WITH GRANT OPTION",
    "SELECT ON orders",
    "INSERT ON orders",
    "LINKED DATABASE ON REMOTE SOURCE ERP",
    "USAGE ON CLIENTSIDE ENCRYPTION COLUMN KEY PII_KEY",
]

for raw in privileges:
    priv = parse_privilege(raw, "ALICE")
    print(f"{raw!r:55} -> {priv.kind.value:10} {priv}")

print("\nStatements:")
for group in group_privilege_strings(privileges, "ALICE"):
    print(f"  {group.grant_statement('ALICE')}")

# Grant options are checked against the privilege kind
try:
    parse_privilege("CATALOG READ WITH GRANT OPTION", "ALICE")
except GrammarError as e:
    print(f"\nRejected: {e}")

# Output:
# Statements:
#   GRANT CATALOG READ TO ALICE
#   GRANT SELECT ON SCHEMA SALES TO ALICE WITH GRANT OPTION
#   GRANT SELECT, INSERT ON ALICE.orders TO ALICE
#   GRANT LINKED DATABASE ON REMOTE SOURCE ERP TO ALICE
#   GRANT USAGE ON CLIENTSIDE ENCRYPTION COLUMN KEY PII_KEY TO ALICE
