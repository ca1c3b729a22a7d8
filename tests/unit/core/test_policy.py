"""
Unit tests for ownership policies and grant defaults.
"""

import pytest

from grantkit.errors import ObservationMissingError, UnknownPolicyError, is_terminal
from grantkit.models import ManagementPolicy
from grantkit.policy import (
    PUBLIC_ROLE,
    apply_grant_defaults,
    default_privilege,
    filter_managed_privileges,
    resolve_policy,
)


class TestDefaultPrivilege:
    """Tests for default_privilege."""

    def test_quotes_schema(self) -> None:
        """The baseline privilege quotes the schema name."""
        assert default_privilege("S") == 'CREATE ANY ON SCHEMA "S" WITH GRANT OPTION'

    def test_escapes_quotes(self) -> None:
        """Embedded double quotes are doubled."""
        assert default_privilege('we"ird') == 'CREATE ANY ON SCHEMA "we""ird" WITH GRANT OPTION'


class TestResolvePolicy:
    """Tests for resolve_policy."""

    def test_accepts_names_and_enums(self) -> None:
        """Policy names and enum members both resolve."""
        assert resolve_policy("lax") is ManagementPolicy.LAX
        assert resolve_policy(ManagementPolicy.STRICT) is ManagementPolicy.STRICT

    def test_unknown_policy(self) -> None:
        """Anything but strict or lax is rejected."""
        with pytest.raises(UnknownPolicyError) as exc_info:
            resolve_policy("bogus")
        assert exc_info.value.policy == "bogus"
        assert is_terminal(exc_info.value)


class TestFilterManagedPrivileges:
    """Tests for filter_managed_privileges."""

    def test_strict_returns_observed(self) -> None:
        """Strict owns everything observed."""
        observed = ["A", "B", "C"]
        assert filter_managed_privileges(observed, ["A"], [], "strict", "S") == ["A", "B", "C"]

    def test_lax_keeps_desired_and_previously_managed(self) -> None:
        """Lax only manages privileges that are desired or were managed before."""
        observed = ["A", "B", "C", "D"]
        assert filter_managed_privileges(observed, ["A"], ["C"], ManagementPolicy.LAX, "S") == ["A", "C"]

    def test_lax_excludes_baseline(self) -> None:
        """The implicit schema privilege is never managed under lax."""
        baseline = default_privilege("S")
        observed = [baseline, "A"]
        assert filter_managed_privileges(observed, [baseline, "A"], [baseline], "lax", "S") == ["A"]

    def test_lax_excludes_catalog_spelling_of_baseline(self) -> None:
        """The baseline is recognized without quotes, as the catalog reports it."""
        observed = ["CREATE ANY ON SCHEMA ALICE WITH GRANT OPTION", "A"]
        assert filter_managed_privileges(observed, ["A"], observed, "lax", "ALICE") == ["A"]

    def test_unknown_policy_attaches_observed(self) -> None:
        """The unchanged observed set travels with the error."""
        with pytest.raises(UnknownPolicyError) as exc_info:
            filter_managed_privileges(["A"], [], [], "bogus", "S")
        assert exc_info.value.observed == ["A"]

    def test_missing_observation(self) -> None:
        """None is not an empty observation."""
        with pytest.raises(ObservationMissingError):
            filter_managed_privileges(None, [], [], "strict", "S")

    def test_empty_observation(self) -> None:
        """An empty observation filters to an empty list."""
        assert filter_managed_privileges([], ["A"], [], "lax", "S") == []


class TestApplyGrantDefaults:
    """Tests for apply_grant_defaults."""

    def test_strict_adds_baseline_and_public(self) -> None:
        """Strict expects the baseline privilege so it is not revoked."""
        privileges, roles = apply_grant_defaults(["A"], ["R"], "strict", "ALICE")
        assert privileges == ["A", default_privilege("ALICE")]
        assert roles == ["R", PUBLIC_ROLE]

    def test_lax_adds_public_only(self) -> None:
        """Lax never touches the baseline privilege."""
        privileges, roles = apply_grant_defaults(["A"], [], "lax", "ALICE")
        assert privileges == ["A"]
        assert roles == [PUBLIC_ROLE]

    def test_restricted_gets_nothing(self) -> None:
        """Restricted grantees hold no implicit grants."""
        assert apply_grant_defaults(["A"], ["R"], "strict", "ALICE", restricted=True) == (["A"], ["R"])

    def test_no_duplicates(self) -> None:
        """Defaults already present are not added twice."""
        baseline = default_privilege("ALICE")
        assert apply_grant_defaults([baseline], [PUBLIC_ROLE], "strict", "ALICE") == ([baseline], [PUBLIC_ROLE])

    def test_inputs_not_mutated(self) -> None:
        """The caller's lists are left alone."""
        privileges, roles = ["A"], ["R"]
        apply_grant_defaults(privileges, roles, "strict", "ALICE")
        assert privileges == ["A"]
        assert roles == ["R"]
