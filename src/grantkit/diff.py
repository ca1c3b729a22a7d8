"""
Set comparison of desired and observed grant strings.
"""

from typing import Iterable, List, NamedTuple, Sequence


def _unique(items: Iterable[str]) -> List[str]:
    return list(dict.fromkeys(items))


def difference(left: Iterable[str], right: Iterable[str]) -> List[str]:
    """Elements of left missing from right, in left's order, without duplicates."""
    exclude = set(right)
    return [item for item in _unique(left) if item not in exclude]


def sets_equal(left: Iterable[str], right: Iterable[str]) -> bool:
    """True when both inputs hold the same elements, ignoring order and duplicates."""
    return set(left) == set(right)


class GrantDiff(NamedTuple):
    """Result of comparing desired with observed grants."""

    equal: bool
    to_add: List[str]
    to_remove: List[str]

    def __str__(self) -> str:
        if self.equal:
            return "No changes"
        return f"+{len(self.to_add)} -{len(self.to_remove)}"


def diff(desired: Sequence[str], observed: Sequence[str]) -> GrantDiff:
    """
    Compare desired and observed grants as unordered sets.

    When both sets are equal no statement needs to run, so running a
    reconciliation twice against unchanged state is a no-op the second time.

    Args:
        desired: Canonical grant strings that should exist
        observed: Canonical grant strings that exist

    Returns:
        GrantDiff(equal, to_add, to_remove)
    """
    if sets_equal(desired, observed):
        return GrantDiff(True, [], [])

    return GrantDiff(
        equal=False,
        to_add=difference(desired, observed),
        to_remove=difference(observed, desired),
    )
