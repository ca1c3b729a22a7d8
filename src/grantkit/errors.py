"""
Exception types raised by grant parsing and ownership filtering.

Grammar and policy errors are deterministic: they come from malformed
specifications or configuration and retrying cannot fix them. Errors raised
by the SQL connection are never wrapped and reach the caller as raised.
"""

from typing import List, Optional


class GrantError(Exception):
    """Base class for all grantkit errors."""

    terminal: bool = True


# =============================================================================
# GRAMMAR ERRORS
# =============================================================================

class GrammarError(GrantError):
    """Raised when a privilege or role string cannot be parsed."""

    def __init__(self, raw: str, message: str):
        self.raw = raw
        super().__init__(message)


class UnknownPrivilegeError(GrammarError):
    """Raised when a string matches no privilege form."""

    def __init__(self, raw: str, reason: Optional[str] = None):
        message = f"unknown type of privilege: {raw}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(raw, message)


class UnknownRoleError(GrammarError):
    """Raised when a string is not a valid role name."""

    def __init__(self, raw: str):
        super().__init__(raw, f"failed to parse role: {raw}")


class InvalidOptionError(GrammarError):
    """Raised when a grant string carries an option its kind does not accept."""

    def __init__(self, raw: str, used: str, expected: str, subject: str):
        self.used = used
        self.expected = expected
        super().__init__(
            raw,
            f"failed to parse {subject} with {used.lower()} option: {raw} "
            f"(only WITH {expected} OPTION is allowed)",
        )


class InvalidGrantOptionError(InvalidOptionError):
    """WITH GRANT OPTION used on a system privilege or a role."""

    def __init__(self, raw: str, subject: str = "privilege"):
        super().__init__(raw, used="GRANT", expected="ADMIN", subject=subject)


class InvalidAdminOptionError(InvalidOptionError):
    """WITH ADMIN OPTION used on a privilege that is granted ON something."""

    def __init__(self, raw: str, subject: str = "privilege"):
        super().__init__(raw, used="ADMIN", expected="GRANT", subject=subject)


# =============================================================================
# POLICY ERRORS
# =============================================================================

class PolicyError(GrantError):
    """Raised for invalid ownership filter input."""


class UnknownPolicyError(PolicyError):
    """Raised when the privilege management policy is not strict or lax."""

    def __init__(self, policy: object, observed: Optional[List[str]] = None):
        self.policy = policy
        self.observed = observed
        super().__init__(f"unknown privilege management policy: {policy}")


class ObservationMissingError(PolicyError):
    """Raised when there is no observed privilege set to filter."""

    def __init__(self) -> None:
        super().__init__("observed privileges cannot be None")


def is_terminal(error: BaseException) -> bool:
    """
    Tell whether retrying after this error is pointless.

    Grammar and policy errors are terminal. Anything else (typically a
    database error) may succeed on a later pass.
    """
    return isinstance(error, GrantError) and error.terminal
