"""
Grammar for privilege and role strings.

Converts free-form grant strings, as written in a grantee specification or
rendered from the database catalog, into typed Privilege and Role entities.

Supported privilege forms (HANA GRANT syntax):
    <system_privilege>
    <source_privilege> ON REMOTE SOURCE <source_name>
    <schema_privilege> ON SCHEMA <schema_name>
    <object_privilege> ON [<schema>.]<object_name>
    USAGE ON CLIENTSIDE ENCRYPTION COLUMN KEY <key_name>
    STRUCTURED PRIVILEGE <structured_privilege>
    USERGROUP OPERATOR ON USERGROUP <usergroup_name>

Each form may end with WITH ADMIN OPTION (system privileges) or
WITH GRANT OPTION (every other form).

Identifiers are either plain (letters, digits and underscores, not starting
with a digit) or double-quoted, with "" standing for an embedded quote. A
quoted identifier that needs no quotes, such as "SALES", is stored without
them, which is how the database catalog reports it. Privilege names are
upper-cased for the same reason.

Usage:
    from grantkit.grammar import parse_privilege, parse_role

    priv = parse_privilege("select on orders with grant option", "SALES")
    priv.render()  # "SELECT ON SALES.orders WITH GRANT OPTION"

    role = parse_role("SALES.REPORTING WITH ADMIN OPTION")
"""

import logging
import re
from typing import Callable, Iterable, List, NamedTuple, Optional, Tuple

from grantkit.errors import (
    GrammarError,
    InvalidAdminOptionError,
    InvalidGrantOptionError,
    UnknownPrivilegeError,
    UnknownRoleError,
)
from grantkit.models import GrantOption, Privilege, PrivilegeKind, Role

logger = logging.getLogger(__name__)

# quoted identifiers escape an embedded quote by doubling it
IDENTIFIER = r'"(?:[^"]|"")+"|[A-Za-z_][A-Za-z0-9_]*'

# One or more words; a verb never contains the keyword ON
VERB = r"(?!ON\b)[A-Za-z]+(?: (?!ON\b)[A-Za-z]+)*"

_PLAIN_IDENTIFIER = re.compile(r"^[A-Z_][A-Z0-9_]*$")
_WHITESPACE_OUTSIDE_QUOTES = re.compile(r'("[^"]*")|\s+')
_OPTION_SUFFIX = re.compile(r"^(?:(?P<body>.*) )?WITH (?P<option>ADMIN|GRANT) OPTION$", re.IGNORECASE)
_COLUMN_KEY_CLAUSE = re.compile(r"\bON CLIENTSIDE ENCRYPTION COLUMN KEY\b", re.IGNORECASE)
_ROLE = re.compile(rf"^(?:(?P<schema>{IDENTIFIER})\.)?(?P<name>{IDENTIFIER})$")


def canonical_identifier(identifier: str) -> str:
    """Drop the quotes from a quoted identifier that is valid unquoted."""
    if len(identifier) > 2 and identifier.startswith('"') and identifier.endswith('"'):
        inner = identifier[1:-1]
        if _PLAIN_IDENTIFIER.match(inner):
            return inner
    return identifier


def quote_identifier(name: str) -> str:
    """
    Render a catalog name as an identifier the grammar reads back unchanged.

    Plain upper-case names stay as they are; anything else is double-quoted.
    """
    if _PLAIN_IDENTIFIER.match(name):
        return name
    escaped = name.replace('"', '""')
    return f'"{escaped}"'


def _qualify(object_name: str, default_schema: str) -> str:
    if not default_schema:
        return object_name
    return f"{default_schema}.{object_name}"


class _PrivilegePattern(NamedTuple):
    """One privilege form: a full-match regex and the builder for (name, target)."""
    kind: PrivilegeKind
    regex: re.Pattern
    build: Callable[[re.Match, str], Tuple[str, str]]


def _pattern(kind: PrivilegeKind, regex: str, build: Callable[[re.Match, str], Tuple[str, str]]) -> _PrivilegePattern:
    return _PrivilegePattern(kind, re.compile(regex, re.IGNORECASE), build)


def _named_target(m: re.Match, _: str) -> Tuple[str, str]:
    return m.group("name"), canonical_identifier(m.group("target"))


# Order matters: the forms overlap syntactically and the first match wins.
PRIVILEGE_PATTERNS: List[_PrivilegePattern] = [
    _pattern(
        PrivilegeKind.USERGROUP,
        rf"^(?P<name>USERGROUP OPERATOR) ON USERGROUP (?P<target>{IDENTIFIER})$",
        _named_target,
    ),
    # Only USAGE exists for column encryption keys
    _pattern(
        PrivilegeKind.COLUMN_KEY,
        rf"^USAGE ON CLIENTSIDE ENCRYPTION COLUMN KEY (?P<target>{IDENTIFIER})$",
        lambda m, _: ("USAGE", canonical_identifier(m.group("target"))),
    ),
    _pattern(
        PrivilegeKind.SOURCE,
        rf"^(?P<name>{VERB}) ON REMOTE SOURCE (?P<target>{IDENTIFIER})$",
        _named_target,
    ),
    _pattern(
        PrivilegeKind.SCHEMA,
        rf"^(?P<name>{VERB}) ON SCHEMA (?P<target>{IDENTIFIER})$",
        _named_target,
    ),
    _pattern(
        PrivilegeKind.OBJECT,
        rf"^(?P<name>{VERB}) ON (?P<schema>{IDENTIFIER})\.(?P<object>{IDENTIFIER})$",
        lambda m, _: (
            m.group("name"),
            f"{canonical_identifier(m.group('schema'))}.{canonical_identifier(m.group('object'))}",
        ),
    ),
    _pattern(
        PrivilegeKind.OBJECT,
        rf"^(?P<name>{VERB}) ON (?P<object>{IDENTIFIER})$",
        lambda m, default_schema: (m.group("name"), _qualify(canonical_identifier(m.group("object")), default_schema)),
    ),
    _pattern(
        PrivilegeKind.STRUCTURED,
        rf"^STRUCTURED PRIVILEGE (?P<target>{IDENTIFIER})$",
        lambda m, _: ("STRUCTURED PRIVILEGE", canonical_identifier(m.group("target"))),
    ),
    _pattern(
        PrivilegeKind.SYSTEM,
        rf"^(?P<name>{VERB})$",
        lambda m, _: (m.group("name"), ""),
    ),
]


def normalize_whitespace(raw: str) -> str:
    """
    Trim a grant string and collapse whitespace runs to single spaces.

    Whitespace inside double-quoted identifiers is left alone.
    """
    return _WHITESPACE_OUTSIDE_QUOTES.sub(lambda m: m.group(1) or " ", raw.strip())


def split_grant_option(text: str) -> Tuple[str, Optional[GrantOption]]:
    """
    Split a normalized grant string into its body and trailing grant option.

    Args:
        text: Whitespace-normalized grant string

    Returns:
        (body, option) where option is None when no WITH ... OPTION suffix is present
    """
    m = _OPTION_SUFFIX.match(text)
    if not m:
        return text, None
    return m.group("body") or "", GrantOption(m.group("option").upper())


def parse_privilege(raw: str, default_schema: str) -> Privilege:
    """
    Parse a privilege string into a typed Privilege.

    Args:
        raw: Privilege string, e.g. "SELECT ON SCHEMA X WITH GRANT OPTION"
        default_schema: Schema that qualifies unqualified object names

    Returns:
        The parsed Privilege

    Raises:
        UnknownPrivilegeError: If the string matches no privilege form
        InvalidGrantOptionError: If a system privilege uses WITH GRANT OPTION
        InvalidAdminOptionError: If any other privilege uses WITH ADMIN OPTION
    """
    body, option = split_grant_option(normalize_whitespace(raw))
    if not body:
        raise UnknownPrivilegeError(raw)

    for pattern in PRIVILEGE_PATTERNS:
        m = pattern.regex.match(body)
        if not m:
            continue
        if option is not None and option is not pattern.kind.grant_option:
            if option is GrantOption.GRANT:
                raise InvalidGrantOptionError(raw)
            raise InvalidAdminOptionError(raw)
        name, target = pattern.build(m, default_schema)
        # the catalog reports privilege names in upper case
        return Privilege(kind=pattern.kind, name=name.upper(), target=target, grantable=option is not None)

    if _COLUMN_KEY_CLAUSE.search(body):
        raise UnknownPrivilegeError(raw, "only USAGE can be granted on a clientside encryption column key")
    raise UnknownPrivilegeError(raw)


def parse_role(raw: str) -> Role:
    """
    Parse a role string into a typed Role.

    Accepts ROLE, SCHEMA.ROLE and quoted identifiers, optionally followed by
    WITH ADMIN OPTION.

    Raises:
        InvalidGrantOptionError: If the role uses WITH GRANT OPTION
        UnknownRoleError: If the string is not a role name
    """
    body, option = split_grant_option(normalize_whitespace(raw))
    if option is GrantOption.GRANT:
        raise InvalidGrantOptionError(raw, subject="role")
    m = _ROLE.match(body)
    if not m:
        raise UnknownRoleError(raw)

    name = canonical_identifier(m.group("name"))
    if m.group("schema"):
        name = f"{canonical_identifier(m.group('schema'))}.{name}"
    return Role(name=name, grantable=option is GrantOption.ADMIN)


def parse_privileges(raws: Iterable[str], default_schema: str) -> List[Privilege]:
    """
    Parse a list of privilege strings, failing on the first invalid entry.

    Nothing is returned for a partially valid list; the raised error names the
    offending entry.
    """
    privileges = []
    for raw in raws:
        try:
            privileges.append(parse_privilege(raw, default_schema))
        except GrammarError as e:
            logger.debug(f"Rejecting privilege list at entry '{raw}': {e}")
            raise
    return privileges


def parse_roles(raws: Iterable[str]) -> List[Role]:
    """Parse a list of role strings, failing on the first invalid entry."""
    roles = []
    for raw in raws:
        try:
            roles.append(parse_role(raw))
        except GrammarError as e:
            logger.debug(f"Rejecting role list at entry '{raw}': {e}")
            raise
    return roles


def format_privilege_strings(raws: Iterable[str], default_schema: str) -> List[str]:
    """
    Canonicalize privilege strings for comparison with observed grants.

    Args:
        raws: Privilege strings as written in a specification
        default_schema: Schema that qualifies unqualified object names

    Returns:
        Rendered strings in input order
    """
    return [priv.render(default_schema) for priv in parse_privileges(raws, default_schema)]


def format_role_strings(raws: Iterable[str]) -> List[str]:
    """Canonicalize role strings for comparison with observed grants."""
    return [role.render() for role in parse_roles(raws)]
