"""
Grantee specifications and their YAML loader.

A specification names a grantee and the privileges and roles it should hold.

Example (grants.yml):
    grantee: ALICE
    privilege_management_policy: lax
    privileges:
      - CATALOG READ
      - SELECT ON SCHEMA SALES WITH GRANT OPTION
      - INSERT ON orders
    roles:
      - MONITORING
      - SALES.REPORTING WITH ADMIN OPTION

Several grantees can share one file under a top-level ``grantees:`` list.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import List, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, model_validator
from typing_extensions import Self

from grantkit.models import GranteeType, ManagementPolicy

logger = logging.getLogger(__name__)

POLICY_ENV_VAR = "GRANTKIT_PRIVILEGE_POLICY"


def get_default_policy() -> ManagementPolicy:
    """
    Get the default privilege management policy from GRANTKIT_PRIVILEGE_POLICY.

    Returns ManagementPolicy.STRICT if not set or invalid.
    """
    value = os.getenv(POLICY_ENV_VAR, "strict").lower()
    try:
        return ManagementPolicy(value)
    except ValueError:
        logger.warning(f"Invalid {POLICY_ENV_VAR}='{value}', defaulting to strict")
        return ManagementPolicy.STRICT


class GrantSpec(BaseModel):
    """Desired grants for one grantee."""

    model_config = ConfigDict(
        populate_by_name=True,
        str_strip_whitespace=True,
        extra="forbid",
    )

    grantee: str = Field(..., min_length=1, description="User or role receiving the grants")
    grantee_type: GranteeType = Field(GranteeType.USER, description="USER or ROLE")
    default_schema: Optional[str] = Field(
        None,
        description="Schema for unqualified object names; defaults to the grantee's own schema"
    )
    privilege_management_policy: ManagementPolicy = Field(
        default_factory=get_default_policy,
        alias="policy",
        description="strict owns every privilege, lax only the ones it granted"
    )
    privileges: List[str] = Field(default_factory=list)
    roles: List[str] = Field(default_factory=list)
    restricted: bool = Field(False, description="Restricted users get no implicit grants")

    @model_validator(mode='after')
    def resolve_default_schema(self) -> Self:
        """Default to the schema the grantee owns: SCHEMA for SCHEMA.NAME, else NAME."""
        if not self.default_schema:
            schema, sep, _ = self.grantee.partition(".")
            self.default_schema = schema if sep else self.grantee
        return self


def _read_yaml(path: Union[str, Path]) -> object:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Grant specification not found: {path}")

    with open(path, "r") as f:
        return yaml.safe_load(f)


def load_grant_specs(path: Union[str, Path]) -> List[GrantSpec]:
    """
    Load every grantee specification from a YAML file.

    Args:
        path: File holding one specification, or a ``grantees:`` list

    Returns:
        Validated GrantSpec objects in file order

    Raises:
        FileNotFoundError: If file doesn't exist
        yaml.YAMLError: If YAML parsing fails
        ValidationError: If a specification is invalid
    """
    data = _read_yaml(path)
    if isinstance(data, dict) and "grantees" in data:
        entries = data["grantees"] or []
    else:
        entries = [data]

    specs = [GrantSpec.model_validate(entry) for entry in entries]
    logger.info(f"Loaded {len(specs)} grant specification(s) from {path}")
    return specs


def load_grant_spec(path: Union[str, Path]) -> GrantSpec:
    """
    Load a single grantee specification from a YAML file.

    Raises:
        ValueError: If the file defines more or fewer than one grantee
    """
    specs = load_grant_specs(path)
    if len(specs) != 1:
        raise ValueError(f"Expected one grantee in {path}, found {len(specs)}")
    return specs[0]
