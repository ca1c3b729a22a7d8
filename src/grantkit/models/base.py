"""
Base classes for grant reconciliation models.

This module contains the foundational pydantic configuration shared by all
grant value objects.
"""

from __future__ import annotations

from pydantic import (
    BaseModel,
    ConfigDict,
)

# =============================================================================
# BASE CONFIGURATION
# =============================================================================

class BaseGrantModel(BaseModel):
    """
    Base model for all grant objects with common configuration.

    Grant objects are value data: they are frozen (hashable, comparable by
    field) and recomputed on every reconciliation pass.
    """

    model_config = ConfigDict(
        frozen=True,  # Value objects, usable in sets and as dict keys
        validate_default=True,  # Validate defaults once
        populate_by_name=True,  # Allow field population by name
        use_enum_values=False,  # Keep enums as enum objects
        str_strip_whitespace=True,  # Strip whitespace from strings
        json_schema_extra={
            "title": "Grant Model",
            "description": "Base model for database grant objects"
        }
    )
