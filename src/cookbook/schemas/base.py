"""Base schema configuration for API models.

Field names stay snake_case on the wire, matching the data store columns
that browser clients already use (``image_url``, ``is_favorite``, ...).

Usage:
    - APIRequest: For incoming API request bodies
    - APIResponse: For outgoing API response bodies
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class _BaseSchema(BaseModel):
    """Private base schema with common configuration.

    Do not use directly - inherit from one of the public subclasses.
    """

    model_config = ConfigDict(
        use_enum_values=True,
        validate_default=True,
    )


class APIRequest(_BaseSchema):
    """Base class for incoming API request schemas.

    Extra fields are ignored so older clients keep working.
    """

    model_config = ConfigDict(extra="ignore")


class APIResponse(_BaseSchema):
    """Base class for outgoing API response schemas."""

    model_config = ConfigDict(extra="forbid")
