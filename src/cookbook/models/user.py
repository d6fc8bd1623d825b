"""Acting identity model."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class ActingUser(BaseModel):
    """The authenticated user a request acts on behalf of."""

    model_config = ConfigDict(frozen=True)

    id: str
    email: str | None = None
