"""Authentication provider models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class AuthResult(BaseModel):
    """Identity established by an auth provider.

    Attributes:
        user_id: Unique identifier of the acting user (``sub`` claim or header).
        email: Display label of the user, stored as the recipe author.
        token_type: How the identity was established (access, header).
        expires_at: Token expiration timestamp (``exp`` claim), if any.
        raw_claims: Original token claims for debugging.
    """

    user_id: str = Field(..., description="User identifier")
    email: str | None = Field(default=None, description="User email")
    token_type: str = Field(default="access", description="Type of credential")
    expires_at: int | None = Field(default=None, description="Expiration timestamp")
    raw_claims: dict[str, Any] = Field(
        default_factory=dict,
        description="Original token claims",
    )

    model_config = {"frozen": True}
