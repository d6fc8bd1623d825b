"""Text-generation request/response models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ChatMessage(BaseModel):
    """Single message of the chat exchange."""

    role: str = Field(..., description="Message role: system or user")
    content: str = Field(..., description="Message content")


class TextGenerationRequest(BaseModel):
    """Request body of the text-generation endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    messages: list[ChatMessage] = Field(..., description="Chat messages")
    json_mode: bool = Field(
        default=True,
        alias="jsonMode",
        description="Ask the endpoint for JSON-constrained output",
    )
    seed: int = Field(..., description="Random seed; a fresh one avoids cached output")


class LLMCompletionResult(BaseModel):
    """Raw completion with its parsed structured output."""

    raw_response: str = Field(..., description="Raw text returned by the endpoint")
    parsed: Any | None = Field(
        default=None,
        description="Parsed structured output if a schema was provided",
    )
    seed: int = Field(..., description="Seed the completion was generated with")

    model_config = {"frozen": True}
