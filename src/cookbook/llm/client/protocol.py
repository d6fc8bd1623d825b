"""Text-generation client protocol."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, TypeVar, runtime_checkable

from pydantic import BaseModel


if TYPE_CHECKING:
    from cookbook.llm.models import LLMCompletionResult


T = TypeVar("T", bound=BaseModel)


@runtime_checkable
class LLMClientProtocol(Protocol):
    """Interface of text-generation clients used by the gateways."""

    async def initialize(self) -> None:
        """Initialize client resources (HTTP connections, etc.)."""
        ...

    async def shutdown(self) -> None:
        """Release client resources."""
        ...

    async def generate(
        self,
        prompt: str,
        *,
        system: str | None = None,
        schema: type[T] | None = None,
    ) -> LLMCompletionResult:
        """Generate a completion for a system + user message exchange.

        Raises:
            LLMUnavailableError: Endpoint unreachable.
            LLMTimeoutError: Request timed out.
            LLMResponseError: Non-2xx answer.
            LLMValidationError: Response is not JSON matching ``schema``.
        """
        ...

    async def generate_structured(
        self,
        prompt: str,
        schema: type[T],
        *,
        system: str | None = None,
    ) -> T:
        """Generate and return the parsed ``schema`` instance directly."""
        ...
