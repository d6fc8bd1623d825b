"""Base class for text-generation prompts."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, ClassVar, Generic, TypeVar

from pydantic import BaseModel

T = TypeVar("T", bound=BaseModel)


class BasePrompt(ABC, Generic[T]):
    """A system instruction, a user-message template and the output schema.

    Example:
        ```python
        class SummaryPrompt(BasePrompt[Summary]):
            output_schema = Summary
            system_prompt = "Fasse den Text zusammen."

            def format(self, text: str) -> str:
                return f"Text:\\n\\n{text}"
        ```
    """

    output_schema: ClassVar[type[BaseModel]]
    """Pydantic model the JSON answer is validated against."""

    system_prompt: ClassVar[str]
    """Instruction sent as the system message."""

    @abstractmethod
    def format(self, **kwargs: Any) -> str:
        """Build the user message.

        Raises:
            ValueError: If required variables are missing.
        """
        ...

    @property
    def name(self) -> str:
        """Prompt identifier for logging."""
        return self.__class__.__name__
