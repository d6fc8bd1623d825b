"""Text-generation integration used by the formatting and import gateways."""

from cookbook.llm.client import LLMClientProtocol, TextGenerationClient
from cookbook.llm.exceptions import (
    LLMError,
    LLMRateLimitError,
    LLMResponseError,
    LLMTimeoutError,
    LLMUnavailableError,
    LLMValidationError,
)
from cookbook.llm.models import LLMCompletionResult
from cookbook.llm.prompts import BasePrompt


__all__ = [
    "BasePrompt",
    "LLMClientProtocol",
    "LLMCompletionResult",
    "LLMError",
    "LLMRateLimitError",
    "LLMResponseError",
    "LLMTimeoutError",
    "LLMUnavailableError",
    "LLMValidationError",
    "TextGenerationClient",
]
