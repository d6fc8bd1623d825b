"""Text-generation client implementations."""

from cookbook.llm.client.pollinations import TextGenerationClient
from cookbook.llm.client.protocol import LLMClientProtocol


__all__ = [
    "LLMClientProtocol",
    "TextGenerationClient",
]
