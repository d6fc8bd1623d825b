"""HTTP client for the public text-generation endpoint.

The endpoint takes a chat exchange plus ``jsonMode`` and ``seed`` and
answers with plain text. Identical requests may be served from an
upstream cache, so every call sends a fresh random seed.
"""

from __future__ import annotations

import random
from typing import Any, TypeVar, cast

import httpx
import orjson
from aiolimiter import AsyncLimiter
from pydantic import BaseModel, ValidationError

from cookbook.llm.exceptions import (
    LLMRateLimitError,
    LLMResponseError,
    LLMTimeoutError,
    LLMUnavailableError,
    LLMValidationError,
)
from cookbook.llm.models import ChatMessage, LLMCompletionResult, TextGenerationRequest
from cookbook.llm.parsing import load_json_object
from cookbook.observability.logging import get_logger


logger = get_logger(__name__)

T = TypeVar("T", bound=BaseModel)


class TextGenerationClient:
    """Async HTTP client for the text-generation endpoint.

    Attributes:
        url: Endpoint URL (POST).
        timeout: HTTP request timeout in seconds.
        max_retries: Retry attempts for timeouts and connection errors.
        seed_max: Seeds are drawn from ``[0, seed_max)``.
    """

    DEFAULT_URL = "https://text.pollinations.ai/"

    def __init__(
        self,
        url: str = DEFAULT_URL,
        *,
        timeout: float = 60.0,
        max_retries: int = 2,
        requests_per_minute: float = 20.0,
        seed_max: int = 1_000_000,
        token: str = "",
        rng: random.Random | None = None,
    ) -> None:
        self.url = url
        self.timeout = timeout
        self.max_retries = max_retries
        self.seed_max = seed_max
        self.token = token
        self._rng = rng or random.Random()  # noqa: S311 - not for security
        self._http_client: httpx.AsyncClient | None = None
        # 1 request per (60/rpm) seconds, no initial burst
        self._rate_limiter = AsyncLimiter(1, 60.0 / requests_per_minute)

    async def initialize(self) -> None:
        """Initialize the HTTP client."""
        if self._http_client is not None:
            return

        headers = {"Content-Type": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"

        self._http_client = httpx.AsyncClient(
            timeout=httpx.Timeout(self.timeout),
            headers=headers,
            limits=httpx.Limits(max_keepalive_connections=5, max_connections=10),
        )
        logger.info("TextGenerationClient initialized", url=self.url, timeout=self.timeout)

    async def shutdown(self) -> None:
        """Close the HTTP client and release connections."""
        if self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None
            logger.debug("TextGenerationClient shutdown")

    def next_seed(self) -> int:
        return self._rng.randrange(self.seed_max)

    async def _execute_with_retry(self, request: TextGenerationRequest) -> str:
        """POST the request, retrying transient transport failures."""
        if self._http_client is None:
            await self.initialize()

        assert self._http_client is not None

        payload = orjson.dumps(request.model_dump(by_alias=True))
        last_exception: Exception | None = None

        for attempt in range(self.max_retries + 1):
            await self._rate_limiter.acquire()

            try:
                response = await self._http_client.post(self.url, content=payload)

                if response.status_code == 429:
                    retry_after = response.headers.get("retry-after", "60")
                    msg = f"Text generation rate limited, retry after {retry_after}s"
                    raise LLMRateLimitError(msg, status_code=429)

                response.raise_for_status()
                return response.text

            except httpx.TimeoutException as e:
                last_exception = e
                logger.warning(
                    "Text generation request timeout",
                    attempt=attempt + 1,
                    max_retries=self.max_retries,
                    timeout=self.timeout,
                )
                if attempt < self.max_retries:
                    continue
                msg = f"Text generation timeout after {self.timeout}s"
                raise LLMTimeoutError(msg) from e

            except httpx.HTTPStatusError as e:
                logger.warning(
                    "Text generation request failed",
                    status_code=e.response.status_code,
                    url=self.url,
                )
                msg = f"Text generation endpoint returned {e.response.status_code}"
                raise LLMResponseError(msg, status_code=e.response.status_code) from e

            except httpx.RequestError as e:
                last_exception = e
                logger.warning(
                    "Text generation connection error",
                    attempt=attempt + 1,
                    max_retries=self.max_retries,
                    error=str(e),
                )
                if attempt < self.max_retries:
                    continue
                msg = f"Cannot connect to text generation endpoint: {e}"
                raise LLMUnavailableError(msg) from e

        msg = "Max retries exceeded"
        raise LLMUnavailableError(msg) from last_exception

    async def generate(
        self,
        prompt: str,
        *,
        system: str | None = None,
        schema: type[T] | None = None,
    ) -> LLMCompletionResult:
        """Generate a completion.

        Args:
            prompt: User message.
            system: Optional system instruction.
            schema: Optional Pydantic model the JSON answer must match.

        Returns:
            LLMCompletionResult with raw text and optionally parsed output.

        Raises:
            LLMUnavailableError: If the endpoint cannot be reached.
            LLMTimeoutError: If the request times out.
            LLMResponseError: If the endpoint returns an error.
            LLMValidationError: If the answer doesn't match ``schema``.
        """
        messages: list[ChatMessage] = []
        if system:
            messages.append(ChatMessage(role="system", content=system))
        messages.append(ChatMessage(role="user", content=prompt))

        seed = self.next_seed()
        request = TextGenerationRequest(messages=messages, json_mode=True, seed=seed)
        raw_response = await self._execute_with_retry(request)
        logger.debug("Text generation output", seed=seed, raw_response=raw_response[:500])

        parsed: Any = None
        if schema is not None:
            try:
                parsed = schema.model_validate(load_json_object(raw_response))
            except (orjson.JSONDecodeError, ValidationError) as e:
                logger.warning(
                    "Failed to parse structured output",
                    schema=schema.__name__,
                    error=str(e),
                    raw_response=raw_response[:500],
                )
                msg = f"Response does not match {schema.__name__} schema: {e}"
                raise LLMValidationError(msg) from e

        return LLMCompletionResult(raw_response=raw_response, parsed=parsed, seed=seed)

    async def generate_structured(
        self,
        prompt: str,
        schema: type[T],
        *,
        system: str | None = None,
    ) -> T:
        """Generate structured output matching a Pydantic schema.

        Raises:
            LLMValidationError: If response doesn't match schema.
        """
        result = await self.generate(prompt=prompt, system=system, schema=schema)

        if result.parsed is None:
            msg = "Structured generation returned no parsed result"
            raise LLMValidationError(msg)

        return cast("T", result.parsed)
