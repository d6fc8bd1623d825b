"""Recipe import gateway.

Fetches a recipe web page, reduces it to its visible text and lets the
text-generation endpoint extract a structured recipe from it.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Any
from urllib.parse import urlsplit

import httpx
from bs4 import BeautifulSoup

from cookbook.core.config import get_settings
from cookbook.llm.exceptions import LLMError
from cookbook.llm.prompts import GeneratedRecipe, ImportRecipePrompt
from cookbook.observability.logging import get_logger
from cookbook.services.importing.exceptions import (
    InvalidImportURLError,
    RecipeImportError,
    RecipeImportFetchError,
)


if TYPE_CHECKING:
    from cookbook.core.config.settings import ImportingSettings
    from cookbook.llm.client.protocol import LLMClientProtocol


logger = get_logger(__name__)

_CLUTTER_TAGS = ["script", "style", "noscript", "svg", "nav", "footer", "header", "iframe"]
_WHITESPACE = re.compile(r"\s+")


def validate_import_url(url: Any) -> str:
    """Return ``url`` if it is a non-empty http(s) URL string.

    Raises:
        InvalidImportURLError: Otherwise.
    """
    if not url or not isinstance(url, str):
        msg = "URL is missing or not a string"
        raise InvalidImportURLError(msg)

    url = url.strip()
    parts = urlsplit(url)
    if parts.scheme not in ("http", "https") or not parts.netloc:
        msg = f"Not an http(s) URL: {url!r}"
        raise InvalidImportURLError(msg)
    return url


def extract_page_text(html: str, max_chars: int = 8000) -> str:
    """Visible body text of a page with clutter removed.

    Whitespace runs collapse to one space; the result is cut at ``max_chars``.
    """
    soup = BeautifulSoup(html, "html.parser")
    for tag in soup(_CLUTTER_TAGS):
        tag.decompose()

    root = soup.body or soup
    text = _WHITESPACE.sub(" ", root.get_text(" ")).strip()
    return text[:max_chars]


class RecipeImportService:
    """Imports a recipe from an arbitrary URL.

    Example:
        ```python
        service = RecipeImportService(llm_client)
        await service.initialize()

        recipe = await service.import_from_url("https://example.com/rezept")

        await service.shutdown()
        ```
    """

    def __init__(
        self,
        llm_client: LLMClientProtocol,
        settings: ImportingSettings | None = None,
    ) -> None:
        self._llm_client = llm_client
        self._settings = settings or get_settings().importing
        self._prompt = ImportRecipePrompt()
        self._http_client: httpx.AsyncClient | None = None

    async def initialize(self) -> None:
        """Initialize the page-fetching HTTP client."""
        self._http_client = httpx.AsyncClient(
            timeout=httpx.Timeout(self._settings.fetch_timeout),
            follow_redirects=True,
            headers={
                # Some sites block non-browser clients
                "User-Agent": self._settings.user_agent,
                "Accept": (
                    "text/html,application/xhtml+xml,application/xml;"
                    "q=0.9,image/webp,*/*;q=0.8"
                ),
                "Accept-Language": "de-DE,de;q=0.9,en;q=0.5",
            },
        )
        logger.info("RecipeImportService initialized")

    async def shutdown(self) -> None:
        """Release resources."""
        if self._http_client:
            await self._http_client.aclose()
            self._http_client = None
        logger.debug("RecipeImportService shutdown")

    async def import_from_url(self, url: Any) -> GeneratedRecipe:
        """Extract a recipe from the page at ``url``.

        Raises:
            InvalidImportURLError: If ``url`` is not a usable http(s) URL.
            RecipeImportFetchError: If the page cannot be loaded.
            RecipeImportError: If no recipe could be extracted.
        """
        url = validate_import_url(url)
        html = await self._fetch_html(url)
        page_text = extract_page_text(html, self._settings.max_chars)
        logger.debug("Page text extracted", url=url, chars=len(page_text))

        try:
            recipe = await self._llm_client.generate_structured(
                self._prompt.format(page_text=page_text or url),
                GeneratedRecipe,
                system=self._prompt.system_prompt,
            )
        except LLMError as e:
            logger.warning("Recipe extraction failed", url=url, error=str(e))
            raise RecipeImportError(str(e)) from e

        logger.info("Recipe imported", url=url, title=recipe.title)
        return recipe

    async def _fetch_html(self, url: str) -> str:
        """Fetch HTML content from URL.

        Raises:
            RecipeImportFetchError: On transport errors, timeouts and non-2xx answers.
        """
        if not self._http_client:
            msg = "Service not initialized. Call initialize() first."
            raise RuntimeError(msg)

        try:
            response = await self._http_client.get(url)
            response.raise_for_status()

        except httpx.TimeoutException as e:
            logger.warning("Request timed out", url=url, error=str(e))
            error_msg = f"Request timed out: {url}"
            raise RecipeImportFetchError(error_msg) from e

        except httpx.HTTPStatusError as e:
            logger.warning(
                "HTTP error fetching URL",
                url=url,
                status_code=e.response.status_code,
            )
            error_msg = f"HTTP {e.response.status_code} fetching {url}"
            raise RecipeImportFetchError(error_msg) from e

        except httpx.RequestError as e:
            logger.warning("Request error fetching URL", url=url, error=str(e))
            error_msg = f"Failed to fetch {url}: {e}"
            raise RecipeImportFetchError(error_msg) from e

        return response.text
