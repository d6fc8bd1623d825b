"""Image-generation URL templating."""

from __future__ import annotations

from urllib.parse import quote, urlencode

from cookbook.core.config.settings import ImageGenerationSettings


# Characters encodeURIComponent leaves alone; keeps generated URLs stable
# for prompts that were persisted by earlier clients.
_URI_COMPONENT_SAFE = "!*'()"


def illustration_url(
    title: str,
    settings: ImageGenerationSettings | None = None,
) -> str:
    """Build the image URL for a recipe title.

    The prompt is the title followed by the configured style suffix; the
    image endpoint renders it on GET, so the URL itself is the image.
    """
    settings = settings or ImageGenerationSettings()
    prompt = f"{title} {settings.style}"
    query = urlencode(
        {"width": settings.width, "height": settings.height, "nologo": "true"}
    )
    return (
        f"{settings.url.rstrip('/')}/{quote(prompt, safe=_URI_COMPONENT_SAFE)}"
        f"?{query}"
    )
