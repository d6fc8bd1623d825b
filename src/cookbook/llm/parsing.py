"""Helpers for reading JSON out of generated text."""

from __future__ import annotations

import re
from typing import Any

import orjson


_JSON_FENCE = re.compile(r"```json\n?")
_FENCE = re.compile(r"```\n?")


def strip_code_fences(text: str) -> str:
    """Remove Markdown code-fence markers the model may add despite instructions."""
    return _FENCE.sub("", _JSON_FENCE.sub("", text)).strip()


def load_json_object(text: str) -> Any:
    """Decode generated text as JSON after stripping code fences.

    Raises:
        orjson.JSONDecodeError: If the text is not valid JSON.
    """
    return orjson.loads(strip_code_fences(text))
