"""Turn the model's reply text into the output document."""
from __future__ import annotations

from typing import Any, Dict, List, Sequence
import json
import re

from .errors import ResponseParseError
from .prompts import image_key


_FENCE_RE = re.compile(r"^```[A-Za-z0-9_-]*\s*\n(.*?)\n?```$", re.DOTALL)


def strip_code_fence(text: str) -> str:
    text = text.strip()
    m = _FENCE_RE.match(text)
    if m:
        return m.group(1).strip()
    return text


def parse_response_text(text: str) -> Dict[str, Any]:
    """Parse the reply as a JSON object. No repair beyond a Markdown fence."""
    if not text or not text.strip():
        raise ResponseParseError("empty response from model")
    try:
        data = json.loads(strip_code_fence(text))
    except json.JSONDecodeError as e:
        raise ResponseParseError(f"model response is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise ResponseParseError(f"expected a JSON object, got {type(data).__name__}")
    return data


def reassemble(parsed: Dict[str, Any], labels: Sequence[str]) -> Dict[str, Any]:
    """Map each reply entry onto the input label it belongs to.

    Keys ``image1..imageN`` are mapped by number. Anything else is mapped by
    position: the Nth key goes to the Nth label.
    """
    keys: List[str] = list(parsed.keys())
    if len(keys) != len(labels):
        raise ResponseParseError(
            f"model returned {len(keys)} scorecard(s) for {len(labels)} image(s)"
        )
    expected = [image_key(i) for i in range(len(labels))]
    if set(keys) == set(expected):
        keys = expected
    return {label: parsed[key] for label, key in zip(labels, keys)}


def dump_result(result: Any, pretty: bool = False) -> str:
    if pretty:
        return json.dumps(result, ensure_ascii=False, indent=2)
    return json.dumps(result, ensure_ascii=False)
