"""OpenAI-compatible chat completions provider."""
from __future__ import annotations

from typing import Any, List, Optional, Sequence, Tuple
import json

from openai import OpenAI, OpenAIError

from ..errors import ApiCallError, ResponseParseError
from ..logs import debug, log


def normalize_usage(usage: Any) -> Optional[dict]:
    """Usage object from the SDK (pydantic model or dict) as a plain dict."""
    if usage is None:
        return None
    if isinstance(usage, dict):
        return dict(usage)
    if hasattr(usage, "model_dump"):
        return usage.model_dump()
    if hasattr(usage, "to_dict"):
        return usage.to_dict()
    return None


def log_usage(usage: Optional[dict], quiet: bool) -> None:
    if not usage:
        return
    parts = []
    for key in ("prompt_tokens", "completion_tokens", "total_tokens", "total_cost"):
        if usage.get(key) is not None:
            parts.append(f"{key}={usage[key]}")
    if parts:
        log("Model usage: " + ", ".join(parts), quiet)


def build_content(units: Sequence[Any], prompt: str) -> List[dict]:
    """One text block followed by one image block per unit, in input order."""
    content: List[dict] = [{"type": "text", "text": prompt}]
    for unit in units:
        content.append({"type": "image_url", "image_url": {"url": unit.data_url()}})
    return content


def sanitize_messages(messages: List[dict]) -> List[dict]:
    # image payloads replaced by their length
    out = []
    for m in messages:
        if isinstance(m.get("content"), list):
            parts = []
            for c in m["content"]:
                if c.get("type") == "image_url":
                    parts.append({"type": "image_url", "len": len(c.get("image_url", {}).get("url", ""))})
                else:
                    parts.append({"type": c.get("type"), "text_snip": (c.get("text") or "")[:200]})
            out.append({"role": m.get("role"), "content": parts})
        else:
            out.append(m)
    return out


class OpenAIProvider:
    """Sends every image of a request in a single chat completion call.

    ``client`` can be injected (an ``openai.OpenAI`` or a test double).
    """

    def __init__(self, client: Optional[Any] = None):
        self._client = client

    def _build_client(self, cfg: Any):
        if self._client is not None:
            return self._client
        if not getattr(cfg, "api_key", None):
            raise ApiCallError("OPENAI_API_KEY is not set")
        kwargs = {"api_key": cfg.api_key, "max_retries": 0}
        if getattr(cfg, "base_url", None):
            kwargs["base_url"] = cfg.base_url
        return OpenAI(**kwargs)

    def call_images(self, cfg: Any, units: Sequence[Any], prompt: str, quiet: bool = False) -> Tuple[str, Optional[dict]]:
        client = self._build_client(cfg)
        messages = [{"role": "user", "content": build_content(units, prompt)}]

        debug_on = getattr(cfg, "image_debug", False)
        if debug_on:
            debug(f"messages payload: {json.dumps(sanitize_messages(messages), ensure_ascii=False)}", True)

        log(
            f"Model request: model={cfg.model}, images={len(units)}, prompt_len={len(prompt)}",
            quiet,
        )
        try:
            resp = client.chat.completions.create(
                model=cfg.model,
                messages=messages,
                max_tokens=cfg.max_tokens,
                timeout=cfg.timeout,
            )
        except OpenAIError as e:
            raise ApiCallError(f"{type(e).__name__}: {e}") from e

        if not getattr(resp, "choices", None):
            raise ResponseParseError("model response has no choices")
        text = resp.choices[0].message.content or ""
        if not text.strip():
            raise ResponseParseError("empty response from model")
        usage = normalize_usage(getattr(resp, "usage", None))
        log("Model response received", quiet)
        log_usage(usage, quiet)
        debug(f"response text: {text[:500]!r}", debug_on)
        return text, usage
