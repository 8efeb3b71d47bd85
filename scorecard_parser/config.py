from dataclasses import dataclass
from typing import Optional
import os
import sys

from dotenv import load_dotenv, find_dotenv


DEFAULT_MODEL = "gpt-4.1-mini"


@dataclass
class Settings:
    api_key: Optional[str]
    base_url: Optional[str]
    model: str = DEFAULT_MODEL
    timeout: int = 120
    max_tokens: int = 2500
    image_quality: int = 90
    image_max_size: int = 0
    prompt_file: Optional[str] = None
    image_debug: bool = False


def _find_env_file() -> str:
    # find_dotenv() first; if it fails, walk up from the working directory
    _env = find_dotenv()
    if _env:
        return _env
    p = os.path.abspath(os.getcwd())
    while True:
        cand = os.path.join(p, ".env")
        if os.path.exists(cand):
            return cand
        parent = os.path.dirname(p)
        if parent == p:
            break
        p = parent
    return ".env"


def _int_env(name: str, default: int) -> int:
    v = os.environ.get(name)
    if not v:
        return default
    try:
        return int(v)
    except ValueError:
        print(f"WARNING: invalid {name}={v!r}, using default {default}", file=sys.stderr)
        return default


def load_config() -> Settings:
    """Build Settings from the process environment and the nearest .env file.

    A missing OPENAI_API_KEY is not an error here: the API call fails later
    with ApiCallError, so argument and image errors are still reported first.
    """
    load_dotenv(_find_env_file())

    debug_env = os.environ.get("DEBUG", None)
    if debug_env is None:
        debug_env = os.environ.get("IMAGE_DEBUG", "")

    return Settings(
        api_key=os.environ.get("OPENAI_API_KEY") or None,
        base_url=os.environ.get("OPENAI_BASE_URL") or None,
        model=os.environ.get("OPENAI_MODEL") or DEFAULT_MODEL,
        timeout=_int_env("OPENAI_TIMEOUT", 120),
        max_tokens=_int_env("OPENAI_MAX_TOKENS", 2500),
        image_quality=_int_env("IMAGE_QUALITY", 90),
        image_max_size=_int_env("IMAGE_MAX_SIZE", 0),
        prompt_file=os.environ.get("PROMPT_FILE") or None,
        image_debug=str(debug_env).lower() in ("1", "true", "yes"),
    )


def read_prompt_file(path: Optional[str]) -> str:
    if not path:
        return ""
    try:
        with open(path, "r", encoding="utf-8") as f:
            return f.read().strip()
    except OSError as e:
        print(f"ERROR: failed to read PROMPT_FILE={path!r}: {e}", file=sys.stderr)
        return ""
