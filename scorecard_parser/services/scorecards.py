"""ScorecardService: one provider call per batch, reply turned into output JSON."""
from typing import Any, Dict, List, Optional, Sequence, Tuple
import os

from ..config import Settings, read_prompt_file
from ..errors import UsageError
from ..image_io import ImageUnit, label_for_path
from ..prompts import build_prompt
from ..providers.base import ModelProvider
from ..reassembly import parse_response_text, reassemble


MAX_IMAGES = 5


def check_image_count(count: int, single: bool = False) -> None:
    if single:
        if count != 1:
            raise UsageError(f"You must provide exactly 1 image path (got {count}).")
    elif not 1 <= count <= MAX_IMAGES:
        raise UsageError(f"You must provide at least 1 and at most {MAX_IMAGES} image paths (got {count}).")


def dedupe_paths(paths: Sequence[str]) -> List[str]:
    """Drop repeats of the same file, keeping the first occurrence."""
    seen = set()
    out: List[str] = []
    for p in paths:
        key = os.path.realpath(p)
        if key in seen:
            continue
        seen.add(key)
        out.append(p)
    return out


def check_image_names(names: Sequence[str], single: bool = False) -> None:
    """Validate the request shape before anything is read from disk."""
    check_image_count(len(names), single=single)
    seen: Dict[str, str] = {}
    for name in names:
        label = label_for_path(name)
        if label in seen:
            raise UsageError(f"{seen[label]} and {name} would both be reported as {label!r}")
        seen[label] = name


class ScorecardService:
    def __init__(self, provider: ModelProvider):
        self.provider = provider

    def parse(
        self,
        cfg: Settings,
        units: Sequence[ImageUnit],
        single: bool = False,
        quiet: bool = False,
    ) -> Tuple[Dict[str, Any], Optional[dict]]:
        """Return (document, usage).

        ``single`` returns the bare scorecard object; otherwise the result is
        keyed by each unit's label.
        """
        check_image_count(len(units), single=single)
        labels = [u.label for u in units]
        prompt = build_prompt(labels, single=single, base_prompt=read_prompt_file(cfg.prompt_file))
        text, usage = self.provider.call_images(cfg, units, prompt, quiet=quiet)
        parsed = parse_response_text(text)
        if single:
            return parsed, usage
        return reassemble(parsed, labels), usage
