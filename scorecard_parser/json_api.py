from typing import List, Optional
import base64
import binascii

from .config import load_config
from .errors import ScorecardError
from .image_io import ImageUnit, image_unit_from_bytes, label_for_path, load_image_unit
from .providers.base import ModelProvider
from .providers.openai_provider import OpenAIProvider
from .reassembly import dump_result
from .services.scorecards import ScorecardService, check_image_names


def handle_json_request(req: dict, provider: Optional[ModelProvider] = None) -> dict:
    """Programmatic counterpart of the CLI.

    ``req``::

        {"action": "parse",
         "images": [{"name": "a.png", "path": "..."} | {"name": "b.jpg", "data_b64": "..."}],
         "single": false, "format": false, "include_usage": false}

    Returns ``{"ok": True, "results": ..., "text": ...}`` or
    ``{"ok": False, "errors": [...]}``; pipeline errors are never raised.
    """
    if req.get("action", "parse") != "parse":
        return {"ok": False, "errors": ["unsupported action"]}

    images = req.get("images")
    if not isinstance(images, list):
        return {"ok": False, "errors": ["images must be a list"]}

    single = bool(req.get("single", False))
    pretty = bool(req.get("format", False))
    include_usage = bool(req.get("include_usage", False))

    names: List[str] = []
    for idx, itm in enumerate(images, start=1):
        if not isinstance(itm, dict):
            return {"ok": False, "errors": [f"image #{idx} must be an object"]}
        for field in ("name", "path", "data_b64"):
            if itm.get(field) is not None and not isinstance(itm[field], str):
                return {"ok": False, "errors": [f"image #{idx}: {field} must be a string"]}
        names.append(itm.get("name") or itm.get("path") or f"image_{idx}.jpg")

    try:
        check_image_names(names, single=single)
    except ScorecardError as e:
        return {"ok": False, "errors": [str(e)]}

    cfg = load_config()
    units: List[ImageUnit] = []
    for name, itm in zip(names, images):
        try:
            if itm.get("data_b64") is not None:
                try:
                    data = base64.b64decode(itm["data_b64"], validate=True)
                except (binascii.Error, ValueError) as e:
                    return {"ok": False, "errors": [f"invalid base64 for image {name}: {e}"]}
                units.append(image_unit_from_bytes(name, data, cfg))
            elif itm.get("path") is not None:
                unit = load_image_unit(itm["path"], cfg)
                if itm.get("name"):
                    unit.label = label_for_path(itm["name"])
                units.append(unit)
            else:
                return {"ok": False, "errors": [f"image {name} missing data_b64 or path"]}
        except ScorecardError as e:
            return {"ok": False, "errors": [str(e)]}

    service = ScorecardService(provider or OpenAIProvider())
    try:
        document, usage = service.parse(cfg, units, single=single, quiet=True)
    except ScorecardError as e:
        return {"ok": False, "errors": [str(e)]}

    out = {"ok": True, "results": document, "text": dump_result(document, pretty=pretty)}
    if include_usage:
        out["usage"] = usage
    return out
