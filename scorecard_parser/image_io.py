from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence
import base64
import os

from .config import Settings
from .errors import ImageNotFoundError
from .image_processing import image_bytes_to_data_url, media_type_for_path, normalize_image_bytes
from .logs import log


@dataclass
class ImageUnit:
    """One normalized input image, alive for a single request."""

    data: bytes
    media_type: str
    label: str

    def to_base64(self) -> str:
        return base64.b64encode(self.data).decode("ascii")

    def data_url(self) -> str:
        return image_bytes_to_data_url(self.data, self.media_type)


def label_for_path(path: str) -> str:
    """Filename without directory and extension: ``cards/a.png`` -> ``a``."""
    return os.path.splitext(os.path.basename(path))[0]


def check_paths_exist(paths: Sequence[str]) -> None:
    for p in paths:
        if not os.path.isfile(p):
            raise ImageNotFoundError(p)


def image_unit_from_bytes(name: str, data: bytes, settings: Settings) -> ImageUnit:
    media_type = media_type_for_path(name)
    label = label_for_path(name)
    out, out_type = normalize_image_bytes(
        data,
        media_type,
        quality=settings.image_quality,
        max_size=settings.image_max_size,
        label=label,
    )
    return ImageUnit(data=out, media_type=out_type, label=label)


def load_image_unit(path: str, settings: Settings) -> ImageUnit:
    # extension is checked before the file is opened
    media_type_for_path(path)
    if not os.path.isfile(path):
        raise ImageNotFoundError(path)
    with open(path, "rb") as f:
        data = f.read()
    return image_unit_from_bytes(path, data, settings)


def load_image_units(
    paths: Sequence[str],
    settings: Settings,
    quiet: bool = False,
    progress: Optional[Callable[[ImageUnit], None]] = None,
) -> List[ImageUnit]:
    """Normalize every path, one at a time, in input order.

    ``progress`` is called with each unit once it is ready.
    """
    for p in paths:
        media_type_for_path(p)
    check_paths_exist(paths)
    units: List[ImageUnit] = []
    for p in paths:
        unit = load_image_unit(p, settings)
        log(f" → {p} ({unit.media_type}, {len(unit.data)} bytes)", quiet)
        units.append(unit)
        if progress is not None:
            progress(unit)
    return units
