from __future__ import annotations

from typing import Optional, Tuple
import base64
import io
import os

from PIL import Image, ImageOps

from .errors import ImageEncodingError, UnsupportedImageFormatError
from .logs import warn


JPEG = "image/jpeg"
PNG = "image/png"
GIF = "image/gif"

EXTENSION_MEDIA_TYPES = {
    ".jpg": JPEG,
    ".jpeg": JPEG,
    ".png": PNG,
    ".gif": GIF,
}

# Pillow format name -> media type; phone cameras often write MPO, a JPEG container
FORMAT_MEDIA_TYPES = {
    "JPEG": JPEG,
    "MPO": JPEG,
    "PNG": PNG,
    "GIF": GIF,
}


def media_type_for_path(path: str) -> str:
    ext = os.path.splitext(path)[1].lower()
    try:
        return EXTENSION_MEDIA_TYPES[ext]
    except KeyError:
        raise UnsupportedImageFormatError(path, ext) from None


def probe_image(data: bytes) -> Tuple[Optional[str], Optional[Tuple[int, int]]]:
    """Return (media type, size) as identified by Pillow, or (None, None)."""
    try:
        with Image.open(io.BytesIO(data)) as im:
            return FORMAT_MEDIA_TYPES.get(im.format), im.size
    except (OSError, Image.DecompressionBombError):
        return None, None


def _exceeds(size: Optional[Tuple[int, int]], max_size: int) -> bool:
    return bool(max_size) and size is not None and max(size) > max_size


def _flatten(im: Image.Image) -> Image.Image:
    # transparent pixels go onto white, not black
    if im.mode in ("RGBA", "LA") or (im.mode == "P" and "transparency" in im.info):
        rgba = im.convert("RGBA")
        canvas = Image.new("RGB", rgba.size, (255, 255, 255))
        canvas.paste(rgba, mask=rgba.split()[-1])
        return canvas
    return im.convert("RGB")


def to_jpeg_bytes(data: bytes, quality: int, max_size: int = 0) -> bytes:
    """Decode ``data`` and save it as JPEG, downscaling to ``max_size`` if set.

    Any Pillow failure is raised as ImageEncodingError.
    """
    try:
        with Image.open(io.BytesIO(data)) as src:
            im = ImageOps.exif_transpose(src)
            im = _flatten(im)
            w, h = im.size
            if max_size:
                scale = min(1.0, float(max_size) / max(w, h))
                if scale < 1.0:
                    im = im.resize((max(1, int(w * scale)), max(1, int(h * scale))), Image.LANCZOS)
            buf = io.BytesIO()
            try:
                im.save(buf, format="JPEG", quality=quality, optimize=True)
            except OSError:
                buf = io.BytesIO()
                im.save(buf, format="JPEG", quality=min(quality, 95), optimize=False)
    except Exception as e:
        raise ImageEncodingError(f"failed to encode image as JPEG: {e}") from e
    out = buf.getvalue()
    if not out:
        raise ImageEncodingError("JPEG encoding resulted in empty bytes")
    return out


def normalize_image_bytes(
    data: bytes,
    media_type: str,
    quality: int = 90,
    max_size: int = 0,
    label: str = "image",
) -> Tuple[bytes, str]:
    """Return (bytes, media type) ready for upload.

    JPEG input is passed through untouched unless it needs downscaling.
    Everything else is re-encoded to JPEG; if that fails the original bytes
    are kept together with the media type they actually carry.
    """
    detected, size = probe_image(data)
    if detected == JPEG and not _exceeds(size, max_size):
        return data, JPEG
    try:
        return to_jpeg_bytes(data, quality, max_size), JPEG
    except ImageEncodingError as e:
        fallback = detected or media_type
        warn(f"{label}: {e}; sending original bytes as {fallback}")
        return data, fallback


def image_bytes_to_data_url(data: bytes, media_type: str) -> str:
    b64 = base64.b64encode(data).decode("ascii")
    return f"data:{media_type};base64,{b64}"
