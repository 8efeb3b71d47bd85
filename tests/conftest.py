import io
import os
import sys

import pytest
from PIL import Image

# Ensure project root is importable during tests
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    # no real credentials or .env files leak into tests
    for name in (
        "OPENAI_API_KEY",
        "OPENAI_BASE_URL",
        "OPENAI_MODEL",
        "OPENAI_TIMEOUT",
        "OPENAI_MAX_TOKENS",
        "IMAGE_QUALITY",
        "IMAGE_MAX_SIZE",
        "PROMPT_FILE",
        "DEBUG",
        "IMAGE_DEBUG",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr("scorecard_parser.config._find_env_file", lambda: str(tmp_path / "no.env"))
    yield


@pytest.fixture
def image_bytes():
    def make(fmt="PNG", size=(64, 48), color=(10, 120, 200), mode="RGB"):
        if mode == "RGBA" and len(color) == 3:
            color = color + (255,)
        img = Image.new(mode, size, color=color)
        buf = io.BytesIO()
        img.save(buf, format=fmt)
        return buf.getvalue()

    return make


@pytest.fixture
def write_image(tmp_path, image_bytes):
    def write(name, fmt=None, **kwargs):
        if fmt is None:
            ext = os.path.splitext(name)[1].lower()
            fmt = {".jpg": "JPEG", ".jpeg": "JPEG", ".gif": "GIF"}.get(ext, "PNG")
        p = tmp_path / name
        p.write_bytes(image_bytes(fmt, **kwargs))
        return str(p)

    return write


class DummyProvider:
    """Provider double that records calls and returns a canned reply."""

    def __init__(self, reply="{}", usage=None, error=None):
        self.reply = reply
        self.usage = usage if usage is not None else {"total_tokens": 42}
        self.error = error
        self.calls = []

    def call_images(self, cfg, units, prompt, quiet=False):
        self.calls.append({"cfg": cfg, "units": list(units), "prompt": prompt})
        if self.error is not None:
            raise self.error
        return self.reply, self.usage


@pytest.fixture
def dummy_provider():
    return DummyProvider
