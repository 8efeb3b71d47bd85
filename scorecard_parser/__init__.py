"""Public API for scorecard_parser.

Expose a small, explicit set of helpers used by the CLI, the JSON API and tests.
"""
from importlib.metadata import PackageNotFoundError, version

try:
	__version__ = version("scorecard_parser")
except PackageNotFoundError:
	__version__ = "0.0.0"

from .config import Settings, load_config, read_prompt_file
from .errors import (
	ScorecardError,
	UsageError,
	ImageNotFoundError,
	UnsupportedImageFormatError,
	ImageEncodingError,
	ApiCallError,
	ResponseParseError,
)
from .image_io import ImageUnit, load_image_unit, load_image_units, image_unit_from_bytes
from .image_processing import media_type_for_path, normalize_image_bytes, to_jpeg_bytes
from .reassembly import parse_response_text, reassemble, dump_result
from .services.scorecards import ScorecardService
from .json_api import handle_json_request

__all__ = [
	"Settings",
	"load_config",
	"read_prompt_file",
	"ScorecardError",
	"UsageError",
	"ImageNotFoundError",
	"UnsupportedImageFormatError",
	"ImageEncodingError",
	"ApiCallError",
	"ResponseParseError",
	"ImageUnit",
	"load_image_unit",
	"load_image_units",
	"image_unit_from_bytes",
	"media_type_for_path",
	"normalize_image_bytes",
	"to_jpeg_bytes",
	"parse_response_text",
	"reassemble",
	"dump_result",
	"ScorecardService",
	"handle_json_request",
	"__version__",
]
