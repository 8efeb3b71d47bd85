"""Error types raised by the pipeline stages.

Every stage raises one of these; only the CLI driver turns them into exit
codes, and the JSON API turns them into ``{"ok": False, "errors": [...]}``.
"""


class ScorecardError(Exception):
    """Base class for all scorecard_parser errors."""

    exit_code = 1


class UsageError(ScorecardError):
    """Wrong number of image paths or otherwise unusable arguments."""


class ImageNotFoundError(ScorecardError):
    def __init__(self, path: str):
        super().__init__(f"File not found: {path}")
        self.path = path


class UnsupportedImageFormatError(ScorecardError):
    def __init__(self, path: str, extension: str):
        shown = extension or "(none)"
        super().__init__(f"Unsupported image format {shown!r} for {path}; expected jpg, jpeg, png or gif")
        self.path = path
        self.extension = extension


class ImageEncodingError(ScorecardError):
    """JPEG re-encoding failed. Recovered locally by the normalizer."""


class ApiCallError(ScorecardError):
    """The completion API call failed (network, auth, quota, bad request)."""


class ResponseParseError(ScorecardError):
    """The completion API reply could not be turned into scorecard JSON."""
