import sys


PREFIX = "[scorecard_parser]"


def log(msg: str, quiet: bool = False) -> None:
    """Prefixed informational line on stderr."""
    if not quiet:
        print(f"{PREFIX} {msg}", file=sys.stderr)


def warn(msg: str) -> None:
    # warnings are shown even in quiet mode
    print(f"{PREFIX} WARNING: {msg}", file=sys.stderr)


def debug(msg: str, enabled: bool) -> None:
    if enabled:
        print(f"[DEBUG] {msg}", file=sys.stderr)
