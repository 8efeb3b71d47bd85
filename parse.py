#!/usr/bin/env python3
"""Thin runner for the `scorecard_parser` package, delegates to `scorecard_parser.cli.main()`.

Provides a convenient entrypoint `python parse.py <image> [image ...]` for
local use without installing the console scripts.
"""
from scorecard_parser.cli import main


if __name__ == "__main__":
    main()
