"""Command-line entry points.

``scorecard-parse`` takes 1 to 5 scorecard images and prints one JSON object
keyed by filename stem; ``scorecard-parse-single`` takes exactly one image and
prints the bare scorecard object.
"""
import argparse
import sys
from typing import Optional, Sequence

from tqdm import tqdm

from .config import Settings, load_config
from .errors import ScorecardError, UsageError
from .image_io import load_image_units
from .logs import log
from .providers.base import ModelProvider
from .providers.openai_provider import OpenAIProvider
from .reassembly import dump_result
from .services.scorecards import MAX_IMAGES, ScorecardService, check_image_count, check_image_names, dedupe_paths


def parse_args(argv: Optional[Sequence[str]] = None, single: bool = False) -> argparse.Namespace:
    prog = "scorecard-parse-single" if single else "scorecard-parse"
    parser = argparse.ArgumentParser(
        prog=prog,
        description=(
            "Parse a mini golf scorecard image into JSON with an OpenAI-compatible vision model."
            if single
            else f"Parse up to {MAX_IMAGES} mini golf scorecard images into JSON with an OpenAI-compatible vision model."
        ),
    )
    # count is validated in main() so that a wrong count exits with status 1
    parser.add_argument(
        "images",
        nargs="*",
        help=(
            "Scorecard image path (jpg, jpeg, png or gif)."
            if single
            else f"Scorecard image paths, 1 to {MAX_IMAGES} (jpg, jpeg, png or gif). "
            "Output is keyed by file name without extension, so two different files "
            "with the same name are rejected; a path given twice is parsed once."
        ),
    )
    parser.add_argument(
        "-f",
        "--format",
        dest="format",
        action="store_true",
        help="Format the output JSON.",
    )
    parser.add_argument(
        "-n",
        "--no-animation",
        dest="no_animation",
        action="store_true",
        help="Disable the loading animation.",
    )
    parser.add_argument(
        "-p",
        "--prompt-file",
        dest="prompt_file",
        help="Override PROMPT_FILE from .env (file whose text replaces the built-in prompt).",
    )
    parser.add_argument(
        "--image-quality",
        dest="image_quality",
        type=int,
        help="Override IMAGE_QUALITY from .env (JPEG quality 1-100 for converted images).",
    )
    parser.add_argument(
        "--image-max-size",
        dest="image_max_size",
        type=int,
        help="Override IMAGE_MAX_SIZE from .env (max side in pixels, 0 keeps the original size).",
    )
    parser.add_argument(
        "-k",
        "--OPENAI_API_KEY",
        dest="openai_api_key",
        help="Override OPENAI_API_KEY from .env.",
    )
    parser.add_argument(
        "-u",
        "--OPENAI_BASE_URL",
        dest="openai_base_url",
        help="Override OPENAI_BASE_URL from .env.",
    )
    parser.add_argument(
        "-m",
        "--OPENAI_MODEL",
        dest="openai_model",
        help="Override OPENAI_MODEL from .env.",
    )
    parser.add_argument(
        "-T",
        "--OPENAI_TIMEOUT",
        dest="openai_timeout",
        type=int,
        help="Override OPENAI_TIMEOUT from .env (seconds).",
    )
    parser.add_argument(
        "-M",
        "--OPENAI_MAX_TOKENS",
        dest="openai_max_tokens",
        type=int,
        help="Override OPENAI_MAX_TOKENS from .env.",
    )
    parser.add_argument(
        "--debug",
        dest="image_debug",
        action="store_true",
        help="Print the sanitized request payload and the raw reply to stderr.",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Quiet mode: suppress informational logs and the animation.",
    )
    # image paths and flags may be interleaved: a.png -f b.png
    return parser.parse_intermixed_args(argv)


def apply_overrides(cfg: Settings, args: argparse.Namespace) -> Settings:
    if getattr(args, "openai_api_key", None):
        cfg.api_key = args.openai_api_key
    if getattr(args, "openai_base_url", None):
        cfg.base_url = args.openai_base_url
    if getattr(args, "openai_model", None):
        cfg.model = args.openai_model
    if getattr(args, "openai_timeout", None) is not None:
        cfg.timeout = args.openai_timeout
    if getattr(args, "openai_max_tokens", None) is not None:
        cfg.max_tokens = args.openai_max_tokens
    if getattr(args, "prompt_file", None):
        cfg.prompt_file = args.prompt_file
    if getattr(args, "image_quality", None) is not None:
        cfg.image_quality = args.image_quality
    if getattr(args, "image_max_size", None) is not None:
        cfg.image_max_size = args.image_max_size
    if getattr(args, "image_debug", False):
        cfg.image_debug = True
    return cfg


def _usage_line(single: bool) -> str:
    if single:
        return "Usage: scorecard-parse-single <path_to_scorecard_image> [options]"
    return "Usage: scorecard-parse <path_to_scorecard_image1> [path_to_scorecard_image2 ...] [options]"


def run(args: argparse.Namespace, provider: Optional[ModelProvider] = None, single: bool = False) -> str:
    """Run the pipeline and return the JSON text to print.

    Raises ScorecardError subclasses; exit codes are decided by main().
    """
    check_image_count(len(args.images), single=single)
    paths = dedupe_paths(args.images)
    if len(paths) < len(args.images):
        log(f"Ignoring {len(args.images) - len(paths)} repeated image path(s)", args.quiet)
    check_image_names(paths, single=single)

    cfg = apply_overrides(load_config(), args)
    log(f"Model: {cfg.model}", args.quiet)
    log(f"BASE_URL: {cfg.base_url or 'default'}", args.quiet)
    log(f"Images received: {len(paths)}", args.quiet)

    service = ScorecardService(provider or OpenAIProvider())
    label = "Parsing scorecard" if single else "Parsing scorecards"
    # one step per image normalized, one for the model request
    with tqdm(
        total=len(paths) + 1,
        desc=label,
        unit="step",
        file=sys.stderr,
        leave=False,
        disable=args.no_animation or args.quiet,
    ) as pbar:
        units = load_image_units(paths, cfg, quiet=args.quiet, progress=lambda unit: pbar.update(1))
        pbar.set_postfix_str("waiting for model")
        document, _usage = service.parse(cfg, units, single=single, quiet=args.quiet)
        pbar.update(1)
    log("Scorecard parsed successfully!" if single else "Scorecards parsed successfully!", args.quiet)
    return dump_result(document, pretty=args.format)


def main(argv: Optional[Sequence[str]] = None, provider: Optional[ModelProvider] = None, single: bool = False) -> None:
    args = parse_args(argv, single=single)
    try:
        output = run(args, provider=provider, single=single)
    except UsageError as e:
        print(_usage_line(single), file=sys.stderr)
        print(str(e), file=sys.stderr)
        sys.exit(e.exit_code)
    except ScorecardError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(e.exit_code)
    print(output)


def main_single(argv: Optional[Sequence[str]] = None, provider: Optional[ModelProvider] = None) -> None:
    main(argv, provider=provider, single=True)


if __name__ == "__main__":
    main()
