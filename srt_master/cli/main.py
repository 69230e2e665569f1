"""Main CLI entry point for srt_master."""

import argparse
import logging
import sys

from srt_master import __version__
from srt_master.cli.commands import translate, validate
from srt_master.config import GENRES, LANGUAGES


def _add_config_arguments(parser: argparse.ArgumentParser) -> None:
    """Add the flags shared by commands that build a configuration."""
    parser.add_argument("--config", help="JSON file with configuration values")
    parser.add_argument(
        "--source-lang",
        help=f"Source language (e.g. {', '.join(LANGUAGES[:4])})",
    )
    parser.add_argument("--target-lang", help="Target language (default: Vietnamese)")
    parser.add_argument("--genre", help=f"Content genre (e.g. {', '.join(GENRES[:3])})")
    parser.add_argument("--prompt", help="Extra instructions for the translator")
    parser.add_argument(
        "--batch-size",
        type=int,
        help="Subtitle lines per request, 1-50 (default: 10)",
    )
    parser.add_argument(
        "--pro-allocation",
        type=int,
        help="Percentage of unflagged batches sent to the quality tier (default: 30)",
    )
    parser.add_argument(
        "--delay",
        type=float,
        help="Seconds to wait between batches (default: 1.0)",
    )
    parser.add_argument("--fast-model", help="Model id for the fast tier")
    parser.add_argument("--quality-model", help="Model id for the quality tier")


def main():
    """Main CLI entry point with subcommands."""
    parser = argparse.ArgumentParser(
        prog="srt-master",
        description="Batch subtitle translation with context checking and model routing",
        epilog="Use 'srt-master <command> --help' for command-specific help",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # srt-master translate <subtitle>
    translate_parser = subparsers.add_parser(
        "translate",
        help="Translate a subtitle file",
        description="Context-check and translate a subtitle file batch by batch",
    )
    translate_parser.add_argument("subtitle", help="Path to subtitle file (.srt, .ass, .ssa, .vtt)")
    translate_parser.add_argument(
        "-o",
        "--output",
        help="Output SRT path (default: <name>.<target-lang>.srt next to the input)",
    )
    translate_parser.add_argument(
        "--auto-apply",
        action="store_true",
        help="Use every context suggestion as translation input",
    )
    translate_parser.add_argument(
        "--seed",
        type=int,
        help="Seed for tier routing (repeatable runs)",
    )
    _add_config_arguments(translate_parser)

    # srt-master validate
    validate_parser = subparsers.add_parser(
        "validate",
        help="Check API key and settings",
        description="Validate API access and configuration without translating",
    )
    _add_config_arguments(validate_parser)

    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG, format="%(asctime)s %(levelname)s %(name)s: %(message)s"
        )

    # Dispatch to appropriate command
    if args.command == "translate":
        return translate.translate_command(args)
    elif args.command == "validate":
        return validate.validate_command(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
