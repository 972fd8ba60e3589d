"""Command-line interface for PyQuill."""

import argparse
import logging
import sys
from pathlib import Path

from pyquill.config import get_config
from pyquill.data.exporter import GameDataExporter
from pyquill.data.loader import IMAGE_FORMATS, ImageLoadError, load_image
from pyquill.decoder.assembler import decode_game
from pyquill.decoder.errors import DecodeError
from pyquill.decoder.header import find_signature
from pyquill.decoder.image import ByteImage

logger = logging.getLogger(__name__)


def _address(value: str) -> int:
    """Parse an address given in decimal or as a 0x-prefixed hex literal."""
    try:
        return int(value, 0)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid address: {value}") from None


def setup_logging(level: str, verbose: bool = False) -> None:
    """Configure the root logger for command-line use."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else getattr(logging, level, logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _search_start(args, config) -> int:
    """Signature search start: command line first, then configuration."""
    if args.search_start is not None:
        return args.search_start
    return config.decoder.search_start


def cmd_decode(args, config) -> int:
    """Decode an image and write it as JSON."""
    image = load_image(args.image, args.format)
    game = decode_game(image, search_start=_search_start(args, config))

    indent = args.indent if args.indent is not None else config.output.indent
    exporter = GameDataExporter(game, indent=indent, ensure_ascii=config.output.ensure_ascii)
    if args.output:
        exporter.save_json(args.output)
    else:
        print(exporter.dumps())
    return 0


def cmd_info(args, config) -> int:
    """Print a summary of the database in an image."""
    data = load_image(args.image, args.format)
    image = ByteImage(data)
    sign = find_signature(image, _search_start(args, config))
    game = decode_game(image, search_start=sign)

    print(f"Signature:     {sign:#06x}")
    print(f"Locations:     {len(game.locations)}")
    print(f"Objects:       {len(game.objects)} ({game.n_objects_carried} carried)")
    print(f"Messages:      {len(game.messages)}")
    print(f"Words:         {len(game.vocabulary)}")
    print(f"Responses:     {len(game.responses) if game.responses else 0}")
    print(f"Processes:     {len(game.processes) if game.processes else 0}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        description="PyQuill - decode adventure game databases from memory images",
        prog="pyquill",
    )

    parser.add_argument(
        "--version",
        action="version",
        version="PyQuill 0.1.0",
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Show debug output from the decoder",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "image",
        type=Path,
        help="Memory image (raw 48K/64K dump or .sna snapshot)",
    )
    common.add_argument(
        "--format",
        choices=IMAGE_FORMATS,
        default="auto",
        help="Image file format (default: detect from extension and size)",
    )
    common.add_argument(
        "--search-start",
        type=_address,
        help="Address where the signature search starts (e.g. 0x4000)",
    )

    decode = subparsers.add_parser(
        "decode",
        parents=[common],
        help="Decode the database and write it as JSON",
    )
    decode.add_argument(
        "-o", "--output",
        type=Path,
        help="Output file (default: standard output)",
    )
    decode.add_argument(
        "--indent",
        type=int,
        help="JSON indentation, 0 for compact output",
    )
    decode.set_defaults(handler=cmd_decode)

    info = subparsers.add_parser(
        "info",
        parents=[common],
        help="Print a summary of the database",
    )
    info.set_defaults(handler=cmd_info)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    config = get_config()
    setup_logging(config.log_level, args.verbose)

    try:
        return args.handler(args, config)
    except (DecodeError, ImageLoadError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Error writing output: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
