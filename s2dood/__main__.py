"""
Main entry point for the s2dood converter.
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from . import __version__
from .converter import ObjectsConverter
from .errors import UnknownFormatError
from .logging_config import setup_logging
from .writers import FORMATS, create_writer


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="s2dood",
        description="Convert SC2 map doodads to a Galaxy script or a user type catalog"
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}"
    )
    subparsers = parser.add_subparsers(dest="command")

    dump = subparsers.add_parser(
        "dump",
        help="Write the doodads of one or more maps to a single output file"
    )
    dump.add_argument(
        "output",
        help="Output file (.galaxy script or .xml catalog)"
    )
    dump.add_argument(
        "inputs",
        nargs="+",
        metavar="input",
        help="Map directory (containing an Objects file) or an Objects file"
    )
    dump.add_argument(
        "--format", "-f",
        default="galaxy",
        help=f"Output format: {', '.join(FORMATS)} (default: galaxy)"
    )
    dump.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Show per-map progress"
    )
    dump.add_argument(
        "--debug", "-d",
        action="store_true",
        help="Show every converted object (implies verbose)"
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command != "dump":
        parser.print_help()
        return 1

    # Setup logging
    logger = setup_logging(args.verbose, args.debug)

    output_path = Path(args.output).resolve()
    if not output_path.parent.is_dir():
        logger.error(f"Output directory does not exist: {output_path.parent}")
        return 1

    try:
        writer = create_writer(args.format)
    except UnknownFormatError as e:
        logger.error(f"{e} (expected one of: {', '.join(FORMATS)})")
        return 1

    logger.info(f"Output: {output_path} ({args.format})")
    logger.info(f"Inputs: {len(args.inputs)}")

    writer.open(open(output_path, 'w', encoding='utf-8', newline='\n'))
    try:
        converter = ObjectsConverter(writer)
        summary = converter.convert(args.inputs)
    finally:
        writer.close()

    if summary.skipped:
        logger.warning(f"Skipped {len(summary.skipped)} maps (Objects file not found)")
        logger.warning(f"  Skipped maps: {', '.join(summary.skipped[:5])}")
    if summary.markup_errors > 0:
        logger.warning(f"Recovered from {summary.markup_errors} markup errors")

    print(f"Exported {summary.total_objects} entries from {summary.converted} maps")
    return 0


if __name__ == "__main__":
    sys.exit(main())
