# src/circmark/cli.py
"""Command line entry point: `circmark-svg`, circuit notation in, SVG out."""
import argparse
import logging
import sys
from typing import List, Optional

from .config import DEFAULT_CONFIG, load_config
from .errors import DiagnosableError, RenderError
from .log_config import setup_logging
from .renderer import Renderer

logger = logging.getLogger(__name__)


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="circmark-svg",
        description="Render compact circuit notation such as '|O-((L1+R1)||C1)|O' to SVG.",
    )
    parser.add_argument('notation', nargs='?', help='Circuit notation (read from stdin when omitted)')
    parser.add_argument('-o', '--output', type=str, help='Write the SVG to this file instead of stdout')
    parser.add_argument('-c', '--config', type=str, help='YAML render configuration file')
    parser.add_argument('-v', '--verbose', action='store_true', help='Verbose output')
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.WARNING)

    notation = args.notation if args.notation is not None else sys.stdin.read()

    try:
        config = load_config(args.config) if args.config else DEFAULT_CONFIG
    except DiagnosableError as e:
        print(e.get_diagnostic_report(), file=sys.stderr)
        return 1

    try:
        rendering = Renderer(config).render(notation)
    except RenderError as e:
        print(str(e), file=sys.stderr)
        return 1

    if rendering.trailing_input:
        print(f"WARNING: trailing input {rendering.trailing_input!r}", file=sys.stderr)

    if args.output:
        rendering.drawing.save_svg(args.output)
    else:
        sys.stdout.write(rendering.as_svg())
        sys.stdout.write("\n")
    return 0


if __name__ == '__main__':
    sys.exit(main())
