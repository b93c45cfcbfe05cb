import argparse
import logging
import sys
from typing import Sequence, TextIO

from sapling.constants import (
    DEFAULT_INDENT, DEFAULT_OUTPUT_FORMAT, OUTPUT_FORMATS
)
from sapling.errors import ParseError
from sapling.node import Node
from sapling.parser import parse
from sapling.serializer import format_tree, serialize, to_json

logger = logging.getLogger(__name__)


def build_argparser() -> argparse.ArgumentParser:
    argparser = argparse.ArgumentParser(
        description="Parse an HTML-like document and print its tree."
    )
    argparser.add_argument(
        "file", nargs="?", default="-",
        help="source file, or - for standard input (default)"
    )
    argparser.add_argument(
        "--format", choices=OUTPUT_FORMATS, default=DEFAULT_OUTPUT_FORMAT
    )
    argparser.add_argument("--indent", type=int, default=DEFAULT_INDENT)
    argparser.add_argument("--verbose", action="store_true")
    return argparser


def read_source(path: str, stdin: TextIO) -> str:
    if path == "-":
        return stdin.read()
    with open(path, encoding="utf-8") as f:
        return f.read()


def render(root: Node, output_format: str, indent: int) -> str:
    if output_format == "html":
        return serialize(root)
    if output_format == "json":
        return to_json(root, indent=indent or None)
    return format_tree(root, step=indent)


def main(
    argv: Sequence[str] | None = None,
    stdin: TextIO = sys.stdin,
    stdout: TextIO = sys.stdout,
    stderr: TextIO = sys.stderr,
) -> int:
    args = build_argparser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=stderr,
    )

    name = "<stdin>" if args.file == "-" else args.file
    try:
        source = read_source(args.file, stdin)
    except (OSError, UnicodeDecodeError) as error:
        print(f"{name}: {error}", file=stderr)
        return 2
    logger.debug("read %d characters from %s", len(source), name)

    try:
        root = parse(source)
    except ParseError as error:
        logger.debug("parse failed with %s at byte %d", error.kind, error.offset)
        print(f"{name}:{error.describe(source)}", file=stderr)
        return 1

    print(render(root, args.format, args.indent), file=stdout)
    return 0
