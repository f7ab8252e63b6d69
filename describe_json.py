#!/usr/bin/env python3
"""Describe the shape of JSON documents: merged types, examples, optional keys."""
import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Iterator, List, Optional

from tqdm import tqdm

from merge_shapes import describe_documents
from render_shape import DEFAULT_INDENT, render
from shape_model import DEFAULT_EXAMPLE_CAP, NumberLiteral

__version__ = "0.1.0"

STDIN_NAME = '-'

logger = logging.getLogger(__name__)


class DescribeError(Exception):
    """Base class for errors reported to the user"""


class InputNotFound(DescribeError):
    def __init__(self, name: str):
        super().__init__(f"File {name} not found")
        self.name = name


class InputReadError(DescribeError):
    def __init__(self, name: str, reason: str):
        super().__init__(f"Could not read {name}: {reason}")
        self.name = name


class JsonParseError(DescribeError):
    def __init__(self, name: str, reason: str, line: Optional[int] = None, column: Optional[int] = None):
        message = f"Invalid JSON in {name}: {reason}"
        if line is not None:
            message += f" (line {line}, column {column})"
        super().__init__(message)
        self.name = name
        self.line = line
        self.column = column


def display_name(source) -> str:
    return '<stdin>' if source == STDIN_NAME else str(source)


def expand_sources(paths: List[str]) -> Iterator:
    """Yield stdin marker or file paths; a directory contributes its *.json files"""
    if not paths:
        yield STDIN_NAME
        return

    for raw in paths:
        if raw == STDIN_NAME:
            yield STDIN_NAME
            continue
        path = Path(raw)
        if path.is_dir():
            files = sorted(f for f in path.iterdir() if f.is_file() and f.suffix.lower() == '.json')
            if not files:
                logger.warning(f"No .json files found in {path}")
            logger.debug(f"Found {len(files)} .json file(s) in {path}")
            yield from files
        else:
            yield path


def read_source(source) -> str:
    """Read the whole text of a file path or stdin"""
    name = display_name(source)
    try:
        if source == STDIN_NAME:
            return sys.stdin.read()
        with open(source, 'r', encoding='utf-8') as f:
            return f.read()
    except FileNotFoundError:
        raise InputNotFound(name)
    except (OSError, UnicodeDecodeError) as e:
        raise InputReadError(name, str(e))


def _reject_constant(constant: str):
    raise ValueError(f"non-standard constant {constant}")


def _unique_keys(pairs):
    obj = {}
    for key, value in pairs:
        if key in obj:
            raise ValueError(f"duplicate key {key!r}")
        obj[key] = value
    return obj


def parse_json(text: str, name: str, line_offset: int = 0) -> Any:
    """Parse one JSON document, turning parser failures into JsonParseError.

    Numbers are kept as the literal text of the source.
    """
    try:
        return json.loads(text, parse_int=NumberLiteral, parse_float=NumberLiteral,
                          parse_constant=_reject_constant, object_pairs_hook=_unique_keys)
    except json.JSONDecodeError as e:
        raise JsonParseError(name, e.msg, e.lineno + line_offset, e.colno)
    except ValueError as e:
        raise JsonParseError(name, str(e))
    except RecursionError:
        raise JsonParseError(name, "nesting too deep")


def parse_documents(text: str, name: str, json_lines: bool = False) -> List[Any]:
    """Parse a source into its documents: the whole text, or one per non-blank line"""
    if not json_lines:
        return [parse_json(text, name)]

    documents = []
    # JSON strings may hold U+2028 and similar unescaped, only \n ends a record
    for number, line in enumerate(text.split('\n')):
        if line.endswith('\r'):
            line = line[:-1]
        if line.strip(' \t'):
            documents.append(parse_json(line, name, line_offset=number))
    return documents


def load_documents(paths: List[str], json_lines: bool = False, progress: bool = False) -> List[Any]:
    """Read and parse every input before anything gets described"""
    sources = list(expand_sources(paths))
    documents = []
    for source in tqdm(sources, desc="Reading inputs", unit="file", disable=not progress):
        name = display_name(source)
        parsed = parse_documents(read_source(source), name, json_lines)
        logger.debug(f"Read {len(parsed)} document(s) from {name}")
        documents.extend(parsed)
    return documents


def non_negative_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: {value!r}")
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be >= 0, got {number}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='describe-json',
        description='Describe the shape of JSON documents: types, example values, '
                    'optional keys and array lengths merged across occurrences.')
    parser.add_argument('files', nargs='*', metavar='FILE',
                        help='input JSON file or directory of .json files (default: stdin, also "-")')
    parser.add_argument('-V', '--version', action='version', version=f'%(prog)s {__version__}')
    parser.add_argument('-n', '--max-examples', type=non_negative_int, default=DEFAULT_EXAMPLE_CAP,
                        help=f'distinct example values shown per number/string (default: {DEFAULT_EXAMPLE_CAP})')
    parser.add_argument('-c', '--compact', action='store_true',
                        help='print the description on a single line')
    parser.add_argument('--indent', type=non_negative_int, default=DEFAULT_INDENT,
                        help=f'indentation width for pretty output (default: {DEFAULT_INDENT})')
    parser.add_argument('-l', '--json-lines', action='store_true',
                        help='treat every non-blank input line as a separate document')
    parser.add_argument('--progress', action='store_true',
                        help='show a progress bar while reading inputs')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='log debug information to stderr')
    return parser


def describe(args: argparse.Namespace) -> str:
    documents = load_documents(args.files, json_lines=args.json_lines, progress=args.progress)
    if not documents:
        raise DescribeError("No JSON documents found in input")

    try:
        shape = describe_documents(documents, cap=args.max_examples)
    except RecursionError:
        raise DescribeError("Input is nested too deeply to describe")
    return render(shape, compact=args.compact, indent=args.indent)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format='%(message)s')

    try:
        output = describe(args)
    except DescribeError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nOperation cancelled by user", file=sys.stderr)
        return 130

    print(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
