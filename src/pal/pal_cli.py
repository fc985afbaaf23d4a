"""
PAL CLI Entrypoint.

Command-line front end for the PAL parser: reads a `.pal` file (or inline
source), parses it, and prints the resulting AST.

Features:
    - Read source from `.pal` files or inline strings.
    - Dump the AST as JSON or as an indented tree.
    - Dump the raw token stream instead of parsing.
    - Write output to a file instead of stdout.
    - Report the first lexical or syntax error on stderr and exit with status 1.

Example usage:
    pal hello.pal
    pal -s "program P; begin end." --format tree
    pal hello.pal -o hello.json
    pal hello.pal --tokens --verbose

Configuration:
    PAL_LOG_LEVEL: Default log level name (e.g. DEBUG, INFO). `-v` and
    `--debug` override it.

Functions:
    run_pal(...) -> str: Runs lex → parse → render and returns the rendered text.
    format_tree(node) -> str: Renders an AST as an indented outline.
    setup_logging(level) -> None: Configures the root logger.
    main(argv=None) -> None: Parses CLI arguments and dispatches.
"""

import argparse
import json
import logging
import os
import sys
from typing import Any

from pal.pal_ast import Node
from pal.pal_errors import LexError, ParseError
from pal.pal_lexer import CharacterStream, Lexer
from pal.pal_parser import Parser

logger = logging.getLogger(__name__)

LOG_LEVEL_ENV = "PAL_LOG_LEVEL"


def setup_logging(level: str | int) -> None:
    logging.basicConfig(format="{levelname}: {name}: {message}", style="{")
    logging.getLogger().setLevel(level)


def format_tree(node: Any, indent: int = 0) -> str:
    """Render a node (or a serialized node) as an indented outline, one field per line."""
    data = node.to_dict() if isinstance(node, Node) else node
    pad = "  " * indent
    lines = [f"{pad}{data['kind']}"]
    for key, value in data.items():
        if key == "kind":
            continue
        if isinstance(value, dict):
            lines.append(f"{pad}  {key}:")
            lines.append(format_tree(value, indent + 2))
        elif isinstance(value, list):
            if not value:
                lines.append(f"{pad}  {key}: []")
                continue
            lines.append(f"{pad}  {key}:")
            for item in value:
                lines.append(format_tree(item, indent + 2))
        else:
            lines.append(f"{pad}  {key}: {value}")
    return "\n".join(lines)


def run_pal(
    source: str,
    is_string: bool = False,
    fmt: str = "json",
    out: str | None = None,
    tokens: bool = False,
) -> str:
    """
    Run the PAL front end: lex, parse, render, and print or write the result.

    Args:
        source (str): PAL source code or path to a `.pal` file.
        is_string (bool): If True, treats `source` as raw code instead of a file path.
        fmt (str): Output format, 'json' or 'tree'. Defaults to 'json'.
        out (str | None): Optional path to write the output to. If None, prints to stdout.
        tokens (bool): If True, render the token stream instead of the AST.

    Returns:
        str: The rendered output.

    Raises:
        ValueError: If `is_string` is False and the source does not end with '.pal',
            or `fmt` is unknown.
        LexError: On malformed characters.
        ParseError: On the first syntax error.
    """
    if fmt not in ("json", "tree"):
        raise ValueError(f"Unknown output format: {fmt!r}")
    if not is_string and not source.endswith(".pal"):
        raise ValueError("Only .pal files are supported.")
    if not is_string:
        logger.info("reading %s", source)
        with open(source, encoding="utf-8") as f:
            source = f.read()

    lexer = Lexer(CharacterStream(source))

    if tokens:
        toks = list(lexer)
        logger.info("scanned %d tokens", len(toks))
        if fmt == "json":
            text = json.dumps(
                [
                    {"type": t.type, "lexeme": t.lexeme, "line": t.line, "col": t.col}
                    for t in toks
                ],
                indent=2,
            )
        else:
            text = "\n".join(f"{t.line}:{t.col}\t{t.type}\t{t.lexeme}" for t in toks)
    else:
        program = Parser(lexer).parse_program()
        logger.info("parsed program %s", program.name)
        if fmt == "json":
            text = json.dumps(program.to_dict(), indent=2)
        else:
            text = format_tree(program)

    if out:
        with open(out, "w", encoding="utf-8") as f:
            f.write(text + "\n")
        logger.info("wrote %s", out)
    else:
        print(text)
    return text


def main(argv: list[str] | None = None) -> None:
    """
    Entry point for the PAL CLI.

    Supported flags:
        - `-s`, `--string`: Interpret source as a raw string instead of a file path.
        - `-f`, `--format`: Output format ('json' or 'tree'), default is 'json'.
        - `-o`, `--out`: Write output to a file.
        - `--tokens`: Dump tokens instead of the AST.
        - `-v`, `--verbose`: INFO logging.
        - `--debug`: DEBUG logging.

    Exits with status 1 after printing a one-line diagnostic if the source is
    malformed, nests too deeply, or cannot be read.
    """
    parser = argparse.ArgumentParser(prog="pal", description="Parse a PAL program.")
    parser.add_argument("source", help="Filename or raw source (with -s)")
    parser.add_argument(
        "-s", "--string", action="store_true", help="Interpret source as literal string"
    )
    parser.add_argument(
        "-f",
        "--format",
        dest="fmt",
        choices=("json", "tree"),
        default="json",
        help="Output format (default: json)",
    )
    parser.add_argument("-o", "--out", metavar="OUTFILE", help="Output to file")
    parser.add_argument(
        "--tokens", action="store_true", help="Dump the token stream instead of the AST"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="INFO logging")
    parser.add_argument("--debug", action="store_true", help="DEBUG logging")

    args = parser.parse_args(argv)

    level = os.environ.get(LOG_LEVEL_ENV, "WARNING").upper()
    if not isinstance(logging.getLevelName(level), int):
        level = "WARNING"
    if args.verbose:
        level = "INFO"
    if args.debug:
        level = "DEBUG"
    setup_logging(level)

    try:
        run_pal(
            source=args.source,
            is_string=args.string,
            fmt=args.fmt,
            out=args.out,
            tokens=args.tokens,
        )
    except (LexError, ParseError, OSError, ValueError) as e:
        print(e, file=sys.stderr)
        sys.exit(1)
    except RecursionError:
        print("Program nests too deeply to parse", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
