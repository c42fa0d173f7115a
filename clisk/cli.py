"""Command line entry point: run a .clsk file and print its value."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from clisk import config
from clisk.debug_utils.pprint import DEFAULT_OPTIONS, load_options_from_json, plain_options, pprint_expr
from clisk.evaluation.evaluator import evaluate
from clisk.interpreter import Interpreter
from clisk.types.errors import ClispError, EvaluationError, MacroExpansionError, ModuleError, ParseError, ResidualMacroError

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="clisk", description="clisk - run a clisk program and print its value")
    parser.add_argument("input", help="Input .clsk source file")
    parser.add_argument("--parser-output", action="store_true", help="Print the forms produced by the reader")
    parser.add_argument("--expanded-output", action="store_true", help="Print the forms after macro expansion")
    parser.add_argument("--no-macros", action="store_true", help="Evaluate forms without running the macro expander")
    parser.add_argument("--no-color", action="store_true", help="Disable coloured output")
    parser.add_argument("--print-options", metavar="JSON", help="Pretty printer options as a JSON object")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging on stderr")
    return parser


def describe(error: ClispError, source: str) -> str:
    if error.span is None:
        return error.message
    line, column = error.span.line_column(source)
    return f"{error.message} at {line}:{column}"


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    try:
        sys.setrecursionlimit(config.get_recursion_limit())
    except ValueError as e:
        print(f"clisk: {e}", file=sys.stderr)
        return 1

    options = load_options_from_json(args.print_options) if args.print_options else dict(DEFAULT_OPTIONS)
    if not config.use_color(sys.stdout.isatty(), False if args.no_color else None):
        options = plain_options(options)

    path = Path(args.input)
    try:
        source = path.read_text(encoding="utf-8")
    except OSError as e:
        print(f"clisk: cannot read {path}: {e.strerror}", file=sys.stderr)
        return 1

    interpreter = Interpreter(expand_macros=not args.no_macros)
    try:
        module = interpreter.load_executable(source, str(path))
        if args.parser_output:
            for node in module.expressions:
                print(pprint_expr(node, options=options))

        result = None
        for node in module.expressions:
            if interpreter.expand_macros:
                logger.debug("expanding %s", node)
                node = interpreter.expand_node(node)
                if args.expanded_output:
                    print(pprint_expr(node, options=options))
            result = evaluate(node, interpreter.env)
            logger.debug("value %s", result)
    except ParseError as e:
        print(f"Failed to parse: {describe(e, source)}", file=sys.stderr)
        return 1
    except ModuleError as e:
        print(f"Failed to load module: {describe(e, source)}", file=sys.stderr)
        return 1
    except (MacroExpansionError, ResidualMacroError) as e:
        message = describe(e, source) if isinstance(e, ClispError) else str(e)
        print(f"Failed to expand macros: {message}", file=sys.stderr)
        return 1
    except EvaluationError as e:
        print(f"Failed to evaluate: {describe(e, source)}", file=sys.stderr)
        return 1

    if result is not None:
        print(pprint_expr(result, options=options))
    return 0


if __name__ == "__main__":
    sys.exit(main())
