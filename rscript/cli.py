"""
RScript Interpreter

This is the command-line entry point for the RScript interpreter.

Workflow:
1. The source script is read from the file given on the command line.
2. The Lexer tokenizes the source code into tokens with spans.
3. The Parser processes the tokens into a syntax tree following the grammar.
4. The Interpreter walks the tree, declaring bindings and evaluating expressions.
5. When the script declares `main`, it is called and its result printed.

With no script argument the interpreter enters interactive mode (REPL).
Setting RSCRIPT_DEBUG in the environment prints tokens and the syntax tree
and turns on debug logging.
"""
import argparse
import logging
import os
import sys

from rscript.exceptions import ScriptError, UnexpectedEofError
from rscript.formatter import format_tree, format_value
from rscript.interpreter import Interpreter
from rscript.lexer import tokenize
from rscript.parser import Parser
from rscript.values import Function, Unit

logger = logging.getLogger("rscript")


def build_arg_parser() -> argparse.ArgumentParser:
    """
    Build the command-line argument parser.
    """
    parser = argparse.ArgumentParser(
        prog="rscript",
        description="RScript language interpreter.",
        allow_abbrev=False,
    )
    parser.add_argument(
        "script",
        nargs="?",
        help="Path to an RScript source file (conventionally *.rscript). "
             "Omit to enter interactive mode.",
    )
    parser.add_argument(
        "--source",
        action="store_true",
        help="Print the source before running it.",
    )
    parser.add_argument(
        "--tokens",
        action="store_true",
        help="Print the token stream.",
    )
    parser.add_argument(
        "--ast",
        action="store_true",
        help="Print the formatted syntax tree.",
    )
    parser.add_argument(
        "--no-main",
        action="store_true",
        help="Do not call main() after running the top-level statements.",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="Log progress (-v for info, -vv for debug).",
    )
    return parser


def configure_logging(verbosity: int) -> None:
    """
    Send the package's log records to stderr at the requested verbosity.
    """
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(
        level=level,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def debug_print_tokens(source: str):
    """
    Print tokenized source
    """
    print("\nTokens:\n")
    for token, span in tokenize(source):
        print(f"{span}\t{token!r}")
    print(" ")


def run_script(script_name: str, args: argparse.Namespace) -> int:
    """
    Run an RScript script and return the process exit status.
    """
    try:
        with open(script_name, "r", encoding="utf-8") as f:
            code = f.read()
    except OSError as e:
        print(f"Cannot read {script_name}: {e}", file=sys.stderr)
        return 2
    logger.info("Read %s (%d characters)", script_name, len(code))

    if args.source:
        print("---SOURCE---")
        print(code, end="" if code.endswith("\n") else "\n")
        print("---ENDING---")

    try:
        if args.tokens:
            debug_print_tokens(code)

        program = Parser(code, script_name).parse()
        if args.ast:
            print("\nAST:\n")
            print(format_tree(program))
            print(" ")

        interpreter = Interpreter(file=script_name)
        interpreter.execute(program)

        if not args.no_main and isinstance(interpreter.environment.globals.get("main"), Function):
            result = interpreter.call("main")
            if not isinstance(result, Unit):
                print(format_value(result))
    except ScriptError as e:
        print(f"{type(e).__name__}: {e}", file=sys.stderr)
        return 1
    return 0


def run_repl() -> int:
    """
    Run the interactive REPL
    """
    print("RScript Interpreter - REPL")
    print("Type `exit` or `quit` to leave.")
    interpreter = Interpreter(file="<stdin>")
    buffer: list[str] = []
    while True:
        try:
            prompt = ">>> " if not buffer else "... "
            line = input(prompt)
            if not buffer and line.strip() in {"exit", "quit"}:
                break
            buffer.append(line)
            source = "\n".join(buffer)
            try:
                program = Parser(source, "<stdin>").parse()
            except UnexpectedEofError:
                # Incomplete input; keep reading lines.
                continue
            buffer.clear()
            value = interpreter.execute(program)
            if not isinstance(value, Unit):
                print(format_value(value))
        except ScriptError as e:
            print(f"{type(e).__name__}: {e}")
            buffer.clear()
        except KeyboardInterrupt:
            print("\nInterrupted.")
            break
        except EOFError:
            print()
            break
    return 0


def main(argv=None) -> int:
    """
    Entry point for the CLI.

    Behaviour:
    - No script argument: enter the REPL.
    - A script argument: run it and return 0, or 1 if it fails.
    - An unreadable script: return 2.
    """
    args = build_arg_parser().parse_args(argv)
    if os.environ.get("RSCRIPT_DEBUG"):
        args.tokens = args.ast = True
        args.verbose = max(args.verbose, 2)
    configure_logging(args.verbose)

    if args.script is None:
        return run_repl()
    return run_script(args.script, args)


if __name__ == "__main__":
    sys.exit(main())
