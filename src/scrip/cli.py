"""Command-line interface for the Scrip front end."""

from __future__ import annotations

import argparse
import sys
import time
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from scrip.ast import Program
from scrip.errors import CompileError

CONFIG_FILENAME = "scrip.toml"


@dataclass(frozen=True, slots=True)
class CliOptions:
    """Parsed CLI options."""

    input_file: Path
    max_errors: int
    tokens: bool
    debug: bool
    watch: bool


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (separate function for testability)."""
    p = argparse.ArgumentParser(
        prog="scrip",
        description="Check Scrip source files for lexical and syntax errors",
    )
    p.add_argument("input", help="Input .scr file")
    p.add_argument(
        "--config",
        metavar="FILE",
        help=f"Config file (default: auto-discover {CONFIG_FILENAME})",
    )
    p.add_argument(
        "--max-errors",
        type=parse_max_errors,
        default=None,
        metavar="N",
        help="Print at most N diagnostics, 0 for unlimited (default: 0)",
    )
    p.add_argument("--tokens", action="store_true", help="Dump the token stream to stderr")
    p.add_argument("--debug", action="store_true", help="Dump AST to stderr")
    p.add_argument("--watch", action="store_true", help="Watch for changes and recheck")
    return p


def parse_max_errors(s: str) -> int:
    """Parse a non-negative diagnostic limit."""
    try:
        value = int(s)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid error limit (expected integer): {s}") from None
    if value < 0:
        raise argparse.ArgumentTypeError(f"invalid error limit (must be >= 0): {s}")
    return value


def load_config(config_path: Path | None, input_dir: Path) -> dict[str, Any]:
    """Load a TOML config file, returning an empty dict on missing/absent file."""
    path = config_path if config_path is not None else input_dir / CONFIG_FILENAME

    if not path.is_file():
        return {}

    with open(path, "rb") as f:
        return tomllib.load(f)


def resolve_options(args: argparse.Namespace) -> CliOptions:
    """Merge config file and CLI args into CliOptions.

    Precedence: config file < CLI flags.
    """
    input_file = Path(args.input)
    input_dir = input_file.parent
    if not input_dir.parts:
        input_dir = Path(".")

    config_path = Path(args.config) if args.config else None
    config = load_config(config_path, input_dir)

    # Diagnostic limit: config < CLI
    max_errors = 0
    cfg_diag = config.get("diagnostics")
    if isinstance(cfg_diag, dict):
        cfg_max = cfg_diag.get("max_errors")
        if cfg_max is not None:
            if isinstance(cfg_max, bool) or not isinstance(cfg_max, int) or cfg_max < 0:
                raise argparse.ArgumentTypeError(
                    f"invalid diagnostics.max_errors in config: {cfg_max!r}"
                )
            max_errors = cfg_max
    if args.max_errors is not None:
        max_errors = args.max_errors

    # Dumps: config or CLI
    want_tokens = False
    want_ast = False
    cfg_debug = config.get("debug")
    if isinstance(cfg_debug, dict):
        want_tokens = cfg_debug.get("tokens") is True
        want_ast = cfg_debug.get("ast") is True

    return CliOptions(
        input_file=input_file,
        max_errors=max_errors,
        tokens=want_tokens or args.tokens,
        debug=want_ast or args.debug,
        watch=args.watch,
    )


def check_file(options: CliOptions) -> Program:
    """Read, tokenize, and parse a Scrip file. Raises CompileError on diagnostics."""
    from scrip.debug import dump_ast, dump_tokens
    from scrip.lexer import Lexer
    from scrip.parser import Parser

    source = options.input_file.read_text(encoding="utf-8")
    filename = str(options.input_file)

    lexed = Lexer(source).run()
    if not lexed.ok:
        raise CompileError(lexed.errors, filename)
    if options.tokens:
        dump_tokens(lexed.tokens, file=sys.stderr)

    program = Parser(lexed.tokens, source, filename).run().program
    if options.debug:
        dump_ast(program, file=sys.stderr)
    return program


def report(options: CliOptions, exc: CompileError) -> None:
    """Print every collected diagnostic to stderr."""
    print(exc.format(limit=options.max_errors), file=sys.stderr)


def watch_loop(options: CliOptions) -> None:
    """Poll input file for changes, recheck on each modification."""
    last_mtime = 0.0
    print(f"Watching {options.input_file} for changes...", file=sys.stderr)
    try:
        while True:
            try:
                mtime = options.input_file.stat().st_mtime
            except OSError:
                time.sleep(0.5)
                continue
            if mtime != last_mtime:
                last_mtime = mtime
                try:
                    program = check_file(options)
                    print(
                        f"{options.input_file}: ok ({len(program.declarations)} declarations)",
                        file=sys.stderr,
                    )
                except CompileError as exc:
                    report(options, exc)
                except OSError as exc:
                    print(f"error: {exc}", file=sys.stderr)
            time.sleep(0.5)
    except KeyboardInterrupt:
        pass


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns exit code (0/1/2). Does not call sys.exit()."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        options = resolve_options(args)
    except argparse.ArgumentTypeError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    except tomllib.TOMLDecodeError as exc:
        print(f"error: invalid config file: {exc}", file=sys.stderr)
        return 2

    if options.watch:
        watch_loop(options)
        return 0

    try:
        program = check_file(options)
    except CompileError as exc:
        report(options, exc)
        return 1
    except OSError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    print(f"{options.input_file}: ok ({len(program.declarations)} declarations)")
    return 0
