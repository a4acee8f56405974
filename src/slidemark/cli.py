"""Command-line interface for slidemark."""

from __future__ import annotations

import argparse
import sys
import time
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from slidemark.errors import GenerateError, ParseError

CONFIG_NAME = "slidemark.toml"


@dataclass(frozen=True, slots=True)
class CliOptions:
    """Parsed CLI options."""

    input_file: Path
    output_file: Path | None
    title: str | None
    lang: str | None
    fragment: bool
    watch: bool
    debug: bool


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (separate function for testability)."""
    p = argparse.ArgumentParser(
        prog="slidemark",
        description="Compile slide markup to HTML",
    )
    p.add_argument("input", help="Input .slides file")
    p.add_argument("-o", "--output", help="Output file (default: stdout)")
    p.add_argument(
        "--config",
        metavar="FILE",
        help=f"Config file (default: auto-discover {CONFIG_NAME})",
    )
    p.add_argument("--title", help="Document title (default: first slide title)")
    p.add_argument("--lang", help="Document language, e.g. 'en'")
    p.add_argument(
        "--fragment",
        action="store_true",
        default=None,
        help="Emit only the slide sections, without the HTML skeleton",
    )
    p.add_argument("--watch", action="store_true", help="Watch for changes and recompile")
    p.add_argument("--debug", action="store_true", help="Dump AST to stderr")
    return p


def load_config(config_path: Path | None, input_dir: Path) -> dict[str, Any]:
    """Load a TOML config file, returning an empty dict on missing/absent file."""
    path = config_path if config_path is not None else input_dir / CONFIG_NAME

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

    title: str | None = None
    lang: str | None = None
    fragment = False
    cfg_doc = config.get("document")
    if isinstance(cfg_doc, dict):
        if isinstance(cfg_doc.get("title"), str):
            title = cfg_doc["title"]
        if isinstance(cfg_doc.get("lang"), str):
            lang = cfg_doc["lang"]
        if isinstance(cfg_doc.get("fragment"), bool):
            fragment = cfg_doc["fragment"]

    if args.title is not None:
        title = args.title
    if args.lang is not None:
        lang = args.lang
    if args.fragment is not None:
        fragment = args.fragment

    output_file = Path(args.output) if args.output else None

    return CliOptions(
        input_file=input_file,
        output_file=output_file,
        title=title,
        lang=lang,
        fragment=fragment,
        watch=args.watch,
        debug=args.debug,
    )


def compile_file(options: CliOptions) -> str:
    """Read, parse, generate, and render a slide file to HTML."""
    from slidemark.ast import line_text
    from slidemark.debug import dump_ast
    from slidemark.generator import generate_presentation
    from slidemark.parser import parse
    from slidemark.render import render, render_document

    source = options.input_file.read_text(encoding="utf-8")
    presentation = parse(source, str(options.input_file))

    if options.debug:
        dump_ast(presentation, file=sys.stderr)

    tree = generate_presentation(presentation)
    if options.fragment:
        return render(tree)

    title = options.title
    if title is None and presentation.slides:
        title = line_text(presentation.slides[0].title)
    return render_document(tree, title=title, lang=options.lang)


def _write_output(options: CliOptions, html: str) -> None:
    if options.output_file:
        options.output_file.write_text(html, encoding="utf-8")
    else:
        sys.stdout.write(html)
        sys.stdout.flush()


def watch_loop(options: CliOptions) -> None:
    """Poll input file for changes, recompile on each modification."""
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
                    _write_output(options, compile_file(options))
                    print(f"Compiled {options.input_file}", file=sys.stderr)
                except ParseError as exc:
                    print(exc.format(), file=sys.stderr)
            time.sleep(0.5)
    except KeyboardInterrupt:
        pass


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns exit code (0/1/2). Does not call sys.exit()."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        options = resolve_options(args)
    except tomllib.TOMLDecodeError as exc:
        print(f"error: invalid config: {exc}", file=sys.stderr)
        return 2

    if options.watch:
        watch_loop(options)
        return 0

    try:
        html = compile_file(options)
    except OSError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    except ParseError as exc:
        print(exc.format(), file=sys.stderr)
        return 1
    except GenerateError as exc:
        print(exc.format(), file=sys.stderr)
        return 2

    _write_output(options, html)
    return 0
