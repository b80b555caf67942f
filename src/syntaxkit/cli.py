"""Command-line interface for syntaxkit."""

from __future__ import annotations

import argparse
import logging
import sys
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from syntaxkit.errors import CatalogError, EngineError, InvalidInputError, SourceReadError

CONFIG_FILENAME = "syntaxkit.toml"


@dataclass(frozen=True, slots=True)
class PerfOptions:
    """Resolved performance-test options."""

    directory: Path
    iterations: int
    incremental: bool
    extension: str
    engine: str


@dataclass(frozen=True, slots=True)
class GrammarOptions:
    """Resolved grammar rendering options."""

    catalog: Path
    output_file: Path | None
    nodes: list[str]


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (separate function for testability)."""
    p = argparse.ArgumentParser(
        prog="syntaxkit",
        description="Grammar documentation and parser benchmarking tools",
    )
    p.add_argument("--verbose", action="store_true", help="Log progress to stderr")
    p.add_argument(
        "--config",
        metavar="FILE",
        help=f"Config file (default: auto-discover {CONFIG_FILENAME})",
    )
    sub = p.add_subparsers(dest="command", required=True)

    g = sub.add_parser("grammar", help="Render a grammar catalog to markdown")
    g.add_argument("catalog", help="Grammar catalog (.toml)")
    g.add_argument("-o", "--output", help="Output file (default: stdout)")
    g.add_argument(
        "--node",
        action="append",
        default=[],
        metavar="NAME",
        help="Only render this node (repeatable)",
    )

    t = sub.add_parser(
        "performance-test",
        help="Parse a directory repeatedly and report the average iteration time",
    )
    t.add_argument(
        "--directory",
        help="Directory whose source files are parsed (recursively)",
    )
    t.add_argument(
        "--iterations",
        type=int,
        default=None,
        help="How many times the directory is parsed",
    )
    t.add_argument(
        "--incremental-parse",
        action="store_true",
        default=None,
        help="Parse files incrementally",
    )
    t.add_argument(
        "--extension",
        default=None,
        metavar="EXT",
        help="Source file extension (default: .py)",
    )
    t.add_argument(
        "--engine",
        default=None,
        metavar="SPEC",
        help=(
            "python, tree-sitter:MODULE or MODULE:ATTR (default: python); "
            "instruction counts need an engine with instructions_executed()"
        ),
    )
    return p


def load_config(config_path: Path | None, search_dir: Path) -> dict[str, Any]:
    """Load a TOML config file, returning an empty dict on missing/absent file."""
    path = config_path if config_path is not None else search_dir / CONFIG_FILENAME

    if not path.is_file():
        return {}

    with open(path, "rb") as f:
        return tomllib.load(f)


def resolve_perf_options(args: argparse.Namespace, search_dir: Path | None = None) -> PerfOptions:
    """Merge config file and CLI args into PerfOptions.

    Precedence: defaults < config file < CLI flags.
    """
    config_path = Path(args.config) if args.config else None
    config = load_config(config_path, search_dir if search_dir is not None else Path("."))
    section = config.get("performance-test")
    if not isinstance(section, dict):
        section = {}

    directory = args.directory if args.directory is not None else section.get("directory")
    if not isinstance(directory, str) or not directory:
        raise InvalidInputError("a source directory is required (--directory)")

    iterations = args.iterations if args.iterations is not None else section.get("iterations")
    if isinstance(iterations, bool) or not isinstance(iterations, int):
        raise InvalidInputError("an iteration count is required (--iterations)")

    incremental = args.incremental_parse
    if incremental is None:
        incremental = bool(section.get("incremental-parse", False))

    extension = args.extension if args.extension is not None else section.get("extension", ".py")
    engine = args.engine if args.engine is not None else section.get("engine", "python")

    return PerfOptions(
        directory=Path(directory),
        iterations=iterations,
        incremental=incremental,
        extension=str(extension),
        engine=str(engine),
    )


def resolve_grammar_options(args: argparse.Namespace) -> GrammarOptions:
    return GrammarOptions(
        catalog=Path(args.catalog),
        output_file=Path(args.output) if args.output else None,
        nodes=list(args.node),
    )


def run_performance(options: PerfOptions) -> str:
    """Discover sources, run the harness, and return the formatted report."""
    from syntaxkit.engines import load_engine
    from syntaxkit.harness import discover_sources, format_report, run_performance_test

    if options.iterations < 1:
        raise InvalidInputError(f"iterations must be at least 1, got {options.iterations}")
    engine = load_engine(options.engine)
    sources = discover_sources(options.directory, options.extension)
    report = run_performance_test(
        engine,
        sources,
        options.iterations,
        incremental=options.incremental,
    )
    return format_report(report)


def render_grammar(options: GrammarOptions) -> str:
    """Load the catalog and render the selected nodes to markdown."""
    from syntaxkit.catalog import load_catalog
    from syntaxkit.render import render_catalog

    nodes = load_catalog(options.catalog)
    if options.nodes:
        by_name = {node.name: node for node in nodes}
        missing = [name for name in options.nodes if name not in by_name]
        if missing:
            raise InvalidInputError(f"unknown node(s): {', '.join(missing)}")
        nodes = [by_name[name] for name in options.nodes]
    return render_catalog(nodes)


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns exit code (0/1/2). Does not call sys.exit()."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(name)s: %(message)s",
        stream=sys.stderr,
    )

    if args.command == "grammar":
        options = resolve_grammar_options(args)
        try:
            markdown = render_grammar(options)
        except CatalogError as exc:
            print(str(exc), file=sys.stderr)
            return 1
        except InvalidInputError as exc:
            print(str(exc), file=sys.stderr)
            return 2

        if options.output_file:
            options.output_file.write_text(markdown, encoding="utf-8")
        else:
            sys.stdout.write(markdown)
        return 0

    try:
        perf_options = resolve_perf_options(args)
        output = run_performance(perf_options)
    except (tomllib.TOMLDecodeError, UnicodeDecodeError) as exc:
        print(f"error: invalid config: {exc}", file=sys.stderr)
        return 2
    except InvalidInputError as exc:
        print(str(exc), file=sys.stderr)
        return 2
    except (SourceReadError, EngineError) as exc:
        print(str(exc), file=sys.stderr)
        return 1

    print(output)
    return 0
