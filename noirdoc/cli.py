"""CLI entrypoints for noirdoc commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import ConfigError, NoirDocConfig
from .demo import run_demo
from .discovery import DiscoveryFailure
from .logging import configure_logging
from .orchestrator import BuildResult, Orchestrator
from .parsers import ParseFailure
from .writer import WriteFailure

DEFAULT_OUTPUT_DIR = "docusaurus_output"


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _add_output_option(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-o",
        "--output",
        default=DEFAULT_OUTPUT_DIR,
        help=f"Directory receiving docs/ and the sidebar module (defaults to {DEFAULT_OUTPUT_DIR}).",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="noirdoc",
        description="Generate a Docusaurus documentation site from annotated Noir sources.",
    )
    _add_verbose_option(parser)
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write logs to this file.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    build_parser = subparsers.add_parser(
        "build",
        help="Document every opted-in source file in a directory.",
    )
    _add_verbose_option(build_parser, suppress_default=True)
    build_parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Directory holding the source files (defaults to current directory).",
    )
    _add_output_option(build_parser)
    build_parser.add_argument(
        "--recursive",
        action="store_true",
        default=None,
        help="Descend into subdirectories when looking for source files.",
    )
    build_parser.add_argument(
        "--namespace",
        default=None,
        help="Place pages under <namespace>/ and group them in one sidebar category.",
    )
    build_parser.add_argument(
        "--fail-fast",
        action="store_true",
        default=None,
        help="Abort on the first unreadable or unparseable file instead of skipping it.",
    )
    build_parser.add_argument(
        "--lenient",
        action="store_true",
        help="Keep recognised items from files with syntax errors.",
    )
    build_parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Parse files on this many threads.",
    )

    demo_parser = subparsers.add_parser(
        "demo",
        help="Document a bundled sample file to try the generator.",
    )
    _add_verbose_option(demo_parser, suppress_default=True)
    _add_output_option(demo_parser)

    return parser


def _apply_overrides(config: NoirDocConfig, args: argparse.Namespace) -> NoirDocConfig:
    if args.recursive is not None:
        config.recursive = args.recursive
    if args.namespace:
        config.layout.namespace = args.namespace
    if args.fail_fast is not None:
        config.fail_fast = args.fail_fast
    if args.lenient:
        config.parser.strict = False
    if args.workers is not None:
        config.parser.workers = max(1, args.workers)
    return config


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for noirdoc commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), log_file=args.log_file)

    orchestrator = Orchestrator()
    output_dir = Path(args.output)

    try:
        if args.command == "build":
            config = _apply_overrides(orchestrator.load_config(args.path), args)
            result = orchestrator.run(args.path, output_dir, config=config)
        elif args.command == "demo":
            result = run_demo(output_dir, orchestrator)
            for unit in result.units:
                print(f"Parsed source unit: {unit.name}")
                print(repr(unit))
        else:  # pragma: no cover - argparse enforces choices
            parser.exit(1, "Unknown command\n")
    except (ConfigError, DiscoveryFailure, ParseFailure) as exc:
        parser.exit(1, f"noirdoc {args.command} failed: {exc}\n")
    except WriteFailure as exc:
        parser.exit(1, f"noirdoc {args.command} failed while writing output: {exc}\n")

    _report(result, output_dir)


def _report(result: BuildResult, output_dir: Path) -> None:
    for skipped in result.skipped:
        print(f"Skipped {_relativize(skipped.path)}: {skipped.reason}")
    print(f"Documentation generated in '{_relativize(output_dir)}' ({len(result.documents)} documents)")


def _relativize(path: Path) -> str:
    try:
        return str(path.resolve().relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
