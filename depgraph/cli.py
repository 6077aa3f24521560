"""CLI entrypoints for depgraph commands."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

import yaml

from .config import ConfigError, DepGraphConfig, load_config
from .io import dump_graph, load_input, write_graph
from .logging import configure_logging
from .detect import detect_format
from .pipeline import GraphConverter


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


def _add_config_option(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to a .depgraph.yml file or its directory (defaults to the current directory).",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="depgraph",
        description="Convert dependency-analysis exports into a unified graph.",
    )
    _add_verbose_option(parser)
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write log records, including skipped references, to this file.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    convert_parser = subparsers.add_parser(
        "convert",
        help="Convert a dependency export into graph JSON.",
    )
    _add_verbose_option(convert_parser, suppress_default=True)
    _add_config_option(convert_parser)
    convert_parser.add_argument("input", type=Path, help="Dependency export (JSON or YAML).")
    convert_parser.add_argument(
        "output",
        type=Path,
        nargs="?",
        default=None,
        help="Where to write the graph JSON (defaults to stdout).",
    )
    convert_parser.add_argument(
        "--project-name",
        default=None,
        help="Override the project name recorded in the graph metadata.",
    )
    convert_parser.add_argument(
        "--indent",
        type=int,
        default=None,
        help="JSON indentation (defaults to output.indent from the config, or 2).",
    )

    detect_parser = subparsers.add_parser(
        "detect",
        help="Report which export format an input file uses.",
    )
    _add_verbose_option(detect_parser, suppress_default=True)
    detect_parser.add_argument("input", type=Path, help="Dependency export (JSON or YAML).")

    serve_parser = subparsers.add_parser(
        "serve",
        help="Run the HTTP conversion service.",
    )
    _add_verbose_option(serve_parser, suppress_default=True)
    _add_config_option(serve_parser)
    serve_parser.add_argument("--host", default="127.0.0.1", help="Interface to bind.")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port to listen on.")

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for depgraph commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), log_file=args.log_file)

    if args.command == "convert":
        config = _load_config(parser, args.config)
        if args.project_name:
            config.project_name = args.project_name
        indent = args.indent if args.indent is not None else config.output.indent
        try:
            graph = GraphConverter(config=config).convert_file(args.input)
        except FileNotFoundError as exc:
            parser.exit(1, f"Input not found: {exc.filename}\n")
        except (json.JSONDecodeError, yaml.YAMLError) as exc:
            parser.exit(1, f"Could not decode {args.input}: {exc}\n")
        except ValueError as exc:
            parser.exit(1, f"depgraph convert failed: {exc}\n")
        if args.output is None:
            print(dump_graph(graph, indent=indent))
        else:
            written = write_graph(graph, args.output, indent=indent)
            print(f"Converted dependencies written to {_relativize(written)}")
    elif args.command == "detect":
        try:
            data = load_input(args.input)
        except FileNotFoundError as exc:
            parser.exit(1, f"Input not found: {exc.filename}\n")
        except (json.JSONDecodeError, yaml.YAMLError) as exc:
            parser.exit(1, f"Could not decode {args.input}: {exc}\n")
        input_format = detect_format(data)
        print(f"{input_format.value} ({input_format.ecosystem.value})")
    elif args.command == "serve":
        from .service import run_service

        config = _load_config(parser, args.config)
        run_service(host=args.host, port=args.port, config=config)
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _load_config(parser: argparse.ArgumentParser, path: Path | None) -> DepGraphConfig:
    try:
        return load_config(path if path is not None else Path.cwd())
    except ConfigError as exc:
        parser.exit(1, f"Invalid configuration: {exc}\n")


def _relativize(path: Path) -> str:
    try:
        return str(path.resolve().relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
