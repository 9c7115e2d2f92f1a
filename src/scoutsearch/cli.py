"""CLI entry point for index maintenance tasks."""

from __future__ import annotations

import argparse
import json
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from scoutsearch.config.settings import Settings


@dataclass(frozen=True)
class _IndexTarget:
    """Stands in for a model type when only its index suffix is known."""

    suffix: str

    def searchable_as(self) -> str:
        return self.suffix


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    settings = _load_settings(args)

    from scoutsearch.observability.logging import setup_logging

    setup_logging(settings.observability)

    from structlog.contextvars import bound_contextvars

    from scoutsearch.engines.base.exceptions import EngineError

    try:
        with bound_contextvars(command=args.command, suffix=args.suffix):
            args.handler(args, settings)
    except EngineError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="scoutsearch",
        description="scoutsearch — Searchable-model adapter for Elasticsearch and OpenSearch",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=str,
        default=None,
        help="Path to YAML configuration file",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["debug", "info", "warning", "error"],
        default=None,
        help="Log level (overrides config)",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"scoutsearch {_get_version()}",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    index_name = subparsers.add_parser("index-name", help="Print the index name for a model suffix")
    index_name.add_argument("--suffix", "-s", required=True, help="Model index suffix, e.g. 'orders'")
    index_name.add_argument("--mode", "-m", choices=["read", "write"], default="read", help="Index mode")
    index_name.set_defaults(handler=_cmd_index_name)

    put_mapping = subparsers.add_parser("put-mapping", help="Send a field mapping to a model's index")
    put_mapping.add_argument("--suffix", "-s", required=True, help="Model index suffix, e.g. 'orders'")
    put_mapping.add_argument("--mode", "-m", choices=["read", "write"], default="write", help="Index mode")
    put_mapping.add_argument("--file", "-f", required=True, help="YAML or JSON mapping file")
    put_mapping.set_defaults(handler=_cmd_put_mapping)

    return parser


def _load_settings(args: argparse.Namespace) -> Settings:
    from scoutsearch.config.settings import Settings

    if args.config:
        config_path = Path(args.config)
        if not config_path.exists():
            print(f"Error: Config file not found: {config_path}", file=sys.stderr)
            sys.exit(1)
        settings = Settings.from_yaml(config_path)
    else:
        settings = Settings()

    if args.log_level:
        settings.observability.log_level = args.log_level
    return settings


def _cmd_index_name(args: argparse.Namespace, settings: Settings) -> None:
    from scoutsearch.engines.elasticsearch.engine import ElasticsearchEngine

    engine = ElasticsearchEngine(None, config=settings.elasticsearch)
    print(engine.model_index_name(_IndexTarget(args.suffix), args.mode))


def _cmd_put_mapping(args: argparse.Namespace, settings: Settings) -> None:
    import yaml  # type: ignore[import-untyped]

    from scoutsearch.engines.elasticsearch.engine import ElasticsearchEngine

    mapping_path = Path(args.file)
    if not mapping_path.exists():
        print(f"Error: Mapping file not found: {mapping_path}", file=sys.stderr)
        sys.exit(1)

    with open(mapping_path) as f:
        mapping: dict[str, Any] = yaml.safe_load(f) or {}

    engine = ElasticsearchEngine.from_settings(settings)
    ack = engine.put_mapping(args.mode, _IndexTarget(args.suffix), mapping)
    print(json.dumps(dict(getattr(ack, "body", ack)), indent=2, default=str))


def _get_version() -> str:
    from scoutsearch import __version__

    return __version__


if __name__ == "__main__":
    main()
