"""CLI for building, querying and inspecting a grounding index."""

from __future__ import annotations

import argparse
from collections.abc import Sequence
import json
import logging
from pathlib import Path
import sys

from pydantic import ValidationError

from grounding_index.config import Settings
from grounding_index.corpus import load_corpus
from grounding_index.exceptions import CorpusLoadError, StateDecodeError
from grounding_index.observability.logging import configure_logging
from grounding_index.observability.metrics import get_metrics
from grounding_index.observability.tracing import init_tracing
from grounding_index.search.state_codec import decode_state
from grounding_index.search.vector_index import VectorIndex
from grounding_index.state_store import StateStore


logger = logging.getLogger(__name__)


def build_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="grounding-index",
        description="Rank project files against a free-text query with TF-IDF",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    search = subparsers.add_parser("search", help="Index a directory and print the best matching files")
    search.add_argument("root", type=Path, help="Directory holding the project files")
    search.add_argument("query", nargs="+", help="Free-text query")
    search.add_argument("--limit", type=int, default=None, help="Maximum hits (default: settings.default_limit)")
    search.add_argument("--save-state", type=Path, help="Also write the index state to this file")
    search.add_argument("--print-metrics", action="store_true", help="Dump Prometheus metrics to stderr")

    export = subparsers.add_parser("export-state", help="Index a directory and write its state file")
    export.add_argument("root", type=Path, help="Directory holding the project files")
    export.add_argument("output", type=Path, help="Destination JSON file")

    inspect = subparsers.add_parser("inspect-state", help="Summarize a state file")
    inspect.add_argument("path", type=Path, help="State JSON file")
    return parser


def _validate_args(args: argparse.Namespace) -> None:
    if getattr(args, "limit", None) is not None and args.limit < 1:
        raise ValueError("--limit must be >= 1")


def _build_index(root: Path, settings: Settings) -> VectorIndex:
    index = VectorIndex(settings)
    index.create_index(load_corpus(root, settings))
    return index


def _run_search(args: argparse.Namespace, settings: Settings) -> int:
    index = _build_index(args.root, settings)
    hits = index.search(" ".join(args.query), args.limit)
    for hit in hits:
        sys.stdout.write(json.dumps(hit.model_dump(), sort_keys=True) + "\n")
    if not hits:
        logger.info("No files matched the query")
    if args.save_state is not None:
        StateStore(args.save_state).save(index)
    if args.print_metrics:
        sys.stderr.write(get_metrics().decode("utf-8"))
    return 0


def _run_export(args: argparse.Namespace, settings: Settings) -> int:
    index = _build_index(args.root, settings)
    path = StateStore(args.output).save(index)
    logger.info("Wrote index state to %s", path)
    return 0


def _run_inspect(args: argparse.Namespace) -> int:
    try:
        state = decode_state(args.path.read_bytes())
    except FileNotFoundError:
        logger.error("State file not found: %s", args.path)
        return 1
    except OSError as exc:
        logger.error("Could not read state file %s: %s", args.path, exc)
        return 1
    except StateDecodeError as exc:
        logger.error("%s", exc)
        return 1
    summary = {"path": str(args.path), "terms": len(state.idf), "documents": len(state.metadata)}
    sys.stdout.write(json.dumps(summary, sort_keys=True) + "\n")
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_argument_parser()
    args = parser.parse_args(argv)

    try:
        settings = Settings()
    except ValidationError as exc:
        sys.stderr.write(f"Invalid configuration: {exc}\n")
        return 1
    configure_logging(settings.log_level, settings.log_json)
    if settings.log_json:
        init_tracing()

    try:
        _validate_args(args)
    except ValueError as exc:
        logger.error("%s", exc)
        return 1

    try:
        if args.command == "search":
            return _run_search(args, settings)
        if args.command == "export-state":
            return _run_export(args, settings)
        return _run_inspect(args)
    except CorpusLoadError as exc:
        logger.error("%s", exc)
        return 1


if __name__ == "__main__":
    sys.exit(main())
