"""CLI entry point for gdocs-source.

Usage:
    python -m gdocs_source nodes [--folder ID ...] [--concurrency N] [--skip-failed]
    python -m gdocs_source convert <document.json> [--format markdown|text|json]
    python -m gdocs_source auth

Options not given on the command line come from GDOCS_* environment
variables or a .env file.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import re
import sys
from pathlib import Path
from typing import Any

from gdocs_source.converter import convert_document
from gdocs_source.logging import configure_logging
from gdocs_source.settings import Settings
from gdocs_source.source import GoogleDocsSource, MemoryStore


def parse_folder_id(id_or_url: str) -> str:
    """Extract a folder ID from a Drive URL or return as-is if already an ID."""
    match = re.search(r"drive\.google\.com/drive/(?:u/\d+/)?folders/([a-zA-Z0-9_-]+)", id_or_url)
    if match:
        return match.group(1)
    return id_or_url


def _load_settings(args: argparse.Namespace) -> Settings:
    overrides: dict[str, Any] = {}
    if getattr(args, "folder", None):
        overrides["folders_ids"] = [parse_folder_id(f) for f in args.folder]
    if getattr(args, "concurrency", None):
        overrides["concurrency"] = args.concurrency
    if getattr(args, "skip_failed", False):
        overrides["on_error"] = "skip"
    if args.verbose:
        overrides["log_level"] = "DEBUG"
    settings = Settings(**overrides)
    configure_logging(level=settings.log_level, json_logs=settings.json_logs)
    return settings


async def cmd_nodes(args: argparse.Namespace) -> int:
    """Load every document and print the nodes as JSON."""
    try:
        settings = _load_settings(args)
        store = MemoryStore()
        source = GoogleDocsSource(settings)
        collection = await source.create_nodes(store)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    nodes = [node.to_dict() for node in collection.nodes]
    print(json.dumps(nodes, indent=2, ensure_ascii=False))
    return 0


async def cmd_convert(args: argparse.Namespace) -> int:
    """Convert a saved Docs API response without touching the network."""
    path = Path(args.document)
    if not path.exists():
        print(f"Error: File not found: {path}", file=sys.stderr)
        return 1

    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
        converted = convert_document(raw)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.format == "text":
        sys.stdout.write(converted.text)
    elif args.format == "json":
        print(json.dumps(converted.content_tree(), indent=2, ensure_ascii=False))
    else:
        sys.stdout.write(converted.markdown)
    return 0


async def cmd_auth(args: argparse.Namespace) -> int:
    """Run the OAuth flow and cache the token."""
    from gdocs_source.auth import get_credentials

    try:
        settings = _load_settings(args)
        missing = [m for m in settings.missing_required() if m != "folders ids"]
        if missing:
            print(f"Error: Missing {', '.join(missing)}", file=sys.stderr)
            return 1
        await asyncio.to_thread(get_credentials, settings)
    except Exception as e:
        print(f"Authentication failed: {e}", file=sys.stderr)
        return 1

    print(f"Token saved to {settings.token_path}")
    return 0


def main() -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        prog="gdocs-source",
        description="Convert Google Docs in Drive folders to Markdown content nodes",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    # nodes subcommand
    nodes_parser = subparsers.add_parser(
        "nodes",
        help="Load all documents and print content nodes as JSON",
    )
    nodes_parser.add_argument(
        "--folder",
        action="append",
        help="Drive folder ID or URL (repeatable; defaults to GDOCS_FOLDERS_IDS)",
    )
    nodes_parser.add_argument(
        "--concurrency",
        type=int,
        default=None,
        help="Maximum number of documents fetched at once",
    )
    nodes_parser.add_argument(
        "--skip-failed",
        action="store_true",
        help="Skip documents that fail to convert instead of aborting",
    )
    nodes_parser.set_defaults(func=cmd_nodes)

    # convert subcommand
    convert_parser = subparsers.add_parser(
        "convert",
        help="Convert a saved Docs API response (offline)",
    )
    convert_parser.add_argument(
        "document",
        help="Path to a documents.get JSON response",
    )
    convert_parser.add_argument(
        "--format",
        choices=["markdown", "text", "json"],
        default="markdown",
        help="Output format (default: markdown)",
    )
    convert_parser.set_defaults(func=cmd_convert)

    # auth subcommand
    auth_parser = subparsers.add_parser(
        "auth",
        help="Run the OAuth flow and cache the token",
    )
    auth_parser.set_defaults(func=cmd_auth)

    args = parser.parse_args()
    result: int = asyncio.run(args.func(args))
    return result


if __name__ == "__main__":
    sys.exit(main())
