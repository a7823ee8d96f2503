"""Command-line front end for the bex grammar core.

Examples:
    python -m bex diff "the cat sat" "the dog sat" --markdown
    llm-tool | python -m bex parse -
    python -m bex history list --limit 5
    python -m bex profiles activate 3f0c...
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sqlite3
import sys
from pathlib import Path
from typing import Sequence

from .config import LOG_LEVELS, STORAGE_BACKENDS, BexConfiguration, create_storage, load_configuration
from .diff import compute_word_diff, diff_stats, diff_to_markdown
from .llm import LLMParseError, parse_grammar_response
from .storage import (
    StorageAdapter,
    clear_history,
    delete_history_entry,
    find_history_entry,
    get_active_profile_id,
    load_history,
    load_profiles,
    set_active_profile_id,
)

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Configure the CLI parser."""
    parser = argparse.ArgumentParser(
        prog="bex",
        description="Word diffs, LLM response parsing and local history for the grammar checker.",
    )
    parser.add_argument(
        "--data-file",
        type=Path,
        help="JSON document used for storage (default: env BEX_DATA_FILE or ~/.bex/data.json).",
    )
    parser.add_argument(
        "--backend",
        choices=STORAGE_BACKENDS,
        help="Storage backend (default: env BEX_STORAGE_BACKEND or file).",
    )
    parser.add_argument(
        "--env-file",
        type=Path,
        help="Optional .env file to load before reading BEX_* variables.",
    )
    parser.add_argument(
        "--log-level",
        choices=LOG_LEVELS,
        help="Logging verbosity (default: env BEX_LOG_LEVEL or WARNING).",
    )

    commands = parser.add_subparsers(dest="command", required=True)

    diff_cmd = commands.add_parser("diff", help="Show a word diff between two texts.")
    diff_cmd.add_argument("original")
    diff_cmd.add_argument("corrected")
    output = diff_cmd.add_mutually_exclusive_group()
    output.add_argument("--markdown", action="store_true", help="Render as Markdown (default).")
    output.add_argument("--json", action="store_true", help="Emit the token list as JSON.")

    parse_cmd = commands.add_parser("parse", help="Parse a raw LLM grammar response.")
    parse_cmd.add_argument(
        "file",
        nargs="?",
        default="-",
        help="File holding the response text; '-' or omitted reads stdin.",
    )

    history_cmd = commands.add_parser("history", help="Inspect or edit the check history.")
    history_actions = history_cmd.add_subparsers(dest="action", required=True)
    list_cmd = history_actions.add_parser("list", help="List recent entries.")
    list_cmd.add_argument("--limit", type=int, default=20, help="Maximum entries to show (default: 20).")
    show_cmd = history_actions.add_parser("show", help="Show one entry with its diff.")
    show_cmd.add_argument("entry_id")
    delete_cmd = history_actions.add_parser("delete", help="Delete one entry.")
    delete_cmd.add_argument("entry_id")
    history_actions.add_parser("clear", help="Delete all entries.")

    profiles_cmd = commands.add_parser("profiles", help="Inspect writing profiles.")
    profile_actions = profiles_cmd.add_subparsers(dest="action", required=True)
    profile_actions.add_parser("list", help="List profiles.")
    activate_cmd = profile_actions.add_parser("activate", help="Set the active profile id.")
    activate_cmd.add_argument("profile_id")

    return parser


def _read_source(name: str) -> str:
    if name == "-":
        return sys.stdin.read()
    return Path(name).read_text(encoding="utf-8")


def run_diff(args: argparse.Namespace) -> int:
    tokens = compute_word_diff(args.original, args.corrected)
    if args.json:
        print(json.dumps([token.model_dump(mode="json") for token in tokens], indent=2))
        return 0
    print(diff_to_markdown(tokens))
    stats = diff_stats(tokens)
    logger.info(
        "%d added, %d removed, %d unchanged",
        stats["added"],
        stats["removed"],
        stats["unchanged"],
    )
    return 0


def run_parse(args: argparse.Namespace) -> int:
    raw = _read_source(args.file)
    try:
        result = parse_grammar_response(raw)
    except LLMParseError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    print(json.dumps(result.model_dump(), indent=2, ensure_ascii=False))
    return 0


async def run_history(args: argparse.Namespace, storage: StorageAdapter) -> int:
    if args.action == "list":
        entries = await load_history(storage)
        if not entries:
            print("No history yet.")
            return 0
        for entry in entries[: max(args.limit, 0)]:
            label = f" [{entry.profile_name}]" if entry.profile_name else ""
            preview = entry.corrected.replace("\n", " ")
            if len(preview) > 60:
                preview = preview[:60] + "..."
            print(f"{entry.id}  {entry.timestamp}  {entry.provider}/{entry.model}{label}  {preview}")
        return 0

    if args.action == "show":
        entry = await find_history_entry(storage, args.entry_id)
        if entry is None:
            print(f"No history entry with id {args.entry_id}", file=sys.stderr)
            return 1
        print(diff_to_markdown(compute_word_diff(entry.original, entry.corrected)))
        print()
        print(entry.explanation)
        return 0

    if args.action == "delete":
        await delete_history_entry(storage, args.entry_id)
        return 0

    await clear_history(storage)
    return 0


async def run_profiles(args: argparse.Namespace, storage: StorageAdapter) -> int:
    if args.action == "activate":
        await set_active_profile_id(storage, args.profile_id)
        return 0

    profiles = await load_profiles(storage)
    active_id = await get_active_profile_id(storage)
    if not profiles:
        print("No profiles saved.")
        return 0
    for profile in profiles:
        flags = []
        if profile.id == active_id:
            flags.append("active")
        if profile.is_default:
            flags.append("default")
        suffix = f" ({', '.join(flags)})" if flags else ""
        print(f"{profile.id}  {profile.name}{suffix}")
    return 0


def dispatch(args: argparse.Namespace, config: BexConfiguration) -> int:
    if args.command == "diff":
        return run_diff(args)
    if args.command == "parse":
        return run_parse(args)

    storage = create_storage(config)
    try:
        if args.command == "history":
            return asyncio.run(run_history(args, storage))
        return asyncio.run(run_profiles(args, storage))
    finally:
        close = getattr(storage, "close", None)
        if close is not None:
            close()


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = load_configuration(
            args.env_file,
            overrides={
                "data_file": args.data_file,
                "backend": args.backend,
                "log_level": args.log_level,
            },
        )
    except ValueError as exc:
        parser.error(str(exc))

    logging.basicConfig(level=config.logging_level)

    try:
        return dispatch(args, config)
    except (OSError, sqlite3.Error) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
