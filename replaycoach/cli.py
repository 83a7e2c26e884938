"""Command-line access to the replay workflow.

Usage:
    replaycoach list --limit 20
    replaycoach upload path/to/game.SC2Replay --player-id 42
    replaycoach claim 5 42
    replaycoach delete 5
    replaycoach analysis 5 --strategic
"""

import argparse
import asyncio
import json
import logging
import sys
from collections.abc import Awaitable, Callable
from pathlib import Path
from typing import Any

from replaycoach.api.client import ApiClient
from replaycoach.config import settings
from replaycoach.models.errors import ApiError
from replaycoach.session import Session
from replaycoach.stores.replays import ReplayStore

logger = logging.getLogger(__name__)


def _emit(data: Any) -> None:
    print(json.dumps(data, indent=2, default=str))


def _fail(store: ReplayStore) -> int:
    print(f"Error: {store.error}", file=sys.stderr)
    return 1


async def _cmd_list(store: ReplayStore, args: argparse.Namespace) -> int:
    replays = await store.list_replays(args.limit, args.offset)
    if store.error:
        return _fail(store)
    _emit(
        {
            "total": store.total,
            "replays": [r.model_dump(mode="json", exclude={"players"}) for r in replays],
        }
    )
    return 0


async def _cmd_upload(store: ReplayStore, args: argparse.Namespace) -> int:
    if not args.path.exists():
        print(f"Error: Replay file not found: {args.path}", file=sys.stderr)
        return 1

    try:
        result = await store.upload(args.path)
    except ApiError:
        return _fail(store)
    _emit({"replay_id": result.replay_id, "message": result.message})

    pending = store.pending_claim
    if pending is None:
        return 0

    if args.player_id is None:
        print("Which player were you? Claim with: replaycoach claim REPLAY PLAYER")
        _emit(
            [
                {"player_id": p.player_id, "name": p.name, "race": p.race}
                for p in pending.human_players
            ]
        )
        return 0

    try:
        claim = await store.claim(pending.id, args.player_id)
    except ApiError:
        return _fail(store)
    _emit(claim.model_dump(mode="json"))
    return 0


async def _cmd_claim(store: ReplayStore, args: argparse.Namespace) -> int:
    try:
        result = await store.claim(args.replay_id, args.player_id)
    except ApiError:
        return _fail(store)
    _emit(result.model_dump(mode="json"))
    return 0


async def _cmd_delete(store: ReplayStore, args: argparse.Namespace) -> int:
    try:
        await store.remove(args.replay_id)
    except ApiError:
        return _fail(store)
    print(f"Deleted replay {args.replay_id}")
    return 0


async def _cmd_analysis(store: ReplayStore, args: argparse.Namespace) -> int:
    if args.strategic:
        strategic = await store.fetch_strategic_analysis(args.replay_id)
        if strategic is None:
            print("Strategic analysis is not available for this replay", file=sys.stderr)
            return 1
        _emit(strategic.model_dump(mode="json"))
        return 0

    analysis = await store.fetch_analysis(args.replay_id)
    if analysis is None:
        return _fail(store)
    _emit(analysis.model_dump(mode="json"))
    return 0


COMMANDS: dict[str, Callable[[ReplayStore, argparse.Namespace], Awaitable[int]]] = {
    "list": _cmd_list,
    "upload": _cmd_upload,
    "claim": _cmd_claim,
    "delete": _cmd_delete,
    "analysis": _cmd_analysis,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="replaycoach", description="Replay analysis client")
    parser.add_argument("--url", default=None, help="API base URL")
    parser.add_argument("--token", default=None, help="Bearer token (or REPLAYCOACH_API_TOKEN)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")

    sub = parser.add_subparsers(dest="command", required=True)

    list_parser = sub.add_parser("list", help="List uploaded replays")
    list_parser.add_argument("--limit", type=int, default=settings.default_page_size)
    list_parser.add_argument("--offset", type=int, default=0)

    upload_parser = sub.add_parser("upload", help="Upload a replay file")
    upload_parser.add_argument("path", type=Path, help="Path to .SC2Replay file")
    upload_parser.add_argument(
        "--player-id",
        type=int,
        default=None,
        help="Claim this player right away if the backend asks",
    )

    claim_parser = sub.add_parser("claim", help="Say which player you were in a replay")
    claim_parser.add_argument("replay_id", type=int)
    claim_parser.add_argument("player_id", type=int)

    delete_parser = sub.add_parser("delete", help="Delete a replay")
    delete_parser.add_argument("replay_id", type=int)

    analysis_parser = sub.add_parser("analysis", help="Show a replay's analysis")
    analysis_parser.add_argument("replay_id", type=int)
    analysis_parser.add_argument(
        "--strategic", action="store_true", help="Show the strategic comparison instead"
    )

    return parser


async def run(args: argparse.Namespace, client: ApiClient | None = None) -> int:
    """Execute a parsed command against the backend."""
    client = client or ApiClient(base_url=args.url)
    async with client:
        session = Session(client)
        token = args.token or settings.api_token
        if token:
            session.restore(token)
        store = ReplayStore(client)
        return await COMMANDS[args.command](store, args)


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    return asyncio.run(run(args))


if __name__ == "__main__":
    sys.exit(main())
