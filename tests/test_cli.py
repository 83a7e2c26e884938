"""Tests for the command-line entry point."""

import json
from pathlib import Path

import httpx
import pytest
import respx

from replaycoach.api.client import ApiClient
from replaycoach.cli import build_parser, run

from tests.helpers import BASE_URL


def _args(*argv: str):
    return build_parser().parse_args(["--url", BASE_URL, "--token", "tok", *argv])


@pytest.fixture
def replay_file(tmp_path: Path) -> Path:
    path = tmp_path / "ladder.SC2Replay"
    path.write_bytes(b"MPQ fake")
    return path


class TestParser:
    def test_list_defaults(self) -> None:
        args = build_parser().parse_args(["list"])
        assert args.command == "list"
        assert args.limit == 20
        assert args.offset == 0

    def test_command_required(self) -> None:
        with pytest.raises(SystemExit):
            build_parser().parse_args([])


class TestCommands:
    @respx.mock
    async def test_list_prints_page(self, capsys, replay_payload) -> None:
        route = respx.get(f"{BASE_URL}/replays").mock(
            return_value=httpx.Response(200, json={"replays": [replay_payload(1)], "total": 1})
        )

        code = await run(_args("list"))

        assert code == 0
        out = json.loads(capsys.readouterr().out)
        assert out["total"] == 1
        assert out["replays"][0]["id"] == 1
        assert route.calls.last.request.headers["Authorization"] == "Bearer tok"

    @respx.mock
    async def test_list_failure_exit_code(self, capsys) -> None:
        respx.get(f"{BASE_URL}/replays").mock(
            return_value=httpx.Response(401, json={"error": "Not authenticated"})
        )

        code = await run(_args("list"))

        assert code == 1
        assert "Not authenticated" in capsys.readouterr().err

    @respx.mock
    async def test_upload_prints_candidates_when_claim_needed(
        self, capsys, replay_payload, replay_file: Path
    ) -> None:
        respx.post(f"{BASE_URL}/replays/upload").mock(
            return_value=httpx.Response(
                201,
                json={
                    "replay_id": 5,
                    "replay": replay_payload(5),
                    "message": "ok",
                    "needs_player_selection": True,
                },
            )
        )
        respx.get(f"{BASE_URL}/replays").mock(
            return_value=httpx.Response(200, json={"replays": [replay_payload(5)], "total": 1})
        )

        code = await run(_args("upload", str(replay_file)))

        assert code == 0
        out = capsys.readouterr().out
        assert "Which player were you?" in out
        assert "Serral" in out

    @respx.mock
    async def test_upload_with_player_claims(self, replay_payload, replay_file: Path) -> None:
        respx.post(f"{BASE_URL}/replays/upload").mock(
            return_value=httpx.Response(
                201,
                json={
                    "replay_id": 5,
                    "replay": replay_payload(5),
                    "message": "ok",
                    "needs_player_selection": True,
                },
            )
        )
        respx.get(f"{BASE_URL}/replays").mock(
            return_value=httpx.Response(200, json={"replays": [], "total": 0})
        )
        claim = respx.post(f"{BASE_URL}/replays/5/claim").mock(
            return_value=httpx.Response(200, json={"message": "ok", "player_name": "Serral"})
        )

        code = await run(_args("upload", str(replay_file), "--player-id", "45"))

        assert code == 0
        assert json.loads(claim.calls.last.request.content) == {"player_id": 45}

    async def test_upload_missing_file(self, capsys, tmp_path: Path) -> None:
        client = ApiClient(base_url=BASE_URL)

        code = await run(_args("upload", str(tmp_path / "nope.SC2Replay")), client=client)

        assert code == 1
        assert "not found" in capsys.readouterr().err

    @respx.mock
    async def test_delete_failure(self, capsys) -> None:
        respx.delete(f"{BASE_URL}/replays/3").mock(return_value=httpx.Response(500))

        code = await run(_args("delete", "3"))

        assert code == 1
        assert "Failed to delete replay" in capsys.readouterr().err

    @respx.mock
    async def test_strategic_unavailable(self, capsys) -> None:
        respx.get(f"{BASE_URL}/replays/3/strategic").mock(return_value=httpx.Response(404))

        code = await run(_args("analysis", "3", "--strategic"))

        assert code == 1
        assert "not available" in capsys.readouterr().err
