"""End-to-end workflow tests against an in-process fake backend."""

from itertools import count

import pytest
from fastapi import FastAPI, File, Header, Response, UploadFile
from fastapi.responses import JSONResponse
from httpx import ASGITransport
from pydantic import BaseModel

from replaycoach.api.client import ApiClient
from replaycoach.models.errors import ApiError, ErrorKind
from replaycoach.session import Session
from replaycoach.stores.auth import AuthStore
from replaycoach.stores.replays import ClaimState, ReplayStore


class ClaimRequest(BaseModel):
    player_id: int = 0


def _error(status: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status, content={"error": message})


def create_fake_backend() -> FastAPI:
    """Mimics the replay endpoints closely enough to drive the stores."""
    app = FastAPI()
    replays: dict[int, dict] = {}
    claims: dict[int, int] = {}
    ids = count(1)

    @app.post("/api/v1/auth/login")
    async def login() -> dict:
        return {
            "token": "tok-e2e",
            "user": {"id": 1, "email": "coach@example.com", "sc2_player_name": "Serral"},
        }

    @app.post("/api/v1/replays/upload", status_code=201)
    async def upload(
        replay: UploadFile = File(...),
        authorization: str | None = Header(default=None),
    ):
        if not (replay.filename or "").endswith(".SC2Replay"):
            return _error(400, "Only .SC2Replay files allowed")
        await replay.read()
        replay_id = next(ids)
        replays[replay_id] = {
            "id": replay_id,
            "hash": f"h{replay_id}",
            "filename": replay.filename,
            "map": "Alcyone LE",
            "duration": 600,
            "game_version": "5.0.13",
            "players": [
                {
                    "replay_id": replay_id,
                    "player_id": 42,
                    "player_slot": 1,
                    "name": "Serral",
                    "race": "Zerg",
                    "result": "Win",
                    "apm": 300.0,
                    "spending_quotient": 90.0,
                    "is_human": True,
                },
                {
                    "replay_id": replay_id,
                    "player_id": 43,
                    "player_slot": 2,
                    "name": "Clem",
                    "race": "Terran",
                    "result": "Loss",
                    "apm": 320.0,
                    "spending_quotient": 88.0,
                    "is_human": True,
                },
            ],
        }
        return {
            "message": "Replay uploaded",
            "replay_id": replay_id,
            "replay": replays[replay_id],
            "needs_player_selection": authorization is not None,
        }

    @app.get("/api/v1/replays")
    async def list_replays(limit: int = 20, offset: int = 0) -> dict:
        ordered = sorted(replays.values(), key=lambda r: r["id"], reverse=True)
        return {
            "replays": ordered[offset : offset + limit] or None,
            "total": len(ordered),
            "limit": limit,
            "offset": offset,
        }

    @app.post("/api/v1/replays/{replay_id}/claim")
    async def claim(replay_id: int, body: ClaimRequest):
        replay = replays.get(replay_id)
        if replay is None:
            return _error(404, "Replay not found")
        for player in replay["players"]:
            if player["player_id"] == body.player_id:
                claims[replay_id] = body.player_id
                return {"message": "Replay claimed", "player_name": player["name"]}
        return _error(400, "Player not in this replay")

    @app.delete("/api/v1/replays/{replay_id}")
    async def delete(replay_id: int):
        if replays.pop(replay_id, None) is None:
            return _error(404, "Replay not found")
        return Response(status_code=204)

    @app.get("/api/v1/replays/{replay_id}/analysis")
    async def analysis(replay_id: int):
        replay = replays.get(replay_id)
        if replay is None:
            return _error(404, "Replay not found")
        return {
            "replay": replay,
            "analyses": {"42": {"supply_analysis": {"block_percentage": 4.2}, "suggestions": []}},
        }

    @app.get("/api/v1/replays/{replay_id}/strategic")
    async def strategic(replay_id: int):
        return _error(404, "Strategic analysis not available")

    return app


@pytest.fixture
async def client():
    transport = ASGITransport(app=create_fake_backend())
    api = ApiClient(base_url="http://test/api/v1", transport=transport)
    yield api
    await api.close()


class TestClaimWorkflow:
    async def test_authenticated_upload_requires_claim(self, client: ApiClient) -> None:
        """Upload, pick the player, then read the analysis."""
        session = Session(client)
        assert await AuthStore(session).login("coach@example.com", "secret")
        store = ReplayStore(client)

        result = await store.upload(b"MPQ...", filename="ladder.SC2Replay")

        assert result.needs_player_selection is True
        assert store.pending_claim is not None
        assert [p.name for p in store.pending_claim.human_players] == ["Serral", "Clem"]
        assert store.total == 1
        assert store.claim_state(result.replay_id) is ClaimState.AWAITING_CLAIM

        claim = await store.claim(result.replay_id, 42)

        assert claim.player_name == "Serral"
        assert store.pending_claim is None
        assert store.claim_state(result.replay_id) is ClaimState.READY

        analysis = await store.fetch_analysis(result.replay_id)
        assert analysis is not None
        assert analysis.for_player(42).supply_analysis.block_percentage == 4.2

    async def test_anonymous_upload_is_ready(self, client: ApiClient) -> None:
        store = ReplayStore(client)

        result = await store.upload(b"MPQ...", filename="ladder.SC2Replay")

        assert result.needs_player_selection is False
        assert store.pending_claim is None
        assert store.claim_state(result.replay_id) is ClaimState.READY

    async def test_wrong_player_keeps_claim_pending(self, client: ApiClient) -> None:
        Session(client).restore("tok-e2e")
        store = ReplayStore(client)
        result = await store.upload(b"MPQ...", filename="ladder.SC2Replay")

        with pytest.raises(ApiError) as exc_info:
            await store.claim(result.replay_id, 7)

        assert exc_info.value.kind is ErrorKind.BACKEND_REPORTED
        assert store.error == "Player not in this replay"
        assert store.pending_claim is not None

        store.clear_pending_claim()
        assert store.claim_state(result.replay_id) is ClaimState.DISMISSED

    async def test_rejected_file_type(self, client: ApiClient) -> None:
        store = ReplayStore(client)

        with pytest.raises(ApiError):
            await store.upload(b"hello", filename="notes.txt")

        assert store.error == "Only .SC2Replay files allowed"


class TestCollectionWorkflow:
    async def test_upload_list_delete(self, client: ApiClient) -> None:
        store = ReplayStore(client)
        first = await store.upload(b"1", filename="a.SC2Replay")
        second = await store.upload(b"2", filename="b.SC2Replay")
        assert [r.id for r in store.replays] == [second.replay_id, first.replay_id]

        await store.remove(first.replay_id)

        assert [r.id for r in store.replays] == [second.replay_id]
        assert store.total == 1

    async def test_empty_backend_list(self, client: ApiClient) -> None:
        store = ReplayStore(client)

        await store.list_replays()

        assert store.replays == []
        assert store.total == 0
        assert store.error is None

    async def test_missing_strategic_analysis_is_silent(self, client: ApiClient) -> None:
        store = ReplayStore(client)
        await store.upload(b"1", filename="a.SC2Replay")

        assert await store.fetch_strategic_analysis(1) is None
        assert store.error is None
