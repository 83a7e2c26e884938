from collections.abc import Callable
from typing import Any

import pytest

from replaycoach.api.client import ApiClient

from tests.helpers import BASE_URL


def _player_payload(replay_id: int, player_id: int, slot: int, name: str, **extra: Any) -> dict:
    payload = {
        "replay_id": replay_id,
        "player_id": player_id,
        "player_slot": slot,
        "name": name,
        "race": "Zerg" if slot % 2 else "Protoss",
        "result": "Win" if slot == 1 else "Loss",
        "apm": 120.5,
        "spending_quotient": 72.0,
        "is_human": True,
    }
    payload.update(extra)
    return payload


def _replay_payload(replay_id: int, players: list[dict] | None = None, **extra: Any) -> dict:
    payload = {
        "id": replay_id,
        "hash": f"hash-{replay_id}",
        "filename": f"game-{replay_id}.SC2Replay",
        "map": "Alcyone LE",
        "duration": 754,
        "game_version": "5.0.13",
        "played_at": "2024-05-01T18:30:00Z",
        "uploaded_at": "2024-05-01T19:00:00Z",
    }
    if players is None:
        players = [
            _player_payload(replay_id, 40 + replay_id, 1, "Serral"),
            _player_payload(replay_id, 50 + replay_id, 2, "Clem"),
        ]
    payload["players"] = players
    payload.update(extra)
    return payload


@pytest.fixture
def replay_payload() -> Callable[..., dict]:
    """Factory for backend-shaped replay JSON."""
    return _replay_payload


@pytest.fixture
def player_payload() -> Callable[..., dict]:
    """Factory for backend-shaped replay participant JSON."""
    return _player_payload


@pytest.fixture
async def api_client():
    """Gateway pointed at the mocked backend base URL."""
    client = ApiClient(base_url=BASE_URL, timeout=5.0)
    yield client
    await client.close()
