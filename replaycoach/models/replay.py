"""
Replay response contracts.

Shapes returned by the /replays and /stats endpoints. Pure data: the
backend parses replays and computes every number in here.
"""

from datetime import datetime

from pydantic import BaseModel, Field

from replaycoach.models.fields import NullableList


class Player(BaseModel):
    """A participant recorded in a replay. Only reachable through its Replay."""

    replay_id: int
    player_id: int
    player_slot: int
    name: str
    race: str
    result: str = Field(
        default="Undecided",
        description="Win, Loss or Undecided",
    )
    apm: float = 0.0
    spending_quotient: float = 0.0
    is_human: bool = True


class Replay(BaseModel):
    """An uploaded game session."""

    id: int
    hash: str = ""
    filename: str = ""
    map: str = ""
    duration: int = Field(default=0, description="Game length in seconds")
    game_version: str = ""
    played_at: datetime | None = None
    uploaded_at: datetime | None = None
    # The backend omits the key when the replay has no stored players
    players: NullableList[Player] = Field(default_factory=list)

    @property
    def human_players(self) -> list[Player]:
        """Players a user could claim, in slot order."""
        return sorted(
            (p for p in self.players if p.is_human),
            key=lambda p: p.player_slot,
        )

    def player(self, player_id: int) -> Player | None:
        """Look up a participant by its player id."""
        for p in self.players:
            if p.player_id == player_id:
                return p
        return None


class ReplayPage(BaseModel):
    """One page of the replay listing."""

    replays: NullableList[Replay] = Field(default_factory=list)
    total: int = 0
    limit: int | None = None
    offset: int | None = None


class UploadResult(BaseModel):
    """
    Result of a replay upload.

    Transient: consumed once to decide whether the uploader has to pick
    which recorded player they were.
    """

    replay_id: int
    replay: Replay
    message: str = ""
    needs_player_selection: bool = False


class ClaimResult(BaseModel):
    """Result of associating the current user with a replay participant."""

    message: str = ""
    player_name: str = ""
    replay_id: int | None = None
    player_id: int | None = None


class TrendData(BaseModel):
    """Direction of a metric over a player's recent games."""

    metric: str
    trend: str
    change: float = 0.0


class TrendsResponse(BaseModel):
    """Trends keyed by metric name."""

    trends: dict[str, TrendData] = Field(default_factory=dict)
