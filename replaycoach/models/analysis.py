"""
Analysis response contracts.

Per-player replay analysis and the comparative strategic analysis. Both
are read-only and replaced wholesale on every fetch.
"""

from pydantic import BaseModel, Field

from replaycoach.models.fields import NullableList
from replaycoach.models.replay import Replay


class SupplyPoint(BaseModel):
    time: float
    supply_used: int
    supply_max: int
    is_blocked: bool = False


class SupplyBlock(BaseModel):
    start_time: float
    end_time: float
    duration: float
    severity: str  # low, medium, high
    supply_used: int
    supply_max: int


class SupplyAnalysis(BaseModel):
    total_block_time: float = 0.0
    block_percentage: float = 0.0
    blocks: NullableList[SupplyBlock] = Field(default_factory=list)
    supply_timeline: NullableList[SupplyPoint] = Field(default_factory=list)


class ResourceValue(BaseModel):
    minerals: float = 0.0
    gas: float = 0.0


class ResourcePoint(BaseModel):
    time: float
    minerals: int = 0
    gas: int = 0
    income: ResourceValue = Field(default_factory=ResourceValue)


class SpendingAnalysis(BaseModel):
    spending_quotient: float = 0.0
    rating: str = ""  # poor, average, good, excellent
    average_unspent: ResourceValue = Field(default_factory=ResourceValue)
    average_income: ResourceValue = Field(default_factory=ResourceValue)
    resource_timeline: NullableList[ResourcePoint] = Field(default_factory=list)


class APMPoint(BaseModel):
    time: float
    apm: float


class APMAnalysis(BaseModel):
    average_apm: float = 0.0
    peak_apm: float = 0.0
    eapm: float = 0.0
    apm_timeline: NullableList[APMPoint] = Field(default_factory=list)


class BuildOrderItem(BaseModel):
    time: float
    supply: int
    action: str
    unit_or_building: str


class InjectAnalysis(BaseModel):
    efficiency: float = 0.0
    total_injects: int = 0
    missed_injects: int = 0


class ArmyPoint(BaseModel):
    time: float
    value: int
    unit_count: int


class UnitComposition(BaseModel):
    unit_type: str
    count: int
    value: int


class ArmyAnalysis(BaseModel):
    peak_army_value: int = 0
    army_timeline: NullableList[ArmyPoint] = Field(default_factory=list)
    unit_composition: NullableList[UnitComposition] = Field(default_factory=list)


class Suggestion(BaseModel):
    """A single coaching hint attached to a player's analysis."""

    priority: str
    category: str
    title: str
    description: str
    timestamp: float | None = None
    target_value: str | None = None


class AnalysisData(BaseModel):
    """Everything the backend computed for one player of one replay."""

    supply_analysis: SupplyAnalysis | None = None
    spending_analysis: SpendingAnalysis | None = None
    apm_analysis: APMAnalysis | None = None
    build_order: list[BuildOrderItem] | None = None
    inject_analysis: InjectAnalysis | None = None
    # Production is not modelled field by field; kept as sent
    production_analysis: dict | None = None
    army_analysis: ArmyAnalysis | None = None
    suggestions: NullableList[Suggestion] = Field(default_factory=list)


class ReplayAnalysis(BaseModel):
    """Per-player analyses of a replay, keyed by player id."""

    replay: Replay
    analyses: dict[int, AnalysisData] = Field(default_factory=dict)

    def for_player(self, player_id: int) -> AnalysisData | None:
        return self.analyses.get(player_id)


class MetricComparison(BaseModel):
    metric: str
    player_value: float
    enemy_value: float
    is_worse: bool


class SupplyBlockSummary(BaseModel):
    time: float
    duration: float
    severity: str


class CriticalMoment(BaseModel):
    time: float
    player_loss: int
    enemy_loss: int
    assessment: str
    is_positive: bool


class IdentifiedProblem(BaseModel):
    title: str
    description: str
    priority: str


class MatchupTips(BaseModel):
    opening: NullableList[str] = Field(default_factory=list)
    mid_game: NullableList[str] = Field(default_factory=list)
    timing: NullableList[str] = Field(default_factory=list)
    late_game: NullableList[str] = Field(default_factory=list)


class ImprovementStep(BaseModel):
    category: str
    title: str
    description: str


class StrategicAnalysis(BaseModel):
    """Winner-versus-loser comparison of a replay."""

    winner: str = ""
    loser: str = ""
    winner_race: str = ""
    loser_race: str = ""
    matchup: str = ""
    metrics_comparison: NullableList[MetricComparison] = Field(default_factory=list)
    supply_blocks: NullableList[SupplyBlockSummary] = Field(default_factory=list)
    critical_moments: NullableList[CriticalMoment] = Field(default_factory=list)
    problems: NullableList[IdentifiedProblem] = Field(default_factory=list)
    matchup_tips: MatchupTips | None = None
    improvement_steps: NullableList[ImprovementStep] = Field(default_factory=list)
    summary: str = ""


class StrategicAnalysisResponse(BaseModel):
    replay: Replay
    analysis: StrategicAnalysis
