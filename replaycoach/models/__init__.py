from replaycoach.models.analysis import (
    AnalysisData,
    ReplayAnalysis,
    StrategicAnalysis,
    StrategicAnalysisResponse,
    Suggestion,
)
from replaycoach.models.auth import AuthResponse, User
from replaycoach.models.errors import (
    DEFAULT_MESSAGES,
    ApiError,
    ErrorKind,
    default_message,
    error_message,
    normalize_error,
)
from replaycoach.models.mentor import (
    CoachingFocus,
    DailyProgress,
    Goal,
    GoalList,
    GoalTemplate,
    MentorDashboard,
    ProgressHistory,
    RecentGame,
    WeeklyReport,
    WeekStats,
)
from replaycoach.models.replay import (
    ClaimResult,
    Player,
    Replay,
    ReplayPage,
    TrendData,
    TrendsResponse,
    UploadResult,
)

__all__ = [
    "AnalysisData",
    "ApiError",
    "AuthResponse",
    "ClaimResult",
    "CoachingFocus",
    "DEFAULT_MESSAGES",
    "DailyProgress",
    "ErrorKind",
    "Goal",
    "GoalList",
    "GoalTemplate",
    "MentorDashboard",
    "Player",
    "ProgressHistory",
    "RecentGame",
    "Replay",
    "ReplayAnalysis",
    "ReplayPage",
    "StrategicAnalysis",
    "StrategicAnalysisResponse",
    "Suggestion",
    "TrendData",
    "TrendsResponse",
    "UploadResult",
    "User",
    "WeekStats",
    "WeeklyReport",
    "default_message",
    "error_message",
    "normalize_error",
]
