"""Data models for the feed ranking engine."""

from .config import (
    DEFAULT_CONFIG,
    RankingConfig,
    config_from_env,
    load_config,
    resolve_config,
)
from .item import FeedComment, FeedItem, ensure_items
from .scoring import (
    EvaluationReport,
    RankedEntry,
    RankingResult,
    Stage1Candidate,
    TrainedModel,
    TrainingRow,
)
from .session import FeedSession
from .signals import UserSignals, ensure_signals

__all__ = [
    "DEFAULT_CONFIG",
    "EvaluationReport",
    "FeedComment",
    "FeedItem",
    "FeedSession",
    "RankedEntry",
    "RankingConfig",
    "RankingResult",
    "Stage1Candidate",
    "TrainedModel",
    "TrainingRow",
    "UserSignals",
    "config_from_env",
    "ensure_items",
    "ensure_signals",
    "load_config",
    "resolve_config",
]
