"""
Feed Ranking Engine: two-stage retrieval/ranking for a short-video feed.

Single entry point for the package:
- models/: RankingConfig, FeedItem, UserSignals, scoring models, FeedSession
- stages/: candidate_pool, keyword_scoring (Stage 1), ranking (learned + hybrid),
  continuity, orchestrator
- utils/: tokenization and counter coercion
"""

from feed_ranking.models.config import (
    DEFAULT_CONFIG,
    RankingConfig,
    config_from_env,
    load_config,
    resolve_config,
)
from feed_ranking.models.item import FeedItem, ensure_items
from feed_ranking.models.scoring import EvaluationReport, RankedEntry, RankingResult
from feed_ranking.models.session import FeedSession
from feed_ranking.models.signals import UserSignals, ensure_signals
from feed_ranking.stages.candidate_pool import FEED_FOR_YOU, FEED_USER, get_candidate_pool
from feed_ranking.stages.continuity import merge_with_previous
from feed_ranking.stages.keyword_scoring import generate_stage1_candidates
from feed_ranking.stages.orchestrator import rank_feed, refresh_feed
from feed_ranking.stages.ranking import evaluate_models
from feed_ranking.utils.text import tokenize

__all__ = [
    "DEFAULT_CONFIG",
    "RankingConfig",
    "config_from_env",
    "load_config",
    "resolve_config",
    "FeedItem",
    "ensure_items",
    "EvaluationReport",
    "RankedEntry",
    "RankingResult",
    "FeedSession",
    "UserSignals",
    "ensure_signals",
    "FEED_FOR_YOU",
    "FEED_USER",
    "get_candidate_pool",
    "merge_with_previous",
    "generate_stage1_candidates",
    "rank_feed",
    "refresh_feed",
    "evaluate_models",
    "tokenize",
]
