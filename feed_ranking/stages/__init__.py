"""Pipeline stages: candidate pool, Stage 1 keyword scoring, learned ranking, continuity merge."""

from .candidate_pool import get_candidate_pool
from .continuity import merge_with_previous
from .keyword_scoring import generate_stage1_candidates
from .orchestrator import rank_feed, refresh_feed

__all__ = [
    "get_candidate_pool",
    "merge_with_previous",
    "generate_stage1_candidates",
    "rank_feed",
    "refresh_feed",
]
