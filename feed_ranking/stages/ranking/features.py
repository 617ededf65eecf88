"""
Feature vectors for the logistic models.

Fixed order: [bias, unseen, followed, liked, views, comments, similarity, rank_norm]
plus a trailing keyword-score feature for the hybrid variant only, so the
learned model can be evaluated independently of the keyword heuristic.
"""

import math
from typing import List

from feed_ranking.models.config import DEFAULT_CONFIG, RankingConfig
from feed_ranking.models.scoring import Stage1Candidate
from feed_ranking.models.signals import UserSignals
from feed_ranking.utils.numbers import clamp

LEARNED_FEATURE_NAMES = [
    "bias",
    "unseen",
    "followed",
    "liked",
    "views",
    "comments",
    "similarity",
    "rank_norm",
]
HYBRID_FEATURE_NAMES = LEARNED_FEATURE_NAMES + ["keyword_score"]


def feature_length(include_keyword_feature: bool) -> int:
    return len(HYBRID_FEATURE_NAMES if include_keyword_feature else LEARNED_FEATURE_NAMES)


def build_model_features(
    candidate: Stage1Candidate,
    stage1_rank_index: int,
    signals: UserSignals,
    include_keyword_feature: bool,
    config: RankingConfig = DEFAULT_CONFIG,
) -> List[float]:
    """Feature vector for one candidate at a given Stage 1 position."""
    item = candidate.item
    views = signals.view_count(item.id)
    comments = signals.comment_count(item.id)
    scale = config.engagement_feature_scale
    rank_norm = 1 - min(1.0, stage1_rank_index / config.rank_norm_horizon)

    features = [
        1.0,
        0.0 if item.has_seen else 1.0,
        1.0 if signals.is_followed(item) else 0.0,
        1.0 if item.is_liked else 0.0,
        min(1.0, math.log1p(views) / scale),
        min(1.0, math.log1p(comments) / scale),
        clamp(candidate.similarity, 0.0, 1.0),
        rank_norm,
    ]
    if include_keyword_feature:
        log_keyword = math.log1p(max(0.0, candidate.keyword_score)) / config.keyword_feature_scale
        features.append(min(config.keyword_feature_cap, log_keyword))
    return features
