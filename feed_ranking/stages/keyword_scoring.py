"""
Stage 1: Keyword Candidate Scoring

Builds a taste profile (token -> interaction weight mass) from the user's
interactions across the pool, then scores every candidate by direct
interaction bonuses plus profile similarity. Returns candidates sorted
best-first, capped at config.max_candidates.

The public entry point is generate_stage1_candidates.
"""

import logging
import math
from typing import Dict, FrozenSet, List, Mapping

from feed_ranking.models.config import DEFAULT_CONFIG, RankingConfig
from feed_ranking.models.item import FeedItem
from feed_ranking.models.scoring import Stage1Candidate
from feed_ranking.models.signals import UserSignals
from feed_ranking.utils.numbers import clamp

logger = logging.getLogger(__name__)


def interaction_weight(
    item: FeedItem,
    signals: UserSignals,
    config: RankingConfig = DEFAULT_CONFIG,
) -> float:
    """How strongly this item's tokens count toward the taste profile."""
    weight = 0.0
    if signals.is_followed(item):
        weight += config.profile_weight_followed
    if item.is_liked:
        weight += config.profile_weight_liked
    comments = signals.comment_count(item.id)
    if comments > 0:
        weight += config.profile_weight_per_comment * comments
    views = signals.view_count(item.id)
    if views > 0:
        weight += min(config.profile_view_cap, math.log1p(views))
    return weight


def build_profile_weights(
    items: List[FeedItem],
    token_sets: List[FrozenSet[str]],
    signals: UserSignals,
    config: RankingConfig = DEFAULT_CONFIG,
) -> Dict[str, float]:
    """
    Sum each item's interaction weight onto every one of its tokens.

    Items with non-positive weight contribute nothing.
    """
    weights: Dict[str, float] = {}
    for item, tokens in zip(items, token_sets):
        w = interaction_weight(item, signals, config)
        if w <= 0:
            continue
        for token in tokens:
            weights[token] = weights.get(token, 0.0) + w
    return weights


def profile_similarity(
    tokens: FrozenSet[str],
    profile: Mapping[str, float],
    token_mass: float,
) -> float:
    """Share of the profile's mass covered by these tokens, in [0, 1]."""
    if token_mass <= 0 or not tokens:
        return 0.0
    overlap = sum(profile.get(token, 0.0) for token in tokens)
    return clamp(overlap / token_mass, 0.0, 1.0)


def compute_keyword_score(
    item: FeedItem,
    index: int,
    similarity: float,
    signals: UserSignals,
    config: RankingConfig = DEFAULT_CONFIG,
) -> float:
    """Weighted sum of interaction bonuses, unseen bonus, similarity, and position prior."""
    score = 0.0
    if signals.is_followed(item):
        score += config.keyword_weight_followed
    if item.is_liked:
        score += config.keyword_weight_liked
    if not item.has_seen:
        score += config.keyword_weight_unseen
    comments = signals.comment_count(item.id)
    views = signals.view_count(item.id)
    score += min(config.keyword_comment_cap, comments) * config.keyword_weight_commented
    score += min(config.keyword_view_cap, math.log1p(views)) * config.keyword_weight_views
    score += similarity * config.keyword_weight_similarity
    score += max(0.0, 1 - index / config.keyword_recency_horizon) * config.keyword_weight_recency
    return score


def _sort_and_cap(
    scored: List[Stage1Candidate],
    config: RankingConfig,
) -> List[Stage1Candidate]:
    """Sort by keyword_score descending, ties by input position; cap at max_candidates."""
    scored.sort(key=lambda c: (-c.keyword_score, c.index))
    if config.max_candidates is None:
        return scored
    return scored[: max(0, config.max_candidates)]


def generate_stage1_candidates(
    items: List[FeedItem],
    signals: UserSignals,
    config: RankingConfig = DEFAULT_CONFIG,
) -> List[Stage1Candidate]:
    """
    Stage 1: score the whole pool against the user's taste profile.

    Cold start (no interactions) gives similarity 0 everywhere, so the order
    comes from the unseen bonus and the position prior alone.
    """
    if not items:
        return []

    # 1) Tokens and profile for this pass
    token_sets = [item.token_set() for item in items]
    profile = build_profile_weights(items, token_sets, signals, config)
    token_mass = sum(profile.values())

    # 2) Score every candidate
    scored: List[Stage1Candidate] = []
    for index, (item, tokens) in enumerate(zip(items, token_sets)):
        similarity = profile_similarity(tokens, profile, token_mass)
        scored.append(
            Stage1Candidate(
                item=item,
                index=index,
                keyword_score=compute_keyword_score(item, index, similarity, signals, config),
                similarity=similarity,
                tokens=tokens,
            )
        )

    logger.debug(
        "[stage1] pool=%d profile_tokens=%d token_mass=%.3f",
        len(items), len(profile), token_mass,
    )
    return _sort_and_cap(scored, config)


def stage1_by_id(candidates: List[Stage1Candidate]) -> Dict[str, Stage1Candidate]:
    return {c.id: c for c in candidates}

