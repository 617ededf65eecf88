"""
Hybrid ranking: blend the learned and hybrid model probabilities into the final order.

Unseen items always come before seen ones; within a seen-state the blended
score decides, then the Stage 1 score.
"""

from typing import List

from feed_ranking.models.config import DEFAULT_CONFIG, RankingConfig
from feed_ranking.models.scoring import RankedEntry, Stage1Candidate, TrainedModel
from feed_ranking.models.signals import UserSignals

from .features import build_model_features
from .logistic import predict


def score_candidate(
    candidate: Stage1Candidate,
    stage1_rank_index: int,
    learned_model: TrainedModel,
    hybrid_model: TrainedModel,
    signals: UserSignals,
    config: RankingConfig = DEFAULT_CONFIG,
) -> RankedEntry:
    """Both model probabilities and the blended final score for one candidate."""
    learned_probability = predict(
        learned_model,
        build_model_features(candidate, stage1_rank_index, signals, False, config),
        config,
    )
    hybrid_probability = predict(
        hybrid_model,
        build_model_features(candidate, stage1_rank_index, signals, True, config),
        config,
    )
    return RankedEntry(
        id=candidate.id,
        has_seen=candidate.item.has_seen,
        stage1_score=candidate.keyword_score,
        learned_probability=learned_probability,
        hybrid_probability=hybrid_probability,
        final_score=(
            config.weight_hybrid * hybrid_probability
            + config.weight_learned * learned_probability
        ),
    )


def sort_ranked_entries(entries: List[RankedEntry]) -> List[RankedEntry]:
    """Unseen first, then final_score descending, then stage1_score descending."""
    return sorted(entries, key=lambda e: (e.has_seen, -e.final_score, -e.stage1_score))


def rank_candidates(
    candidates: List[Stage1Candidate],
    learned_model: TrainedModel,
    hybrid_model: TrainedModel,
    signals: UserSignals,
    config: RankingConfig = DEFAULT_CONFIG,
) -> List[RankedEntry]:
    """
    Score every Stage 1 candidate with both models and sort.

    Each candidate's own Stage 1 position is its rank feature, whether or not
    it became a training row.
    """
    entries = [
        score_candidate(candidate, rank_index, learned_model, hybrid_model, signals, config)
        for rank_index, candidate in enumerate(candidates)
    ]
    return sort_ranked_entries(entries)
