"""
Online logistic regression: a small batch-gradient-descent learner.

Models are trained fresh every ranking pass (zero-initialized weights, no
warm start) and discarded afterwards.
"""

import logging
from typing import List, Sequence, Tuple

import numpy as np

from feed_ranking.models.config import DEFAULT_CONFIG, RankingConfig
from feed_ranking.models.scoring import TrainedModel, TrainingRow

from .features import feature_length as variant_feature_length

logger = logging.getLogger(__name__)

Sample = Tuple[Sequence[float], int]


def sigmoid(x):
    return 1.0 / (1.0 + np.exp(-x))


def logistic_predict(
    weights: Sequence[float],
    features: Sequence[float],
    logit_clamp: float = DEFAULT_CONFIG.logit_clamp,
) -> float:
    """Probability in (0, 1); the logit is clamped so the asymptotes are never reached."""
    n = min(len(weights), len(features))
    z = float(np.dot(np.asarray(weights[:n], dtype=float), np.asarray(features[:n], dtype=float)))
    return float(sigmoid(np.clip(z, -logit_clamp, logit_clamp)))


def train_logistic_regression(
    samples: List[Sample],
    n_features: int,
    config: RankingConfig = DEFAULT_CONFIG,
) -> List[float]:
    """
    Batch gradient descent with L2 on every weight except the bias (index 0).

    No samples or n_features 0 → zero vector of n_features.
    """
    if not samples or not n_features:
        return [0.0] * n_features

    X = np.array([list(features)[:n_features] for features, _ in samples], dtype=float)
    y = np.array([label for _, label in samples], dtype=float)
    n = len(samples)
    weights = np.zeros(n_features)
    l2_mask = np.ones(n_features)
    l2_mask[0] = 0.0

    for _ in range(config.epochs):
        p = sigmoid(np.clip(X @ weights, -config.logit_clamp, config.logit_clamp))
        gradient = X.T @ (p - y)
        weights -= config.learning_rate * (gradient / n + config.l2_penalty * l2_mask * weights)

    return weights.tolist()


def train_model(
    rows: List[TrainingRow],
    include_keyword_feature: bool,
    config: RankingConfig = DEFAULT_CONFIG,
) -> TrainedModel:
    """Train the learned (no keyword feature) or hybrid (with keyword feature) variant."""
    samples = [(row.features_for(include_keyword_feature), row.label) for row in rows]
    weights = train_logistic_regression(
        samples, variant_feature_length(include_keyword_feature), config
    )
    logger.debug(
        "[learner] variant=%s samples=%d weights=%s",
        "hybrid" if include_keyword_feature else "learned",
        len(samples),
        [round(w, 4) for w in weights],
    )
    return TrainedModel(
        weights=weights,
        include_keyword_feature=include_keyword_feature,
        sample_count=len(samples),
    )


def predict(
    model: TrainedModel,
    features: Sequence[float],
    config: RankingConfig = DEFAULT_CONFIG,
) -> float:
    """Model probability, or 0 for a model with no weights."""
    if model.is_empty:
        return 0.0
    return logistic_predict(model.weights, features, config.logit_clamp)
