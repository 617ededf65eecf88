"""
Learned ranking: training rows, logistic learners, evaluation, hybrid blend.

Public API: rank_candidates, train_model, evaluate_models.
- training_rows: implicit-feedback rows and the deterministic split.
- features / logistic: feature vectors and the online learner.
- evaluation: AUC and like-rate@K on the held-out split.
- core: hybrid scoring and the unseen-first sort.
"""

from .core import rank_candidates, sort_ranked_entries
from .evaluation import compute_auc, evaluate_models, like_rate_at_k, log_evaluation
from .features import build_model_features
from .logistic import logistic_predict, predict, train_logistic_regression, train_model
from .training_rows import build_training_rows, split_bucket, split_train_test

__all__ = [
    "rank_candidates",
    "sort_ranked_entries",
    "compute_auc",
    "evaluate_models",
    "like_rate_at_k",
    "log_evaluation",
    "build_model_features",
    "logistic_predict",
    "predict",
    "train_logistic_regression",
    "train_model",
    "build_training_rows",
    "split_bucket",
    "split_train_test",
]
