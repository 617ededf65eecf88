"""
Ranking configuration: Stage 1, learner, evaluation, and blend parameters.

RankingConfig defaults are defined here. Callers may pass a dict (e.g. loaded
from a JSON file); from_dict() merges its sections with these defaults.
"""

import json
import os
from pathlib import Path
from typing import Dict, Optional, Union

from dotenv import load_dotenv
from pydantic import BaseModel, model_validator


class RankingConfig(BaseModel):
    """Configuration for the feed ranking engine."""

    # -------------------------------------------------------------------------
    # Stage 1: Candidate Scoring
    # -------------------------------------------------------------------------

    # Max candidates kept after Stage 1. None keeps the whole pool.
    max_candidates: Optional[int] = None

    # Interaction weight spread over an item's tokens when building the taste profile.
    profile_weight_followed: float = 4.0
    profile_weight_liked: float = 3.5
    profile_weight_per_comment: float = 1.2
    # Views contribute min(profile_view_cap, ln(1 + views)).
    profile_view_cap: float = 2.2

    # Keyword score components.
    keyword_weight_followed: float = 120.0
    keyword_weight_liked: float = 95.0
    keyword_weight_unseen: float = 220.0
    keyword_weight_commented: float = 35.0
    keyword_comment_cap: float = 3.0
    keyword_weight_views: float = 22.0
    keyword_view_cap: float = 2.5
    keyword_weight_similarity: float = 80.0
    # Position prior: weight * max(0, 1 - index / horizon).
    keyword_weight_recency: float = 8.0
    keyword_recency_horizon: float = 20.0

    # -------------------------------------------------------------------------
    # Feature vector
    # -------------------------------------------------------------------------

    # rank_norm = 1 - min(1, stage1_rank_index / rank_norm_horizon)
    rank_norm_horizon: float = 40.0
    # Views/comments enter as min(1, ln(1 + count) / engagement_feature_scale).
    engagement_feature_scale: float = 3.0
    # Hybrid-only feature: min(keyword_feature_cap, ln(1 + keyword_score) / keyword_feature_scale).
    keyword_feature_scale: float = 8.0
    keyword_feature_cap: float = 1.5

    # -------------------------------------------------------------------------
    # Logistic learner
    # -------------------------------------------------------------------------

    learning_rate: float = 0.1
    epochs: int = 160
    # L2 penalty, never applied to the bias weight.
    l2_penalty: float = 0.002
    # Logits are clamped to [-logit_clamp, logit_clamp] before the sigmoid.
    logit_clamp: float = 20.0

    # -------------------------------------------------------------------------
    # Train/test split
    # bucket = sum(ord(c) for c in item_id) % split_buckets; bucket <= train_bucket_max → train
    # -------------------------------------------------------------------------

    split_buckets: int = 10
    train_bucket_max: int = 7

    # -------------------------------------------------------------------------
    # Evaluation
    # -------------------------------------------------------------------------

    # Fewer labeled rows than this and evaluation is withheld.
    min_evaluation_rows: int = 4
    # like-rate@K uses K = min(evaluation_k, number of test rows).
    evaluation_k: int = 5

    # -------------------------------------------------------------------------
    # Hybrid blend (must sum to 1.0)
    # final_score = weight_hybrid * hybrid_probability + weight_learned * learned_probability
    # -------------------------------------------------------------------------

    weight_hybrid: float = 0.85
    weight_learned: float = 0.15

    @model_validator(mode="after")
    def check_blend_and_learner(self):
        total = self.weight_hybrid + self.weight_learned
        if abs(total - 1.0) > 0.01:
            raise ValueError(f"Blend weights must sum to 1.0, got {total}")
        if self.epochs <= 0:
            raise ValueError(f"epochs must be positive, got {self.epochs}")
        if self.split_buckets <= 0:
            raise ValueError(f"split_buckets must be positive, got {self.split_buckets}")
        return self

    @classmethod
    def from_dict(cls, config_dict: Dict) -> "RankingConfig":
        """Create config from a (possibly sectioned) dictionary, e.g. loaded from JSON."""
        flat = {}
        for section in ("stage_1", "features", "learner", "split", "evaluation"):
            if section in config_dict:
                flat.update(config_dict[section])
        if "blend" in config_dict:
            blend = config_dict["blend"]
            if "hybrid" in blend:
                flat["weight_hybrid"] = blend["hybrid"]
            if "learned" in blend:
                flat["weight_learned"] = blend["learned"]
        # Top-level keys win over sections
        flat.update({k: v for k, v in config_dict.items() if not isinstance(v, dict)})
        allowed = set(cls.model_fields)
        filtered = {k: v for k, v in flat.items() if k in allowed}
        return cls.model_validate(filtered)


DEFAULT_CONFIG = RankingConfig()

CONFIG_ENV_VAR = "FEED_RANKING_CONFIG"


def resolve_config(config: Optional["RankingConfig"]) -> "RankingConfig":
    """Return config or DEFAULT_CONFIG when none is provided."""
    return config if config is not None else DEFAULT_CONFIG


def load_config(path: Union[str, Path]) -> RankingConfig:
    """Load a RankingConfig from a JSON file."""
    with open(path) as f:
        return RankingConfig.from_dict(json.load(f))


def config_from_env(env_file: Optional[Path] = None) -> RankingConfig:
    """
    Load config from the JSON file named by FEED_RANKING_CONFIG.

    A .env file (env_file, or the nearest one found by python-dotenv) is read
    first; variables already set in the environment take precedence.
    """
    load_dotenv(env_file)
    path = os.getenv(CONFIG_ENV_VAR, "").strip()
    if not path:
        return DEFAULT_CONFIG
    return load_config(path)
