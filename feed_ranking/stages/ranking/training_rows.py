"""
Training rows and the deterministic train/test split.

Rows come only from implicit feedback: a candidate is labeled once the user
has viewed or liked it. label = 1 iff currently liked, so a viewed but
unliked item is a negative.
"""

from typing import List, Tuple

from feed_ranking.models.config import DEFAULT_CONFIG, RankingConfig
from feed_ranking.models.scoring import Stage1Candidate, TrainingRow
from feed_ranking.models.signals import UserSignals

from .features import build_model_features


def build_training_rows(
    candidates: List[Stage1Candidate],
    signals: UserSignals,
    config: RankingConfig = DEFAULT_CONFIG,
) -> List[TrainingRow]:
    """One row per viewed-or-liked candidate, in Stage 1 order."""
    rows: List[TrainingRow] = []
    for rank_index, candidate in enumerate(candidates):
        item = candidate.item
        if signals.view_count(item.id) <= 0 and not item.is_liked:
            continue
        rows.append(
            TrainingRow(
                item_id=item.id,
                label=1 if item.is_liked else 0,
                stage1_rank_index=rank_index,
                features=build_model_features(
                    candidate, rank_index, signals, include_keyword_feature=True, config=config
                ),
            )
        )
    return rows


def split_bucket(item_id: str, buckets: int = 10) -> int:
    """Stable bucket from the sum of character codes; no randomness."""
    return sum(ord(ch) for ch in item_id or "") % buckets


def split_train_test(
    rows: List[TrainingRow],
    config: RankingConfig = DEFAULT_CONFIG,
) -> Tuple[List[TrainingRow], List[TrainingRow]]:
    """Buckets 0..train_bucket_max go to train (80% by default), the rest to test."""
    train: List[TrainingRow] = []
    test: List[TrainingRow] = []
    for row in rows:
        if split_bucket(row.item_id, config.split_buckets) <= config.train_bucket_max:
            train.append(row)
        else:
            test.append(row)
    return train, test
