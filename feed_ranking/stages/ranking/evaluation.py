"""
Held-out evaluation of keyword, learned, and hybrid scoring.

Computes:
- AUC: pairwise positive-vs-negative ordering accuracy (ties count half)
- like-rate@K: share of liked items among the top K test items
- relative improvement of hybrid over keyword like-rate@K

Observability only: reports are logged and returned, never used to rank.
"""

import logging
from typing import Dict, List, Mapping, Optional

from feed_ranking.models.config import DEFAULT_CONFIG, RankingConfig
from feed_ranking.models.scoring import EvaluationReport, Stage1Candidate, TrainingRow

logger = logging.getLogger(__name__)


def compute_auc(
    rows: List[TrainingRow],
    score_by_id: Mapping[str, float],
) -> Optional[float]:
    """
    AUC over every positive/negative pair.

    Returns None unless the rows contain both a positive and a negative.
    Missing scores count as 0.
    """
    positives = [r for r in rows if r.label == 1]
    negatives = [r for r in rows if r.label == 0]
    if not positives or not negatives:
        return None
    wins = 0.0
    pairs = 0
    for pos in positives:
        ps = score_by_id.get(pos.item_id, 0.0)
        for neg in negatives:
            ns = score_by_id.get(neg.item_id, 0.0)
            if ps > ns:
                wins += 1
            elif ps == ns:
                wins += 0.5
            pairs += 1
    return wins / pairs if pairs else None


def order_by_score(score_by_id: Mapping[str, float]) -> List[str]:
    """Ids by score descending; ties keep mapping order."""
    return sorted(score_by_id, key=lambda item_id: -score_by_id.get(item_id, 0.0))


def like_rate_at_k(
    rows: List[TrainingRow],
    ordered_ids: List[str],
    k: int = 5,
) -> Optional[float]:
    """
    Fraction of liked items among the top k ordered ids that are test rows.

    None when there are no rows, no ordering, or no overlap between them.
    """
    if not rows or not ordered_ids:
        return None
    label_by_id = {r.item_id: r.label for r in rows}
    top = [item_id for item_id in ordered_ids[: max(1, k)] if item_id in label_by_id]
    if not top:
        return None
    return sum(label_by_id[item_id] for item_id in top) / len(top)


def relative_improvement(
    baseline: Optional[float],
    candidate: Optional[float],
) -> Optional[float]:
    """Percent change of candidate over baseline; None unless baseline > 0."""
    if baseline is None or candidate is None or baseline <= 0:
        return None
    return (candidate - baseline) / baseline * 100


def evaluate_models(
    test_rows: List[TrainingRow],
    stage1_by_id: Mapping[str, Stage1Candidate],
    learned_scores: Mapping[str, float],
    hybrid_scores: Mapping[str, float],
    labeled_rows: int,
    config: RankingConfig = DEFAULT_CONFIG,
) -> Optional[EvaluationReport]:
    """
    Compare the three schemes on the test split.

    Withheld (None) when fewer than config.min_evaluation_rows rows were
    labeled in total, or the test split is empty.
    """
    if labeled_rows < config.min_evaluation_rows or not test_rows:
        return None

    keyword_scores: Dict[str, float] = {}
    for row in test_rows:
        candidate = stage1_by_id.get(row.item_id)
        keyword_scores[row.item_id] = candidate.keyword_score if candidate else 0.0

    k = min(config.evaluation_k, len(test_rows))
    keyword_like_rate = like_rate_at_k(test_rows, order_by_score(keyword_scores), k)
    hybrid_like_rate = like_rate_at_k(test_rows, order_by_score(hybrid_scores), k)

    return EvaluationReport(
        k=k,
        keyword_like_rate=keyword_like_rate,
        learned_like_rate=like_rate_at_k(test_rows, order_by_score(learned_scores), k),
        hybrid_like_rate=hybrid_like_rate,
        keyword_auc=compute_auc(test_rows, keyword_scores),
        learned_auc=compute_auc(test_rows, learned_scores),
        hybrid_auc=compute_auc(test_rows, hybrid_scores),
        improvement_pct=relative_improvement(keyword_like_rate, hybrid_like_rate),
        train_rows=labeled_rows - len(test_rows),
        test_rows=len(test_rows),
    )


def _pct(value: Optional[float]) -> str:
    return f"{(value or 0) * 100:.1f}%"


def format_evaluation(report: EvaluationReport) -> str:
    """One-line summary; undefined metrics print as 0, improvement as n/a."""
    improvement = "n/a" if report.improvement_pct is None else f"{report.improvement_pct:.1f}%"
    return (
        f"like@{report.k}: keyword={_pct(report.keyword_like_rate)} "
        f"learned={_pct(report.learned_like_rate)} hybrid={_pct(report.hybrid_like_rate)} | "
        f"auc: keyword={report.keyword_auc or 0:.3f} learned={report.learned_auc or 0:.3f} "
        f"hybrid={report.hybrid_auc or 0:.3f} | hybrid improvement={improvement}"
    )


def log_evaluation(report: Optional[EvaluationReport]) -> None:
    if report is None:
        return
    logger.info("[recommender_eval] %s", format_evaluation(report))
