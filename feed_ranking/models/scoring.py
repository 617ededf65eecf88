"""
Scoring models: per-pass values produced by the ranking stages.

Contains:
- Stage1Candidate: an item with its keyword score and profile similarity
- TrainingRow: a labeled example derived from a Stage 1 candidate
- TrainedModel: logistic weights for the learned or hybrid variant
- RankedEntry: the hybrid ranker's output for one item
- EvaluationReport: held-out metrics for the three scoring schemes
- RankingResult: everything one ranking pass returns

None of these outlive a single pass.
"""

from typing import FrozenSet, List, Optional

from pydantic import BaseModel, Field

from .item import FeedItem


class Stage1Candidate(BaseModel):
    """An item scored by the keyword/profile heuristic."""

    item: FeedItem
    # Position in the input pool; only used as a stable tie-break.
    index: int
    keyword_score: float
    similarity: float
    tokens: FrozenSet[str] = Field(default_factory=frozenset)

    @property
    def id(self) -> str:
        return self.item.id


class TrainingRow(BaseModel):
    """
    A labeled example for the logistic learners.

    features is the hybrid (9-feature) vector; the learned variant uses the
    same vector without its trailing keyword feature.
    """

    item_id: str
    label: int
    stage1_rank_index: int
    features: List[float]

    def features_for(self, include_keyword_feature: bool) -> List[float]:
        return list(self.features) if include_keyword_feature else list(self.features[:-1])


class TrainedModel(BaseModel):
    """Weights of one logistic model; index 0 is the bias."""

    weights: List[float] = Field(default_factory=list)
    include_keyword_feature: bool = False
    sample_count: int = 0

    @property
    def is_empty(self) -> bool:
        return not self.weights


class RankedEntry(BaseModel):
    """Final scores for one candidate, consumed by the continuity merge."""

    id: str
    has_seen: bool
    stage1_score: float
    learned_probability: float
    hybrid_probability: float
    final_score: float


class EvaluationReport(BaseModel):
    """
    Held-out metrics for keyword, learned, and hybrid scoring.

    Any metric may be None when it is undefined for the test split.
    Observability only: never feeds back into the ranking.
    """

    k: int
    keyword_like_rate: Optional[float] = None
    learned_like_rate: Optional[float] = None
    hybrid_like_rate: Optional[float] = None
    keyword_auc: Optional[float] = None
    learned_auc: Optional[float] = None
    hybrid_auc: Optional[float] = None
    improvement_pct: Optional[float] = None
    train_rows: int = 0
    test_rows: int = 0


class RankingResult(BaseModel):
    """Output of one ranking pass."""

    ranked_ids: List[str] = Field(default_factory=list)
    entries: List[RankedEntry] = Field(default_factory=list)
    evaluation: Optional[EvaluationReport] = None
    cold_start: bool = False
    candidate_count: int = 0
    training_rows: int = 0
