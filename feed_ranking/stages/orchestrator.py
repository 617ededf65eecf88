"""
Pipeline orchestrator: runs one ranking pass and the continuity merge.

rank_feed: Stage 1 → training rows → split → learned/hybrid models →
evaluation (logged only) → hybrid ranking.
refresh_feed: candidate pool → rank_feed → continuity merge against the
caller's FeedSession.
"""

import logging
from typing import Any, Dict, List, Optional, Tuple, Union

from feed_ranking.models.config import RankingConfig, resolve_config
from feed_ranking.models.item import FeedItem, ensure_items
from feed_ranking.models.scoring import RankingResult, Stage1Candidate, TrainedModel
from feed_ranking.models.session import FeedSession
from feed_ranking.models.signals import UserSignals, ensure_signals
from feed_ranking.stages.candidate_pool import (
    FEED_FOR_YOU,
    FEED_USER,
    candidate_key,
    get_candidate_pool,
    unique_by_id,
)
from feed_ranking.stages.continuity import merge_with_previous
from feed_ranking.stages.keyword_scoring import generate_stage1_candidates, stage1_by_id
from feed_ranking.stages.ranking import (
    build_model_features,
    build_training_rows,
    evaluate_models,
    log_evaluation,
    predict,
    rank_candidates,
    split_train_test,
    train_model,
)

logger = logging.getLogger(__name__)


def _held_out_scores(
    test_candidates: List[Tuple[str, int, Stage1Candidate]],
    model: TrainedModel,
    signals: UserSignals,
    config: RankingConfig,
) -> Dict[str, float]:
    """Model probabilities for the test rows, keyed by item id."""
    return {
        item_id: predict(
            model,
            build_model_features(
                candidate, rank_index, signals, model.include_keyword_feature, config
            ),
            config,
        )
        for item_id, rank_index, candidate in test_candidates
    }


def rank_feed(
    items: List[Union[Dict[str, Any], FeedItem]],
    signals: Optional[Union[Dict[str, Any], UserSignals]] = None,
    config: Optional[RankingConfig] = None,
) -> RankingResult:
    """
    Run one full ranking pass over a candidate pool.

    Deterministic for identical inputs. The evaluation report is attached to
    the result and logged but has no effect on ranked_ids.
    """
    config = resolve_config(config)
    items_typed = ensure_items(items)
    signals_typed = ensure_signals(signals)

    # Stage 1: keyword/profile scoring
    candidates = generate_stage1_candidates(items_typed, signals_typed, config)
    if not candidates:
        return RankingResult(cold_start=not signals_typed.has_history)
    by_id = stage1_by_id(candidates)

    # Implicit-feedback rows and deterministic split
    rows = build_training_rows(candidates, signals_typed, config)
    train, test = split_train_test(rows, config)

    # Two fresh models per pass
    learned_model = train_model(train, include_keyword_feature=False, config=config)
    hybrid_model = train_model(train, include_keyword_feature=True, config=config)

    # Held-out evaluation (observability only)
    test_candidates = [(row.item_id, row.stage1_rank_index, by_id[row.item_id]) for row in test]
    evaluation = evaluate_models(
        test,
        by_id,
        _held_out_scores(test_candidates, learned_model, signals_typed, config),
        _held_out_scores(test_candidates, hybrid_model, signals_typed, config),
        labeled_rows=len(rows),
        config=config,
    )
    log_evaluation(evaluation)

    # Hybrid ranking
    entries = rank_candidates(candidates, learned_model, hybrid_model, signals_typed, config)
    logger.debug(
        "[ranking] candidates=%d rows=%d train=%d test=%d",
        len(candidates), len(rows), len(train), len(test),
    )
    return RankingResult(
        ranked_ids=[e.id for e in entries],
        entries=entries,
        evaluation=evaluation,
        cold_start=not (signals_typed.has_history or any(c.item.is_liked for c in candidates)),
        candidate_count=len(candidates),
        training_rows=len(rows),
    )


def refresh_feed(
    items: List[Union[Dict[str, Any], FeedItem]],
    signals: Optional[Union[Dict[str, Any], UserSignals]] = None,
    session: Optional[FeedSession] = None,
    current_user: str = "",
    feed_filter: str = FEED_FOR_YOU,
    profile_user: Optional[str] = None,
    search_query: str = "",
    config: Optional[RankingConfig] = None,
) -> Tuple[List[str], FeedSession, RankingResult]:
    """
    Produce the sequence to display and the session to carry into the next call.

    A changed pool or search query resets the session, so the new ranking
    is shown as-is. Profile feeds ("user") keep newest-first order with no
    learned ranking and no merge.

    Returns:
        display_ids: ordered item ids to render
        session: updated caller-held state
        result: the ranking pass (evaluation report included)
    """
    pool = get_candidate_pool(
        ensure_items(items), current_user, feed_filter, profile_user, search_query
    )
    key = candidate_key(pool)
    session = session if session is not None else FeedSession()
    if session.candidate_key != key or session.search_query != search_query:
        session = session.reset(key, search_query)

    if feed_filter == FEED_USER:
        profile_items = unique_by_id(pool)
        result = RankingResult(
            ranked_ids=[item.id for item in profile_items], candidate_count=len(profile_items)
        )
        display_ids = list(result.ranked_ids)
    else:
        result = rank_feed(pool, signals, config)
        display_ids = merge_with_previous(
            session.displayed_ids,
            result.ranked_ids,
            session.max_index,
            visible_id=session.visible_id,
            active_index=session.active_index,
        )

    visible_id = session.visible_id
    if visible_id not in display_ids:
        visible_id = display_ids[session.active_index] if session.active_index < len(display_ids) else None
    return display_ids, session.model_copy(
        update={"displayed_ids": display_ids, "visible_id": visible_id}
    ), result
