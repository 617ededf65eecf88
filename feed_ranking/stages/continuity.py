"""
Continuity merge: reconcile a fresh ranking with the sequence on screen.

Positions the user has already scrolled past are frozen, the rest of the new
ranking is appended behind them, and the item on screen is kept in place.
Pure function: the previous sequence is never mutated.
"""

import logging
from typing import List, Optional, Sequence, Set

logger = logging.getLogger(__name__)


def _frozen_prefix(
    previous_ids: Sequence[str],
    valid_ids: Set[str],
    max_index: int,
) -> List[str]:
    """First max_index + 1 previous ids still in the ranking, de-duplicated."""
    freeze_count = min(len(previous_ids), max(0, max_index) + 1)
    seen: Set[str] = set()
    prefix: List[str] = []
    for item_id in previous_ids[:freeze_count]:
        if item_id not in valid_ids or item_id in seen:
            continue
        seen.add(item_id)
        prefix.append(item_id)
    return prefix


def _keep_visible_in_place(
    merged: List[str],
    visible_id: Optional[str],
    valid_ids: Set[str],
    active_index: int,
) -> List[str]:
    """Move visible_id to active_index (clamped) unless it is already there."""
    if not visible_id or visible_id not in valid_ids:
        return merged
    expected = max(0, active_index)
    if expected < len(merged) and merged[expected] == visible_id:
        return merged
    if visible_id not in merged:
        return merged
    target = min(expected, len(merged) - 1)
    relocated = [item_id for item_id in merged if item_id != visible_id]
    relocated.insert(target, visible_id)
    logger.debug(
        "[continuity] relocated visible_id=%s from=%d to=%d",
        visible_id, merged.index(visible_id), target,
    )
    return relocated


def merge_with_previous(
    previous_ids: Sequence[str],
    ranked_ids: Sequence[str],
    max_index: int,
    visible_id: Optional[str] = None,
    active_index: int = 0,
) -> List[str]:
    """
    Merge the new ranking into the displayed sequence.

    Empty ranking → []. Empty previous sequence (first pass, or the pool
    changed) → the new ranking unchanged.
    """
    if not ranked_ids:
        return []
    if not previous_ids:
        return list(ranked_ids)

    valid_ids = set(ranked_ids)
    merged = _frozen_prefix(previous_ids, valid_ids, max_index)
    placed = set(merged)
    for item_id in ranked_ids:
        if item_id in placed:
            continue
        placed.add(item_id)
        merged.append(item_id)

    return _keep_visible_in_place(merged, visible_id, valid_ids, active_index)
