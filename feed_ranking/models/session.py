"""
Session model: caller-held continuity state carried between ranking passes.
"""

from typing import List, Optional

from pydantic import BaseModel, Field


class FeedSession(BaseModel):
    """
    What is on screen for one viewing user.

    displayed_ids: the sequence currently rendered.
    max_index: furthest list index the user has reached (never decreases).
    active_index: index of the item on screen.
    visible_id: id of the item on screen.
    candidate_key / search_query: identify the pool the sequence was built from.
    """

    displayed_ids: List[str] = Field(default_factory=list)
    max_index: int = 0
    active_index: int = 0
    visible_id: Optional[str] = None
    candidate_key: str = ""
    search_query: str = ""

    def record_position(self, index: int) -> "FeedSession":
        """Return a session scrolled to index; max_index only grows."""
        index = max(0, index)
        visible_id = (
            self.displayed_ids[index] if index < len(self.displayed_ids) else self.visible_id
        )
        return self.model_copy(
            update={
                "active_index": index,
                "max_index": max(self.max_index, index),
                "visible_id": visible_id,
            }
        )

    def reset(self, candidate_key: str, search_query: str) -> "FeedSession":
        """Fresh session for a changed pool; the next pass behaves like a first pass."""
        return FeedSession(candidate_key=candidate_key, search_query=search_query)
