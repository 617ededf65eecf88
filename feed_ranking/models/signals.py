"""
User signals: follow set and per-item interaction counters for one viewing user.

A read-only snapshot passed into each ranking pass. Counters are coerced to
non-negative finite values on read, so malformed collaborator data never raises.
"""

from typing import Any, Dict, FrozenSet, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from feed_ranking.utils.numbers import non_negative

from .item import FeedItem


class UserSignals(BaseModel):
    """
    followed_authors: author handles the viewing user follows.
    view_counts: item id -> views by this user.
    comment_counts: item id -> comments authored by this user on that item.
    """

    model_config = ConfigDict(frozen=True)

    followed_authors: FrozenSet[str] = Field(default_factory=frozenset)
    view_counts: Dict[str, Any] = Field(default_factory=dict)
    comment_counts: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("followed_authors", mode="before")
    @classmethod
    def _follow_set(cls, v: Any) -> FrozenSet[str]:
        if not v:
            return frozenset()
        if isinstance(v, str):
            return frozenset({v})
        return frozenset(str(handle) for handle in v)

    @field_validator("view_counts", "comment_counts", mode="before")
    @classmethod
    def _counter_map(cls, v: Any) -> Dict[str, Any]:
        return {str(k): count for k, count in dict(v).items()} if v else {}

    def is_followed(self, item: FeedItem) -> bool:
        return item.author in self.followed_authors

    def view_count(self, item_id: str) -> float:
        return non_negative(self.view_counts.get(item_id, 0))

    def comment_count(self, item_id: str) -> float:
        return non_negative(self.comment_counts.get(item_id, 0))

    @property
    def has_history(self) -> bool:
        """False for a cold-start user: no follows, no views, no comments."""
        if self.followed_authors:
            return True
        return any(non_negative(v) > 0 for v in self.view_counts.values()) or any(
            non_negative(v) > 0 for v in self.comment_counts.values()
        )


def ensure_signals(
    signals: Optional[Union[Dict[str, Any], "UserSignals"]],
) -> "UserSignals":
    """Convert a dict (or None) to UserSignals."""
    if signals is None:
        return UserSignals()
    return UserSignals.model_validate(signals) if isinstance(signals, dict) else signals
