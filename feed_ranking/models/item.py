"""
Feed item model: typed, read-only view of a candidate video for the ranking pipeline.

Built from content-store dicts via FeedItem.model_validate(d) or ensure_items().
Accepts both snake_case names and the content store's keys (username, audio,
isLiked, hasSeen, createdAt).
"""

from datetime import datetime, timezone
from typing import Any, Dict, FrozenSet, List, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from feed_ranking.utils.text import join_text, tokenize


class FeedComment(BaseModel):
    """A comment on a feed item; only the text feeds the ranking."""

    model_config = ConfigDict(extra="allow")

    text: str = ""

    @field_validator("text", mode="before")
    @classmethod
    def _text_or_empty(cls, v: Any) -> str:
        return "" if v is None else str(v)


class FeedItem(BaseModel):
    """
    Candidate item payload used across the ranking stages.

    is_liked and has_seen are per viewing user. The engine never mutates items.
    """

    model_config = ConfigDict(extra="allow", frozen=True, populate_by_name=True)

    id: str
    author: str = Field(default="", validation_alias=AliasChoices("author", "username"))
    caption: str = ""
    audio_label: str = Field(default="", validation_alias=AliasChoices("audio_label", "audioLabel", "audio"))
    comments: List[FeedComment] = Field(default_factory=list)
    is_liked: bool = Field(default=False, validation_alias=AliasChoices("is_liked", "isLiked"))
    has_seen: bool = Field(default=False, validation_alias=AliasChoices("has_seen", "hasSeen"))
    created_at: str = Field(default="", validation_alias=AliasChoices("created_at", "createdAt"))

    @field_validator("id", mode="before")
    @classmethod
    def _id_str(cls, v: Any) -> str:
        return str(v).strip() if isinstance(v, (int, str)) else v

    @field_validator("author", "caption", "audio_label", "created_at", mode="before")
    @classmethod
    def _str_or_empty(cls, v: Any) -> str:
        return "" if v is None else str(v)

    @field_validator("is_liked", "has_seen", mode="before")
    @classmethod
    def _truthy(cls, v: Any) -> bool:
        return bool(v)

    @field_validator("comments", mode="before")
    @classmethod
    def _comments_list(cls, v: Any) -> List[Any]:
        if not isinstance(v, list):
            return []
        return [c if isinstance(c, (dict, FeedComment)) else {"text": ""} for c in v]

    def comments_text(self) -> str:
        return join_text(c.text for c in self.comments)

    def token_set(self) -> FrozenSet[str]:
        """Tokens from author, caption, audio label, and comment text."""
        return tokenize(
            join_text([self.author, self.caption, self.audio_label, self.comments_text()])
        )

    def created_at_timestamp(self) -> float:
        """POSIX timestamp of created_at; 0 when missing or unparseable."""
        if not self.created_at:
            return 0.0
        try:
            dt = datetime.fromisoformat(self.created_at.strip().replace("Z", "+00:00"))
        except ValueError:
            return 0.0
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=timezone.utc)
        return dt.timestamp()


def ensure_items(items: List[Union[Dict[str, Any], "FeedItem"]]) -> List["FeedItem"]:
    """Convert list of dicts or FeedItems to list of FeedItem models for the pipeline."""
    return [
        FeedItem.model_validate(item) if isinstance(item, dict) else item
        for item in items
    ]
