"""Shared fixtures: feed item and signal builders."""

from typing import Dict, List

import pytest

from feed_ranking.models.item import FeedItem
from feed_ranking.models.signals import UserSignals


def build_item(item_id: str, **fields) -> FeedItem:
    payload = {"id": item_id, "username": f"user{item_id}", "caption": "", "audio": ""}
    payload.update(fields)
    return FeedItem.model_validate(payload)


@pytest.fixture
def make_item():
    return build_item


@pytest.fixture
def make_pool():
    def _make(ids: List[str], **fields) -> List[FeedItem]:
        return [build_item(item_id, **fields) for item_id in ids]

    return _make


@pytest.fixture
def make_signals():
    def _make(
        followed: List[str] = (),
        views: Dict[str, float] = None,
        comments: Dict[str, float] = None,
    ) -> UserSignals:
        return UserSignals(
            followed_authors=frozenset(followed),
            view_counts=views or {},
            comment_counts=comments or {},
        )

    return _make
