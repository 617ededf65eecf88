"""
Model Tests

Feed items accept the content store's payload keys, signals coerce malformed
counters to 0, and the session tracks scroll position monotonically.

Run:
----
    pytest tests/test_models.py -v
"""

import math

from feed_ranking import rank_feed
from feed_ranking.models.item import FeedItem, ensure_items
from feed_ranking.models.session import FeedSession
from feed_ranking.models.signals import UserSignals, ensure_signals
from feed_ranking.utils.text import normalize_text, text_matches_query, tokenize


class TestTokenizer:
    def test_normalizes_and_drops_short_tokens(self):
        assert tokenize("Hi, @Dance_Queen!! #fyp 2024") == {"dance", "queen", "fyp", "2024"}

    def test_empty_input(self):
        assert tokenize("") == frozenset()
        assert tokenize("!! ?? a b") == frozenset()

    def test_normalize_collapses_runs(self):
        assert normalize_text("  Late--Night   Ramen!! ") == "late night ramen"

    def test_query_tokens_must_all_match(self):
        assert text_matches_query("ramen night", "Late-night RAMEN run")
        assert not text_matches_query("ramen sushi", "Late-night RAMEN run")
        assert not text_matches_query("   ", "anything")


class TestFeedItem:
    def test_accepts_content_store_keys(self):
        item = FeedItem.model_validate(
            {
                "id": "v1",
                "username": "chef",
                "caption": "Pasta night",
                "audio": "Original Sound",
                "isLiked": True,
                "hasSeen": 1,
                "createdAt": "2024-05-01T10:00:00Z",
                "comments": [{"text": "yummy carbonara"}, None],
                "likes": 12,
            }
        )
        assert item.author == "chef"
        assert item.audio_label == "Original Sound"
        assert item.is_liked is True
        assert item.has_seen is True
        assert len(item.comments) == 2

    def test_token_set_covers_all_text_fields(self):
        item = FeedItem(
            id="v1",
            author="chef",
            caption="Pasta night",
            audio_label="Original Sound",
            comments=[{"text": "yummy carbonara"}],
        )
        assert item.token_set() == {
            "chef", "pasta", "night", "original", "sound", "yummy", "carbonara",
        }

    def test_missing_fields_default_empty(self):
        item = FeedItem.model_validate({"id": "v2", "caption": None, "comments": "oops"})
        assert item.caption == ""
        assert item.comments == []
        assert item.token_set() == frozenset()

    def test_created_at_timestamp(self):
        assert FeedItem(id="a", created_at="not a date").created_at_timestamp() == 0.0
        assert FeedItem(id="a").created_at_timestamp() == 0.0
        assert FeedItem(id="a", created_at="1970-01-02T00:00:00Z").created_at_timestamp() == 86400.0

    def test_ensure_items_mixed(self):
        items = ensure_items([{"id": "a"}, FeedItem(id="b")])
        assert [i.id for i in items] == ["a", "b"]


class TestUserSignals:
    def test_numeric_ids_are_stringified(self):
        signals = ensure_signals({"view_counts": {1: 3}, "comment_counts": {2: 1}})
        assert signals.view_count("1") == 3
        assert signals.comment_count("2") == 1

    def test_numeric_ids_rank_end_to_end(self):
        items = [{"id": 1, "username": "chef", "hasSeen": True}, {"id": 2, "username": "cook"}]
        result = rank_feed(items, {"view_counts": {1: 3, 2: 1}})
        assert result.ranked_ids == ["2", "1"]
        assert result.training_rows == 2

    def test_single_handle_string(self):
        signals = ensure_signals({"followed_authors": "alice"})
        assert signals.followed_authors == frozenset({"alice"})
        assert signals.is_followed(FeedItem(id="a", author="alice"))

    def test_counters_are_coerced(self):
        signals = UserSignals(
            view_counts={"a": -3, "b": float("nan"), "c": "abc", "d": "2", "e": math.inf},
            comment_counts={"a": None},
        )
        assert signals.view_count("a") == 0
        assert signals.view_count("b") == 0
        assert signals.view_count("c") == 0
        assert signals.view_count("d") == 2
        assert signals.view_count("e") == 0
        assert signals.view_count("missing") == 0
        assert signals.comment_count("a") == 0

    def test_follow_membership(self):
        signals = ensure_signals({"followed_authors": ["chef"]})
        assert signals.is_followed(FeedItem(id="a", author="chef"))
        assert not signals.is_followed(FeedItem(id="b", author="other"))

    def test_has_history(self):
        assert not ensure_signals(None).has_history
        assert not UserSignals(view_counts={"a": 0}).has_history
        assert UserSignals(view_counts={"a": 1}).has_history
        assert UserSignals(followed_authors={"x"}).has_history


class TestFeedSession:
    def test_record_position_is_monotonic(self):
        session = FeedSession(displayed_ids=["a", "b", "c", "d"])
        session = session.record_position(3)
        session = session.record_position(1)
        assert session.max_index == 3
        assert session.active_index == 1
        assert session.visible_id == "b"

    def test_reset_clears_scroll_state(self):
        session = FeedSession(displayed_ids=["a"], max_index=4, active_index=2, visible_id="a")
        fresh = session.reset("a|b", "cats")
        assert fresh.displayed_ids == []
        assert fresh.max_index == 0
        assert fresh.visible_id is None
        assert fresh.candidate_key == "a|b"
        assert fresh.search_query == "cats"
