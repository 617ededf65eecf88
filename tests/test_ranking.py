"""
Hybrid Ranking and Full-Pass Tests

Test Scenarios:
---------------
1. No interaction history: 5 unseen items → ranked in input order, no evaluation
2. Unseen-first: no seen item precedes an unseen item
3. Determinism: identical inputs → identical output
4. Evaluation is observability only: withholding it leaves the ranking unchanged

Run:
----
    pytest tests/test_ranking.py -v
"""

import math

import pytest

from feed_ranking import rank_feed
from feed_ranking.models.config import RankingConfig
from feed_ranking.models.scoring import RankedEntry, Stage1Candidate, TrainedModel
from feed_ranking.stages.ranking.core import rank_candidates, sort_ranked_entries


def _entry(item_id, has_seen=False, final=0.5, stage1=0.0):
    return RankedEntry(
        id=item_id,
        has_seen=has_seen,
        stage1_score=stage1,
        learned_probability=final,
        hybrid_probability=final,
        final_score=final,
    )


@pytest.fixture
def engaged_pool(make_item):
    """Eight viewed items; a, b, d, f liked. Split: b and c are held out."""
    liked = {"a", "b", "d", "f"}
    captions = {
        "a": "pasta night", "b": "pasta carbonara", "c": "speedrun glitch",
        "d": "ramen night", "e": "speedrun any", "f": "pasta primavera",
        "g": "tax tips", "h": "night market",
    }
    items = [
        make_item(i, caption=captions[i], isLiked=i in liked, hasSeen=i in {"a", "c", "e"})
        for i in "abcdefgh"
    ]
    items.append(make_item("new1", caption="pasta alfredo"))
    items.append(make_item("new2", caption="tax season"))
    return items


@pytest.fixture
def engaged_signals(make_signals):
    return make_signals(views={i: 1 for i in "abcdefgh"}, comments={"b": 1})


class TestSortRankedEntries:
    def test_unseen_first_then_score(self):
        entries = [
            _entry("seen_high", has_seen=True, final=0.99),
            _entry("unseen_low", final=0.1),
            _entry("unseen_high", final=0.9),
        ]
        assert [e.id for e in sort_ranked_entries(entries)] == [
            "unseen_high", "unseen_low", "seen_high",
        ]

    def test_ties_break_by_stage1_score(self):
        entries = [_entry("low", stage1=10.0), _entry("high", stage1=200.0)]
        assert [e.id for e in sort_ranked_entries(entries)] == ["high", "low"]


class TestRankCandidates:
    def test_blend_weights(self, make_item, make_signals):
        candidate = Stage1Candidate(item=make_item("a"), index=0, keyword_score=228.0, similarity=0.0)
        learned = TrainedModel(weights=[0.0] * 8)
        hybrid = TrainedModel(weights=[2.0] + [0.0] * 8, include_keyword_feature=True)
        [entry] = rank_candidates([candidate], learned, hybrid, make_signals())
        assert entry.learned_probability == 0.5
        assert entry.hybrid_probability == pytest.approx(1 / (1 + math.exp(-2)))
        assert entry.final_score == pytest.approx(
            0.85 * entry.hybrid_probability + 0.15 * entry.learned_probability
        )
        assert entry.stage1_score == 228.0

    def test_empty_models_score_zero(self, make_item, make_signals):
        candidate = Stage1Candidate(item=make_item("a"), index=0, keyword_score=1.0, similarity=0.0)
        [entry] = rank_candidates([candidate], TrainedModel(), TrainedModel(), make_signals())
        assert entry.final_score == 0.0


class TestRankFeed:
    def test_empty_pool(self):
        result = rank_feed([], {})
        assert result.ranked_ids == []
        assert result.evaluation is None

    def test_no_interaction_history(self, make_pool):
        pool = make_pool(["p0", "p1", "p2", "p3", "p4"])
        result = rank_feed(pool)

        assert result.ranked_ids == ["p0", "p1", "p2", "p3", "p4"]
        assert result.cold_start is True
        assert result.training_rows == 0
        assert result.evaluation is None
        assert [e.stage1_score for e in result.entries] == pytest.approx(
            [228.0, 227.6, 227.2, 226.8, 226.4]
        )
        assert all(e.final_score == pytest.approx(0.5) for e in result.entries)

    def test_accepts_plain_dicts(self):
        items = [{"id": "a", "username": "chef", "hasSeen": True}, {"id": "b", "username": "chef"}]
        result = rank_feed(items, {"followed_authors": ["chef"], "view_counts": {"a": 2}})
        assert result.ranked_ids == ["b", "a"]
        assert result.cold_start is False

    def test_unseen_first_invariant(self, engaged_pool, engaged_signals):
        result = rank_feed(engaged_pool, engaged_signals)
        seen_flags = [e.has_seen for e in result.entries]
        assert seen_flags == sorted(seen_flags)
        assert set(result.ranked_ids) == {item.id for item in engaged_pool}

    def test_deterministic(self, engaged_pool, engaged_signals):
        first = rank_feed(engaged_pool, engaged_signals)
        second = rank_feed(engaged_pool, engaged_signals)
        assert first.ranked_ids == second.ranked_ids
        assert first.entries == second.entries
        assert first.evaluation == second.evaluation

    def test_probabilities_in_open_interval(self, engaged_pool, engaged_signals):
        for entry in rank_feed(engaged_pool, engaged_signals).entries:
            assert 0.0 < entry.learned_probability < 1.0
            assert 0.0 < entry.hybrid_probability < 1.0

    def test_evaluation_report(self, engaged_pool, engaged_signals):
        result = rank_feed(engaged_pool, engaged_signals)
        report = result.evaluation

        assert result.training_rows == 8
        assert report is not None
        assert (report.train_rows, report.test_rows, report.k) == (6, 2, 2)
        for auc in (report.keyword_auc, report.learned_auc, report.hybrid_auc):
            assert 0.0 <= auc <= 1.0

    def test_evaluation_never_changes_ranking(self, engaged_pool, engaged_signals):
        with_eval = rank_feed(engaged_pool, engaged_signals)
        without_eval = rank_feed(
            engaged_pool, engaged_signals, RankingConfig(min_evaluation_rows=1000)
        )
        assert without_eval.evaluation is None
        assert with_eval.ranked_ids == without_eval.ranked_ids
