"""
Candidate pool: narrows the content store's items to what this feed view shows.

Filters: own-content exclusion ("for_you") or single-author profile ("user"),
then an optional search query. The public entry point is get_candidate_pool.
"""

from typing import Callable, List, Optional, Set, Tuple

from feed_ranking.models.item import FeedItem
from feed_ranking.utils.text import text_matches_query

FEED_FOR_YOU = "for_you"
FEED_USER = "user"

# Search checks in priority order: author matches come first, then caption, etc.
_SEARCH_FIELDS: List[Tuple[str, Callable[[FeedItem], str]]] = [
    ("author", lambda item: item.author),
    ("caption", lambda item: item.caption),
    ("audio", lambda item: item.audio_label),
    ("comments", lambda item: item.comments_text()),
]


def sort_by_created_at_desc(items: List[FeedItem]) -> List[FeedItem]:
    """Newest first; unparseable timestamps sort as oldest, ties keep input order."""
    indexed = list(enumerate(items))
    indexed.sort(key=lambda pair: (-pair[1].created_at_timestamp(), pair[0]))
    return [item for _, item in indexed]


def search_matches_in_order(items: List[FeedItem], query: str) -> List[FeedItem]:
    """
    Items matching query, grouped by the first field that matched.

    A blank query returns items unchanged.
    """
    if not (query or "").strip():
        return items
    matched_ids: Set[str] = set()
    ordered: List[FeedItem] = []
    for _, get_text in _SEARCH_FIELDS:
        for item in items:
            if item.id in matched_ids:
                continue
            if text_matches_query(query, get_text(item)):
                matched_ids.add(item.id)
                ordered.append(item)
    return ordered


def get_candidate_pool(
    items: List[FeedItem],
    current_user: str = "",
    feed_filter: str = FEED_FOR_YOU,
    profile_user: Optional[str] = None,
    search_query: str = "",
) -> List[FeedItem]:
    """
    Build the candidate pool for one feed view.

    for_you: every item not authored by current_user, in store order.
    user: items authored by profile_user (default current_user), newest first.
    """
    if feed_filter == FEED_USER:
        target = profile_user or current_user
        base = sort_by_created_at_desc([item for item in items if item.author == target])
    else:
        base = [item for item in items if item.author != current_user]
    return search_matches_in_order(base, search_query)


def unique_by_id(items: List[FeedItem]) -> List[FeedItem]:
    """Drop repeated ids, keeping the first occurrence."""
    seen: Set[str] = set()
    unique: List[FeedItem] = []
    for item in items:
        if item.id in seen:
            continue
        seen.add(item.id)
        unique.append(item)
    return unique


def candidate_key(items: List[FeedItem]) -> str:
    """Identity of a pool; changes whenever membership or order changes."""
    return "|".join(item.id for item in items)
