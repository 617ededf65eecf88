"""
Text helpers: tokenization for the taste profile and normalization for search.
"""

import re
from typing import FrozenSet, Iterable

_NON_ALNUM = re.compile(r"[^a-z0-9]+")

MIN_TOKEN_LENGTH = 3


def normalize_text(value: str) -> str:
    """Lower-case and collapse every run of non-[a-z0-9] characters to one space."""
    if not value:
        return ""
    return _NON_ALNUM.sub(" ", str(value).lower()).strip()


def tokenize(value: str) -> FrozenSet[str]:
    """
    Normalized token set for free text.

    Tokens shorter than MIN_TOKEN_LENGTH are dropped; empty input yields an empty set.
    """
    return frozenset(
        token for token in normalize_text(value).split() if len(token) >= MIN_TOKEN_LENGTH
    )


def join_text(parts: Iterable[str]) -> str:
    return " ".join(part or "" for part in parts)


def text_matches_query(query: str, text: str) -> bool:
    """True if every normalized query token is a substring of the normalized text."""
    normalized_query = normalize_text(query)
    if not normalized_query:
        return False
    normalized_text = normalize_text(text)
    if not normalized_text:
        return False
    return all(token in normalized_text for token in normalized_query.split())
