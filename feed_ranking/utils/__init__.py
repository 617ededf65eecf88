"""Shared utilities for tokenization, search matching, and counter coercion."""

from .numbers import clamp, non_negative
from .text import join_text, normalize_text, text_matches_query, tokenize

__all__ = [
    "clamp",
    "non_negative",
    "join_text",
    "normalize_text",
    "text_matches_query",
    "tokenize",
]
