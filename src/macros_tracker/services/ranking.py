"""Fuzzy relevance ranking for the food catalog."""

from collections.abc import Iterable
from functools import cmp_to_key

from rapidfuzz import fuzz

from macros_tracker.domain.foods import FoodListing

SUBSTRING_BONUS = 1.0


def relevance_score(name: str, query: str) -> float:
    """Score how well a food name matches a search query.

    The fuzzy similarity of the lowercased strings lies in [0, 1]; names that
    contain the query as a substring get a flat bonus on top, so they always
    rank above names that only match fuzzily.
    """
    candidate = name.lower()
    needle = query.lower()
    score = fuzz.ratio(candidate, needle) / 100.0
    if needle in candidate:
        score += SUBSTRING_BONUS
    return score


def rank_foods(listings: Iterable[FoodListing], query: str) -> list[FoodListing]:
    """Rescore every listing against the query and sort best first."""
    ranked = list(listings)
    for listing in ranked:
        listing.relevance = relevance_score(listing.food.name, query)
    return sorted(ranked, key=cmp_to_key(_by_relevance_desc))


def _by_relevance_desc(left: FoodListing, right: FoodListing) -> int:
    # Incomparable scores fall through to "equal" and keep their order.
    if left.relevance > right.relevance:
        return -1
    if left.relevance < right.relevance:
        return 1
    return 0
