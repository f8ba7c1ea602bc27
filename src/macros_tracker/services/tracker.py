"""Validated mutations of the food catalog and the consumption feed."""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime, tzinfo
from typing import Protocol

from macros_tracker.domain.feed import FeedEntry, FeedRow
from macros_tracker.domain.foods import Food, FoodListing
from macros_tracker.domain.state import (
    DRAFT_FIELDS,
    VIEWS,
    DraftField,
    FoodDraft,
    TrackerState,
)
from macros_tracker.errors import InvalidViewError
from macros_tracker.services.feed import build_display_sequence
from macros_tracker.services.ranking import rank_foods

MAX_MACRO_GRAMS = 1000.0
MAX_SERVINGS = 1000.0

logger = logging.getLogger(__name__)


class EntityRepository(Protocol):
    """Persistence interface for foods and feed entries."""

    def load_foods(self) -> list[Food]:
        """Return every stored food."""

    def load_feed(self) -> list[FeedEntry]:
        """Return every stored feed entry."""

    def save_foods(self, foods: list[Food]) -> None:
        """Replace the stored foods."""

    def save_feed(self, feed: list[FeedEntry]) -> None:
        """Replace the stored feed entries."""


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class TrackerService:
    """Applies commands to a TrackerState and keeps storage in sync."""

    repository: EntityRepository
    clock: Callable[[], datetime] = _utc_now

    def load(self) -> TrackerState:
        """Build the initial state from storage."""
        foods = self.repository.load_foods()
        feed = sorted(self.repository.load_feed(), key=lambda entry: entry.date)
        state = TrackerState(
            foods=rank_foods((FoodListing(food=food) for food in foods), ""),
            feed=feed,
        )
        logger.info("Loaded %d foods and %d feed entries", len(foods), len(feed))
        return state

    def select_view(self, state: TrackerState, index: int) -> None:
        """Switch the active view."""
        if not 0 <= index < len(VIEWS):
            raise InvalidViewError(f"Invalid view index {index}")
        state.current_view = index

    def change_search_text(self, state: TrackerState, text: str) -> None:
        """Store the search query and rerank the catalog."""
        state.search_text = text
        state.foods = rank_foods(state.foods, text)

    def begin_add_food(self, state: TrackerState) -> None:
        """Open an empty draft for a new food."""
        state.draft = FoodDraft(target_id=state.next_food_id)

    def modify_food(self, state: TrackerState, food_id: int) -> bool:
        """Open a draft pre-filled from an existing food."""
        listing = state.find_listing(food_id)
        if listing is None:
            logger.debug("Ignoring modify for unknown food %d", food_id)
            return False
        food = listing.food
        state.draft = FoodDraft(
            target_id=food.id,
            name=food.name,
            serving_size=food.serving_size,
            carbs=str(food.carbs),
            fats=str(food.fats),
            proteins=str(food.protein),
        )
        return True

    def update_draft(self, state: TrackerState, field: DraftField, value: str) -> bool:
        """Change one text field of the open draft."""
        if state.draft is None:
            return False
        if field not in DRAFT_FIELDS:
            raise ValueError(f"Unknown draft field {field!r}")
        setattr(state.draft, field, value)
        return True

    def cancel_edit(self, state: TrackerState) -> None:
        """Discard the open draft."""
        state.draft = None

    def finish_edit(self, state: TrackerState) -> bool:
        """Validate the draft and upsert the food it describes.

        An invalid draft leaves the state untouched, including the draft.
        The state changes only once the new catalog has been saved.
        """
        if state.draft is None:
            return False
        food = parse_draft(state.draft)
        if food is None:
            logger.debug("Rejected food draft for id %d", state.draft.target_id)
            return False

        listings = [
            FoodListing(food=listing.food)
            for listing in state.foods
            if listing.food.id != food.id
        ]
        listings.append(FoodListing(food=food))
        self.repository.save_foods([listing.food for listing in listings])
        state.foods = rank_foods(listings, state.search_text)
        state.draft = None
        return True

    def set_serving_input(self, state: TrackerState, food_id: int, value: str) -> bool:
        """Store the serving amount typed for a food."""
        listing = state.find_listing(food_id)
        if listing is None:
            return False
        listing.current_serving_size = value
        return True

    def add_feed_entry(self, state: TrackerState, food_id: int) -> bool:
        """Record eating the typed number of servings of a food now."""
        listing = state.find_listing(food_id)
        if listing is None:
            return False
        amount = parse_servings(listing.current_serving_size)
        if amount is None:
            logger.debug(
                "Rejected serving amount %r for food %d",
                listing.current_serving_size,
                food_id,
            )
            return False

        entry = FeedEntry(
            id=state.next_feed_id,
            food_id=food_id,
            amount=amount,
            date=self.clock(),
        )
        feed = sorted([*state.feed, entry], key=lambda item: item.date)
        self.repository.save_feed(feed)
        state.feed = feed
        return True

    def delete_food(self, state: TrackerState, food_id: int) -> bool:
        """Remove a food and every feed entry that references it.

        The feed is saved first so storage never holds an entry whose food
        is gone.
        """
        if state.find_listing(food_id) is None:
            logger.debug("Ignoring delete for unknown food %d", food_id)
            return False
        feed = [entry for entry in state.feed if entry.food_id != food_id]
        if len(feed) != len(state.feed):
            self.repository.save_feed(feed)
            state.feed = feed

        listings = [
            FoodListing(food=listing.food, relevance=listing.relevance)
            for listing in state.foods
            if listing.food.id != food_id
        ]
        self.repository.save_foods([listing.food for listing in listings])
        state.foods = listings
        return True

    def delete_feed_entry(self, state: TrackerState, entry_id: int) -> bool:
        """Remove a single feed entry."""
        feed = [entry for entry in state.feed if entry.id != entry_id]
        if len(feed) == len(state.feed):
            logger.debug("Ignoring delete for unknown feed entry %d", entry_id)
            return False
        self.repository.save_feed(feed)
        state.feed = feed
        return True

    def ranked_foods(self, state: TrackerState) -> list[FoodListing]:
        """Return the catalog in relevance order."""
        return list(state.foods)

    def display_feed(
        self, state: TrackerState, tz: tzinfo | None = None
    ) -> list[FeedRow]:
        """Return the feed interleaved with daily totals, newest first."""
        return build_display_sequence(
            state.feed, (listing.food for listing in state.foods), tz
        )


def parse_draft(draft: FoodDraft) -> Food | None:
    """Build a Food from a draft, or return None if any field is invalid."""
    name = draft.name.strip()
    serving_size = draft.serving_size.strip()
    if not name or not serving_size:
        return None
    carbs = _parse_float(draft.carbs)
    fats = _parse_float(draft.fats)
    protein = _parse_float(draft.proteins)
    if carbs is None or fats is None or protein is None:
        return None
    if not all(0.0 <= value <= MAX_MACRO_GRAMS for value in (carbs, fats, protein)):
        return None
    return Food(
        id=draft.target_id,
        name=draft.name,
        brand="",
        carbs=carbs,
        fats=fats,
        protein=protein,
        serving_size=draft.serving_size,
    )


def parse_servings(raw: str) -> float | None:
    """Parse a serving amount in (0, 1000], or return None."""
    amount = _parse_float(raw)
    if amount is None or not 0.0 < amount <= MAX_SERVINGS:
        return None
    return amount


def _parse_float(raw: str) -> float | None:
    try:
        return float(raw)
    except ValueError:
        return None
