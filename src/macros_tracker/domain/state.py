"""Application state for the command loop."""

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Literal, get_args

from macros_tracker.domain.feed import FeedEntry
from macros_tracker.domain.foods import FoodListing

VIEWS = ("Feed", "Food")

DraftField = Literal["name", "serving_size", "carbs", "fats", "proteins"]
DRAFT_FIELDS: tuple[str, ...] = get_args(DraftField)


def next_id(ids: Iterable[int]) -> int:
    """Return one past the largest id, or 0 when there are none."""
    return max(ids, default=-1) + 1


@dataclass
class FoodDraft:
    """Text buffer for creating or editing a food."""

    target_id: int
    name: str = ""
    serving_size: str = ""
    carbs: str = ""
    fats: str = ""
    proteins: str = ""


@dataclass
class TrackerState:
    """Everything the command loop mutates."""

    foods: list[FoodListing] = field(default_factory=list)
    feed: list[FeedEntry] = field(default_factory=list)
    search_text: str = ""
    current_view: int = 0
    draft: FoodDraft | None = None

    @property
    def is_editing(self) -> bool:
        return self.draft is not None

    @property
    def next_food_id(self) -> int:
        return next_id(listing.food.id for listing in self.foods)

    @property
    def next_feed_id(self) -> int:
        return next_id(entry.id for entry in self.feed)

    def find_listing(self, food_id: int) -> FoodListing | None:
        return next(
            (listing for listing in self.foods if listing.food.id == food_id), None
        )
