"""Domain models for the consumption feed."""

from dataclasses import dataclass
from datetime import date, datetime

from macros_tracker.domain.foods import Food
from macros_tracker.domain.nutrition import MacroTotals


@dataclass(frozen=True)
class FeedEntry:
    """A single consumption event."""

    id: int
    food_id: int
    amount: float
    date: datetime


@dataclass(frozen=True)
class DailyTotals:
    """Summed macros for one local calendar day."""

    day: date
    date: datetime
    macros: MacroTotals
    entry_count: int


@dataclass(frozen=True)
class FeedRow:
    """Row of the display feed: a logged entry or a synthesized daily total."""

    date: datetime
    macros: MacroTotals
    is_daily_total: bool = False
    entry: FeedEntry | None = None
    food: Food | None = None
