"""Daily aggregation of the consumption feed."""

from collections.abc import Iterable, Mapping
from datetime import UTC, date, datetime, time, tzinfo

from macros_tracker.domain.feed import DailyTotals, FeedEntry, FeedRow
from macros_tracker.domain.foods import Food
from macros_tracker.domain.nutrition import MacroTotals
from macros_tracker.errors import UnknownFoodError

END_OF_DAY = time(23, 59, 59)


def local_day(moment: datetime, tz: tzinfo | None = None) -> date:
    """Return the calendar day of `moment` in `tz` (system local when None)."""
    return moment.astimezone(tz).date()


def end_of_day(day: date, tz: tzinfo | None = None) -> datetime:
    """Return 23:59:59 local time on `day`, expressed in UTC."""
    if tz is None:
        local = datetime.combine(day, END_OF_DAY).astimezone()
    else:
        local = datetime.combine(day, END_OF_DAY, tzinfo=tz)
    return local.astimezone(UTC)


def daily_totals(
    feed: Iterable[FeedEntry],
    foods: Iterable[Food],
    tz: tzinfo | None = None,
) -> list[DailyTotals]:
    """Sum each day's macros; days without entries are omitted."""
    catalog = _catalog(foods)
    sums: dict[date, MacroTotals] = {}
    counts: dict[date, int] = {}
    for entry in feed:
        portion = _resolve_food(catalog, entry).macros_for(entry.amount)
        day = local_day(entry.date, tz)
        total = sums.get(day, MacroTotals(0.0, 0.0, 0.0))
        sums[day] = MacroTotals(
            carbs=total.carbs + portion.carbs,
            fats=total.fats + portion.fats,
            protein=total.protein + portion.protein,
        )
        counts[day] = counts.get(day, 0) + 1

    return [
        DailyTotals(
            day=day,
            date=end_of_day(day, tz),
            macros=sums[day],
            entry_count=counts[day],
        )
        for day in sorted(sums)
    ]


def build_display_sequence(
    feed: Iterable[FeedEntry],
    foods: Iterable[Food],
    tz: tzinfo | None = None,
) -> list[FeedRow]:
    """Interleave feed entries with daily totals, most recent first.

    Every entry's food must be in `foods`; a dangling reference raises
    UnknownFoodError.
    """
    entries = list(feed)
    catalog = _catalog(foods)
    rows: list[FeedRow] = []
    for entry in entries:
        food = _resolve_food(catalog, entry)
        rows.append(
            FeedRow(
                date=entry.date,
                macros=food.macros_for(entry.amount),
                entry=entry,
                food=food,
            )
        )
    for totals in daily_totals(entries, catalog.values(), tz):
        rows.append(
            FeedRow(date=totals.date, macros=totals.macros, is_daily_total=True)
        )

    rows.sort(key=lambda row: row.date)
    rows.reverse()
    return rows


def _catalog(foods: Iterable[Food]) -> Mapping[int, Food]:
    return {food.id: food for food in foods}


def _resolve_food(catalog: Mapping[int, Food], entry: FeedEntry) -> Food:
    food = catalog.get(entry.food_id)
    if food is None:
        raise UnknownFoodError(entry.food_id)
    return food
