"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest

from macros_tracker.config import Settings
from macros_tracker.containers import AppContainer
from macros_tracker.domain.feed import FeedEntry
from macros_tracker.domain.foods import Food
from macros_tracker.errors import StorageWriteError
from macros_tracker.services.commands import CommandDispatcher
from macros_tracker.services.tracker import EntityRepository, TrackerService


@dataclass
class InMemoryEntityRepository(EntityRepository):
    """In-memory repository that records every save."""

    foods: list[Food] = field(default_factory=list)
    feed: list[FeedEntry] = field(default_factory=list)
    food_saves: int = 0
    feed_saves: int = 0

    def load_foods(self) -> list[Food]:
        return list(self.foods)

    def load_feed(self) -> list[FeedEntry]:
        return list(self.feed)

    def save_foods(self, foods: list[Food]) -> None:
        self.foods = list(foods)
        self.food_saves += 1

    def save_feed(self, feed: list[FeedEntry]) -> None:
        self.feed = list(feed)
        self.feed_saves += 1


@dataclass
class FailingEntityRepository(InMemoryEntityRepository):
    """Repository whose selected collections cannot be written."""

    fail_foods: bool = False
    fail_feed: bool = False

    def save_foods(self, foods: list[Food]) -> None:
        if self.fail_foods:
            raise StorageWriteError(Path("foods.json"))
        super().save_foods(foods)

    def save_feed(self, feed: list[FeedEntry]) -> None:
        if self.fail_feed:
            raise StorageWriteError(Path("feed.json"))
        super().save_feed(feed)


@dataclass
class FakeClock:
    """Clock returning a controllable UTC time."""

    now: datetime = field(
        default_factory=lambda: datetime(2024, 3, 5, 12, 0, tzinfo=UTC)
    )

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now = self.now + timedelta(**kwargs)


def make_food(  # noqa: PLR0913
    food_id: int,
    name: str,
    carbs: float = 10.0,
    fats: float = 5.0,
    protein: float = 2.0,
    serving_size: str = "100g",
) -> Food:
    return Food(
        id=food_id,
        name=name,
        brand="",
        carbs=carbs,
        fats=fats,
        protein=protein,
        serving_size=serving_size,
    )


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(data_dir=tmp_path / "macros", timezone="UTC")


@pytest.fixture
def repository() -> InMemoryEntityRepository:
    return InMemoryEntityRepository()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def tracker_service(
    repository: InMemoryEntityRepository, clock: FakeClock
) -> TrackerService:
    return TrackerService(repository, clock=clock)


@pytest.fixture
def container(
    settings: Settings,
    repository: InMemoryEntityRepository,
    tracker_service: TrackerService,
) -> AppContainer:
    return AppContainer(
        settings=settings,
        repository=repository,
        tracker_service=tracker_service,
        dispatcher=CommandDispatcher(tracker_service),
        timezone=UTC,
    )
