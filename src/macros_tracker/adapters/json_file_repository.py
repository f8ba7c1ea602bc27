"""JSON file implementation for foods and feed entries."""

import logging
from dataclasses import dataclass
from datetime import UTC
from pathlib import Path

from pydantic import (
    AwareDatetime,
    BaseModel,
    NonNegativeInt,
    TypeAdapter,
    ValidationError,
    field_validator,
)

from macros_tracker.domain.feed import FeedEntry
from macros_tracker.domain.foods import Food
from macros_tracker.errors import StorageCorruptedError, StorageWriteError
from macros_tracker.services.tracker import EntityRepository

FOODS_FILE = "foods.json"
FEED_FILE = "feed.json"

logger = logging.getLogger(__name__)


class FoodDocument(BaseModel):
    """Stored shape of a food."""

    id: NonNegativeInt
    name: str
    brand: str = ""
    carbs: float
    fats: float
    protein: float
    serving_size: str


class FeedEntryDocument(BaseModel):
    """Stored shape of a feed entry."""

    id: NonNegativeInt
    food_id: NonNegativeInt
    amount: float
    date: AwareDatetime

    @field_validator("date")
    @classmethod
    def _to_utc(cls, value: AwareDatetime) -> AwareDatetime:
        return value.astimezone(UTC)


_FOODS = TypeAdapter(list[FoodDocument])
_FEED = TypeAdapter(list[FeedEntryDocument])


@dataclass
class JsonFileRepository(EntityRepository):
    """Keeps each collection in a pretty-printed JSON array on disk."""

    data_dir: Path

    def __post_init__(self) -> None:
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise StorageWriteError(self.data_dir) from exc

    @property
    def foods_path(self) -> Path:
        return self.data_dir / FOODS_FILE

    @property
    def feed_path(self) -> Path:
        return self.data_dir / FEED_FILE

    def load_foods(self) -> list[Food]:
        """Return every stored food, or nothing if the file is missing."""
        raw = self._read(self.foods_path)
        if raw is None:
            return []
        try:
            documents = _FOODS.validate_json(raw)
        except ValidationError as exc:
            raise StorageCorruptedError(self.foods_path) from exc
        return [_parse_food(document) for document in documents]

    def load_feed(self) -> list[FeedEntry]:
        """Return every stored feed entry, or nothing if the file is missing."""
        raw = self._read(self.feed_path)
        if raw is None:
            return []
        try:
            documents = _FEED.validate_json(raw)
        except ValidationError as exc:
            raise StorageCorruptedError(self.feed_path) from exc
        return [_parse_entry(document) for document in documents]

    def save_foods(self, foods: list[Food]) -> None:
        """Overwrite the foods file."""
        documents = [
            FoodDocument(
                id=food.id,
                name=food.name,
                brand=food.brand,
                carbs=food.carbs,
                fats=food.fats,
                protein=food.protein,
                serving_size=food.serving_size,
            )
            for food in foods
        ]
        self._write(self.foods_path, _FOODS.dump_json(documents, indent=2))

    def save_feed(self, feed: list[FeedEntry]) -> None:
        """Overwrite the feed file."""
        documents = [
            FeedEntryDocument(
                id=entry.id,
                food_id=entry.food_id,
                amount=entry.amount,
                date=entry.date,
            )
            for entry in feed
        ]
        self._write(self.feed_path, _FEED.dump_json(documents, indent=2))

    @staticmethod
    def _read(path: Path) -> bytes | None:
        if not path.exists():
            logger.info("No %s yet, starting empty", path.name)
            return None
        try:
            return path.read_bytes()
        except OSError as exc:
            raise StorageCorruptedError(path) from exc

    @staticmethod
    def _write(path: Path, payload: bytes) -> None:
        try:
            path.write_bytes(payload)
        except OSError as exc:
            raise StorageWriteError(path) from exc
        logger.info("Wrote %s", path.name)


def _parse_food(document: FoodDocument) -> Food:
    return Food(
        id=document.id,
        name=document.name,
        brand=document.brand,
        carbs=document.carbs,
        fats=document.fats,
        protein=document.protein,
        serving_size=document.serving_size,
    )


def _parse_entry(document: FeedEntryDocument) -> FeedEntry:
    return FeedEntry(
        id=document.id,
        food_id=document.food_id,
        amount=document.amount,
        date=document.date,
    )
