"""Error types raised by the tracker."""

from pathlib import Path


class TrackerError(Exception):
    """Base class for unrecoverable tracker errors."""


class StorageCorruptedError(TrackerError):
    """A storage file exists but does not match the expected schema."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"Failed to parse {path}")
        self.path = path


class StorageWriteError(TrackerError):
    """A collection could not be written to storage."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"Failed to write {path}")
        self.path = path


class InvalidViewError(TrackerError, IndexError):
    """A view index outside the known views was selected."""


class UnknownFoodError(TrackerError, LookupError):
    """A feed entry references a food that is not in the catalog."""

    def __init__(self, food_id: int) -> None:
        super().__init__(f"Feed entry references unknown food {food_id}")
        self.food_id = food_id
