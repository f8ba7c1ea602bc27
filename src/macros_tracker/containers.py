"""Dependency container wiring for the application."""

from dataclasses import dataclass
from datetime import tzinfo

from macros_tracker.adapters.json_file_repository import JsonFileRepository
from macros_tracker.config import Settings, resolve_timezone
from macros_tracker.services.commands import CommandDispatcher
from macros_tracker.services.tracker import EntityRepository, TrackerService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    repository: EntityRepository
    tracker_service: TrackerService
    dispatcher: CommandDispatcher
    timezone: tzinfo | None


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    repository = JsonFileRepository(resolved_settings.data_dir)
    tracker_service = TrackerService(repository)
    return AppContainer(
        settings=resolved_settings,
        repository=repository,
        tracker_service=tracker_service,
        dispatcher=CommandDispatcher(tracker_service),
        timezone=resolve_timezone(resolved_settings.timezone),
    )
