"""Commands issued by the presentation layer and their dispatcher."""

from dataclasses import dataclass

from macros_tracker.domain.state import DraftField, TrackerState
from macros_tracker.services.tracker import TrackerService


@dataclass(frozen=True)
class SelectView:
    index: int


@dataclass(frozen=True)
class ChangeSearchText:
    text: str


@dataclass(frozen=True)
class BeginAddFood:
    pass


@dataclass(frozen=True)
class CancelAddFood:
    pass


@dataclass(frozen=True)
class FinishAddFood:
    pass


@dataclass(frozen=True)
class EditDraftField:
    field: DraftField
    value: str


@dataclass(frozen=True)
class SetServingInput:
    food_id: int
    value: str


@dataclass(frozen=True)
class AddFeedEntry:
    food_id: int


@dataclass(frozen=True)
class ModifyFood:
    food_id: int


@dataclass(frozen=True)
class DeleteFood:
    food_id: int


@dataclass(frozen=True)
class DeleteFeedEntry:
    entry_id: int


Command = (
    SelectView
    | ChangeSearchText
    | BeginAddFood
    | CancelAddFood
    | FinishAddFood
    | EditDraftField
    | SetServingInput
    | AddFeedEntry
    | ModifyFood
    | DeleteFood
    | DeleteFeedEntry
)


@dataclass
class CommandDispatcher:
    """Single entry point that applies commands to the tracker state."""

    tracker_service: TrackerService

    def handle(  # noqa: PLR0911, PLR0912
        self, state: TrackerState, command: Command
    ) -> bool:
        """Apply a command and return whether it changed anything."""
        service = self.tracker_service
        if isinstance(command, SelectView):
            service.select_view(state, command.index)
            return True
        if isinstance(command, ChangeSearchText):
            service.change_search_text(state, command.text)
            return True
        if isinstance(command, BeginAddFood):
            service.begin_add_food(state)
            return True
        if isinstance(command, CancelAddFood):
            service.cancel_edit(state)
            return True
        if isinstance(command, FinishAddFood):
            return service.finish_edit(state)
        if isinstance(command, EditDraftField):
            return service.update_draft(state, command.field, command.value)
        if isinstance(command, SetServingInput):
            return service.set_serving_input(state, command.food_id, command.value)
        if isinstance(command, AddFeedEntry):
            return service.add_feed_entry(state, command.food_id)
        if isinstance(command, ModifyFood):
            return service.modify_food(state, command.food_id)
        if isinstance(command, DeleteFood):
            return service.delete_food(state, command.food_id)
        if isinstance(command, DeleteFeedEntry):
            return service.delete_feed_entry(state, command.entry_id)
        raise TypeError(f"Unsupported command {command!r}")
