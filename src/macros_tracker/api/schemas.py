"""Pydantic models for the command API payloads."""

from datetime import date, datetime
from typing import Annotated, Literal

from pydantic import BaseModel, Field

from macros_tracker.domain.state import DraftField
from macros_tracker.services import commands


class SelectViewPayload(BaseModel):
    """Switch the active view."""

    type: Literal["select_view"]
    index: int

    def to_command(self) -> commands.Command:
        return commands.SelectView(index=self.index)


class ChangeSearchTextPayload(BaseModel):
    """Change the food search query."""

    type: Literal["change_search_text"]
    text: str

    def to_command(self) -> commands.Command:
        return commands.ChangeSearchText(text=self.text)


class BeginAddFoodPayload(BaseModel):
    """Open an empty food draft."""

    type: Literal["begin_add_food"]

    def to_command(self) -> commands.Command:
        return commands.BeginAddFood()


class CancelAddFoodPayload(BaseModel):
    """Discard the food draft."""

    type: Literal["cancel_add_food"]

    def to_command(self) -> commands.Command:
        return commands.CancelAddFood()


class FinishAddFoodPayload(BaseModel):
    """Save the food draft."""

    type: Literal["finish_add_food"]

    def to_command(self) -> commands.Command:
        return commands.FinishAddFood()


class EditDraftFieldPayload(BaseModel):
    """Change one field of the food draft."""

    type: Literal["edit_draft_field"]
    field: DraftField
    value: str

    def to_command(self) -> commands.Command:
        return commands.EditDraftField(field=self.field, value=self.value)


class SetServingInputPayload(BaseModel):
    """Type a serving amount for a food."""

    type: Literal["set_serving_input"]
    food_id: int
    value: str

    def to_command(self) -> commands.Command:
        return commands.SetServingInput(food_id=self.food_id, value=self.value)


class AddFeedEntryPayload(BaseModel):
    """Log the typed amount of a food."""

    type: Literal["add_feed_entry"]
    food_id: int

    def to_command(self) -> commands.Command:
        return commands.AddFeedEntry(food_id=self.food_id)


class ModifyFoodPayload(BaseModel):
    """Open a draft for an existing food."""

    type: Literal["modify_food"]
    food_id: int

    def to_command(self) -> commands.Command:
        return commands.ModifyFood(food_id=self.food_id)


class DeleteFoodPayload(BaseModel):
    """Delete a food and its feed entries."""

    type: Literal["delete_food"]
    food_id: int

    def to_command(self) -> commands.Command:
        return commands.DeleteFood(food_id=self.food_id)


class DeleteFeedEntryPayload(BaseModel):
    """Delete one feed entry."""

    type: Literal["delete_feed_entry"]
    entry_id: int

    def to_command(self) -> commands.Command:
        return commands.DeleteFeedEntry(entry_id=self.entry_id)


CommandPayload = Annotated[
    SelectViewPayload
    | ChangeSearchTextPayload
    | BeginAddFoodPayload
    | CancelAddFoodPayload
    | FinishAddFoodPayload
    | EditDraftFieldPayload
    | SetServingInputPayload
    | AddFeedEntryPayload
    | ModifyFoodPayload
    | DeleteFoodPayload
    | DeleteFeedEntryPayload,
    Field(discriminator="type"),
]


class CommandResult(BaseModel):
    """Outcome of a command."""

    applied: bool


class FoodDraftOut(BaseModel):
    """Open food draft."""

    target_id: int
    name: str
    serving_size: str
    carbs: str
    fats: str
    proteins: str


class FoodListingOut(BaseModel):
    """Food row of the catalog view."""

    id: int
    name: str
    brand: str
    serving_size: str
    carbs: float
    fats: float
    protein: float
    calories: float
    relevance: float
    current_serving_size: str


class FoodsView(BaseModel):
    """Ranked catalog with search and editor state."""

    view: str
    search_text: str
    draft: FoodDraftOut | None = None
    foods: list[FoodListingOut]


class FeedRowOut(BaseModel):
    """Row of the display feed."""

    date: datetime
    day: date
    is_daily_total: bool
    entry_id: int | None = None
    food_id: int | None = None
    food_name: str | None = None
    amount: float | None = None
    carbs: float
    fats: float
    protein: float
    calories: float


class FeedView(BaseModel):
    """Display feed, newest first."""

    rows: list[FeedRowOut]
