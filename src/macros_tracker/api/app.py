"""FastAPI application factory."""

import logging
import signal
from collections.abc import Callable
from datetime import tzinfo

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.responses import JSONResponse

from macros_tracker.api.schemas import (
    CommandPayload,
    CommandResult,
    FeedRowOut,
    FeedView,
    FoodDraftOut,
    FoodListingOut,
    FoodsView,
)
from macros_tracker.app_logging import configure_logging
from macros_tracker.containers import AppContainer
from macros_tracker.domain.feed import FeedRow
from macros_tracker.domain.foods import FoodListing
from macros_tracker.domain.state import VIEWS, TrackerState
from macros_tracker.errors import TrackerError
from macros_tracker.services.feed import local_day


def create_app(
    container: AppContainer, shutdown: Callable[[], None] | None = None
) -> FastAPI:
    """Create a FastAPI app that owns the tracker state.

    Storage is read here, so corrupted files stop the app before it serves.
    Handlers are coroutines that never await mid-command, which keeps every
    command serialized on the event loop. A TrackerError raised while serving
    halts command handling and calls ``shutdown`` (SIGTERM by default).
    """
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    app = FastAPI()
    app.state.container = container
    app.state.tracker = container.tracker_service.load()
    app.state.halted = False
    logger.info("Data directory: %s", container.settings.data_dir)
    stop = shutdown or _terminate

    @app.exception_handler(TrackerError)
    async def fatal_error(request: Request, exc: TrackerError) -> JSONResponse:
        """Stop the process on unrecoverable tracker errors."""
        logger.critical("Fatal tracker error, shutting down: %s", exc)
        request.app.state.halted = True
        stop()
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": str(exc)},
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/foods")
    async def foods(request: Request) -> FoodsView:
        """Return the ranked food catalog."""
        state_container: AppContainer = request.app.state.container
        tracker: TrackerState = request.app.state.tracker
        listings = state_container.tracker_service.ranked_foods(tracker)
        draft = tracker.draft
        return FoodsView(
            view=VIEWS[tracker.current_view],
            search_text=tracker.search_text,
            draft=(
                FoodDraftOut(
                    target_id=draft.target_id,
                    name=draft.name,
                    serving_size=draft.serving_size,
                    carbs=draft.carbs,
                    fats=draft.fats,
                    proteins=draft.proteins,
                )
                if draft
                else None
            ),
            foods=[_listing_out(listing) for listing in listings],
        )

    @app.get("/feed")
    async def feed(request: Request) -> FeedView:
        """Return the feed with daily totals, newest first."""
        state_container: AppContainer = request.app.state.container
        tracker: TrackerState = request.app.state.tracker
        rows = state_container.tracker_service.display_feed(
            tracker, state_container.timezone
        )
        return FeedView(
            rows=[_row_out(row, state_container.timezone) for row in rows]
        )

    @app.post("/commands")
    async def run_command(payload: CommandPayload, request: Request) -> CommandResult:
        """Apply one command to the tracker state."""
        if request.app.state.halted:
            raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE)
        state_container: AppContainer = request.app.state.container
        tracker: TrackerState = request.app.state.tracker
        command = payload.to_command()
        applied = state_container.dispatcher.handle(tracker, command)
        if not applied:
            logger.debug("Command had no effect: %r", command)
        return CommandResult(applied=applied)

    return app


def _terminate() -> None:
    signal.raise_signal(signal.SIGTERM)


def _listing_out(listing: FoodListing) -> FoodListingOut:
    food = listing.food
    return FoodListingOut(
        id=food.id,
        name=food.name,
        brand=food.brand,
        serving_size=food.serving_size,
        carbs=food.carbs,
        fats=food.fats,
        protein=food.protein,
        calories=food.calories,
        relevance=listing.relevance,
        current_serving_size=listing.current_serving_size,
    )


def _row_out(row: FeedRow, tz: tzinfo | None) -> FeedRowOut:
    return FeedRowOut(
        date=row.date,
        day=local_day(row.date, tz),
        is_daily_total=row.is_daily_total,
        entry_id=row.entry.id if row.entry else None,
        food_id=row.food.id if row.food else None,
        food_name=row.food.name if row.food else None,
        amount=row.entry.amount if row.entry else None,
        carbs=row.macros.carbs,
        fats=row.macros.fats,
        protein=row.macros.protein,
        calories=row.macros.calories,
    )
