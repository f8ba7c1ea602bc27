"""Tests for the command API."""

from datetime import UTC, datetime

import pytest
from fastapi.testclient import TestClient

from macros_tracker.api.app import create_app
from macros_tracker.config import Settings
from macros_tracker.containers import AppContainer
from macros_tracker.domain.feed import FeedEntry
from macros_tracker.errors import StorageCorruptedError
from macros_tracker.services.commands import CommandDispatcher
from macros_tracker.services.tracker import TrackerService
from tests.conftest import (
    FailingEntityRepository,
    FakeClock,
    InMemoryEntityRepository,
    make_food,
)


def _command(client: TestClient, **payload: object) -> bool:
    response = client.post("/commands", json=payload)
    assert response.status_code == 200
    return response.json()["applied"]


def test_health(container: AppContainer) -> None:
    client = TestClient(create_app(container))

    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_create_food_and_log_it(
    container: AppContainer, repository: InMemoryEntityRepository
) -> None:
    client = TestClient(create_app(container))

    assert _command(client, type="begin_add_food")
    for field, value in [
        ("name", "Banana"),
        ("serving_size", "1 medium"),
        ("carbs", "27"),
        ("fats", "0.3"),
        ("proteins", "1.3"),
    ]:
        assert _command(client, type="edit_draft_field", field=field, value=value)

    editing = client.get("/foods").json()
    assert editing["draft"]["name"] == "Banana"

    assert _command(client, type="finish_add_food")
    assert _command(client, type="set_serving_input", food_id=0, value="2")
    assert _command(client, type="add_feed_entry", food_id=0)

    foods = client.get("/foods").json()
    assert foods["draft"] is None
    assert foods["foods"][0]["id"] == 0
    assert foods["foods"][0]["calories"] == pytest.approx(115.9)

    rows = client.get("/feed").json()["rows"]
    assert [row["is_daily_total"] for row in rows] == [True, False]
    assert rows[0]["day"] == "2024-03-05"
    assert rows[0]["carbs"] == pytest.approx(54)
    assert rows[1]["food_name"] == "Banana"
    assert rows[1]["amount"] == 2.0
    assert len(repository.feed) == 1


def test_rejected_commands_report_no_effect(
    container: AppContainer, repository: InMemoryEntityRepository
) -> None:
    repository.foods = [make_food(0, "Oats")]
    client = TestClient(create_app(container))

    assert not _command(client, type="set_serving_input", food_id=5, value="1")
    assert _command(client, type="set_serving_input", food_id=0, value="0")
    assert not _command(client, type="add_feed_entry", food_id=0)
    assert repository.feed == []


def test_search_and_delete(
    container: AppContainer, repository: InMemoryEntityRepository
) -> None:
    repository.foods = [
        make_food(0, "Bread"),
        make_food(1, "Applesauce"),
        make_food(2, "Apple"),
    ]
    repository.feed = [
        FeedEntry(id=0, food_id=2, amount=1, date=datetime(2024, 3, 1, tzinfo=UTC))
    ]
    client = TestClient(create_app(container))

    assert _command(client, type="change_search_text", text="apple")
    names = [food["name"] for food in client.get("/foods").json()["foods"]]
    assert names == ["Apple", "Applesauce", "Bread"]

    assert _command(client, type="delete_food", food_id=2)
    assert client.get("/feed").json()["rows"] == []
    assert repository.feed == []


def test_unknown_command_type_is_unprocessable(container: AppContainer) -> None:
    client = TestClient(create_app(container))

    response = client.post("/commands", json={"type": "launch_rocket"})

    assert response.status_code == 422


def test_invalid_view_index_is_fatal(container: AppContainer) -> None:
    shutdowns: list[bool] = []
    client = TestClient(create_app(container, shutdown=lambda: shutdowns.append(True)))

    assert _command(client, type="select_view", index=1)
    assert client.get("/foods").json()["view"] == "Food"

    response = client.post("/commands", json={"type": "select_view", "index": 5})

    assert response.status_code == 500
    assert shutdowns == [True]
    halted = client.post("/commands", json={"type": "select_view", "index": 0})
    assert halted.status_code == 503
    assert client.get("/foods").json()["view"] == "Food"


def test_failed_write_stops_the_server_without_losing_the_draft(
    settings: Settings, clock: FakeClock
) -> None:
    repository = FailingEntityRepository(fail_foods=True)
    service = TrackerService(repository, clock=clock)
    container = AppContainer(
        settings=settings,
        repository=repository,
        tracker_service=service,
        dispatcher=CommandDispatcher(service),
        timezone=UTC,
    )
    shutdowns: list[bool] = []
    client = TestClient(create_app(container, shutdown=lambda: shutdowns.append(True)))
    _command(client, type="begin_add_food")
    for field, value in [
        ("name", "Banana"),
        ("serving_size", "1 medium"),
        ("carbs", "27"),
        ("fats", "0.3"),
        ("proteins", "1.3"),
    ]:
        _command(client, type="edit_draft_field", field=field, value=value)

    response = client.post("/commands", json={"type": "finish_add_food"})

    assert response.status_code == 500
    assert shutdowns == [True]
    foods = client.get("/foods").json()
    assert foods["foods"] == []
    assert foods["draft"]["name"] == "Banana"
    assert repository.foods == []
    halted = client.post("/commands", json={"type": "cancel_add_food"})
    assert halted.status_code == 503


def test_corrupted_storage_stops_startup(container: AppContainer) -> None:
    class CorruptedRepository(InMemoryEntityRepository):
        def load_foods(self) -> list:
            raise StorageCorruptedError(container.settings.data_dir / "foods.json")

    container.tracker_service.repository = CorruptedRepository()

    with pytest.raises(StorageCorruptedError):
        create_app(container)
