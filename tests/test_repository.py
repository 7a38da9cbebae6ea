"""CRUD semantics of ResourceRepository and SingletonResource."""

from __future__ import annotations

import pytest

from hub_app.api_client import (
    ERROR,
    CreateError,
    DeleteError,
    FetchError,
    NotificationSettings,
    PriceLevel,
    Room,
    Schedule,
    TempSensor,
    TimeWindow,
    TransportError,
    UpdateError,
    Weekday,
)
from hub_app.api_client.repository import collection_path

from tests.conftest import FakeService, json_reply, text_reply


@pytest.mark.asyncio
async def test_list_parses_documents(make_client) -> None:
    service = FakeService(json_reply(200, [
        {"id": "r1", "name": "Kitchen", "min_temp": 18.5},
        {"id": "r2", "name": "Office", "min_temp": None},
    ]))
    client = make_client(service)

    rooms = await client.rooms.list()

    assert rooms == [Room(id="r1", name="Kitchen", min_temp=18.5), Room(id="r2", name="Office")]
    assert service.requests[0].method == "GET"
    assert service.requests[0].url.path == "/rooms/"


@pytest.mark.asyncio
async def test_list_failure_raises_fetch_error(make_client) -> None:
    service = FakeService(text_reply(500))
    client = make_client(service, max_attempts=2)

    with pytest.raises(FetchError) as excinfo:
        await client.rooms.list()

    assert excinfo.value.message == "Failed to load data"
    assert excinfo.value.attempts == 2
    assert excinfo.value.status_code == 500
    assert isinstance(excinfo.value, TransportError)


@pytest.mark.asyncio
async def test_list_with_unexpected_body_raises_fetch_error(make_client) -> None:
    service = FakeService(json_reply(200, {"rooms": []}))
    client = make_client(service)

    with pytest.raises(FetchError):
        await client.rooms.list()


@pytest.mark.asyncio
async def test_list_or_error_returns_sentinel(make_client) -> None:
    service = FakeService(text_reply(404))
    client = make_client(service)

    assert await client.plugs.list_or_error() == ERROR
    assert service.attempts == 1


@pytest.mark.asyncio
async def test_list_or_error_returns_documents_on_success(make_client) -> None:
    service = FakeService(json_reply(200, []))
    client = make_client(service)

    assert await client.plugs.list_or_error() == []


@pytest.mark.asyncio
async def test_create_posts_body_without_id(make_client) -> None:
    service = FakeService(text_reply(200))
    client = make_client(service)

    await client.rooms.create(Room(name="Kitchen", min_temp=19))

    request = service.requests[0]
    assert request.method == "POST"
    assert request.url.path == "/rooms/"
    assert service.body() == {"name": "Kitchen", "min_temp": 19.0}


@pytest.mark.asyncio
async def test_create_surfaces_validation_text_of_bad_request(make_client) -> None:
    service = FakeService(text_reply(400, "Schedule must include one room."))
    client = make_client(service)

    with pytest.raises(CreateError) as excinfo:
        await client.rooms.create(Room(name="Kitchen"))

    assert str(excinfo.value) == "Schedule must include one room."
    assert excinfo.value.status_code == 400
    assert service.attempts == 1


@pytest.mark.asyncio
async def test_create_with_empty_bad_request_body_is_generic(make_client) -> None:
    service = FakeService(text_reply(400))
    client = make_client(service)

    with pytest.raises(CreateError) as excinfo:
        await client.rooms.create(Room(name="Kitchen"))

    assert excinfo.value.message == "Failed to create"


@pytest.mark.asyncio
async def test_create_other_failure_is_generic(make_client) -> None:
    service = FakeService(text_reply(409, "conflict"))
    client = make_client(service)

    with pytest.raises(CreateError) as excinfo:
        await client.rooms.create(Room(name="Kitchen"))

    assert excinfo.value.message == "Failed to create"
    assert excinfo.value.status_code == 409


@pytest.mark.asyncio
async def test_temp_sensor_create_keeps_hardware_id(make_client) -> None:
    service = FakeService(text_reply(200))
    client = make_client(service)

    await client.temp_sensors.create(TempSensor(id="28-0000", room_id="r1"))

    assert service.requests[0].url.path == "/temp_sensors/"
    assert service.body() == {"id": "28-0000", "room_id": "r1"}


@pytest.mark.asyncio
async def test_update_posts_to_item_path_without_id_in_body(make_client) -> None:
    service = FakeService(text_reply(200))
    client = make_client(service)

    await client.rooms.update(Room(id="r1", name="Kitchen"))

    request = service.requests[0]
    assert request.method == "POST"
    assert request.url.path == "/rooms/r1"
    assert service.body() == {"name": "Kitchen", "min_temp": None}


@pytest.mark.asyncio
async def test_update_schedule_serializes_wire_shape(make_client) -> None:
    service = FakeService(text_reply(200))
    client = make_client(service)
    schedule = Schedule(
        id="s1",
        temps={PriceLevel.VERY_CHEAP: 22.0, PriceLevel.EXPENSIVE: 18.0},
        days=[Weekday.MON, Weekday.TUE],
        time_windows=[TimeWindow("06:00", "09:30")],
        room_ids=["r1"],
    )

    await client.schedules.update(schedule)

    assert service.requests[0].url.path == "/schedules/s1"
    assert service.body() == {
        "temps": {"VeryCheap": 22.0, "Expensive": 18.0},
        "days": ["MON", "TUE"],
        "time_windows": [["06:00:00", "09:30:00"]],
        "room_ids": ["r1"],
    }


@pytest.mark.asyncio
async def test_update_without_id_fails_before_network(make_client) -> None:
    service = FakeService(text_reply(200))
    client = make_client(service)

    with pytest.raises(UpdateError):
        await client.rooms.update(Room(name="Kitchen"))

    assert service.attempts == 0


@pytest.mark.asyncio
async def test_update_failure_is_generic(make_client) -> None:
    service = FakeService(text_reply(500))
    client = make_client(service, max_attempts=3)

    with pytest.raises(UpdateError) as excinfo:
        await client.rooms.update(Room(id="r1", name="Kitchen"))

    assert excinfo.value.message == "Failed to update"
    assert service.attempts == 3


@pytest.mark.asyncio
async def test_delete_sends_no_body(make_client) -> None:
    service = FakeService(text_reply(200))
    client = make_client(service)

    await client.schedules.delete("s1")

    request = service.requests[0]
    assert request.method == "DELETE"
    assert request.url.path == "/schedules/s1"
    assert request.content == b""


@pytest.mark.asyncio
async def test_delete_failure(make_client) -> None:
    service = FakeService(text_reply(404))
    client = make_client(service)

    with pytest.raises(DeleteError) as excinfo:
        await client.buttons.delete("b1")

    assert excinfo.value.message == "Failed to delete"
    assert service.requests[0].url.path == "/buttons/b1"


@pytest.mark.asyncio
async def test_notification_settings_missing(make_client) -> None:
    service = FakeService(json_reply(200, None))
    client = make_client(service)

    assert await client.notification_settings.get() is None


@pytest.mark.asyncio
async def test_notification_settings_round_trip(make_client) -> None:
    stored = {"max_consumption": 8000, "max_consumption_timeout_minutes": 15, "ntfy_topic": "house"}
    service = FakeService(json_reply(200, stored), text_reply(200))
    client = make_client(service)

    settings = await client.notification_settings.get()
    await client.notification_settings.upsert(settings)

    assert settings == NotificationSettings(**stored)
    assert service.requests[1].url.path == "/notification_settings/"
    assert service.body() == stored


def test_collection_paths_get_one_trailing_slash() -> None:
    assert collection_path("buttons") == "buttons/"
    assert collection_path("rooms/") == "rooms/"
    assert collection_path("/temp_sensors") == "temp_sensors/"
