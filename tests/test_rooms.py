from fastapi import status

from roomadmin.store.base import StoreError
from roomadmin.store.local import SqlStore
from tests.conf_tests import (
    TODAY,
    TOMORROW,
    TestingSessionLocal,
    clear_db,
    client,
    clock,
    dashboard,
    make_room,
    mount_dashboard,
    store,
    unmount_dashboard,
)

room_data = {
    "name": "Conference Room A",
    "description": "GPU session",
    "url": "https://rooms.example.com/a",
    "max_users": 10,
    "price_inr": 50,
    "date_option": "today",
    "start_time": "09:00",
    "end_time": "17:00",
}


class FailingSessionsStore(SqlStore):
    def delete(self, table, filters):
        if table == "user_sessions":
            raise StoreError("permission denied for table user_sessions", code="42501")
        super().delete(table, filters)


def test_create_room_success(dashboard):
    response = client.post("/rooms/", json=room_data)
    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()
    assert data["name"] == "Conference Room A"
    assert data["current_users"] == 0
    assert data["session_date"] == TODAY
    assert data["session_start_time"] == "09:00:00"
    assert data["session_end_time"] == "17:00:00"
    assert data["status"] == "active"
    assert data["session_time"] == "Today, 9:00 AM - 5:00 PM"


def test_created_room_appears_in_live_list(dashboard):
    created = client.post("/rooms/", json=room_data).json()

    response = client.get("/rooms/")
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert [room["id"] for room in data] == [created["id"]]


def test_room_for_tomorrow_only_in_history(dashboard):
    response = client.post("/rooms/", json={**room_data, "date_option": "tomorrow"})
    assert response.status_code == status.HTTP_201_CREATED
    assert response.json()["session_date"] == TOMORROW
    assert response.json()["status"] == "inactive"

    assert client.get("/rooms/").json() == []
    history = client.get("/rooms/history").json()
    assert [room["session_date"] for room in history] == [TOMORROW]


def test_existing_rooms_loaded_on_mount(store, clock):
    make_room(store, name="Today")
    make_room(store, name="Later", session_date=TOMORROW)
    dashboard = mount_dashboard(store, clock)
    try:
        data = client.get("/rooms/").json()
        assert [room["name"] for room in data] == ["Today"]
    finally:
        unmount_dashboard(dashboard)


def test_full_room_status(store, dashboard):
    make_room(store, current_users=10, max_users=10)
    data = client.get("/rooms/").json()
    assert data[0]["status"] == "full"
    assert data[0]["is_full"] is True


def test_create_room_end_before_start(store, dashboard):
    response = client.post("/rooms/", json={**room_data, "start_time": "17:00", "end_time": "09:00"})
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
    assert "End time must be after start time" in response.text
    assert store.select("rooms") == []


def test_create_room_invalid_fields(store, dashboard):
    for field, value, message in [
        ("name", "  ", "Room name is required"),
        ("url", "not a url", "Please enter a valid URL"),
        ("price_inr", 0, "Price must be greater than 0"),
        ("max_users", 0, "Max users must be at least 1"),
        ("start_time", "9am", "Invalid time format"),
    ]:
        response = client.post("/rooms/", json={**room_data, field: value})
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        assert message in response.text
    assert store.select("rooms") == []


def test_update_room(store, dashboard):
    room = make_room(store)
    response = client.put(
        f"/rooms/{room['id']}",
        json={**room_data, "name": "Renamed", "start_time": "13:00", "end_time": "14:30"},
    )
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["name"] == "Renamed"
    assert data["session_start_time"] == "13:00:00"
    assert data["status"] == "inactive"
    assert client.get("/rooms/").json()[0]["name"] == "Renamed"


def test_update_room_to_tomorrow_leaves_live_list(store, dashboard):
    room = make_room(store)
    client.put(f"/rooms/{room['id']}", json={**room_data, "date_option": "tomorrow"})
    assert client.get("/rooms/").json() == []


def test_update_room_not_found(dashboard):
    response = client.put("/rooms/missing", json=room_data)
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json()["detail"] == "Room not found"


def test_delete_room_removes_sessions(store, dashboard):
    room = make_room(store)
    store.insert("user_sessions", {"room_id": room["id"], "user_id": "u1", "rewards_left": 0})

    response = client.delete(f"/rooms/{room['id']}")
    assert response.status_code == status.HTTP_204_NO_CONTENT
    assert store.select("rooms") == []
    assert store.select("user_sessions") == []
    assert client.get("/rooms/").json() == []


def test_delete_room_failure_keeps_room(clock):
    failing = FailingSessionsStore(TestingSessionLocal)
    room = make_room(failing)
    dashboard = mount_dashboard(failing, clock)
    try:
        response = client.delete(f"/rooms/{room['id']}")
        assert response.status_code == status.HTTP_502_BAD_GATEWAY
        assert "permission denied" in response.json()["detail"]
        assert len(failing.select("rooms")) == 1

        notices = client.get("/notifications/").json()
        assert notices[-1]["type"] == "error"
        assert notices[-1]["message"] == "Failed to delete room. Please try again."
    finally:
        unmount_dashboard(dashboard)


def test_success_notification_after_create(dashboard):
    client.post("/rooms/", json=room_data)
    notices = client.get("/notifications/").json()
    assert [n["message"] for n in notices] == ["Room added successfully!"]

    response = client.delete(f"/notifications/{notices[0]['id']}")
    assert response.status_code == status.HTTP_204_NO_CONTENT
    assert client.get("/notifications/").json() == []
    assert client.delete(f"/notifications/{notices[0]['id']}").status_code == status.HTTP_404_NOT_FOUND


def test_refresh_rooms(store, dashboard):
    make_room(store)
    response = client.post("/rooms/refresh")
    assert response.status_code == status.HTTP_200_OK
    assert len(response.json()) == 1


def test_history_tolerates_garbled_session_date(store, dashboard):
    make_room(store, session_date="2025-6-x")
    response = client.get("/rooms/history")
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data[0]["status"] == "inactive"
    assert data[0]["session_time"] == "2025-6-x, 9:00 AM - 5:00 PM"
