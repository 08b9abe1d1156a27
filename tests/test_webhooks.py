import json

from fastapi import status

from roomadmin.utils.webhook_security import SIGNATURE_HEADER, sign_payload, verify_signature
from tests.conf_tests import (
    TODAY,
    clear_db,
    client,
    clock,
    dashboard,
    mount_dashboard,
    store,
    unmount_dashboard,
)


def room_record(room_id="remote_room", **extra):
    record = {
        "id": room_id,
        "name": "Remote Room",
        "description": "Created elsewhere",
        "url": "https://rooms.example.com/remote",
        "max_users": 10,
        "current_users": 0,
        "price_inr": 50,
        "session_date": TODAY,
        "session_start_time": "09:00:00",
        "session_end_time": "17:00:00",
        "created_at": "2025-06-02T08:00:00+00:00",
    }
    record.update(extra)
    return record


def test_insert_webhook_reaches_room_list(dashboard):
    payload = {"type": "INSERT", "table": "rooms", "schema": "public", "record": room_record(), "old_record": None}

    response = client.post("/webhooks/changes", json=payload)
    assert response.status_code == status.HTTP_202_ACCEPTED
    assert response.json() == {"accepted": True, "table": "rooms", "type": "INSERT"}

    rooms = client.get("/rooms/").json()
    assert [room["id"] for room in rooms] == ["remote_room"]
    assert rooms[0]["status"] == "active"


def test_delete_webhook_clears_status_banner(dashboard):
    record = {"id": "banner", "message": "Down for maintenance"}
    client.post("/webhooks/changes", json={"type": "INSERT", "table": "status_message", "record": record})
    assert client.get("/status-message/").json()["message"] == "Down for maintenance"

    client.post("/webhooks/changes", json={"type": "DELETE", "table": "status_message", "old_record": record})
    assert client.get("/status-message/").json() is None


def test_bad_webhook_payload(dashboard):
    response = client.post("/webhooks/changes", json={"type": "TRUNCATE", "table": "rooms"})
    assert response.status_code == status.HTTP_400_BAD_REQUEST

    response = client.post("/webhooks/changes", json=["not", "an", "object"])
    assert response.status_code == status.HTTP_400_BAD_REQUEST

    response = client.post(
        "/webhooks/changes", content=b"{not json", headers={"Content-Type": "application/json"}
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_signed_webhooks(store, clock):
    dashboard = mount_dashboard(store, clock, WEBHOOK_SECRET="s3cret")
    try:
        body = json.dumps({"type": "INSERT", "table": "rooms", "record": room_record()}).encode()

        response = client.post("/webhooks/changes", content=body)
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

        response = client.post(
            "/webhooks/changes", content=body, headers={SIGNATURE_HEADER: sign_payload(body, "wrong")}
        )
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

        response = client.post(
            "/webhooks/changes", content=body, headers={SIGNATURE_HEADER: sign_payload(body, "s3cret")}
        )
        assert response.status_code == status.HTTP_202_ACCEPTED
        assert len(client.get("/rooms/").json()) == 1
    finally:
        unmount_dashboard(dashboard)


def test_verify_signature_formats():
    body = b'{"type": "INSERT"}'
    signature = sign_payload(body, "key")
    assert signature.startswith("sha256=")
    assert verify_signature(body, signature, "key")
    assert not verify_signature(body, signature.replace("sha256", "sha1"), "key")
    assert not verify_signature(body, "", "key")
    assert not verify_signature(body + b" ", signature, "key")
