from fastapi import status

from tests.conf_tests import clear_db, client, clock, dashboard, store

promo_data = {
    "code": "SAVE20",
    "influencer_id": "influencer_1",
    "discount_amount": 20,
    "max_uses": 50,
}


def add_code(store, **overrides):
    row = {**promo_data, "total_uses": 0, "expiry_date": None}
    row.update(overrides)
    return store.insert("promo_codes", row)[0]


def test_create_promo_code(dashboard):
    response = client.post("/promo-codes/", json={**promo_data, "expiry_date": "2025-06-30"})
    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()
    assert data["code"] == "SAVE20"
    assert data["total_uses"] == 0
    assert data["expiry_date"] == "2025-06-30"
    assert data["status"] == "active"

    listed = client.get("/promo-codes/").json()
    assert [code["id"] for code in listed] == [data["id"]]


def test_create_promo_code_without_expiry(dashboard):
    response = client.post("/promo-codes/", json=promo_data)
    assert response.status_code == status.HTTP_201_CREATED
    assert response.json()["expiry_date"] is None


def test_new_codes_are_appended(store, dashboard):
    add_code(store, code="FIRST")
    client.post("/promo-codes/", json={**promo_data, "code": "SECOND"})
    assert [code["code"] for code in client.get("/promo-codes/").json()] == ["FIRST", "SECOND"]


def test_promo_code_validation(store, dashboard):
    for overrides, message in [
        ({"code": "save20"}, "uppercase letters, numbers, and underscores"),
        ({"code": "SAVE-20"}, "uppercase letters, numbers, and underscores"),
        ({"influencer_id": ""}, "Influencer ID is required"),
        ({"discount_amount": 0}, "Discount amount must be greater than 0"),
        ({"max_uses": 0}, "Maximum uses must be at least 1"),
        ({"expiry_date": "2025-06-01"}, "Expiry date must be after today"),
        ({"expiry_date": "2025-06-02"}, "Expiry date must be after today"),
    ]:
        response = client.post("/promo-codes/", json={**promo_data, **overrides})
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        assert message in response.text
    assert store.select("promo_codes") == []


def test_expiry_today_is_rejected(store, dashboard):
    response = client.post("/promo-codes/", json={**promo_data, "expiry_date": "2025-06-02"})
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
    assert store.select("promo_codes") == []

    promo = add_code(store)
    response = client.put(
        f"/promo-codes/{promo['id']}",
        json={"influencer_id": "influencer_1", "expiry_date": "2025-06-02"},
    )
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


def test_expiry_tomorrow_is_allowed(dashboard):
    response = client.post("/promo-codes/", json={**promo_data, "expiry_date": "2025-06-03"})
    assert response.status_code == status.HTTP_201_CREATED
    assert response.json()["status"] == "active"


def test_duplicate_code_is_store_error(store, dashboard):
    add_code(store)
    response = client.post("/promo-codes/", json=promo_data)
    assert response.status_code == status.HTTP_502_BAD_GATEWAY
    assert response.json()["detail"].startswith("Failed to add promo code")


def test_exhausted_and_expired_codes_are_reported(store, dashboard):
    add_code(store, code="USED_UP", total_uses=50)
    add_code(store, code="ALMOST", total_uses=49)
    add_code(store, code="OLD", expiry_date="2025-05-01")
    add_code(store, code="ENDS_TODAY", expiry_date="2025-06-02")
    add_code(store, code="GARBLED", expiry_date="someday")

    response = client.get("/promo-codes/")
    assert response.status_code == status.HTTP_200_OK
    statuses = {code["code"]: code["status"] for code in response.json()}
    assert statuses == {
        "USED_UP": "expired",
        "ALMOST": "active",
        "OLD": "expired",
        "ENDS_TODAY": "expired",
        "GARBLED": "expired",
    }


def test_update_promo_code(store, dashboard):
    promo = add_code(store)
    response = client.put(
        f"/promo-codes/{promo['id']}",
        json={"influencer_id": "influencer_2", "discount_amount": 30, "max_uses": 10},
    )
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["code"] == "SAVE20"
    assert data["discount_amount"] == 30
    assert client.get("/promo-codes/").json()[0]["influencer_id"] == "influencer_2"


def test_update_promo_code_not_found(dashboard):
    response = client.put("/promo-codes/missing", json={"influencer_id": "influencer_1"})
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_delete_promo_code(store, dashboard):
    promo = add_code(store)
    response = client.delete(f"/promo-codes/{promo['id']}")
    assert response.status_code == status.HTTP_204_NO_CONTENT
    assert client.get("/promo-codes/").json() == []
