"""Inventory API tests."""

from datetime import date, timedelta

from foodkeeper.models.enums import HistoryRecordType
from foodkeeper.models.history_record import FoodHistoryRecord


def test_create_item_fills_in_defaults(client):
    """Category, storage location and expiry are inferred from the name."""
    response = client.post("/api/v1/inventory/items", json={"name": "牛奶", "quantity": 1, "unit": "L"})
    assert response.status_code == 201
    data = response.json()
    assert data["name"] == "牛奶"
    assert data["category"] == "Dairy"
    assert data["storage_location"] == "Refrigerator"
    assert data["purchase_date"] == date.today().isoformat()
    assert data["expiration_date"] == (date.today() + timedelta(days=6)).isoformat()
    assert data["days_until_expiration"] == 6
    assert data["is_expired"] is False
    assert data["formatted_quantity_with_unit"] == "1.00 L"
    assert data["group_id"] is not None


def test_create_item_keeps_given_fields(client):
    response = client.post(
        "/api/v1/inventory/items",
        json={
            "name": "Steak",
            "quantity": 300,
            "unit": "g",
            "category": "Meat",
            "storage_location": "Refrigerator",
            "expiration_date": "2030-01-01",
        },
    )
    assert response.status_code == 201
    data = response.json()
    assert data["category"] == "Meat"
    assert data["storage_location"] == "Refrigerator"
    assert data["expiration_date"] == "2030-01-01"


def test_create_item_records_purchase(client, db):
    client.post("/api/v1/inventory/items", json={"name": "鸡蛋", "quantity": 6})

    records = db.query(FoodHistoryRecord).all()
    assert len(records) == 1
    assert records[0].type == HistoryRecordType.PURCHASE
    assert records[0].item_name == "鸡蛋"
    assert records[0].quantity == 6


def test_create_item_rejects_bad_image(client):
    response = client.post(
        "/api/v1/inventory/items",
        json={"name": "Apple", "image_base64": "not base64!"},
    )
    assert response.status_code == 422


def test_create_item_requires_name(client):
    response = client.post("/api/v1/inventory/items", json={"name": ""})
    assert response.status_code == 422


def test_list_items_sorted_by_expiry(client):
    client.post("/api/v1/inventory/items", json={"name": "Rice", "expiration_date": "2031-01-01"})
    client.post("/api/v1/inventory/items", json={"name": "Milk", "expiration_date": "2030-01-01"})

    response = client.get("/api/v1/inventory/items")
    assert response.status_code == 200
    names = [item["name"] for item in response.json()]
    assert names == ["Milk", "Rice"]


def test_get_item_not_found(client):
    response = client.get("/api/v1/inventory/items/99999")
    assert response.status_code == 404


def test_update_item_records_adjustment(client, db):
    item = client.post("/api/v1/inventory/items", json={"name": "鸡蛋", "quantity": 6}).json()

    response = client.patch(f"/api/v1/inventory/items/{item['id']}", json={"quantity": 4})
    assert response.status_code == 200
    assert response.json()["quantity"] == 4

    adjustment = db.query(FoodHistoryRecord).filter(FoodHistoryRecord.type == HistoryRecordType.ADJUSTMENT).one()
    assert adjustment.quantity == -2
    assert adjustment.notes == "6 -> 4"


def test_rename_moves_item_to_new_group(client):
    eggs = client.post("/api/v1/inventory/items", json={"name": "鸡蛋", "quantity": 6}).json()
    client.post("/api/v1/inventory/items", json={"name": "土鸡蛋", "quantity": 2})
    beef = client.post("/api/v1/inventory/items", json={"name": "牛肉", "quantity": 500, "unit": "g"}).json()

    response = client.patch(f"/api/v1/inventory/items/{eggs['id']}", json={"name": "牛排"})
    assert response.status_code == 200
    assert response.json()["group_id"] == beef["group_id"]


def test_adjust_quantity_to_zero_removes_item(client):
    item = client.post("/api/v1/inventory/items", json={"name": "Apple", "quantity": 3}).json()

    response = client.post(f"/api/v1/inventory/items/{item['id']}/quantity", json={"quantity": 0})
    assert response.status_code == 200
    assert response.json() is None

    assert client.get(f"/api/v1/inventory/items/{item['id']}").status_code == 404
    assert client.get("/api/v1/inventory/groups").json() == []


def test_delete_item(client):
    item = client.post("/api/v1/inventory/items", json={"name": "Apple"}).json()

    response = client.delete(f"/api/v1/inventory/items/{item['id']}")
    assert response.status_code == 204
    assert client.get("/api/v1/inventory/items").json() == []


def test_expiring_and_expired_items(client):
    today = date.today()
    client.post(
        "/api/v1/inventory/items",
        json={"name": "Old Milk", "expiration_date": (today - timedelta(days=1)).isoformat()},
    )
    client.post(
        "/api/v1/inventory/items",
        json={"name": "Bread", "expiration_date": (today + timedelta(days=2)).isoformat()},
    )
    client.post(
        "/api/v1/inventory/items",
        json={"name": "Rice", "expiration_date": (today + timedelta(days=200)).isoformat()},
    )

    expiring = client.get("/api/v1/inventory/items/expiring").json()
    assert [item["name"] for item in expiring] == ["Bread"]

    expired = client.get("/api/v1/inventory/items/expired").json()
    assert [item["name"] for item in expired] == ["Old Milk"]
    assert expired[0]["is_expired"] is True


def test_discard_expired_moves_items_to_history(client, db):
    yesterday = (date.today() - timedelta(days=1)).isoformat()
    client.post("/api/v1/inventory/items", json={"name": "Old Milk", "expiration_date": yesterday})
    client.post("/api/v1/inventory/items", json={"name": "Rice", "expiration_date": "2031-01-01"})

    response = client.post("/api/v1/inventory/discard-expired")
    assert response.status_code == 200
    assert response.json() == {"removed": ["Old Milk"]}

    names = [item["name"] for item in client.get("/api/v1/inventory/items").json()]
    assert names == ["Rice"]
    expirations = db.query(FoodHistoryRecord).filter(FoodHistoryRecord.type == HistoryRecordType.EXPIRATION).all()
    assert [record.item_name for record in expirations] == ["Old Milk"]


def test_groups_aggregate_variants(client):
    client.post("/api/v1/inventory/items", json={"name": "鸡蛋", "quantity": 6, "expiration_date": "2030-02-01"})
    client.post("/api/v1/inventory/items", json={"name": "土鸡蛋", "quantity": 4, "expiration_date": "2030-01-01"})

    groups = client.get("/api/v1/inventory/groups").json()
    assert len(groups) == 1
    group = groups[0]
    assert group["base_name"] == "鸡蛋"
    assert group["total_quantity"] == 10
    assert group["earliest_expiration_date"] == "2030-01-01"
    assert len(group["items"]) == 2


def test_update_group(client):
    item = client.post("/api/v1/inventory/items", json={"name": "Apple"}).json()

    response = client.patch(
        f"/api/v1/inventory/groups/{item['group_id']}",
        json={"display_name": "Apples", "custom_emoji": "🍏"},
    )
    assert response.status_code == 200
    assert response.json()["display_name"] == "Apples"
    assert response.json()["display_icon"] == "🍏"


def test_delete_group_removes_items(client):
    item = client.post("/api/v1/inventory/items", json={"name": "Apple"}).json()

    response = client.delete(f"/api/v1/inventory/groups/{item['group_id']}")
    assert response.status_code == 204
    assert client.get("/api/v1/inventory/items").json() == []


def test_group_not_found(client):
    assert client.get("/api/v1/inventory/groups/99999").status_code == 404
