"""Shopping list tests."""

from foodkeeper.services.shopping_service import ShoppingService


def test_create_shopping_item(client):
    response = client.post(
        "/api/v1/shopping/items",
        json={"name": "鸡蛋", "category": "Eggs", "min_quantity": 6},
    )
    assert response.status_code == 201
    data = response.json()
    assert data["name"] == "鸡蛋"
    assert data["unit"] == "个"
    assert data["alert_enabled"] is True
    assert data["is_urgent"] is True
    assert data["formatted_quantity_with_unit"] == "6 pcs"


def test_update_and_delete_shopping_item(client):
    item = client.post("/api/v1/shopping/items", json={"name": "Milk", "unit": "ml", "min_quantity": 500}).json()

    response = client.patch(f"/api/v1/shopping/items/{item['id']}", json={"alert_enabled": False})
    assert response.status_code == 200
    assert response.json()["is_urgent"] is False

    assert client.delete(f"/api/v1/shopping/items/{item['id']}").status_code == 204
    assert client.get(f"/api/v1/shopping/items/{item['id']}").status_code == 404


def test_current_stock_counts_grouped_variants(client, db):
    client.post("/api/v1/inventory/items", json={"name": "鸡蛋", "quantity": 2})
    client.post("/api/v1/inventory/items", json={"name": "土鸡蛋", "quantity": 3})
    client.post("/api/v1/inventory/items", json={"name": "牛肉", "quantity": 500, "unit": "g"})
    service = ShoppingService(db)
    item = service.create_item(name="鸡蛋", min_quantity=6)

    assert service.current_stock(item) == 5


def test_shortages_endpoint(client):
    client.post("/api/v1/inventory/items", json={"name": "鸡蛋", "quantity": 2})
    client.post("/api/v1/shopping/items", json={"name": "鸡蛋", "min_quantity": 6})
    client.post("/api/v1/shopping/items", json={"name": "Rice", "min_quantity": 1, "alert_enabled": False})

    response = client.get("/api/v1/shopping/shortages")
    assert response.status_code == 200
    data = response.json()
    assert len(data) == 1
    assert data[0]["item"]["name"] == "鸡蛋"
    assert data[0]["current_stock"] == 2
    assert data[0]["missing_quantity"] == 4
    assert data[0]["warning"] == "鸡蛋 is running low: 2 pcs left, minimum 6 pcs"


def test_shortages_filtered_by_name(db):
    service = ShoppingService(db)
    service.create_item(name="鸡蛋", min_quantity=6)
    service.create_item(name="Milk", unit="ml", min_quantity=500)

    shortages = service.shortages(["土鸡蛋"])

    assert [s.item.name for s in shortages] == ["鸡蛋"]
    assert shortages[0].current_stock == 0
