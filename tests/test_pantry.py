"""Pantry API tests."""

from datetime import UTC, datetime, timedelta


def _add(client, headers, **fields):
    response = client.post("/api/v1/pantry", headers=headers, json=fields)
    assert response.status_code == 201
    return response.json()


def test_create_pantry_item(client, auth_headers):
    """Test creating a pantry item."""
    response = client.post(
        "/api/v1/pantry",
        headers=auth_headers,
        json={"name": "Ground Beef", "quantity": 2, "unit": "lb", "category": "Meat"},
    )
    assert response.status_code == 201
    data = response.json()
    assert data["name"] == "Ground Beef"
    assert data["quantity"] == 2
    assert data["unit"] == "lb"
    assert data["category"] == "Meat"
    assert data["owner_id"] == auth_headers.user_id
    assert data["version"] == 1


def test_create_pantry_item_defaults(client, auth_headers):
    """Test creating a pantry item with default unit and category."""
    data = _add(client, auth_headers, name="Salt", quantity=1, unit="", category="")
    assert data["unit"] == "piece"
    assert data["category"] == "Other"


def test_create_pantry_item_invalid(client, auth_headers):
    response = client.post(
        "/api/v1/pantry", headers=auth_headers, json={"name": "Salt", "quantity": 0}
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "Quantity must be greater than 0"

    response = client.post(
        "/api/v1/pantry", headers=auth_headers, json={"name": "  ", "quantity": 1}
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "Item name is required"


def test_list_pantry_items(client, auth_headers):
    """Test listing pantry items in name order."""
    _add(client, auth_headers, name="Sugar", quantity=1, category="Baking")
    _add(client, auth_headers, name="flour", quantity=2, category="Baking")
    _add(client, auth_headers, name="Apples", quantity=3)

    response = client.get("/api/v1/pantry", headers=auth_headers)
    assert response.status_code == 200
    assert [item["name"] for item in response.json()] == ["Apples", "flour", "Sugar"]


def test_pantry_is_scoped_to_user(client, auth_headers):
    item = _add(client, auth_headers, name="Saffron", quantity=1)

    other = client.post(
        "/api/v1/auth/register",
        json={"email": "other@example.com", "password": "otherpass123"},
    )
    other_headers = {"Authorization": f"Bearer {other.json()['access_token']}"}

    assert client.get("/api/v1/pantry", headers=other_headers).json() == []
    assert client.get(f"/api/v1/pantry/{item['id']}", headers=other_headers).status_code == 404
    assert (
        client.delete(f"/api/v1/pantry/{item['id']}", headers=other_headers).status_code == 404
    )


def test_get_pantry_item(client, auth_headers):
    item = _add(client, auth_headers, name="Pepper", quantity=1)

    response = client.get(f"/api/v1/pantry/{item['id']}", headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["name"] == "Pepper"


def test_get_pantry_item_not_found(client, auth_headers):
    response = client.get("/api/v1/pantry/99999", headers=auth_headers)
    assert response.status_code == 404
    assert response.json()["detail"] == "Pantry item not found"


def test_search_pantry_items(client, auth_headers):
    _add(client, auth_headers, name="Basmati Rice", quantity=3, unit="cup", category="Grains")
    _add(client, auth_headers, name="Tomatoes", quantity=5, category="Vegetables")
    _add(client, auth_headers, name="Carrots", quantity=4, category="Vegetables")

    response = client.get(
        "/api/v1/pantry/search", headers=auth_headers, params={"search_term": "rice"}
    )
    assert [i["name"] for i in response.json()] == ["Basmati Rice"]

    response = client.get(
        "/api/v1/pantry/search", headers=auth_headers, params={"category": "Vegetables"}
    )
    assert [i["name"] for i in response.json()] == ["Carrots", "Tomatoes"]

    response = client.get(
        "/api/v1/pantry/search", headers=auth_headers, params={"category": "All"}
    )
    assert len(response.json()) == 3


def test_pantry_stats(client, auth_headers):
    now = datetime.now(UTC)
    _add(
        client,
        auth_headers,
        name="Yogurt",
        quantity=1,
        category="Dairy",
        expires_at=(now - timedelta(days=1)).isoformat(),
    )
    _add(
        client,
        auth_headers,
        name="Spinach",
        quantity=2,
        category="Vegetables",
        expires_at=(now + timedelta(days=3)).isoformat(),
    )
    _add(
        client,
        auth_headers,
        name="Rice",
        quantity=3,
        category="Grains",
        expires_at=(now + timedelta(days=30)).isoformat(),
    )

    response = client.get("/api/v1/pantry/stats", headers=auth_headers)
    assert response.status_code == 200
    stats = response.json()
    assert stats["total_items"] == 3
    assert stats["total_quantity"] == 6
    assert stats["categories_count"] == 3
    assert stats["expired_items"] == 1
    assert stats["expiring_items"] == 1
    assert stats["recently_added"] == 3


def test_update_pantry_item_partial(client, auth_headers):
    """Blank and omitted fields keep their stored values."""
    item = _add(client, auth_headers, name="Milk", quantity=2, unit="l", category="Dairy")

    response = client.put(
        f"/api/v1/pantry/{item['id']}",
        headers=auth_headers,
        json={"name": "", "quantity": 1.5, "unit": None},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "Milk"
    assert data["quantity"] == 1.5
    assert data["unit"] == "l"
    assert data["category"] == "Dairy"
    assert data["version"] == 2


def test_update_pantry_item_ignores_negative_quantity(client, auth_headers):
    item = _add(client, auth_headers, name="Milk", quantity=2)

    response = client.put(
        f"/api/v1/pantry/{item['id']}",
        headers=auth_headers,
        json={"quantity": -5, "category": "Dairy"},
    )
    assert response.status_code == 200
    assert response.json()["quantity"] == 2
    assert response.json()["category"] == "Dairy"


def test_update_pantry_item_stale_version(client, auth_headers):
    item = _add(client, auth_headers, name="Milk", quantity=2)
    client.put(f"/api/v1/pantry/{item['id']}", headers=auth_headers, json={"quantity": 1})

    response = client.put(
        f"/api/v1/pantry/{item['id']}",
        headers=auth_headers,
        json={"quantity": 3, "version": item["version"]},
    )
    assert response.status_code == 409


def test_delete_pantry_item(client, auth_headers):
    """Test deleting a pantry item."""
    item = _add(client, auth_headers, name="Cumin", quantity=1)

    response = client.delete(f"/api/v1/pantry/{item['id']}", headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["deleted_item"] == "Cumin"

    response = client.get(f"/api/v1/pantry/{item['id']}", headers=auth_headers)
    assert response.status_code == 404


def test_consume_pantry_item(client, auth_headers):
    item = _add(client, auth_headers, name="Tomatoes", quantity=5)

    response = client.post(
        f"/api/v1/pantry/{item['id']}/consume", headers=auth_headers, json={"amount": 2}
    )
    assert response.status_code == 200
    data = response.json()
    assert data["removed"] is False
    assert data["consumed_amount"] == 2
    assert data["item"]["quantity"] == 3


def test_consume_pantry_item_completely(client, auth_headers):
    item = _add(client, auth_headers, name="Eggs", quantity=2)

    response = client.post(
        f"/api/v1/pantry/{item['id']}/consume", headers=auth_headers, json={"amount": 2}
    )
    assert response.status_code == 200
    assert response.json()["removed"] is True
    assert response.json()["item"] is None

    response = client.post(
        f"/api/v1/pantry/{item['id']}/consume", headers=auth_headers, json={"amount": 1}
    )
    assert response.status_code == 404


def test_consume_more_than_available(client, auth_headers):
    item = _add(client, auth_headers, name="Eggs", quantity=2)

    response = client.post(
        f"/api/v1/pantry/{item['id']}/consume", headers=auth_headers, json={"amount": 3}
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "cannot consume more than available"


def test_consume_available(client, auth_headers):
    item = _add(client, auth_headers, name="Eggs", quantity=2)

    response = client.post(
        f"/api/v1/pantry/{item['id']}/consume-available", headers=auth_headers, json={"amount": 3}
    )
    assert response.status_code == 200
    assert response.json()["consumed_amount"] == 2
    assert response.json()["removed"] is True


def test_match_ingredients(client, auth_headers):
    _add(client, auth_headers, name="Ground Beef", quantity=1, unit="lb")

    response = client.post(
        "/api/v1/pantry/match",
        headers=auth_headers,
        json={"ingredients": ["2 lb beef", "1 onion"]},
    )
    assert response.status_code == 200
    report = response.json()
    assert report[0]["available"] is True
    assert report[0]["sufficient"] is False
    assert report[0]["pantry_item"]["name"] == "Ground Beef"
    assert report[1]["name"] == "onion"
    assert report[1]["available"] is False


def test_consume_ingredients(client, auth_headers):
    item = _add(client, auth_headers, name="Tomatoes", quantity=5, unit="piece")

    response = client.post(
        "/api/v1/pantry/consume-ingredients",
        headers=auth_headers,
        json={"ingredients": ["2 piece Tomatoes", "1 cup basil"]},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["consumed"] == [
        {"id": item["id"], "name": "Tomatoes", "consumed_amount": 2, "unit": "piece"}
    ]
    assert data["unmatched"] == ["basil"]

    remaining = client.get(f"/api/v1/pantry/{item['id']}", headers=auth_headers).json()
    assert remaining["quantity"] == 3


def test_consume_ingredients_requires_lines(client, auth_headers):
    response = client.post(
        "/api/v1/pantry/consume-ingredients", headers=auth_headers, json={"ingredients": []}
    )
    assert response.status_code == 422


def test_create_pantry_item_non_finite_quantity(client, auth_headers):
    for quantity in (float("nan"), float("inf")):
        response = client.post(
            "/api/v1/pantry", headers=auth_headers, json={"name": "Milk", "quantity": quantity}
        )
        assert response.status_code == 400
        assert response.json()["detail"] == "Quantity must be greater than 0"

    assert client.get("/api/v1/pantry", headers=auth_headers).json() == []
