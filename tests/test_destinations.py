import pytest

from errors import ValidationError
from services.destinations import popular_destinations

from conftest import make_destination


@pytest.fixture
def rated_destinations(app):
    for name, rating in [("Alpha", 4.9), ("Bravo", 4.2), ("Charlie", 4.8), ("Delta", 3.0)]:
        make_destination(app, name=name, rating=rating)


def test_popular_orders_by_rating(client, rated_destinations):
    resp = client.get("/destinations/popular", query_string={"limit": 3})
    assert resp.status_code == 200
    assert [d["rating"] for d in resp.get_json()] == [4.9, 4.8, 4.2]


def test_popular_default_limit(client, rated_destinations):
    body = client.get("/destinations/popular").get_json()
    assert [d["name"] for d in body] == ["Alpha", "Charlie", "Bravo", "Delta"]


def test_popular_rejects_zero_limit(client, rated_destinations):
    resp = client.get("/destinations/popular", query_string={"limit": 0})
    assert resp.status_code == 400
    assert "limit" in resp.get_json()["details"]


@pytest.mark.parametrize("limit", [0, -3, "5", True])
def test_popular_service_rejects_bad_limit(app, limit):
    with app.app_context():
        with pytest.raises(ValidationError):
            popular_destinations(limit)


def test_popular_accepts_large_limit(client, rated_destinations):
    resp = client.get("/destinations/popular", query_string={"limit": 101})
    assert resp.status_code == 200
    assert len(resp.get_json()) == 4


def test_popular_with_no_destinations(client):
    assert client.get("/destinations/popular").get_json() == []


def test_countries_are_unique_and_sorted(app, client):
    make_destination(app, name="EBC", country="Nepal")
    make_destination(app, name="Druk Path", country="Bhutan")
    make_destination(app, name="Poon Hill", country="Nepal")

    assert client.get("/destinations/countries").get_json() == ["Bhutan", "Nepal"]


def test_list_destinations_filters(app, client):
    make_destination(app, name="EBC", country="Nepal", difficulty="challenging", price_amount=1450)
    make_destination(app, name="Poon Hill", country="Nepal", difficulty="easy", price_amount=450)
    make_destination(app, name="Druk Path", country="Bhutan", difficulty="moderate", price_amount=1600)

    body = client.get("/destinations", query_string={"country": "Nepal"}).get_json()
    assert body["total"] == 2

    body = client.get("/destinations", query_string={"maxPrice": 1000}).get_json()
    assert [d["name"] for d in body["destinations"]] == ["Poon Hill"]
    assert body["destinations"][0]["price"] == {"amount": 450.0, "currency": "USD"}

    body = client.get("/destinations", query_string={"search": "druk"}).get_json()
    assert [d["country"] for d in body["destinations"]] == ["Bhutan"]


def test_get_destination(client, destination_id):
    resp = client.get(f"/destinations/{destination_id}")
    assert resp.status_code == 200
    assert resp.get_json()["name"] == "Everest Base Camp"

    assert client.get("/destinations/9999").status_code == 404


def test_stats_refuses_anonymous(client, destination_id):
    assert client.get("/destinations/stats").status_code == 403
    resp = client.get("/destinations/stats", query_string={"admin": "true", "limit": 3})
    assert resp.status_code == 403


def test_stats_refuses_non_admin(user_client, destination_id):
    assert user_client.get("/destinations/stats").status_code == 403


def test_stats_for_admin(app, admin_client, rated_destinations):
    make_destination(app, name="Echo", country="Bhutan", rating=4.0, featured=True)

    resp = admin_client.get("/destinations/stats")
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["totalDestinations"] == 5
    assert body["featuredCount"] == 1
    assert body["topRated"][0]["name"] == "Alpha"
    assert body["countryBreakdown"] == [
        {"country": "Bhutan", "count": 1},
        {"country": "Nepal", "count": 4},
    ]


DESTINATION_BODY = {
    "name": "Gokyo Lakes",
    "country": "Nepal",
    "region": "Khumbu",
    "description": "Turquoise glacial lakes beneath Cho Oyu.",
    "difficulty": "moderate",
    "priceAmount": 1100,
}


def test_create_destination_is_admin_only(client, user_client, admin_client):
    assert client.post("/destinations", json=DESTINATION_BODY).status_code == 401
    assert user_client.post("/destinations", json=DESTINATION_BODY).status_code == 403

    resp = admin_client.post("/destinations", json=DESTINATION_BODY)
    assert resp.status_code == 201
    body = resp.get_json()
    assert body["name"] == "Gokyo Lakes"
    assert body["price"] == {"amount": 1100.0, "currency": "USD"}
    assert body["featured"] is False

    assert client.get(f"/destinations/{body['id']}").status_code == 200


def test_create_destination_validates(admin_client):
    resp = admin_client.post("/destinations", json={**DESTINATION_BODY, "description": "Too short"})
    assert resp.status_code == 400
    assert "description" in resp.get_json()["details"]

    resp = admin_client.post("/destinations", json={**DESTINATION_BODY, "priceAmount": 0})
    assert resp.status_code == 400


def test_update_destination(user_client, admin_client, destination_id):
    url = f"/destinations/{destination_id}"
    assert user_client.put(url, json={"featured": True}).status_code == 403

    resp = admin_client.put(url, json={"featured": True, "priceAmount": 1500})
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["featured"] is True
    assert body["price"]["amount"] == 1500
    assert body["name"] == "Everest Base Camp"

    assert admin_client.put(url, json={"difficulty": "impossible"}).status_code == 400
    assert admin_client.put("/destinations/9999", json={"featured": True}).status_code == 404


def test_delete_destination(app, user_client, admin_client, destination_id):
    url = f"/destinations/{destination_id}"
    assert user_client.delete(url).status_code == 403

    assert admin_client.delete(url).status_code == 200
    assert admin_client.get(url).status_code == 404
    assert admin_client.delete(url).status_code == 404
