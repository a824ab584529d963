from datetime import date

from extensions import db
from models import Booking, Guide, Tour
from services.guides import sorted_unique

from conftest import add, make_guide


def schedules_url(guide_id):
    return f"/guides/{guide_id}/schedules"


# ----------------------------
# Schedules
# ----------------------------

def test_create_schedule_echoes_entry(user_client, guide_id, schedule_payload):
    resp = user_client.post(schedules_url(guide_id), json=schedule_payload)
    assert resp.status_code == 201

    body = resp.get_json()
    assert body["id"]
    assert body["guideId"] == guide_id
    for key, value in schedule_payload.items():
        assert body[key] == value


def test_create_schedule_ten_day_trek(user_client, guide_id):
    payload = {
        "destination": "Everest",
        "location": "Base Camp",
        "startDate": "2024-05-01",
        "endDate": "2024-05-10",
        "description": "Ten-day trek",
        "maxParticipants": 8,
        "price": 500,
        "status": "pending",
        "difficulty": "moderate",
        "itinerary": "Day-by-day plan ...",
    }
    resp = user_client.post(schedules_url(guide_id), json=payload)
    assert resp.status_code == 201
    assert resp.get_json() == {**payload, "id": resp.get_json()["id"], "guideId": guide_id}


def test_create_schedule_requires_login(client, guide_id, schedule_payload):
    resp = client.post(schedules_url(guide_id), json=schedule_payload)
    assert resp.status_code == 401


def test_create_schedule_unknown_guide(user_client, schedule_payload):
    resp = user_client.post(schedules_url(9999), json=schedule_payload)
    assert resp.status_code == 404


def test_create_schedule_unknown_guide_before_validation(user_client):
    resp = user_client.post(schedules_url(9999), json={"destination": "x"})
    assert resp.status_code == 404


def test_create_schedule_rejects_zero_participants(app, user_client, guide_id, schedule_payload):
    schedule_payload["maxParticipants"] = 0
    resp = user_client.post(schedules_url(guide_id), json=schedule_payload)
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "Validation error"
    with app.app_context():
        assert Tour.query.count() == 0


def test_create_schedule_rejects_negative_price(user_client, guide_id, schedule_payload):
    schedule_payload["price"] = -1
    resp = user_client.post(schedules_url(guide_id), json=schedule_payload)
    assert resp.status_code == 400
    assert "price" in resp.get_json()["details"]


def test_create_schedule_rejects_unknown_status(user_client, guide_id, schedule_payload):
    schedule_payload["status"] = "postponed"
    resp = user_client.post(schedules_url(guide_id), json=schedule_payload)
    assert resp.status_code == 400
    assert "status" in resp.get_json()["details"]


def test_create_schedule_rejects_unknown_difficulty(user_client, guide_id, schedule_payload):
    schedule_payload["difficulty"] = "extreme"
    resp = user_client.post(schedules_url(guide_id), json=schedule_payload)
    assert resp.status_code == 400
    assert "difficulty" in resp.get_json()["details"]


def test_create_schedule_rejects_end_before_start(user_client, guide_id, schedule_payload):
    schedule_payload["endDate"] = "2025-03-30"
    resp = user_client.post(schedules_url(guide_id), json=schedule_payload)
    assert resp.status_code == 400
    assert "__root__" in resp.get_json()["details"]


def test_list_schedules_filters_by_status(user_client, guide_id, schedule_payload):
    user_client.post(schedules_url(guide_id), json=schedule_payload)
    schedule_payload["status"] = "pending"
    schedule_payload["startDate"] = "2025-05-01"
    schedule_payload["endDate"] = "2025-05-10"
    user_client.post(schedules_url(guide_id), json=schedule_payload)

    all_entries = user_client.get(schedules_url(guide_id)).get_json()
    assert [t["startDate"] for t in all_entries] == ["2025-04-01", "2025-05-01"]

    pending = user_client.get(schedules_url(guide_id), query_string={"status": "pending"}).get_json()
    assert len(pending) == 1
    assert pending[0]["status"] == "pending"


def test_update_schedule(user_client, guide_id, schedule_payload):
    created = user_client.post(schedules_url(guide_id), json=schedule_payload).get_json()
    url = f"{schedules_url(guide_id)}/{created['id']}"

    resp = user_client.patch(url, json={"price": 1600, "status": "completed"})
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["price"] == 1600
    assert body["status"] == "completed"
    assert body["destination"] == schedule_payload["destination"]

    resp = user_client.patch(url, json={"endDate": "2025-03-01"})
    assert resp.status_code == 400


def test_schedule_belongs_to_guide(app, user_client, guide_id, schedule_payload):
    created = user_client.post(schedules_url(guide_id), json=schedule_payload).get_json()
    other_guide = make_guide(app, name="Maya Gurung", email="maya@guides.example.com")

    resp = user_client.get(f"{schedules_url(other_guide)}/{created['id']}")
    assert resp.status_code == 404


def test_delete_schedule(user_client, guide_id, schedule_payload):
    created = user_client.post(schedules_url(guide_id), json=schedule_payload).get_json()
    url = f"{schedules_url(guide_id)}/{created['id']}"

    assert user_client.delete(url).status_code == 200
    assert user_client.get(url).status_code == 404


# ----------------------------
# Aggregates
# ----------------------------

def test_sorted_unique():
    assert sorted_unique([["b", "a"], None, ["a", "c", ""]]) == ["a", "b", "c"]


def test_languages_and_specialties_are_deduplicated(app, user_client):
    make_guide(app, languages=["Nepali", "English"], specialties=["Culture"])
    make_guide(app, name="Ang Dorje", email="ang@guides.example.com",
               languages=["German", "Nepali"], specialties=["Photography", "Culture"])

    assert user_client.get("/guides/languages").get_json() == ["English", "German", "Nepali"]
    assert user_client.get("/guides/specialties").get_json() == ["Culture", "Photography"]


def test_languages_empty_without_guides(user_client):
    assert user_client.get("/guides/languages").get_json() == []


def test_top_rated_skips_low_ratings(app, user_client):
    make_guide(app, name="A", email="a@g.example.com", rating=4.1)
    make_guide(app, name="B", email="b@g.example.com", rating=4.9)
    make_guide(app, name="C", email="c@g.example.com", rating=3.5)

    body = user_client.get("/guides/top-rated").get_json()
    assert [g["name"] for g in body] == ["B", "A"]

    body = user_client.get("/guides/top-rated", query_string={"limit": 1}).get_json()
    assert [g["name"] for g in body] == ["B"]


def test_guide_stats(app, user_client):
    make_guide(app, name="A", email="a@g.example.com", availability="available", rating=4.0)
    make_guide(app, name="B", email="b@g.example.com", availability="unavailable", rating=5.0)

    body = user_client.get("/guides/stats").get_json()
    assert body["totalGuides"] == 2
    assert body["activeGuides"] == 1
    assert body["inactiveGuides"] == 1
    assert body["averageRating"] == 4.5


# ----------------------------
# Guide CRUD
# ----------------------------

GUIDE_BODY = {
    "name": "Sita Tamang",
    "email": "sita@guides.example.com",
    "phone": "+977-9811111111",
    "country": "Nepal",
    "region": "Langtang",
    "bio": "Langtang valley specialist.",
    "languages": ["English", "Tamang"],
    "specialties": ["Culture"],
    "experienceYears": 6,
    "hourlyRate": 25,
}


def test_list_guides_filters_by_language(app, client):
    make_guide(app, languages=["English"])
    make_guide(app, name="Ang Dorje", email="ang@guides.example.com", languages=["German"])

    body = client.get("/guides", query_string={"language": "German"}).get_json()
    assert body["total"] == 1
    assert body["guides"][0]["name"] == "Ang Dorje"


def test_create_guide_is_admin_only(user_client, admin_client):
    assert user_client.post("/guides", json=GUIDE_BODY).status_code == 403

    resp = admin_client.post("/guides", json=GUIDE_BODY)
    assert resp.status_code == 201
    body = resp.get_json()
    assert body["experience"]["years"] == 6
    assert body["hourlyRate"] == 25

    assert admin_client.post("/guides", json=GUIDE_BODY).status_code == 409


def test_delete_guide_keeps_bookings(app, admin_client, user_id, guide_id, destination_id, schedule_payload):
    admin_client.post(schedules_url(guide_id), json=schedule_payload)
    booking_id = add(app, Booking(
        booking_number="B-20250101-1234",
        customer_id=user_id,
        destination_id=destination_id,
        guide_id=guide_id,
        start_date=date(2025, 1, 10),
        end_date=date(2025, 1, 20),
        duration=11,
        total_travelers=2,
        total_amount=2900,
    ))

    assert admin_client.delete(f"/guides/{guide_id}").status_code == 200

    with app.app_context():
        assert db.session.get(Guide, guide_id) is None
        assert Tour.query.count() == 0
        assert db.session.get(Booking, booking_id).guide_id is None


def test_update_guide_is_admin_only(app, user_client, admin_client, guide_id):
    url = f"/guides/{guide_id}"
    assert user_client.patch(url, json={"hourlyRate": 55}).status_code == 403

    resp = admin_client.put(url, json={"hourlyRate": 55, "availability": "unavailable"})
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["hourlyRate"] == 55
    assert body["availability"] == "unavailable"
    assert body["languages"] == ["English", "Nepali"]

    assert admin_client.patch(url, json={"rating": 7}).status_code == 400
    assert admin_client.patch("/guides/9999", json={"bio": "x"}).status_code == 404


def test_update_guide_rejects_taken_email(app, admin_client, guide_id):
    make_guide(app, name="Maya Gurung", email="maya@guides.example.com")

    resp = admin_client.patch(f"/guides/{guide_id}", json={"email": "maya@guides.example.com"})
    assert resp.status_code == 409

    resp = admin_client.patch(f"/guides/{guide_id}", json={"email": "pemba@guides.example.com"})
    assert resp.status_code == 200
