import pytest

from app import create_app
from config import Settings
from extensions import db
from models import Destination, Guide, User

ADMIN_EMAIL = "admin@example.com"
USER_EMAIL = "alice@example.com"
OTHER_EMAIL = "bob@example.com"
PASSWORD = "password123"


@pytest.fixture
def settings():
    return Settings(
        secret_key="test-secret",
        database_url="sqlite://",
        mapbox_token="pk.test-token",
        admin_email=ADMIN_EMAIL,
        brave_search_api_key="brave-test-key",
        testing=True,
    )


# Requests push their own app context so flask-login state never leaks
# between test clients; fixtures only hold the context while seeding.
@pytest.fixture
def app(settings):
    app = create_app(settings)
    with app.app_context():
        db.create_all()
    yield app
    with app.app_context():
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


def add(app, obj):
    """Persist ``obj`` and return its primary key."""
    with app.app_context():
        db.session.add(obj)
        db.session.commit()
        return obj.id


def make_user(app, name, email, password=PASSWORD):
    user = User(name=name, email=email, provider="credentials")
    user.set_password(password)
    return add(app, user)


def login(client, email, password=PASSWORD):
    resp = client.post("/auth/login", json={"email": email, "password": password})
    assert resp.status_code == 200, resp.get_json()
    return resp.get_json()


@pytest.fixture
def user_id(app):
    return make_user(app, "Alice", USER_EMAIL)


@pytest.fixture
def other_user_id(app):
    return make_user(app, "Bob", OTHER_EMAIL)


@pytest.fixture
def admin_id(app):
    return make_user(app, "Admin", ADMIN_EMAIL)


@pytest.fixture
def user_client(app, user_id):
    client = app.test_client()
    login(client, USER_EMAIL)
    return client


@pytest.fixture
def other_client(app, other_user_id):
    client = app.test_client()
    login(client, OTHER_EMAIL)
    return client


@pytest.fixture
def admin_client(app, admin_id):
    client = app.test_client()
    login(client, ADMIN_EMAIL)
    return client


def make_guide(app, name="Pemba Sherpa", email="pemba@guides.example.com", **fields):
    data = dict(
        name=name,
        email=email,
        phone="+977-9800000000",
        country="Nepal",
        region="Khumbu",
        bio="Veteran Everest guide.",
        languages=["English", "Nepali"],
        specialties=["High altitude"],
        experience_years=12,
        experience_level="expert",
        rating=4.8,
        hourly_rate=40,
    )
    data.update(fields)
    return add(app, Guide(**data))


def make_destination(app, name="Everest Base Camp", **fields):
    data = dict(
        name=name,
        country="Nepal",
        region="Khumbu",
        difficulty="challenging",
        price_amount=1450,
        rating=4.9,
        review_count=10,
    )
    data.update(fields)
    return add(app, Destination(**data))


@pytest.fixture
def guide_id(app):
    return make_guide(app)


@pytest.fixture
def destination_id(app):
    return make_destination(app)


@pytest.fixture
def schedule_payload():
    return {
        "destination": "Everest Base Camp",
        "location": "Khumbu, Nepal",
        "startDate": "2025-04-01",
        "endDate": "2025-04-14",
        "description": "Classic two week trek to base camp.",
        "maxParticipants": 10,
        "price": 1450,
        "status": "confirmed",
        "difficulty": "challenging",
        "itinerary": "Fly to Lukla, trek up the valley, return.",
    }
