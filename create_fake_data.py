import random
from datetime import date, datetime, timedelta

from app import create_app
from extensions import db
from models import Booking, Destination, Guide, Notification, Review, Tour, User
from services.bookings import generate_booking_number
from services.destinations import update_destination_rating
from services.guides import update_guide_rating

# ====== CONFIG ======
NUM_CUSTOMERS = 20
NUM_BOOKINGS = 120
NUM_REVIEWS = 80
# =====================

DESTINATIONS = [
    ("Everest Base Camp", "Nepal", "Khumbu", "challenging", 1450),
    ("Annapurna Circuit", "Nepal", "Annapurna", "challenging", 1200),
    ("Poon Hill", "Nepal", "Annapurna", "easy", 450),
    ("Langtang Valley", "Nepal", "Langtang", "moderate", 700),
    ("Manaslu Circuit", "Nepal", "Gorkha", "extreme", 1800),
    ("Upper Mustang", "Nepal", "Mustang", "moderate", 2100),
    ("Druk Path", "Bhutan", "Paro", "moderate", 1600),
    ("Markha Valley", "India", "Ladakh", "moderate", 900),
]

GUIDE_NAMES = ["Pemba Sherpa", "Maya Gurung", "Ang Dorje", "Sita Tamang", "Karma Lama", "Nima Rai"]
LANGUAGES = ["English", "Nepali", "Hindi", "German", "French", "Japanese", "Tibetan"]
SPECIALTIES = ["High altitude", "Photography", "Culture", "Wildlife", "Mountaineering", "Family treks"]
REVIEW_TAGS = ["scenic", "well organised", "challenging", "flagged", "great food"]


def random_day(start, end):
    return start + timedelta(days=random.randint(0, (end - start).days))


def create_customers():
    print("Creating customers...")
    customers = []
    for i in range(1, NUM_CUSTOMERS + 1):
        user = User(name=f"Traveler {i}", email=f"traveler{i}@example.com", provider="credentials")
        user.set_password("password123")
        customers.append(user)
    db.session.add_all(customers)
    db.session.commit()
    print(f"Created {len(customers)} customers.")
    return customers


def create_destinations():
    print("Creating destinations...")
    destinations = [
        Destination(
            name=name,
            country=country,
            region=region,
            difficulty=difficulty,
            price_amount=price,
            price_currency="USD",
            featured=random.random() < 0.3,
            description=f"{name} trek in the {region} region of {country}.",
        )
        for name, country, region, difficulty, price in DESTINATIONS
    ]
    db.session.add_all(destinations)
    db.session.commit()
    print(f"Created {len(destinations)} destinations.")
    return destinations


def create_guides():
    print("Creating guides and schedules...")
    guides = []
    for name in GUIDE_NAMES:
        slug = name.lower().replace(" ", ".")
        guide = Guide(
            name=name,
            email=f"{slug}@guides.example.com",
            phone=f"+977-98{random.randint(10000000, 99999999)}",
            country="Nepal",
            region=random.choice(["Khumbu", "Annapurna", "Langtang"]),
            bio=f"{name} has been leading treks in the Himalaya for years.",
            languages=random.sample(LANGUAGES, random.randint(2, 4)),
            specialties=random.sample(SPECIALTIES, random.randint(1, 3)),
            experience_years=random.randint(2, 20),
            experience_level=random.choice(["intermediate", "expert"]),
            hourly_rate=random.randint(15, 60),
            availability=random.choice(["available", "available", "partially_available", "unavailable"]),
        )
        guides.append(guide)
    db.session.add_all(guides)
    db.session.flush()

    today = date.today()
    for guide in guides:
        for _ in range(random.randint(1, 4)):
            name, country, region, difficulty, price = random.choice(DESTINATIONS)
            start = random_day(today - timedelta(days=60), today + timedelta(days=120))
            db.session.add(Tour(
                guide_id=guide.id,
                destination=name,
                location=f"{region}, {country}",
                start_date=start,
                end_date=start + timedelta(days=random.randint(3, 14)),
                description=f"Guided group trek to {name}.",
                max_participants=random.randint(4, 14),
                price=price,
                status=random.choice(["confirmed", "pending", "completed"]),
                difficulty="challenging" if difficulty in ("challenging", "extreme") else difficulty,
                itinerary="Day 1 arrival, acclimatisation, trek, return.",
            ))
    db.session.commit()
    print(f"Created {len(guides)} guides.")
    return guides


def create_bookings(customers, destinations, guides):
    print("Creating bookings...")
    used = set()
    bookings = []
    now = datetime.utcnow()
    for _ in range(NUM_BOOKINGS):
        created = now - timedelta(days=random.randint(0, 365))
        number = generate_booking_number(created.date())
        if number in used:
            continue
        used.add(number)

        destination = random.choice(destinations)
        start = created.date() + timedelta(days=random.randint(7, 90))
        duration = random.randint(4, 16)
        travelers = random.randint(1, 6)
        bookings.append(Booking(
            booking_number=number,
            customer_id=random.choice(customers).id,
            destination_id=destination.id,
            guide_id=random.choice(guides).id if random.random() < 0.7 else None,
            start_date=start,
            end_date=start + timedelta(days=duration - 1),
            duration=duration,
            total_travelers=travelers,
            total_amount=float(destination.price_amount) * travelers,
            currency="USD",
            status=random.choice(["pending", "confirmed", "confirmed", "completed", "cancelled"]),
            created_at=created,
        ))
    db.session.add_all(bookings)
    db.session.commit()
    print(f"Created {len(bookings)} bookings.")
    return bookings


def create_reviews(customers, destinations, guides):
    print("Creating reviews...")
    for _ in range(NUM_REVIEWS):
        review = Review(
            author_id=random.choice(customers).id,
            rating=random.randint(2, 5),
            title=random.choice(["Unforgettable", "Tough but worth it", "Great trip", "Could be better"]),
            content="Stunning views and a very knowledgeable team.",
            date=datetime.utcnow() - timedelta(days=random.randint(0, 300)),
            verified=random.random() < 0.6,
            tags=random.sample(REVIEW_TAGS, random.randint(0, 2)),
        )
        if random.random() < 0.5:
            review.guide_id = random.choice(guides).id
        else:
            review.destination_id = random.choice(destinations).id
        db.session.add(review)
    db.session.flush()

    for guide in guides:
        update_guide_rating(guide.id)
    for destination in destinations:
        update_destination_rating(destination.id)
    db.session.commit()
    print(f"Created {NUM_REVIEWS} reviews.")


def create_notifications(bookings):
    print("Creating notifications...")
    notifications = [
        Notification(
            recipient_id=b.customer_id,
            title="Booking received",
            description=f"Your booking {b.booking_number} has been received.",
            type="success",
            read=random.random() < 0.5,
            action_url=f"/dashboard/bookings/{b.id}",
            action_label="View Booking",
            related_entity_type="booking",
            related_entity_id=str(b.id),
            related_entity_name=b.destination.name,
            created_at=b.created_at,
        )
        for b in bookings
    ]
    db.session.add_all(notifications)
    db.session.commit()
    print(f"Created {len(notifications)} notifications.")


if __name__ == "__main__":
    app = create_app()
    with app.app_context():
        print("Seeding demo data...\n")

        customers = create_customers()
        destinations = create_destinations()
        guides = create_guides()
        bookings = create_bookings(customers, destinations, guides)
        create_reviews(customers, destinations, guides)
        create_notifications(bookings)

        print("\nDemo data ready.")
