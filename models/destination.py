from datetime import datetime

from extensions import db

DESTINATION_DIFFICULTY = ("easy", "moderate", "challenging", "extreme")


class Destination(db.Model):
    __tablename__ = "destinations"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(150), nullable=False)
    country = db.Column(db.String(100), nullable=False)
    region = db.Column(db.String(100))
    description = db.Column(db.Text)

    difficulty = db.Column(
        db.Enum(*DESTINATION_DIFFICULTY, name="destination_difficulty"),
        default="moderate"
    )
    price_amount = db.Column(db.Numeric(10, 2), default=0)
    price_currency = db.Column(db.String(3), default="USD")

    featured = db.Column(db.Boolean, default=False)
    rating = db.Column(db.Float, default=0)
    review_count = db.Column(db.Integer, default=0)

    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    bookings = db.relationship("Booking", back_populates="destination", cascade="all, delete")
    reviews = db.relationship("Review", back_populates="destination", cascade="all, delete")

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "country": self.country,
            "region": self.region,
            "description": self.description,
            "difficulty": self.difficulty,
            "price": {"amount": float(self.price_amount or 0), "currency": self.price_currency},
            "featured": bool(self.featured),
            "rating": self.rating or 0,
            "reviewCount": self.review_count or 0,
        }
