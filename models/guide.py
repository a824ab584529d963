from datetime import datetime

from extensions import db

GUIDE_AVAILABILITY = ("available", "partially_available", "unavailable")


class Guide(db.Model):
    __tablename__ = "guides"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False)
    email = db.Column(db.String(120), unique=True)
    phone = db.Column(db.String(30))
    photo = db.Column(db.String(255))

    country = db.Column(db.String(100))
    region = db.Column(db.String(100))
    bio = db.Column(db.Text)

    languages = db.Column(db.JSON, nullable=False, default=list)
    specialties = db.Column(db.JSON, nullable=False, default=list)

    experience_years = db.Column(db.Integer, default=0)
    experience_level = db.Column(db.String(50))

    rating = db.Column(db.Float, default=0)
    review_count = db.Column(db.Integer, default=0)
    hourly_rate = db.Column(db.Numeric(10, 2), default=0)

    availability = db.Column(
        db.Enum(*GUIDE_AVAILABILITY, name="guide_availability"),
        default="available"
    )

    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    tours = db.relationship("Tour", back_populates="guide", cascade="all, delete-orphan")
    reviews = db.relationship("Review", back_populates="guide", cascade="all, delete")
    bookings = db.relationship("Booking", back_populates="guide")

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "phone": self.phone,
            "photo": self.photo,
            "location": {"country": self.country, "region": self.region},
            "bio": self.bio,
            "languages": list(self.languages or []),
            "specialties": list(self.specialties or []),
            "experience": {"years": self.experience_years, "level": self.experience_level},
            "rating": self.rating or 0,
            "reviewCount": self.review_count or 0,
            "hourlyRate": float(self.hourly_rate or 0),
            "availability": self.availability,
        }
