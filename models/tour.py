from datetime import datetime

from extensions import db

TOUR_STATUSES = ("confirmed", "pending", "completed", "cancelled")
TOUR_DIFFICULTY = ("easy", "moderate", "challenging")


class Tour(db.Model):
    """One entry of a guide's schedule."""

    __tablename__ = "tours"
    __table_args__ = (
        db.CheckConstraint("end_date >= start_date", name="ck_tour_dates"),
    )

    id = db.Column(db.Integer, primary_key=True)
    guide_id = db.Column(db.Integer, db.ForeignKey("guides.id", ondelete="CASCADE"), nullable=False)

    destination = db.Column(db.String(150), nullable=False)
    location = db.Column(db.String(150), nullable=False)
    start_date = db.Column(db.Date, nullable=False)
    end_date = db.Column(db.Date, nullable=False)
    description = db.Column(db.Text, nullable=False)
    max_participants = db.Column(db.Integer, nullable=False)
    price = db.Column(db.Numeric(10, 2), nullable=False)

    status = db.Column(
        db.Enum(*TOUR_STATUSES, name="tour_status"),
        default="pending"
    )
    difficulty = db.Column(
        db.Enum(*TOUR_DIFFICULTY, name="tour_difficulty"),
        default="moderate"
    )
    itinerary = db.Column(db.Text, nullable=False)

    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    guide = db.relationship("Guide", back_populates="tours")

    def to_dict(self):
        return {
            "id": self.id,
            "guideId": self.guide_id,
            "destination": self.destination,
            "location": self.location,
            "startDate": self.start_date.isoformat(),
            "endDate": self.end_date.isoformat(),
            "description": self.description,
            "maxParticipants": self.max_participants,
            "price": float(self.price),
            "status": self.status,
            "difficulty": self.difficulty,
            "itinerary": self.itinerary,
        }
