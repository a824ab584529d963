from datetime import datetime

from extensions import db

BOOKING_STATUSES = ("pending", "confirmed", "completed", "cancelled", "refunded")


class Booking(db.Model):
    __tablename__ = "bookings"

    id = db.Column(db.Integer, primary_key=True)
    booking_number = db.Column(db.String(20), nullable=False, unique=True)

    customer_id = db.Column(db.Integer, db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    destination_id = db.Column(db.Integer, db.ForeignKey("destinations.id", ondelete="CASCADE"), nullable=False)
    guide_id = db.Column(db.Integer, db.ForeignKey("guides.id", ondelete="SET NULL"), nullable=True)

    start_date = db.Column(db.Date, nullable=False)
    end_date = db.Column(db.Date, nullable=False)
    duration = db.Column(db.Integer, nullable=False)
    total_travelers = db.Column(db.Integer, nullable=False, default=1)

    total_amount = db.Column(db.Numeric(10, 2), nullable=False, default=0)
    currency = db.Column(db.String(3), nullable=False, default="USD")

    status = db.Column(
        db.Enum(*BOOKING_STATUSES, name="booking_status"),
        default="pending"
    )

    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # relationships
    customer = db.relationship("User", back_populates="bookings")
    destination = db.relationship("Destination", back_populates="bookings")
    guide = db.relationship("Guide", back_populates="bookings")
