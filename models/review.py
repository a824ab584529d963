from datetime import datetime

from extensions import db


class Review(db.Model):
    __tablename__ = "reviews"
    __table_args__ = (
        # a review targets a guide or a destination, never both
        db.CheckConstraint(
            "(guide_id IS NULL) <> (destination_id IS NULL)",
            name="ck_review_single_target"
        ),
    )

    id = db.Column(db.Integer, primary_key=True)
    author_id = db.Column(db.Integer, db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    guide_id = db.Column(db.Integer, db.ForeignKey("guides.id", ondelete="CASCADE"), nullable=True)
    destination_id = db.Column(db.Integer, db.ForeignKey("destinations.id", ondelete="CASCADE"), nullable=True)

    rating = db.Column(db.Integer, nullable=False)
    title = db.Column(db.String(200))
    content = db.Column(db.Text, nullable=False)
    date = db.Column(db.DateTime, default=datetime.utcnow)

    verified = db.Column(db.Boolean, default=False)
    featured = db.Column(db.Boolean, default=False)
    tags = db.Column(db.JSON, nullable=False, default=list)
    photos = db.Column(db.JSON, nullable=False, default=list)
    highlights = db.Column(db.JSON, nullable=False, default=list)
    helpful_count = db.Column(db.Integer, default=0)
    unhelpful_count = db.Column(db.Integer, default=0)

    trip_start_date = db.Column(db.Date)
    trip_end_date = db.Column(db.Date)
    trip_duration = db.Column(db.Integer)
    trip_type = db.Column(db.String(50))

    response_content = db.Column(db.Text)
    response_date = db.Column(db.DateTime)
    responder_name = db.Column(db.String(100))
    responder_role = db.Column(db.String(50))
    responder_id = db.Column(db.Integer)

    author = db.relationship("User", back_populates="reviews")
    guide = db.relationship("Guide", back_populates="reviews")
    destination = db.relationship("Destination", back_populates="reviews")
