from datetime import datetime

from flask_login import UserMixin
from werkzeug.security import generate_password_hash, check_password_hash
from extensions import db


class User(db.Model, UserMixin):
    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False)
    email = db.Column(db.String(120), nullable=False, unique=True)
    # NULL for accounts created through OAuth
    password_hash = db.Column(db.String(255), nullable=True)
    avatar = db.Column(db.String(255))

    provider = db.Column(
        db.Enum("credentials", "google", name="auth_providers"),
        default="credentials"
    )

    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    bookings = db.relationship("Booking", back_populates="customer", lazy=True)
    reviews = db.relationship("Review", back_populates="author", lazy=True)
    notifications = db.relationship("Notification", back_populates="recipient", cascade="all, delete-orphan")

    def set_password(self, password):
        self.password_hash = generate_password_hash(password)

    def check_password(self, password):
        if not self.password_hash:
            return False
        return check_password_hash(self.password_hash, password)

    def is_admin(self, admin_email):
        return bool(admin_email) and (self.email or "").lower() == admin_email.lower()

    def to_principal(self):
        return {"id": self.id, "email": self.email, "name": self.name}

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "avatar": self.avatar,
            "provider": self.provider,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }
