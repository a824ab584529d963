from datetime import datetime

from extensions import db

NOTIFICATION_TYPES = ("info", "warning", "success", "error")


class Notification(db.Model):
    __tablename__ = "notifications"

    id = db.Column(db.Integer, primary_key=True)
    recipient_id = db.Column(db.Integer, db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    title = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text, nullable=False)
    type = db.Column(
        db.Enum(*NOTIFICATION_TYPES, name="notification_types"),
        nullable=False,
        default="info"
    )
    read = db.Column(db.Boolean, nullable=False, default=False)

    action_url = db.Column(db.String(255))
    action_label = db.Column(db.String(100))
    related_entity_type = db.Column(db.String(50))
    related_entity_id = db.Column(db.String(50))
    related_entity_name = db.Column(db.String(150))

    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    recipient = db.relationship("User", back_populates="notifications")

    def to_dict(self):
        data = {
            "id": self.id,
            "recipientId": self.recipient_id,
            "title": self.title,
            "description": self.description,
            "type": self.type,
            "read": bool(self.read),
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "actionUrl": self.action_url,
            "actionLabel": self.action_label,
            "relatedEntity": None,
        }
        if self.related_entity_type:
            data["relatedEntity"] = {
                "type": self.related_entity_type,
                "id": self.related_entity_id,
                "name": self.related_entity_name,
            }
        return data
