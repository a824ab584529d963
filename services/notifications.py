"""
Notification service

Every operation is keyed by the recipient's user id. Lookups that mutate or
delete a row always filter on both the notification id and the recipient id,
so a user can never touch another user's notifications.
"""

from sqlalchemy import or_

from extensions import db
from errors import NotFound
from models import Notification, User


def notify(recipient_id, title, description, type="info", action_url=None,
           action_label=None, related_entity=None):
    """Queue a notification on the current session without committing.

    ``related_entity`` is an optional ``(type, id, name)`` triple.
    """
    notif = Notification(
        recipient_id=recipient_id,
        title=title,
        description=description,
        type=type,
        read=False,
        action_url=action_url,
        action_label=action_label,
    )
    if related_entity:
        entity_type, entity_id, entity_name = related_entity
        notif.related_entity_type = entity_type
        notif.related_entity_id = str(entity_id)
        notif.related_entity_name = entity_name
    db.session.add(notif)
    return notif


def list_notifications(recipient_id, filters=None):
    query = Notification.query.filter_by(recipient_id=recipient_id)

    if filters is not None:
        if filters.type and filters.type != "all":
            query = query.filter(Notification.type == filters.type)
        if filters.status == "read":
            query = query.filter(Notification.read.is_(True))
        elif filters.status == "unread":
            query = query.filter(Notification.read.is_(False))
        if filters.search:
            pattern = f"%{filters.search}%"
            query = query.filter(or_(
                Notification.title.ilike(pattern),
                Notification.description.ilike(pattern),
                Notification.related_entity_name.ilike(pattern),
            ))

    total = query.count()
    query = query.order_by(Notification.created_at.desc(), Notification.id.desc())
    if filters is not None:
        query = query.offset(filters.offset).limit(filters.limit)
    return {"notifications": query.all(), "total": total}


def create_notification(recipient_id, payload):
    if db.session.get(User, recipient_id) is None:
        raise NotFound("Recipient not found")

    related = None
    if payload.related_entity is not None:
        entity = payload.related_entity
        related = (entity.type, entity.id, entity.name)

    notif = notify(
        recipient_id,
        title=payload.title,
        description=payload.description,
        type=payload.type,
        action_url=payload.action_url,
        action_label=payload.action_label,
        related_entity=related,
    )
    db.session.commit()
    return notif


def _owned(notification_id, recipient_id):
    notif = Notification.query.filter_by(id=notification_id, recipient_id=recipient_id).first()
    if notif is None:
        raise NotFound("Notification not found")
    return notif


def mark_read(notification_id, recipient_id, read=True):
    notif = _owned(notification_id, recipient_id)
    notif.read = read
    db.session.commit()
    return notif


def mark_all_read(recipient_id):
    updated = (
        Notification.query
        .filter_by(recipient_id=recipient_id, read=False)
        .update({"read": True}, synchronize_session=False)
    )
    db.session.commit()
    return updated


def unread_count(recipient_id):
    return Notification.query.filter_by(recipient_id=recipient_id, read=False).count()


def delete_notification(notification_id, recipient_id):
    notif = _owned(notification_id, recipient_id)
    db.session.delete(notif)
    db.session.commit()
