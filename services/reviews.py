from datetime import datetime

from extensions import db
from errors import NotFound
from models import Review, Guide, Destination
from services.destinations import update_destination_rating
from services.guides import update_guide_rating

DEFAULT_AVATAR = "/avatars/default.png"


def review_status(verified, tags):
    if verified:
        return "approved"
    if "flagged" in (tags or []):
        return "flagged"
    return "pending"


def _iso(value):
    return value.isoformat() if value else None


def shape_review(review):
    is_guide = review.guide_id is not None
    if is_guide:
        entity_name = review.guide.name if review.guide else "Unknown Guide"
    else:
        entity_name = review.destination.name if review.destination else "Unknown Destination"

    trip_details = None
    if review.trip_start_date:
        trip_details = {
            "startDate": _iso(review.trip_start_date),
            "endDate": _iso(review.trip_end_date),
            "duration": review.trip_duration,
            "type": review.trip_type,
        }

    response_details = None
    if review.response_content:
        response_details = {
            "content": review.response_content,
            "date": _iso(review.response_date),
            "responderName": review.responder_name,
            "responderRole": review.responder_role,
            "responderId": review.responder_id,
        }

    return {
        "id": review.id,
        "type": "guide" if is_guide else "destination",
        "entityId": review.guide_id if is_guide else review.destination_id,
        "entityName": entity_name,
        "userName": review.author.name,
        "userAvatar": review.author.avatar or DEFAULT_AVATAR,
        "rating": review.rating,
        "title": review.title,
        "comment": review.content,
        "date": _iso(review.date),
        "status": review_status(review.verified, review.tags),
        "response": review.response_content,
        "photos": list(review.photos or []),
        "highlights": list(review.highlights or []),
        "tags": list(review.tags or []),
        "featured": bool(review.featured),
        "helpfulCount": review.helpful_count or 0,
        "unhelpfulCount": review.unhelpful_count or 0,
        "tripDetails": trip_details,
        "responseDetails": response_details,
    }


def _load(review_id):
    review = db.session.get(Review, review_id)
    if review is None:
        raise NotFound("Review not found")
    return review


def get_review(review_id):
    return shape_review(_load(review_id))


def list_reviews(filters):
    query = Review.query
    if filters.type == "guides":
        query = query.filter(Review.guide_id.isnot(None))
    elif filters.type == "destinations":
        query = query.filter(Review.destination_id.isnot(None))
    if filters.entity_id is not None:
        # guide and destination ids share a range, so match one column only
        if filters.entity_type == "guide":
            query = query.filter(Review.guide_id == filters.entity_id)
        else:
            query = query.filter(Review.destination_id == filters.entity_id)

    reviews = [shape_review(r) for r in query.order_by(Review.date.desc(), Review.id.desc()).all()]

    # status is derived, so it is filtered after shaping
    if filters.type == "flagged":
        reviews = [r for r in reviews if r["status"] == "flagged"]
    if filters.status:
        reviews = [r for r in reviews if r["status"] == filters.status]
    return reviews


def create_review(author, payload):
    if payload.guide_id is not None and db.session.get(Guide, payload.guide_id) is None:
        raise NotFound("Guide not found")
    if payload.destination_id is not None and db.session.get(Destination, payload.destination_id) is None:
        raise NotFound("Destination not found")

    review = Review(author_id=author.id, **payload.model_dump())
    db.session.add(review)
    db.session.flush()

    if review.guide_id is not None:
        update_guide_rating(review.guide_id)
    else:
        update_destination_rating(review.destination_id)
    db.session.commit()
    return review


def respond_to_review(review_id, responder, content, role="admin"):
    review = _load(review_id)
    review.response_content = content
    review.response_date = datetime.utcnow()
    review.responder_name = responder.name
    review.responder_role = role
    review.responder_id = responder.id
    db.session.commit()
    return shape_review(review)


def set_verified(review_id, verified):
    review = _load(review_id)
    review.verified = verified
    db.session.commit()
    return shape_review(review)
