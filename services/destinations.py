from flask import current_app
from sqlalchemy import func, or_

from extensions import db
from errors import NotFound, ValidationError
from models import Destination, Review


def list_destinations(filters):
    query = Destination.query

    if filters.search:
        pattern = f"%{filters.search}%"
        query = query.filter(or_(
            Destination.name.ilike(pattern),
            Destination.description.ilike(pattern),
            Destination.country.ilike(pattern),
            Destination.region.ilike(pattern),
        ))
    if filters.country:
        query = query.filter(Destination.country == filters.country)
    if filters.difficulty:
        query = query.filter(Destination.difficulty == filters.difficulty)
    if filters.featured is not None:
        query = query.filter(Destination.featured == filters.featured)
    if filters.min_rating is not None:
        query = query.filter(Destination.rating >= filters.min_rating)
    if filters.min_price is not None:
        query = query.filter(Destination.price_amount >= filters.min_price)
    if filters.max_price is not None:
        query = query.filter(Destination.price_amount <= filters.max_price)

    total = query.count()
    destinations = (
        query.order_by(Destination.featured.desc(), Destination.rating.desc(), Destination.id)
        .offset(filters.offset)
        .limit(filters.limit)
        .all()
    )
    return {"destinations": [d.to_dict() for d in destinations], "total": total}


def get_destination(destination_id):
    destination = db.session.get(Destination, destination_id)
    if destination is None:
        raise NotFound("Destination not found")
    return destination


def create_destination(payload):
    destination = Destination(**payload.model_dump())
    db.session.add(destination)
    db.session.commit()
    current_app.logger.info("Destination %s created", destination.id)
    return destination


def update_destination(destination_id, payload):
    destination = get_destination(destination_id)
    for key, value in payload.model_dump(exclude_unset=True, exclude_none=True).items():
        setattr(destination, key, value)
    db.session.commit()
    return destination


def delete_destination(destination_id):
    """Remove a destination together with its bookings and reviews."""
    destination = get_destination(destination_id)
    db.session.delete(destination)
    db.session.commit()
    current_app.logger.info("Destination %s deleted", destination_id)


def list_countries():
    rows = db.session.query(Destination.country).distinct().all()
    return sorted(row[0] for row in rows if row[0])


def popular_destinations(limit=5):
    if isinstance(limit, bool) or not isinstance(limit, int) or limit < 1:
        raise ValidationError(details={"limit": ["limit must be a positive integer"]})

    return (
        Destination.query
        .order_by(Destination.rating.desc(), Destination.review_count.desc(), Destination.id)
        .limit(limit)
        .all()
    )


def destination_stats():
    total = Destination.query.count()
    featured = Destination.query.filter_by(featured=True).count()
    average_rating = db.session.query(func.avg(Destination.rating)).scalar() or 0

    top_rated = (
        Destination.query
        .filter(Destination.rating > 0)
        .order_by(Destination.rating.desc())
        .limit(5)
        .all()
    )
    most_reviewed = (
        Destination.query
        .order_by(Destination.review_count.desc())
        .limit(5)
        .all()
    )

    by_country = (
        db.session.query(Destination.country, func.count(Destination.id))
        .group_by(Destination.country)
        .all()
    )
    by_difficulty = (
        db.session.query(Destination.difficulty, func.count(Destination.id))
        .group_by(Destination.difficulty)
        .all()
    )

    def brief(d):
        return {
            "id": d.id,
            "name": d.name,
            "country": d.country,
            "rating": d.rating or 0,
            "reviewCount": d.review_count or 0,
        }

    return {
        "totalDestinations": total,
        "featuredCount": featured,
        "averageRating": round(float(average_rating), 2),
        "topRated": [brief(d) for d in top_rated],
        "mostReviewed": [brief(d) for d in most_reviewed],
        "countryBreakdown": [{"country": c, "count": n} for c, n in sorted(by_country)],
        "difficultyBreakdown": [
            {"difficulty": d, "count": n} for d, n in by_difficulty
        ],
    }


def update_destination_rating(destination_id):
    """Recompute rating and review count from the destination's reviews."""
    average, count = (
        db.session.query(func.avg(Review.rating), func.count(Review.id))
        .filter(Review.destination_id == destination_id)
        .one()
    )
    if not count:
        return

    destination = get_destination(destination_id)
    destination.rating = round(float(average), 2)
    destination.review_count = count
