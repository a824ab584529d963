from datetime import date

from flask import current_app
from sqlalchemy import func, or_

from extensions import db
from errors import NotFound, Conflict, ValidationError
from models import Guide, Tour, Booking, Review
from services import month_start


def sorted_unique(lists):
    """Flatten a collection of lists into a sorted list without duplicates."""
    values = set()
    for items in lists:
        values.update(item for item in (items or []) if item)
    return sorted(values)


def get_guide(guide_id):
    guide = db.session.get(Guide, guide_id)
    if guide is None:
        raise NotFound("Guide not found")
    return guide


def list_guides(filters):
    query = Guide.query

    if filters.search:
        pattern = f"%{filters.search}%"
        query = query.filter(or_(Guide.name.ilike(pattern), Guide.bio.ilike(pattern)))
    if filters.availability:
        query = query.filter(Guide.availability == filters.availability)
    if filters.min_rating is not None:
        query = query.filter(Guide.rating >= filters.min_rating)

    guides = query.order_by(Guide.rating.desc(), Guide.experience_years.desc(), Guide.id).all()

    # list columns are JSON, so membership is checked here rather than in SQL
    if filters.language:
        guides = [g for g in guides if filters.language in (g.languages or [])]
    if filters.specialty:
        guides = [g for g in guides if filters.specialty in (g.specialties or [])]

    total = len(guides)
    page = guides[filters.offset:filters.offset + filters.limit]
    return {"guides": [g.to_dict() for g in page], "total": total}


def create_guide(payload):
    if Guide.query.filter_by(email=payload.email).first():
        raise Conflict("A guide with this email already exists")

    guide = Guide(**payload.model_dump())
    db.session.add(guide)
    db.session.commit()
    current_app.logger.info("Guide %s created", guide.id)
    return guide


def update_guide(guide_id, payload):
    guide = get_guide(guide_id)
    changes = payload.model_dump(exclude_unset=True, exclude_none=True)

    email = changes.get("email")
    if email and email != guide.email and Guide.query.filter_by(email=email).first():
        raise Conflict("A guide with this email already exists")

    for key, value in changes.items():
        setattr(guide, key, value)
    db.session.commit()
    current_app.logger.info("Guide %s updated", guide_id)
    return guide


def delete_guide(guide_id):
    guide = get_guide(guide_id)
    db.session.delete(guide)
    db.session.commit()
    current_app.logger.info("Guide %s deleted", guide_id)


def languages_across_guides():
    return sorted_unique(row[0] for row in db.session.query(Guide.languages).all())


def specialties_across_guides():
    return sorted_unique(row[0] for row in db.session.query(Guide.specialties).all())


def top_rated_guides(limit=5):
    return (
        Guide.query
        .filter(Guide.rating >= 4.0)
        .order_by(Guide.rating.desc(), Guide.id)
        .limit(limit)
        .all()
    )


def guide_stats(today=None):
    today = today or date.today()
    this_month = month_start(today)
    last_month = month_start(today, 1)

    counts = dict(
        db.session.query(Guide.availability, func.count(Guide.id))
        .group_by(Guide.availability)
        .all()
    )
    average_rating, total_reviews = db.session.query(
        func.avg(Guide.rating), func.sum(Guide.review_count)
    ).one()

    guided = Booking.query.filter(Booking.guide_id.isnot(None))
    tours_this_month = guided.filter(
        Booking.start_date >= this_month, Booking.start_date <= today
    ).count()
    tours_last_month = guided.filter(
        Booking.start_date >= last_month, Booking.start_date < this_month
    ).count()

    change = 0
    if tours_last_month:
        change = round((tours_this_month - tours_last_month) / tours_last_month * 100)

    return {
        "totalGuides": sum(counts.values()),
        "activeGuides": counts.get("available", 0),
        "onLeaveGuides": counts.get("partially_available", 0),
        "inactiveGuides": counts.get("unavailable", 0),
        "averageRating": round(float(average_rating or 0), 2),
        "totalReviews": int(total_reviews or 0),
        "toursThisMonth": tours_this_month,
        "changeFromLastMonth": change,
    }


def update_guide_rating(guide_id):
    """Recompute rating and review count from the guide's reviews."""
    average, count = (
        db.session.query(func.avg(Review.rating), func.count(Review.id))
        .filter(Review.guide_id == guide_id)
        .one()
    )
    if not count:
        return

    guide = get_guide(guide_id)
    guide.rating = round(float(average), 2)
    guide.review_count = count


# ----------------------------
# Schedules
# ----------------------------

def list_schedules(guide_id, filters):
    query = Tour.query.filter_by(guide_id=guide_id)
    if filters.status:
        query = query.filter_by(status=filters.status)
    return query.order_by(Tour.start_date, Tour.id).all()


def get_schedule(guide_id, schedule_id):
    tour = Tour.query.filter_by(id=schedule_id, guide_id=guide_id).first()
    if tour is None:
        raise NotFound("Schedule not found")
    return tour


def create_schedule(guide_id, payload):
    get_guide(guide_id)

    tour = Tour(guide_id=guide_id, **payload.model_dump())
    db.session.add(tour)
    db.session.commit()
    current_app.logger.info("Schedule %s created for guide %s", tour.id, guide_id)
    return tour


def update_schedule(guide_id, schedule_id, payload):
    tour = get_schedule(guide_id, schedule_id)
    changes = payload.model_dump(exclude_unset=True, exclude_none=True)

    start = changes.get("start_date", tour.start_date)
    end = changes.get("end_date", tour.end_date)
    if end < start:
        raise ValidationError(details={"endDate": ["endDate must be on or after startDate"]})

    for key, value in changes.items():
        setattr(tour, key, value)
    db.session.commit()
    return tour


def delete_schedule(guide_id, schedule_id):
    tour = get_schedule(guide_id, schedule_id)
    db.session.delete(tour)
    db.session.commit()
