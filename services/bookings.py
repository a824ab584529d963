import random
from datetime import date, datetime

from flask import current_app
from sqlalchemy import func, or_

from extensions import db
from errors import NotFound, Conflict
from models import Booking, Destination, Guide, User
from models.booking import BOOKING_STATUSES
from services import notifications, month_start

BOOKING_NUMBER_ATTEMPTS = 5


def generate_booking_number(today=None, rng=random):
    """B-YYYYMMDD-XXXX with a random four digit suffix."""
    today = today or date.today()
    return f"B-{today:%Y%m%d}-{rng.randint(1000, 9999)}"


def _unused_booking_number():
    for _ in range(BOOKING_NUMBER_ATTEMPTS):
        number = generate_booking_number()
        if not Booking.query.filter_by(booking_number=number).first():
            return number
    raise Conflict("Could not allocate a booking number, please retry")


def summarize(booking):
    """Flattened booking view used by the dashboard widgets."""
    customer = booking.customer
    destination = booking.destination
    data = {
        "id": booking.id,
        "bookingNumber": booking.booking_number,
        "status": booking.status,
        "customer": {
            "id": customer.id,
            "name": customer.name,
            "email": customer.email,
            "avatar": customer.avatar,
        },
        "destination": {
            "id": destination.id,
            "name": destination.name,
            "location": destination.country,
        },
        "dates": {
            "startDate": booking.start_date.isoformat(),
            "endDate": booking.end_date.isoformat(),
        },
        "duration": booking.duration,
        "travelers": booking.total_travelers,
        "totalAmount": float(booking.total_amount or 0),
        "currency": booking.currency,
        "createdAt": booking.created_at.isoformat() if booking.created_at else None,
    }
    if booking.guide is not None:
        data["guide"] = {"id": booking.guide.id, "name": booking.guide.name}
    return data


def recent_bookings(limit=5):
    bookings = (
        Booking.query
        .order_by(Booking.created_at.desc(), Booking.id.desc())
        .limit(limit)
        .all()
    )
    return [summarize(b) for b in bookings]


def list_bookings(filters):
    query = Booking.query.join(User, Booking.customer_id == User.id).join(
        Destination, Booking.destination_id == Destination.id
    )

    if filters.search:
        pattern = f"%{filters.search}%"
        query = query.filter(or_(
            Booking.booking_number.ilike(pattern),
            User.name.ilike(pattern),
            Destination.name.ilike(pattern),
        ))
    if filters.status:
        query = query.filter(Booking.status == filters.status)
    if filters.customer_id is not None:
        query = query.filter(Booking.customer_id == filters.customer_id)
    if filters.destination_id is not None:
        query = query.filter(Booking.destination_id == filters.destination_id)
    if filters.guide_id is not None:
        query = query.filter(Booking.guide_id == filters.guide_id)
    if filters.start_date:
        query = query.filter(Booking.start_date >= filters.start_date)
    if filters.end_date:
        query = query.filter(Booking.end_date <= filters.end_date)

    total = query.count()
    bookings = (
        query.order_by(Booking.created_at.desc(), Booking.id.desc())
        .offset(filters.offset)
        .limit(filters.limit)
        .all()
    )
    return {"bookings": [summarize(b) for b in bookings], "total": total}


def get_booking(booking_id):
    booking = db.session.get(Booking, booking_id)
    if booking is None:
        raise NotFound("Booking not found")
    return booking


def _guide_is_busy(guide_id, start, end):
    overlapping = Booking.query.filter(
        Booking.guide_id == guide_id,
        Booking.status.in_(["pending", "confirmed"]),
        Booking.start_date <= end,
        Booking.end_date >= start,
    )
    return db.session.query(overlapping.exists()).scalar()


def create_booking(customer, payload):
    destination = db.session.get(Destination, payload.destination_id)
    if destination is None:
        raise NotFound("Destination not found")

    guide = None
    if payload.guide_id is not None:
        guide = db.session.get(Guide, payload.guide_id)
        if guide is None:
            raise NotFound("Guide not found")
        if _guide_is_busy(guide.id, payload.start_date, payload.end_date):
            raise Conflict("Selected guide is not available for these dates")

    duration = payload.duration or (payload.end_date - payload.start_date).days + 1

    booking = Booking(
        booking_number=_unused_booking_number(),
        customer_id=customer.id,
        destination_id=destination.id,
        guide_id=guide.id if guide else None,
        start_date=payload.start_date,
        end_date=payload.end_date,
        duration=duration,
        total_travelers=payload.total_travelers,
        total_amount=payload.total_amount,
        currency=payload.currency.upper(),
        status=payload.status,
    )
    db.session.add(booking)
    db.session.flush()

    notifications.notify(
        customer.id,
        title="Booking received",
        description=f"Your booking {booking.booking_number} for {destination.name} has been received.",
        type="success",
        action_url=f"/dashboard/bookings/{booking.id}",
        action_label="View Booking",
        related_entity=("booking", booking.id, destination.name),
    )
    db.session.commit()

    current_app.logger.info("Booking %s created by user %s", booking.booking_number, customer.id)
    return booking


def update_booking_status(booking_id, status):
    booking = get_booking(booking_id)
    if booking.status == status:
        return booking

    booking.status = status
    notifications.notify(
        booking.customer_id,
        title="Booking updated",
        description=f"Booking {booking.booking_number} is now {status}.",
        type="error" if status in ("cancelled", "refunded") else "info",
        action_url=f"/dashboard/bookings/{booking.id}",
        action_label="View Booking",
        related_entity=("booking", booking.id, booking.destination.name),
    )
    db.session.commit()

    current_app.logger.info("Booking %s set to %s", booking.booking_number, status)
    return booking


def booking_stats(now=None):
    now = now or datetime.utcnow()
    this_month = datetime.combine(month_start(now.date()), datetime.min.time())
    last_month = datetime.combine(month_start(now.date(), 1), datetime.min.time())

    total = Booking.query.count()

    status_counts = {status: 0 for status in BOOKING_STATUSES}
    for status, count in db.session.query(Booking.status, func.count(Booking.id)).group_by(Booking.status):
        status_counts[status] = count

    bookings_this_month = Booking.query.filter(Booking.created_at >= this_month).count()
    bookings_last_month = Booking.query.filter(
        Booking.created_at >= last_month, Booking.created_at < this_month
    ).count()
    if bookings_last_month:
        growth = (bookings_this_month - bookings_last_month) / bookings_last_month * 100
    else:
        growth = 100.0 if bookings_this_month else 0.0

    revenue, travelers = db.session.query(
        func.sum(Booking.total_amount), func.sum(Booking.total_travelers)
    ).one()
    revenue = float(revenue or 0)
    travelers = int(travelers or 0)

    top_destinations = (
        db.session.query(Destination.id, Destination.name, func.count(Booking.id))
        .join(Booking, Booking.destination_id == Destination.id)
        .group_by(Destination.id, Destination.name)
        .order_by(func.count(Booking.id).desc())
        .limit(5)
        .all()
    )

    return {
        "totalBookings": total,
        "statusCounts": status_counts,
        "bookingsThisMonth": bookings_this_month,
        "bookingsLastMonth": bookings_last_month,
        "monthlyGrowthRate": round(growth, 2),
        "totalRevenue": revenue,
        "averageBookingValue": round(revenue / total, 2) if total else 0,
        "totalTravelers": travelers,
        "avgTravelersPerBooking": round(travelers / total, 2) if total else 0,
        "topDestinations": [
            {"id": d_id, "name": name, "bookings": count} for d_id, name, count in top_destinations
        ],
    }
