import io
from datetime import datetime

import pandas as pd
from flask import Blueprint, jsonify, send_file
from flask_login import login_required

from models import Booking, Destination, Guide, User
from security import admin_required
from services import bookings as booking_service
from services import guides as guide_service

dashboard_bp = Blueprint("dashboard", __name__)

XLSX_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


@dashboard_bp.route("")
@login_required
def overview():
    return jsonify({
        "bookings": booking_service.booking_stats(),
        "guides": guide_service.guide_stats(),
        "totals": {
            "users": User.query.count(),
            "guides": Guide.query.count(),
            "destinations": Destination.query.count(),
        },
        "recentBookings": booking_service.recent_bookings(5),
    })


# Excel report of bookings and guides
@dashboard_bp.route("/export")
@login_required
@admin_required
def export_excel():
    stats = booking_service.booking_stats()

    df_summary = pd.DataFrame([
        {"Metric": "Total users", "Value": User.query.count()},
        {"Metric": "Total guides", "Value": Guide.query.count()},
        {"Metric": "Total destinations", "Value": Destination.query.count()},
        {"Metric": "Total bookings", "Value": stats["totalBookings"]},
        {"Metric": "Bookings this month", "Value": stats["bookingsThisMonth"]},
        {"Metric": "Total revenue", "Value": stats["totalRevenue"]},
        {"Metric": "Average booking value", "Value": stats["averageBookingValue"]},
    ])

    bookings = Booking.query.order_by(Booking.created_at.desc(), Booking.id.desc()).all()
    df_bookings = pd.DataFrame([{
        "Booking number": b.booking_number,
        "Customer": b.customer.name,
        "Email": b.customer.email,
        "Destination": b.destination.name,
        "Guide": b.guide.name if b.guide else "",
        "Start date": b.start_date.strftime("%Y-%m-%d"),
        "End date": b.end_date.strftime("%Y-%m-%d"),
        "Travelers": b.total_travelers,
        "Amount": float(b.total_amount or 0),
        "Currency": b.currency,
        "Status": b.status,
        "Created": b.created_at.strftime("%Y-%m-%d") if b.created_at else "",
    } for b in bookings], columns=[
        "Booking number", "Customer", "Email", "Destination", "Guide", "Start date",
        "End date", "Travelers", "Amount", "Currency", "Status", "Created",
    ])

    guides = Guide.query.order_by(Guide.name).all()
    df_guides = pd.DataFrame([{
        "Name": g.name,
        "Email": g.email,
        "Languages": ", ".join(g.languages or []),
        "Specialties": ", ".join(g.specialties or []),
        "Rating": g.rating or 0,
        "Reviews": g.review_count or 0,
        "Hourly rate": float(g.hourly_rate or 0),
        "Availability": g.availability,
    } for g in guides], columns=[
        "Name", "Email", "Languages", "Specialties", "Rating", "Reviews",
        "Hourly rate", "Availability",
    ])

    output = io.BytesIO()
    with pd.ExcelWriter(output, engine="xlsxwriter") as writer:
        df_summary.to_excel(writer, index=False, sheet_name="Summary")
        df_bookings.to_excel(writer, index=False, sheet_name="Bookings")
        df_guides.to_excel(writer, index=False, sheet_name="Guides")

        workbook = writer.book
        worksheet = writer.sheets["Summary"]
        header_format = workbook.add_format({"bold": True, "bg_color": "#CCE5FF", "border": 1})
        for col_num, value in enumerate(df_summary.columns.values):
            worksheet.write(0, col_num, value, header_format)

    output.seek(0)
    filename = f"dashboard_{datetime.now().strftime('%Y-%m-%d_%H-%M')}.xlsx"

    return send_file(
        output,
        as_attachment=True,
        download_name=filename,
        mimetype=XLSX_MIMETYPE,
    )
