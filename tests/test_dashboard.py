import io

import pandas as pd

from conftest import make_guide


def test_overview(user_client, destination_id, guide_id):
    user_client.post("/bookings", json={
        "destinationId": destination_id,
        "guideId": guide_id,
        "startDate": "2025-10-01",
        "endDate": "2025-10-05",
        "totalAmount": 900,
    })

    resp = user_client.get("/dashboard")
    assert resp.status_code == 200

    body = resp.get_json()
    assert body["bookings"]["totalBookings"] == 1
    assert body["guides"]["totalGuides"] == 1
    assert body["totals"] == {"users": 1, "guides": 1, "destinations": 1}
    assert len(body["recentBookings"]) == 1


def test_overview_requires_login(client):
    assert client.get("/dashboard").status_code == 401


def test_export_is_admin_only(user_client):
    assert user_client.get("/dashboard/export").status_code == 403


def test_export_workbook(app, admin_client, user_client, destination_id, guide_id):
    make_guide(app, name="Maya Gurung", email="maya@guides.example.com", languages=["English"])
    user_client.post("/bookings", json={
        "destinationId": destination_id,
        "startDate": "2025-10-01",
        "endDate": "2025-10-05",
        "totalAmount": 900,
    })

    resp = admin_client.get("/dashboard/export")
    assert resp.status_code == 200
    assert resp.mimetype == "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
    assert "attachment" in resp.headers["Content-Disposition"]

    sheets = pd.read_excel(io.BytesIO(resp.data), sheet_name=None)
    assert list(sheets) == ["Summary", "Bookings", "Guides"]

    summary = dict(zip(sheets["Summary"]["Metric"], sheets["Summary"]["Value"]))
    assert summary["Total bookings"] == 1
    assert summary["Total guides"] == 2

    bookings = sheets["Bookings"]
    assert bookings.loc[0, "Destination"] == "Everest Base Camp"
    assert bookings.loc[0, "Customer"] == "Alice"
    assert list(sheets["Guides"]["Name"]) == ["Maya Gurung", "Pemba Sherpa"]
