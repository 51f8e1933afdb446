import base64
from decimal import Decimal
from io import BytesIO

import pytest

from studio.cli import seed_demo_vendor
from studio.extensions import db
from studio.models import AddOn, Client, ClientFeedback, Lead, Notification, Project, PromoCode, Transaction
from studio.models.base import utcnow


@pytest.fixture
def demo(app):
    vendor = seed_demo_vendor()
    drone = AddOn.owned_by(vendor.id).filter_by(name="Drone").one()
    gold = next(p for p in vendor.packages if p.name == "Paket Pernikahan Gold")
    return {"vendor": vendor, "drone": drone, "gold": gold}


def booking_payload(demo, **overrides):
    payload = {
        "package_id": demo["gold"].id,
        "selected_addon_ids": [demo["drone"].id],
        "client_name": "Budi Santoso",
        "email": "budi@example.com",
        "phone": "08123456789",
        "project_type": "Pernikahan",
        "location": "Bandung",
        "date": "2025-02-14",
        "promo_code": "disc10",
        "dp": "1000000",
        "dp_payment_ref": "TRX-778",
    }
    payload.update(overrides)
    return payload


def test_public_catalog_lists_packages_without_promo_codes(client, demo):
    response = client.get(f"/api/v1/public/{demo['vendor'].id}/packages")
    assert response.status_code == 200
    body = response.get_json()
    assert {p["name"] for p in body["packages"]} == {"Paket Pernikahan Gold", "Paket Prewedding"}
    assert {a["name"] for a in body["add_ons"]} == {"Drone", "Same Day Edit"}
    assert body["studio"]["company_name"] == "Vena Pictures"
    assert "promo_codes" not in body


def test_unknown_vendor_is_404(client, app):
    assert client.get("/api/v1/public/999/packages").status_code == 404


def test_quote_reports_promo_feedback(client, demo):
    url = f"/api/v1/public/{demo['vendor'].id}/quote"
    response = client.post(
        url,
        json={"package_id": demo["gold"].id, "selected_addon_ids": [demo["drone"].id], "promo_code": "DISC10"},
    )
    body = response.get_json()
    assert response.status_code == 200
    assert body["promo"]["feedback_kind"] == "success"
    assert Decimal(body["price"]["subtotal"]) == Decimal("5500000")
    assert Decimal(body["price"]["total"]) == Decimal("4950000")

    missing = client.post(url, json={"package_id": demo["gold"].id, "promo_code": "NOPE"}).get_json()
    assert missing["promo"]["message"] == "Kode promo tidak ditemukan."


def test_json_booking_creates_chain_and_notification(client, demo):
    vendor_id = demo["vendor"].id
    response = client.post(f"/api/v1/public/{vendor_id}/bookings", json=booking_payload(demo))

    assert response.status_code == 201
    body = response.get_json()
    assert body["payment_status"] == "DP Terbayar"
    assert Decimal(body["total_cost"]) == Decimal("4950000")
    assert Decimal(body["discount_amount"]) == Decimal("550000")

    assert Client.owned_by(vendor_id).count() == 1
    assert Project.owned_by(vendor_id).count() == 1
    assert Lead.owned_by(vendor_id).count() == 1
    assert Transaction.owned_by(vendor_id).count() == 1
    assert PromoCode.owned_by(vendor_id).filter_by(code="DISC10").one().usage_count == 1

    [note] = Notification.owned_by(vendor_id).all()
    assert note.title == "Booking baru"
    assert "Rp 4.950.000" in note.message


def test_repeated_booking_returns_the_same_project(client, demo):
    url = f"/api/v1/public/{demo['vendor'].id}/bookings"
    first = client.post(url, json=booking_payload(demo)).get_json()
    second = client.post(url, json=booking_payload(demo)).get_json()

    assert first["id"] == second["id"]
    assert Project.owned_by(demo["vendor"].id).count() == 1
    assert PromoCode.owned_by(demo["vendor"].id).filter_by(code="DISC10").one().usage_count == 1


def test_second_booking_with_same_email_and_date_is_stored(client, demo):
    vendor_id = demo["vendor"].id
    url = f"/api/v1/public/{vendor_id}/bookings"
    first = client.post(url, json=booking_payload(demo, dp="0", selected_addon_ids=[], location="Jakarta"))
    second = client.post(url, json=booking_payload(demo, dp="2000000", project_type="Lamaran"))

    assert first.status_code == 201
    assert second.status_code == 201
    assert first.get_json()["id"] != second.get_json()["id"]
    assert Project.owned_by(vendor_id).count() == 2
    [deposit] = Transaction.owned_by(vendor_id).all()
    assert deposit.project_id == second.get_json()["id"]
    assert deposit.amount == Decimal("2000000")


def test_exhausted_promo_books_at_full_price(client, demo):
    promo = PromoCode.owned_by(demo["vendor"].id).filter_by(code="DISC10").one()
    promo.usage_count = promo.max_usage
    promo.updated_at = utcnow()
    db.session.commit()

    response = client.post(f"/api/v1/public/{demo['vendor'].id}/bookings", json=booking_payload(demo))
    body = response.get_json()
    assert response.status_code == 201
    assert Decimal(body["total_cost"]) == Decimal("5500000")
    assert body["discount_amount"] is None


def test_multipart_booking_with_pdf_proof(client, demo):
    data = {name: str(value) for name, value in booking_payload(demo, promo_code="").items()}
    data["selected_addon_ids"] = str(demo["drone"].id)
    data["dp_proof"] = (BytesIO(b"%PDF-1.4\n%bukti\n"), "bukti.pdf")

    response = client.post(
        f"/api/v1/public/{demo['vendor'].id}/bookings", data=data, content_type="multipart/form-data"
    )

    assert response.status_code == 201
    project = Project.owned_by(demo["vendor"].id).one()
    assert project.dp_proof_url.startswith("data:application/pdf;base64,")
    assert project.total_cost == Decimal("5500000")


def test_json_booking_with_data_url_proof(client, demo):
    encoded = base64.b64encode(b"%PDF-1.4\n%bukti\n").decode("ascii")
    payload = booking_payload(demo, dp_proof=f"data:application/pdf;base64,{encoded}")

    response = client.post(f"/api/v1/public/{demo['vendor'].id}/bookings", json=payload)

    assert response.status_code == 201
    assert Project.owned_by(demo["vendor"].id).one().dp_proof_url.startswith("data:application/pdf")


def test_invalid_booking_writes_nothing(client, demo):
    vendor_id = demo["vendor"].id
    response = client.post(f"/api/v1/public/{vendor_id}/bookings", json=booking_payload(demo, phone=""))

    assert response.status_code == 400
    assert "Nomor telepon" in response.get_json()["error"]
    assert Client.owned_by(vendor_id).count() == 0

    bad_proof = booking_payload(demo, dp_proof="data:image/png;base64,aGVsbG8=")
    assert client.post(f"/api/v1/public/{vendor_id}/bookings", json=bad_proof).status_code == 400
    assert Project.owned_by(vendor_id).count() == 0


def test_unknown_package_is_404(client, demo):
    response = client.post(
        f"/api/v1/public/{demo['vendor'].id}/bookings", json=booking_payload(demo, package_id=99999)
    )
    assert response.status_code == 404


def test_public_lead_form(client, demo):
    vendor_id = demo["vendor"].id
    response = client.post(
        f"/api/v1/public/{vendor_id}/leads",
        json={
            "name": "Sari",
            "whatsapp": "0812000111",
            "event_type": "Prewedding",
            "event_date": "2025-03-01",
            "event_location": "Bali",
        },
    )

    assert response.status_code == 201
    lead = Lead.owned_by(vendor_id).one()
    assert lead.status == "Sedang Diskusi"
    assert lead.contact_channel == "Website"
    assert lead.notes.splitlines() == [
        "Jenis Acara: Prewedding",
        "Tanggal Acara: 01/03/2025",
        "Lokasi Acara: Bali",
    ]
    assert Notification.owned_by(vendor_id).one().title == "Prospek baru"


def test_public_feedback_form(client, demo):
    vendor_id = demo["vendor"].id
    url = f"/api/v1/public/{vendor_id}/feedback"

    assert client.post(url, json={"client_name": "Sari", "rating": 6}).status_code == 400

    response = client.post(url, json={"client_name": "Sari", "rating": 5, "feedback": "Mantap"})
    assert response.status_code == 201
    feedback = ClientFeedback.owned_by(vendor_id).one()
    assert feedback.satisfaction == "Sangat Puas"
    assert Notification.owned_by(vendor_id).one().title == "Feedback baru"


def test_client_portal_shows_projects(client, demo):
    client.post(f"/api/v1/public/{demo['vendor'].id}/bookings", json=booking_payload(demo))
    access_id = Client.owned_by(demo["vendor"].id).one().portal_access_id

    response = client.get(f"/api/v1/portal/client/{access_id}")
    body = response.get_json()
    assert response.status_code == 200
    assert body["client"]["name"] == "Budi Santoso"
    assert "portal_access_id" not in body["client"]
    assert [p["project_name"] for p in body["projects"]] == ["Acara Budi Santoso"]
    assert body["studio"]["company_name"] == "Vena Pictures"

    assert client.get("/api/v1/portal/client/unknown").status_code == 404


def test_health(client):
    assert client.get("/health").get_json() == {"status": "ok"}
