import threading
from datetime import date
from decimal import Decimal

import pytest

from studio.constants import LeadStatus, PaymentStatus, TransactionType
from studio.errors import GENERIC_BOOKING_FAILURE, BookingError, DuplicateSubmissionError, StoreError, ValidationError
from studio.services.booking_service import BookingService, BookingSubmission
from studio.services.notification_service import MemoryNotificationRepository, NotificationService
from studio.services.proof_service import UploadedProof
from studio.store import MemoryRecordStore
from studio.submission_guard import SubmissionGuard

VENDOR = 1


def submission(**overrides):
    payload = {
        "client_name": "Budi Santoso",
        "email": "budi@example.com",
        "phone": "08123456789",
        "project_type": "Pernikahan",
        "location": "Jakarta",
        "date": "2024-09-14",
        "promo_code": "DISC10",
        "dp": "1000000",
        "dp_payment_ref": "TRX-001",
    }
    payload.update(overrides)
    return BookingSubmission.from_payload(payload)


def build_service(store, guard=None):
    notifications = NotificationService(MemoryNotificationRepository())
    return BookingService(store, guard or SubmissionGuard(), notifications=notifications)


def promo_row(store, code):
    return next(row for row in store.tables["promo_codes"] if row["code"] == code)


def test_disc10_booking_writes_one_full_chain(memory_store):
    service = build_service(memory_store)
    booking = submission(selected_addon_ids=[str(memory_store.drone["id"])])

    project = service.submit_booking(VENDOR, booking, memory_store.package)

    assert project["total_cost"] == Decimal("4950000.00")
    assert project["discount_amount"] == Decimal("550000.00")
    assert project["amount_paid"] == Decimal("1000000.00")
    assert project["payment_status"] == PaymentStatus.DP_TERBAYAR
    assert project["project_name"] == "Acara Budi Santoso"
    assert project["notes"] == "Referensi Pembayaran DP: TRX-001"
    assert project["add_ons"] == [{"id": memory_store.drone["id"], "name": "Drone", "price": "500000"}]
    assert project["promo_code_id"] == promo_row(memory_store, "DISC10")["id"]

    tables = memory_store.tables
    assert len(tables["clients"]) == 1
    assert len(tables["projects"]) == 1
    assert len(tables["leads"]) == 1
    assert len(tables["transactions"]) == 1
    assert promo_row(memory_store, "DISC10")["usage_count"] == 1

    client = tables["clients"][0]
    assert client["status"] == "Aktif"
    assert client["client_type"] == "Langsung"
    assert client["portal_access_id"]

    lead = tables["leads"][0]
    assert lead["status"] == LeadStatus.CONVERTED
    assert lead["notes"] == f"Dikonversi dari formulir booking. Klien ID: {client['id']}"

    transaction = tables["transactions"][0]
    assert transaction["type"] == TransactionType.INCOME
    assert transaction["amount"] == Decimal("1000000.00")
    assert transaction["description"] == "DP Proyek Acara Budi Santoso"
    assert transaction["project_id"] == project["id"]

    entries = service.notifications.list()
    assert [entry.title for entry in entries] == ["Booking baru"]
    assert "Rp 4.950.000" in entries[0].message


def test_expired_code_books_without_discount(memory_store):
    service = build_service(memory_store)

    project = service.submit_booking(VENDOR, submission(promo_code="EXPIRED5"), memory_store.package)

    assert project["total_cost"] == Decimal("5000000.00")
    assert project["discount_amount"] is None
    assert project["promo_code_id"] is None
    assert promo_row(memory_store, "EXPIRED5")["usage_count"] == 0


def test_no_deposit_means_no_transaction(memory_store):
    service = build_service(memory_store)

    project = service.submit_booking(VENDOR, submission(dp="", promo_code=""), memory_store.package)

    assert project["payment_status"] == PaymentStatus.BELUM_BAYAR
    assert memory_store.tables["transactions"] == []


def test_proof_is_stored_as_data_uri(memory_store):
    service = build_service(memory_store)
    booking = submission()
    booking.proof = UploadedProof(filename="bukti.pdf", mimetype="application/pdf", content=b"%PDF-1.4 test")

    project = service.submit_booking(VENDOR, booking, memory_store.package)

    assert project["dp_proof_url"].startswith("data:application/pdf;base64,")


class FailingLeadStore(MemoryRecordStore):
    def create_lead(self, vendor_id, payload):
        raise StoreError("leads table unavailable")


class FailingPromoStore(MemoryRecordStore):
    def update_promo_code_usage(self, promo_code_id):
        raise StoreError("promo update rejected")


def copy_catalog(source, target):
    for table in ("packages", "add_ons", "promo_codes"):
        target.tables[table] = [dict(row) for row in source.tables[table]]


def test_failed_write_is_compensated(memory_store):
    store = FailingLeadStore()
    copy_catalog(memory_store, store)
    service = build_service(store)

    with pytest.raises(BookingError) as excinfo:
        service.submit_booking(VENDOR, submission(), memory_store.package)

    assert excinfo.value.message == GENERIC_BOOKING_FAILURE
    assert store.tables["clients"] == []
    assert store.tables["projects"] == []
    assert store.tables["transactions"] == []
    # Usage is spent even though the booking was rolled back.
    assert promo_row(store, "DISC10")["usage_count"] == 1
    assert service.notifications.list() == []


def test_promo_failure_aborts_before_any_write(memory_store):
    store = FailingPromoStore()
    copy_catalog(memory_store, store)
    service = build_service(store)

    with pytest.raises(BookingError):
        service.submit_booking(VENDOR, submission(), memory_store.package)

    for table in ("clients", "projects", "leads", "transactions"):
        assert store.tables[table] == []


def test_resubmitting_a_completed_booking_returns_the_same_project(memory_store):
    service = build_service(memory_store)

    first = service.submit_booking(VENDOR, submission(), memory_store.package)
    second = service.submit_booking(VENDOR, submission(), memory_store.package)

    assert first["id"] == second["id"]
    assert len(memory_store.tables["clients"]) == 1
    assert len(memory_store.tables["projects"]) == 1
    assert promo_row(memory_store, "DISC10")["usage_count"] == 1


def test_submission_already_in_flight_is_rejected(memory_store):
    guard = SubmissionGuard()
    service = build_service(memory_store, guard)

    with guard.claim("key-1"):
        with pytest.raises(DuplicateSubmissionError):
            service.submit_booking(VENDOR, submission(submission_key="key-1"), memory_store.package)

    assert memory_store.tables["projects"] == []
    assert not guard.is_in_flight("key-1")


class SlowClientStore(MemoryRecordStore):
    def __init__(self):
        super().__init__()
        self.entered = threading.Event()
        self.release = threading.Event()

    def create_client(self, vendor_id, payload):
        self.entered.set()
        self.release.wait(timeout=5)
        return super().create_client(vendor_id, payload)


def test_concurrent_double_submit_creates_one_chain(memory_store):
    store = SlowClientStore()
    copy_catalog(memory_store, store)
    service = build_service(store)
    results = []

    worker = threading.Thread(
        target=lambda: results.append(service.submit_booking(VENDOR, submission(), memory_store.package))
    )
    worker.start()
    assert store.entered.wait(timeout=5)

    with pytest.raises(DuplicateSubmissionError):
        service.submit_booking(VENDOR, submission(), memory_store.package)

    store.release.set()
    worker.join(timeout=5)

    assert len(results) == 1
    assert len(store.tables["clients"]) == 1
    assert len(store.tables["projects"]) == 1


def test_submission_validation():
    with pytest.raises(ValidationError):
        submission(client_name="  ")
    with pytest.raises(ValidationError):
        submission(email="bukan-email")
    with pytest.raises(ValidationError):
        submission(dp="abc")
    with pytest.raises(ValidationError):
        submission(dp="-10")

    parsed = submission(selected_addon_ids="3, 4", date="")
    assert parsed.selected_addon_ids == ["3", "4"]
    assert parsed.date == date.today()


def test_derived_key_is_stable_per_vendor(memory_store):
    booking = submission()
    first = BookingService.derive_submission_key(VENDOR, memory_store.package, booking)
    assert first == BookingService.derive_submission_key(VENDOR, memory_store.package, submission())
    assert first != BookingService.derive_submission_key(2, memory_store.package, booking)
    changes = ({"dp": "2000000"}, {"location": "Bandung"}, {"selected_addon_ids": "7"}, {"dp_payment_ref": "TRX-002"})
    for change in changes:
        assert first != BookingService.derive_submission_key(VENDOR, memory_store.package, submission(**change))
    assert first.startswith("auto-")


def test_different_bookings_on_the_same_day_are_both_stored(memory_store):
    service = build_service(memory_store)

    first = service.submit_booking(VENDOR, submission(dp="0", promo_code=""), memory_store.package)
    second = service.submit_booking(
        VENDOR,
        submission(
            dp="2000000",
            promo_code="",
            location="Bandung",
            project_type="Lamaran",
            selected_addon_ids=[str(memory_store.drone["id"])],
        ),
        memory_store.package,
    )

    assert first["id"] != second["id"]
    assert second["location"] == "Bandung"
    assert len(memory_store.tables["projects"]) == 2
    [deposit] = memory_store.tables["transactions"]
    assert deposit["project_id"] == second["id"]
    assert deposit["amount"] == Decimal("2000000.00")
