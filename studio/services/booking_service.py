import hashlib
import logging
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Optional

from studio.constants import (
    DP_CATEGORY,
    DP_METHOD,
    PROJECT_STATUS_CONFIRMED,
    BookingStatus,
    ClientStatus,
    ClientType,
    ContactChannel,
    LeadStatus,
    TransactionType,
)
from studio.errors import BookingError, DuplicateSubmissionError
from studio.extensions import submission_guard
from studio.formatting import format_currency
from studio.models.base import utcnow
from studio.services import pricing
from studio.services.notification_service import NotificationService
from studio.services.proof_service import ProofService, UploadedProof
from studio.store import SqlRecordStore
from studio.validators import clean_text, parse_amount, parse_date, parse_id_list, require, validate_email

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")
REQUIRED_FIELDS = {
    "client_name": "Nama lengkap",
    "email": "Email",
    "phone": "Nomor telepon",
    "project_type": "Jenis acara",
    "location": "Lokasi",
}


@dataclass
class BookingSubmission:
    client_name: str
    email: str
    phone: str
    project_type: str
    location: str
    date: date
    instagram: str = ""
    selected_addon_ids: list = field(default_factory=list)
    promo_code: str = ""
    dp: Decimal = Decimal("0")
    dp_payment_ref: str = ""
    proof: Optional[UploadedProof] = None
    submission_key: Optional[str] = None

    @classmethod
    def from_payload(cls, payload, proof=None):
        """Validate raw form/JSON input. Raises ValidationError before anything is written."""
        values = require(payload, REQUIRED_FIELDS)
        values["email"] = validate_email(values["email"])

        return cls(
            date=parse_date(payload.get("date"), "Tanggal acara"),
            instagram=clean_text(payload.get("instagram")),
            selected_addon_ids=parse_id_list(payload.get("selected_addon_ids")),
            promo_code=clean_text(payload.get("promo_code")),
            dp=parse_amount(payload.get("dp"), "Jumlah DP"),
            dp_payment_ref=clean_text(payload.get("dp_payment_ref")),
            proof=proof,
            submission_key=clean_text(payload.get("submission_key")) or None,
            **values,
        )


class BookingService:
    """Turns one public booking submission into a client/project/lead/transaction chain.

    Writes go through the injected record store one at a time, each using ids
    produced by the previous one. When a write fails, the records already
    created for this submission are deleted again in reverse order and a
    single generic BookingError is raised. Promo usage is never given back.
    """

    def __init__(self, store, guard, notifications=None, locale="id-ID", currency="IDR"):
        self.store = store
        self.guard = guard
        self.notifications = notifications
        self.locale = locale
        self.currency = currency

    def quote(self, vendor_id, package, selected_addon_ids, promo_code):
        return pricing.quote(
            package,
            self.store.get_public_addons(vendor_id),
            selected_addon_ids,
            self.store.get_public_promo_codes(vendor_id),
            promo_code,
            locale=self.locale,
            currency=self.currency,
        )

    @classmethod
    def for_vendor(cls, vendor_id, profile):
        return cls(
            SqlRecordStore(),
            submission_guard,
            notifications=NotificationService.for_vendor(vendor_id, profile=profile),
            locale=profile.currency_locale,
            currency=profile.currency_code,
        )

    @staticmethod
    def derive_submission_key(vendor_id, package, submission):
        """Fingerprint of everything the customer sent; only a byte-identical resubmit shares it."""
        proof_digest = hashlib.sha256(submission.proof.content).hexdigest() if submission.proof else ""
        raw = "|".join(
            [
                str(vendor_id),
                str(package["id"]),
                submission.client_name.casefold(),
                submission.email.lower(),
                submission.phone,
                submission.instagram,
                submission.project_type,
                submission.location,
                submission.date.isoformat(),
                ",".join(sorted(str(addon_id) for addon_id in submission.selected_addon_ids)),
                submission.promo_code.upper(),
                str(submission.dp.quantize(CENT)),
                submission.dp_payment_ref,
                proof_digest,
            ]
        )
        return "auto-" + hashlib.sha256(raw.encode("utf-8")).hexdigest()[:40]

    def submit_booking(self, vendor_id, submission, package):
        key = submission.submission_key or self.derive_submission_key(vendor_id, package, submission)

        try:
            with self.guard.claim(key):
                existing = self.store.find_project_by_submission_key(vendor_id, key)
                if existing is not None:
                    logger.info("Booking %s already stored as project %s", key, existing["id"])
                    return existing
                project = self._write_chain(vendor_id, submission, package, key)
        except (BookingError, DuplicateSubmissionError):
            raise
        except Exception as exc:
            logger.exception("Booking lookup failed for vendor %s", vendor_id)
            raise BookingError() from exc

        self._notify(project, package)
        return project

    def _write_chain(self, vendor_id, submission, package, key):
        created = []
        try:
            catalog_addons = self.store.get_public_addons(vendor_id)
            promo_codes = self.store.get_public_promo_codes(vendor_id)
            promo, price = pricing.quote(
                package,
                catalog_addons,
                submission.selected_addon_ids,
                promo_codes,
                submission.promo_code,
                locale=self.locale,
                currency=self.currency,
            )
            payment_status = pricing.classify_payment(price.total, submission.dp)
            addons = pricing.selected_addons(catalog_addons, submission.selected_addon_ids)

            promo_code_id = None
            if promo.applied:
                resolved = pricing.find_promo_code(promo_codes, submission.promo_code)
                if resolved is not None:
                    promo_code_id = resolved["id"]
                    self.store.update_promo_code_usage(promo_code_id)

            proof_uri = ProofService.to_data_uri(submission.proof) if submission.proof else None
            today = date.today()

            client = self.store.create_client(
                vendor_id,
                {
                    "name": submission.client_name,
                    "email": submission.email,
                    "phone": submission.phone,
                    "whatsapp": submission.phone,
                    "instagram": submission.instagram,
                    "client_type": ClientType.DIRECT,
                    "status": ClientStatus.ACTIVE,
                    "since": today,
                    "last_contact": utcnow(),
                },
            )
            created.append(("clients", client["id"]))

            project = self.store.create_project(
                vendor_id,
                {
                    "project_name": f"Acara {submission.client_name}",
                    "client_id": client["id"],
                    "client_name": client["name"],
                    "project_type": submission.project_type,
                    "package_id": package["id"],
                    "package_name": package["name"],
                    "add_ons": [{"id": a["id"], "name": a["name"], "price": str(a["price"])} for a in addons],
                    "date": submission.date,
                    "location": submission.location,
                    "progress": 0,
                    "status": PROJECT_STATUS_CONFIRMED,
                    "booking_status": BookingStatus.BARU,
                    "total_cost": price.total.quantize(CENT),
                    "amount_paid": submission.dp.quantize(CENT),
                    "payment_status": payment_status,
                    "discount_amount": price.discount.quantize(CENT) if price.discount > 0 else None,
                    "promo_code_id": promo_code_id,
                    "notes": f"Referensi Pembayaran DP: {submission.dp_payment_ref}",
                    "dp_proof_url": proof_uri,
                    "submission_key": key,
                },
            )
            created.append(("projects", project["id"]))

            lead = self.store.create_lead(
                vendor_id,
                {
                    "name": client["name"],
                    "contact_channel": ContactChannel.WEBSITE,
                    "location": submission.location,
                    "status": LeadStatus.CONVERTED,
                    "date": today,
                    "notes": f"Dikonversi dari formulir booking. Klien ID: {client['id']}",
                    "whatsapp": submission.phone,
                },
            )
            created.append(("leads", lead["id"]))

            if submission.dp > 0:
                transaction = self.store.create_transaction(
                    vendor_id,
                    {
                        "date": today,
                        "description": f"DP Proyek {project['project_name']}",
                        "amount": submission.dp.quantize(CENT),
                        "type": TransactionType.INCOME,
                        "project_id": project["id"],
                        "category": DP_CATEGORY,
                        "method": DP_METHOD,
                    },
                )
                created.append(("transactions", transaction["id"]))
        except Exception as exc:
            logger.exception("Booking submission failed for vendor %s (package %s)", vendor_id, package.get("id"))
            self._compensate(created)
            raise BookingError() from exc

        return project

    def _compensate(self, created):
        for table, record_id in reversed(created):
            try:
                self.store.delete_record(table, record_id)
            except Exception:
                logger.exception("Could not roll back %s record %s", table, record_id)

    def _notify(self, project, package):
        if self.notifications is None:
            return
        total = format_currency(project["total_cost"], locale=self.locale, currency=self.currency)
        try:
            self.notifications.notify(
                "Booking baru",
                f"{project['client_name']} memesan paket {package['name']} senilai {total}.",
            )
        except Exception:
            logger.warning("Booking notification for project %s could not be recorded", project["id"], exc_info=True)
