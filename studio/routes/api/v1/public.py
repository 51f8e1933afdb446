from flask import Blueprint, current_app, jsonify, request

from studio.errors import AppError
from studio.extensions import cache, limiter
from studio.serializers import feedback_to_dict, lead_to_dict
from studio.services import (
    BookingService,
    BookingSubmission,
    NotificationService,
    ProfileService,
    ProofService,
    PublicFormService,
)
from studio.store import SqlRecordStore
from studio.validators import parse_id_list

api_public_bp = Blueprint("api_public", __name__)

BOOKING_SUMMARY_FIELDS = ("id", "project_name", "total_cost", "amount_paid", "payment_status", "discount_amount")


def catalog_cache_key(vendor_id):
    return f"public-catalog-{vendor_id}"


def forget_public_catalog(vendor_id):
    cache.delete(catalog_cache_key(vendor_id))


def _public_write_limit():
    return current_app.config.get("RATELIMIT_PUBLIC_WRITES", "20 per minute")


def _max_proof_bytes():
    return current_app.config.get("MAX_PROOF_MB", 10) * 1024 * 1024


def _booking_input():
    """Multipart form with a file, or JSON carrying the proof as a data URL."""
    if request.mimetype == "multipart/form-data" or request.form:
        payload = request.form.to_dict()
        payload["selected_addon_ids"] = request.form.getlist("selected_addon_ids") or payload.get(
            "selected_addon_ids"
        )
        proof = ProofService.from_upload(request.files.get("dp_proof"), max_bytes=_max_proof_bytes())
        return payload, proof

    payload = request.get_json(silent=True) or {}
    proof = ProofService.from_data_url(payload.get("dp_proof"), max_bytes=_max_proof_bytes())
    return payload, proof


def _get_package(vendor_id, package_id):
    package = SqlRecordStore().get_public_package(vendor_id, package_id) if package_id else None
    if package is None:
        raise AppError("Paket tidak ditemukan.", 404)
    return package


@api_public_bp.get("/<int:vendor_id>/packages")
def public_packages(vendor_id):
    PublicFormService.get_vendor(vendor_id)
    key = catalog_cache_key(vendor_id)
    catalog = cache.get(key)
    if catalog is None:
        store = SqlRecordStore()
        profile = ProfileService.get_profile(vendor_id)
        catalog = {
            "studio": {
                "company_name": profile.company_name,
                "brand_color": profile.brand_color,
                "logo_base64": profile.logo_base64,
                "currency_locale": profile.currency_locale,
                "currency_code": profile.currency_code,
                "page": profile.public_page_config,
                "project_types": profile.project_types,
                "terms_and_conditions": profile.terms_and_conditions,
            },
            "packages": store.get_public_packages(vendor_id),
            "add_ons": store.get_public_addons(vendor_id),
        }
        cache.set(key, catalog)
    return jsonify(catalog)


@api_public_bp.post("/<int:vendor_id>/quote")
def public_quote(vendor_id):
    PublicFormService.get_vendor(vendor_id)
    payload = request.get_json(silent=True) or {}
    package = _get_package(vendor_id, payload.get("package_id"))
    profile = ProfileService.get_profile(vendor_id)

    service = BookingService(SqlRecordStore(), None, locale=profile.currency_locale, currency=profile.currency_code)
    promo, price = service.quote(
        vendor_id, package, parse_id_list(payload.get("selected_addon_ids")), payload.get("promo_code")
    )
    return jsonify({"promo": promo.to_dict(), "price": price.to_dict()})


@api_public_bp.post("/<int:vendor_id>/bookings")
@limiter.limit(_public_write_limit, methods=["POST"])
def public_booking(vendor_id):
    PublicFormService.get_vendor(vendor_id)
    payload, proof = _booking_input()
    package = _get_package(vendor_id, payload.get("package_id"))
    submission = BookingSubmission.from_payload(payload, proof=proof)

    profile = ProfileService.get_profile(vendor_id)
    project = BookingService.for_vendor(vendor_id, profile).submit_booking(vendor_id, submission, package)
    summary = {name: project[name] for name in BOOKING_SUMMARY_FIELDS}
    summary["message"] = "Booking berhasil dikirim!"
    return jsonify(summary), 201


@api_public_bp.post("/<int:vendor_id>/leads")
@limiter.limit(_public_write_limit, methods=["POST"])
def public_lead(vendor_id):
    PublicFormService.get_vendor(vendor_id)
    service = PublicFormService(vendor_id, notifications=NotificationService.for_vendor(vendor_id))
    lead = service.submit_lead(request.get_json(silent=True) or request.form.to_dict())
    return jsonify(lead_to_dict(lead)), 201


@api_public_bp.post("/<int:vendor_id>/feedback")
@limiter.limit(_public_write_limit, methods=["POST"])
def public_feedback(vendor_id):
    PublicFormService.get_vendor(vendor_id)
    service = PublicFormService(vendor_id, notifications=NotificationService.for_vendor(vendor_id))
    feedback = service.submit_feedback(request.get_json(silent=True) or request.form.to_dict())
    return jsonify(feedback_to_dict(feedback)), 201
