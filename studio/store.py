"""Record store boundary used by the public booking flow.

A store takes a vendor (ownership key) and a column-mapped payload and hands
back the stored row as a dict carrying the store-assigned ``id`` and
``created_at``. Any rejected call raises ``StoreError``. ``SqlRecordStore`` is
backed by the application database; ``MemoryRecordStore`` keeps rows in plain
lists so the booking flow can be exercised without one.
"""

import copy
import itertools
import logging
import threading
from uuid import uuid4

from sqlalchemy import or_, update
from sqlalchemy.exc import SQLAlchemyError

from studio.errors import StoreError
from studio.extensions import db
from studio.models import AddOn, Client, Lead, Package, Project, PromoCode, Transaction
from studio.models.base import utcnow
from studio.serializers import (
    addon_to_dict,
    client_to_dict,
    lead_to_dict,
    package_to_dict,
    project_to_dict,
    promo_code_to_dict,
    transaction_to_dict,
)

logger = logging.getLogger(__name__)


def new_portal_access_id():
    return str(uuid4())


class RecordStore:
    def get_public_packages(self, vendor_id):
        raise NotImplementedError

    def get_public_package(self, vendor_id, package_id):
        raise NotImplementedError

    def get_public_addons(self, vendor_id):
        raise NotImplementedError

    def get_public_promo_codes(self, vendor_id):
        raise NotImplementedError

    def create_client(self, vendor_id, payload):
        raise NotImplementedError

    def create_project(self, vendor_id, payload):
        raise NotImplementedError

    def create_lead(self, vendor_id, payload):
        raise NotImplementedError

    def create_transaction(self, vendor_id, payload):
        raise NotImplementedError

    def update_promo_code_usage(self, promo_code_id):
        raise NotImplementedError

    def find_project_by_submission_key(self, vendor_id, submission_key):
        raise NotImplementedError

    def delete_record(self, table, record_id):
        raise NotImplementedError


class SqlRecordStore(RecordStore):
    MODELS = {
        "clients": Client,
        "projects": Project,
        "leads": Lead,
        "transactions": Transaction,
    }

    def _insert(self, model, serializer, vendor_id, payload):
        try:
            row = model(user_id=vendor_id, **payload)
            db.session.add(row)
            db.session.commit()
        except SQLAlchemyError as exc:
            db.session.rollback()
            logger.exception("Insert into %s failed", model.__tablename__)
            raise StoreError(f"Could not store {model.__tablename__} record.") from exc
        return serializer(row)

    def get_public_packages(self, vendor_id):
        rows = Package.owned_by(vendor_id).order_by(Package.created_at.desc()).all()
        return [package_to_dict(row) for row in rows]

    def get_public_package(self, vendor_id, package_id):
        row = Package.owned_by(vendor_id).filter(Package.id == package_id).first()
        return package_to_dict(row) if row else None

    def get_public_addons(self, vendor_id):
        rows = AddOn.owned_by(vendor_id).order_by(AddOn.name.asc()).all()
        return [addon_to_dict(row) for row in rows]

    def get_public_promo_codes(self, vendor_id):
        rows = PromoCode.owned_by(vendor_id).filter(PromoCode.is_active.is_(True)).all()
        return [promo_code_to_dict(row) for row in rows]

    def create_client(self, vendor_id, payload):
        payload = dict(payload)
        payload.setdefault("portal_access_id", new_portal_access_id())
        return self._insert(Client, client_to_dict, vendor_id, payload)

    def create_project(self, vendor_id, payload):
        return self._insert(Project, project_to_dict, vendor_id, payload)

    def create_lead(self, vendor_id, payload):
        return self._insert(Lead, lead_to_dict, vendor_id, payload)

    def create_transaction(self, vendor_id, payload):
        return self._insert(Transaction, transaction_to_dict, vendor_id, payload)

    def update_promo_code_usage(self, promo_code_id):
        # Conditional increment so two bookings cannot both take the last use.
        stmt = (
            update(PromoCode)
            .where(PromoCode.id == promo_code_id)
            .where(PromoCode.is_active.is_(True))
            .where(or_(PromoCode.max_usage.is_(None), PromoCode.usage_count < PromoCode.max_usage))
            .values(usage_count=PromoCode.usage_count + 1, updated_at=utcnow())
        )
        try:
            result = db.session.execute(stmt)
            if result.rowcount != 1:
                db.session.rollback()
                raise StoreError("Promo code can no longer be redeemed.", 409)
            db.session.commit()
        except SQLAlchemyError as exc:
            db.session.rollback()
            logger.exception("Promo usage increment failed for %s", promo_code_id)
            raise StoreError("Could not update promo code usage.") from exc

    def find_project_by_submission_key(self, vendor_id, submission_key):
        row = Project.owned_by(vendor_id).filter(Project.submission_key == submission_key).first()
        return project_to_dict(row) if row else None

    def delete_record(self, table, record_id):
        model = self.MODELS.get(table)
        if model is None:
            raise StoreError(f"Unknown table {table}.")
        try:
            row = db.session.get(model, record_id)
            if row is not None:
                db.session.delete(row)
                db.session.commit()
        except SQLAlchemyError as exc:
            db.session.rollback()
            logger.exception("Delete from %s failed for %s", table, record_id)
            raise StoreError(f"Could not delete {table} record.") from exc


class MemoryRecordStore(RecordStore):
    def __init__(self):
        self.tables = {
            "packages": [],
            "add_ons": [],
            "promo_codes": [],
            "clients": [],
            "projects": [],
            "leads": [],
            "transactions": [],
        }
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def _put(self, table, vendor_id, payload):
        with self._lock:
            row = dict(copy.deepcopy(payload), id=next(self._ids), user_id=vendor_id, created_at=utcnow().isoformat())
            self.tables[table].append(row)
        return copy.deepcopy(row)

    def _owned(self, table, vendor_id):
        return [copy.deepcopy(row) for row in self.tables[table] if row["user_id"] == vendor_id]

    def add_package(self, vendor_id, **payload):
        return self._put("packages", vendor_id, payload)

    def add_addon(self, vendor_id, **payload):
        return self._put("add_ons", vendor_id, payload)

    def add_promo_code(self, vendor_id, **payload):
        payload.setdefault("is_active", True)
        payload.setdefault("usage_count", 0)
        payload.setdefault("max_usage", None)
        payload.setdefault("expiry_date", None)
        payload["code"] = payload["code"].upper()
        return self._put("promo_codes", vendor_id, payload)

    def get_public_packages(self, vendor_id):
        return self._owned("packages", vendor_id)

    def get_public_package(self, vendor_id, package_id):
        for row in self._owned("packages", vendor_id):
            if str(row["id"]) == str(package_id):
                return row
        return None

    def get_public_addons(self, vendor_id):
        return self._owned("add_ons", vendor_id)

    def get_public_promo_codes(self, vendor_id):
        return [row for row in self._owned("promo_codes", vendor_id) if row["is_active"]]

    def create_client(self, vendor_id, payload):
        payload = dict(payload)
        payload.setdefault("portal_access_id", new_portal_access_id())
        return self._put("clients", vendor_id, payload)

    def create_project(self, vendor_id, payload):
        return self._put("projects", vendor_id, payload)

    def create_lead(self, vendor_id, payload):
        return self._put("leads", vendor_id, payload)

    def create_transaction(self, vendor_id, payload):
        return self._put("transactions", vendor_id, payload)

    def update_promo_code_usage(self, promo_code_id):
        with self._lock:
            for row in self.tables["promo_codes"]:
                if row["id"] == promo_code_id:
                    if row["max_usage"] is not None and row["usage_count"] >= row["max_usage"]:
                        raise StoreError("Promo code can no longer be redeemed.", 409)
                    row["usage_count"] += 1
                    return
        raise StoreError("Promo code not found.", 404)

    def find_project_by_submission_key(self, vendor_id, submission_key):
        for row in self._owned("projects", vendor_id):
            if row.get("submission_key") == submission_key:
                return row
        return None

    def delete_record(self, table, record_id):
        with self._lock:
            rows = self.tables.get(table)
            if rows is None:
                raise StoreError(f"Unknown table {table}.")
            self.tables[table] = [row for row in rows if row["id"] != record_id]
