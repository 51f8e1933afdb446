from decimal import Decimal

from studio.constants import PROJECT_STATUS_CONFIRMED, BookingStatus
from studio.extensions import db
from studio.models import AddOn, Client, Package, Project
from studio.serializers import addon_to_dict, package_to_dict
from studio.services import pricing
from studio.services.common import delete_owned, get_owned, text_or_none
from studio.validators import clean_text, one_of, parse_amount, parse_date, parse_id_list, parse_int

CENT = Decimal("0.01")


class ProjectService:
    @staticmethod
    def list_projects(vendor_id, status=None, client_id=None):
        query = Project.owned_by(vendor_id)
        if status:
            query = query.filter(Project.status == status)
        if client_id:
            query = query.filter(Project.client_id == client_id)
        return query.order_by(Project.date.desc(), Project.id.desc()).all()

    @staticmethod
    def get_project(vendor_id, project_id):
        return get_owned(Project, vendor_id, project_id, "Proyek")

    @staticmethod
    def _pick_addons(vendor_id, raw_ids):
        ids = parse_id_list(raw_ids)
        catalog = [addon_to_dict(row) for row in AddOn.owned_by(vendor_id).all()]
        chosen = pricing.selected_addons(catalog, ids)
        return catalog, ids, [{"id": a["id"], "name": a["name"], "price": a["price"]} for a in chosen]

    @staticmethod
    def create_project(vendor_id, payload):
        client = get_owned(Client, vendor_id, payload.get("client_id"), "Klien")
        package = None
        if payload.get("package_id"):
            package = get_owned(Package, vendor_id, payload.get("package_id"), "Paket")
        catalog, addon_ids, add_ons = ProjectService._pick_addons(vendor_id, payload.get("add_on_ids"))

        if payload.get("total_cost") not in (None, ""):
            total_cost = parse_amount(payload.get("total_cost"), "Total biaya")
        elif package is not None:
            total_cost = pricing.compute_total(package_to_dict(package), catalog, addon_ids).total
        else:
            total_cost = Decimal("0")
        amount_paid = parse_amount(payload.get("amount_paid"), "Jumlah dibayar")

        project = Project(
            user_id=vendor_id,
            client_id=client.id,
            client_name=client.name,
            project_name=clean_text(payload.get("project_name")) or f"Acara {client.name}",
            project_type=clean_text(payload.get("project_type")),
            package_id=package.id if package else None,
            package_name=package.name if package else "",
            add_ons=add_ons,
            date=parse_date(payload.get("date"), "Tanggal acara"),
            deadline_date=parse_date(payload.get("deadline_date"), "Tenggat", default_today=False),
            location=clean_text(payload.get("location")),
            progress=parse_int(payload.get("progress") or 0, "Progres", minimum=0, maximum=100),
            status=clean_text(payload.get("status")) or PROJECT_STATUS_CONFIRMED,
            booking_status=None,
            total_cost=total_cost.quantize(CENT),
            amount_paid=amount_paid.quantize(CENT),
            payment_status=pricing.classify_payment(total_cost, amount_paid),
            notes=text_or_none(payload, "notes"),
        )
        db.session.add(project)
        db.session.commit()
        return project

    @staticmethod
    def update_project(vendor_id, project_id, payload):
        project = get_owned(Project, vendor_id, project_id, "Proyek")

        for name in ("project_name", "project_type", "location", "status"):
            if name in payload:
                value = clean_text(payload.get(name))
                if value or name in ("project_type", "location"):
                    setattr(project, name, value)
        for name in ("notes", "rejection_reason"):
            if name in payload:
                setattr(project, name, text_or_none(payload, name))
        if "date" in payload:
            project.date = parse_date(payload.get("date"), "Tanggal acara")
        if "deadline_date" in payload:
            project.deadline_date = parse_date(payload.get("deadline_date"), "Tenggat", default_today=False)
        if "progress" in payload:
            project.progress = parse_int(payload.get("progress"), "Progres", minimum=0, maximum=100)
        if "booking_status" in payload:
            project.booking_status = one_of(payload.get("booking_status"), BookingStatus.ALL, "Status booking")
        if "add_on_ids" in payload:
            _catalog, _ids, project.add_ons = ProjectService._pick_addons(vendor_id, payload.get("add_on_ids"))
        if "total_cost" in payload:
            project.total_cost = parse_amount(payload.get("total_cost"), "Total biaya").quantize(CENT)
        if "amount_paid" in payload:
            project.amount_paid = parse_amount(payload.get("amount_paid"), "Jumlah dibayar").quantize(CENT)

        project.payment_status = pricing.classify_payment(project.total_cost, project.amount_paid)
        db.session.commit()
        return project

    @staticmethod
    def record_payment(project, amount):
        """Add a payment to the project total and reclassify. Caller commits."""
        project.amount_paid = (Decimal(project.amount_paid or 0) + amount).quantize(CENT)
        project.payment_status = pricing.classify_payment(project.total_cost, project.amount_paid)
        return project

    @staticmethod
    def delete_project(vendor_id, project_id):
        return delete_owned(Project, vendor_id, project_id, "Proyek")
