from decimal import Decimal

from sqlalchemy import func

from studio.constants import TransactionType
from studio.errors import ValidationError
from studio.extensions import db
from studio.models import Project, Transaction
from studio.services.common import get_owned
from studio.services.project_service import ProjectService
from studio.validators import clean_text, one_of, parse_amount, parse_date, require_text


class TransactionService:
    @staticmethod
    def list_transactions(vendor_id, type_=None, project_id=None):
        query = Transaction.owned_by(vendor_id)
        if type_:
            query = query.filter(Transaction.type == type_)
        if project_id:
            query = query.filter(Transaction.project_id == project_id)
        return query.order_by(Transaction.date.desc(), Transaction.id.desc()).all()

    @staticmethod
    def create_transaction(vendor_id, payload):
        type_ = one_of(payload.get("type"), TransactionType.ALL, "Jenis transaksi")
        amount = parse_amount(payload.get("amount"), "Jumlah")
        if amount <= 0:
            raise ValidationError("Jumlah harus lebih dari nol.")

        project = None
        if payload.get("project_id"):
            project = get_owned(Project, vendor_id, payload.get("project_id"), "Proyek")

        transaction = Transaction(
            user_id=vendor_id,
            project_id=project.id if project else None,
            date=parse_date(payload.get("date"), "Tanggal"),
            description=require_text(payload.get("description"), "Deskripsi"),
            amount=amount,
            type=type_,
            category=clean_text(payload.get("category")),
            method=clean_text(payload.get("method")),
        )
        db.session.add(transaction)
        # Income booked against a project counts toward what the client has paid.
        if project is not None and type_ == TransactionType.INCOME:
            ProjectService.record_payment(project, amount)
        db.session.commit()
        return transaction

    @staticmethod
    def summary(vendor_id):
        rows = (
            db.session.query(Transaction.type, func.coalesce(func.sum(Transaction.amount), 0))
            .filter(Transaction.user_id == vendor_id)
            .group_by(Transaction.type)
            .all()
        )
        totals = {type_: Decimal(str(total)) for type_, total in rows}
        income = totals.get(TransactionType.INCOME, Decimal("0"))
        expense = totals.get(TransactionType.EXPENSE, Decimal("0"))
        return {"income": income, "expense": expense, "balance": income - expense}
