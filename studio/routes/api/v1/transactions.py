from flask import Blueprint, jsonify, request
from flask_login import current_user, login_required

from studio.decorators import vendor_required
from studio.serializers import transaction_to_dict
from studio.services import TransactionService

api_transaction_bp = Blueprint("api_transaction", __name__)


@api_transaction_bp.get("")
@login_required
@vendor_required
def list_transactions():
    rows = TransactionService.list_transactions(
        current_user.id,
        type_=request.args.get("type"),
        project_id=request.args.get("project_id", type=int),
    )
    return jsonify([transaction_to_dict(row) for row in rows])


@api_transaction_bp.post("")
@login_required
@vendor_required
def create_transaction():
    transaction = TransactionService.create_transaction(current_user.id, request.get_json(silent=True) or {})
    return jsonify(transaction_to_dict(transaction)), 201


@api_transaction_bp.get("/summary")
@login_required
@vendor_required
def transaction_summary():
    summary = TransactionService.summary(current_user.id)
    return jsonify({name: str(value) for name, value in summary.items()})
