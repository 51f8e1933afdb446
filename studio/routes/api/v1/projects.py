from flask import Blueprint, Response, jsonify, request
from flask_login import current_user, login_required

from studio.decorators import vendor_required
from studio.serializers import project_to_dict
from studio.services import InvoiceService, ProjectService

api_project_bp = Blueprint("api_project", __name__)


@api_project_bp.get("")
@login_required
@vendor_required
def list_projects():
    rows = ProjectService.list_projects(
        current_user.id,
        status=request.args.get("status"),
        client_id=request.args.get("client_id", type=int),
    )
    return jsonify([project_to_dict(row) for row in rows])


@api_project_bp.post("")
@login_required
@vendor_required
def create_project():
    project = ProjectService.create_project(current_user.id, request.get_json(silent=True) or {})
    return jsonify(project_to_dict(project)), 201


@api_project_bp.get("/<int:project_id>")
@login_required
@vendor_required
def get_project(project_id):
    return jsonify(project_to_dict(ProjectService.get_project(current_user.id, project_id)))


@api_project_bp.patch("/<int:project_id>")
@login_required
@vendor_required
def update_project(project_id):
    project = ProjectService.update_project(current_user.id, project_id, request.get_json(silent=True) or {})
    return jsonify(project_to_dict(project))


@api_project_bp.delete("/<int:project_id>")
@login_required
@vendor_required
def delete_project(project_id):
    ProjectService.delete_project(current_user.id, project_id)
    return jsonify({"ok": True})


@api_project_bp.get("/<int:project_id>/invoice")
@login_required
@vendor_required
def project_invoice(project_id):
    project = ProjectService.get_project(current_user.id, project_id)
    invoice = InvoiceService.build_invoice(project)
    if request.args.get("format") != "pdf":
        return jsonify(invoice)

    return Response(
        InvoiceService.render_pdf(invoice),
        mimetype="application/pdf",
        headers={"Content-Disposition": f"attachment; filename={invoice['number']}.pdf"},
    )
