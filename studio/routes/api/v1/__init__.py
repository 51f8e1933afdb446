from flask import Blueprint

from studio.extensions import csrf
from studio.routes.api.v1.auth import api_auth_bp
from studio.routes.api.v1.clients import api_client_bp
from studio.routes.api.v1.feedback import api_feedback_bp
from studio.routes.api.v1.leads import api_lead_bp
from studio.routes.api.v1.notifications import api_notification_bp
from studio.routes.api.v1.packages import api_package_bp
from studio.routes.api.v1.portal import api_portal_bp
from studio.routes.api.v1.profile import api_profile_bp
from studio.routes.api.v1.projects import api_project_bp
from studio.routes.api.v1.promo_codes import api_promo_code_bp
from studio.routes.api.v1.public import api_public_bp
from studio.routes.api.v1.team import api_team_bp
from studio.routes.api.v1.transactions import api_transaction_bp

api_v1_bp = Blueprint("api_v1", __name__)
api_v1_bp.register_blueprint(api_auth_bp, url_prefix="/auth")
api_v1_bp.register_blueprint(api_profile_bp, url_prefix="/profile")
api_v1_bp.register_blueprint(api_client_bp, url_prefix="/clients")
api_v1_bp.register_blueprint(api_package_bp, url_prefix="/packages")
api_v1_bp.register_blueprint(api_lead_bp, url_prefix="/leads")
api_v1_bp.register_blueprint(api_project_bp, url_prefix="/projects")
api_v1_bp.register_blueprint(api_transaction_bp, url_prefix="/transactions")
api_v1_bp.register_blueprint(api_promo_code_bp, url_prefix="/promo-codes")
api_v1_bp.register_blueprint(api_feedback_bp, url_prefix="/feedback")
api_v1_bp.register_blueprint(api_team_bp, url_prefix="/team")
api_v1_bp.register_blueprint(api_notification_bp, url_prefix="/notifications")
api_v1_bp.register_blueprint(api_public_bp, url_prefix="/public")
api_v1_bp.register_blueprint(api_portal_bp, url_prefix="/portal")

csrf.exempt(api_v1_bp)
