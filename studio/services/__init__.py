from studio.services.auth_service import AuthService
from studio.services.booking_service import BookingService, BookingSubmission
from studio.services.client_service import ClientService
from studio.services.feedback_service import FeedbackService
from studio.services.invoice_service import InvoiceService
from studio.services.lead_service import LeadService
from studio.services.notification_service import NotificationService
from studio.services.package_service import PackageService
from studio.services.portal_service import PortalService
from studio.services.profile_service import ProfileService
from studio.services.project_service import ProjectService
from studio.services.promo_code_service import PromoCodeService
from studio.services.proof_service import ProofService
from studio.services.public_form_service import PublicFormService
from studio.services.team_service import TeamService
from studio.services.transaction_service import TransactionService

__all__ = [
    "AuthService",
    "BookingService",
    "BookingSubmission",
    "ClientService",
    "FeedbackService",
    "InvoiceService",
    "LeadService",
    "NotificationService",
    "PackageService",
    "PortalService",
    "ProfileService",
    "ProjectService",
    "PromoCodeService",
    "ProofService",
    "PublicFormService",
    "TeamService",
    "TransactionService",
]
