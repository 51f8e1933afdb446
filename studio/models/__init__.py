from studio.models.addon import AddOn
from studio.models.client import Client
from studio.models.feedback import ClientFeedback
from studio.models.lead import Lead
from studio.models.notification import Notification
from studio.models.package import Package
from studio.models.profile import Profile
from studio.models.project import Project
from studio.models.promo_code import PromoCode
from studio.models.team_member import TeamMember
from studio.models.transaction import Transaction
from studio.models.user import User

__all__ = [
    "User",
    "Profile",
    "Client",
    "Package",
    "AddOn",
    "Project",
    "Lead",
    "Transaction",
    "PromoCode",
    "ClientFeedback",
    "TeamMember",
    "Notification",
]
