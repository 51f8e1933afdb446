from datetime import timedelta

import click

from studio.constants import DiscountType
from studio.extensions import db
from studio.models import AddOn, Package, PromoCode, User
from studio.models.base import utcnow
from studio.services import AuthService

DEMO_EMAIL = "demo@vena.local"
DEMO_PASSWORD = "demo12345"

DEMO_PACKAGES = [
    {
        "name": "Paket Pernikahan Gold",
        "price": "5000000",
        "processing_time": "30 hari kerja",
        "photographers": "2 Fotografer",
        "videographers": "1 Videografer",
        "physical_items": [
            {"name": "Album 20x30 (20 halaman)", "price": "750000"},
            {"name": "Cetak 16R + bingkai", "price": "250000"},
        ],
        "digital_items": ["Semua file edit", "Video highlight 3 menit"],
    },
    {
        "name": "Paket Prewedding",
        "price": "2500000",
        "processing_time": "14 hari kerja",
        "photographers": "1 Fotografer",
        "physical_items": [],
        "digital_items": ["50 file edit"],
    },
]
DEMO_ADDONS = [("Drone", "500000"), ("Same Day Edit", "1500000")]
DEMO_PROMOS = [
    {"code": "DISC10", "discount_type": DiscountType.PERCENTAGE, "discount_value": "10", "max_usage": 100},
    {"code": "HEMAT500", "discount_type": DiscountType.FIXED, "discount_value": "500000", "max_usage": None},
]


def seed_demo_vendor():
    """Create the demo vendor with a small catalog. Existing rows are left alone."""
    user = User.query.filter_by(email=DEMO_EMAIL).first()
    if user is None:
        user = AuthService.register_vendor("Vena Demo", DEMO_EMAIL, DEMO_PASSWORD, company_name="Vena Pictures")

    if not Package.owned_by(user.id).first():
        for data in DEMO_PACKAGES:
            db.session.add(Package(user_id=user.id, **data))
    if not AddOn.owned_by(user.id).first():
        for name, price in DEMO_ADDONS:
            db.session.add(AddOn(user_id=user.id, name=name, price=price))
    for data in DEMO_PROMOS:
        if not PromoCode.owned_by(user.id).filter(PromoCode.code == data["code"]).first():
            db.session.add(
                PromoCode(user_id=user.id, is_active=True, expiry_date=utcnow() + timedelta(days=365), **data)
            )
    db.session.commit()
    return user


def register_cli(app):
    @app.cli.command("seed-demo")
    def seed_demo():
        """Seed a demo vendor with packages, add-ons and promo codes."""
        db.create_all()
        user = seed_demo_vendor()
        click.echo(f"[seed] demo vendor id={user.id} email={DEMO_EMAIL}")
