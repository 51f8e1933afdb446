from flask_login import UserMixin

from studio.extensions import db
from studio.models.base import PKType, TimestampMixin


class User(UserMixin, TimestampMixin, db.Model):
    __tablename__ = "users"

    id = db.Column(PKType, primary_key=True, autoincrement=True)
    full_name = db.Column(db.String(120), nullable=False)
    email = db.Column(db.String(255), nullable=False, unique=True, index=True)
    password_hash = db.Column(db.String(255), nullable=False)
    role = db.Column(db.String(24), nullable=False, index=True, default="vendor")
    is_active_user = db.Column(db.Boolean, nullable=False, default=True)
    last_login = db.Column(db.DateTime(timezone=True), nullable=True, index=True)

    profile = db.relationship("Profile", back_populates="user", uselist=False, cascade="all, delete-orphan")
    clients = db.relationship("Client", back_populates="owner", lazy="dynamic")
    packages = db.relationship("Package", back_populates="owner", lazy="dynamic")
    projects = db.relationship("Project", back_populates="owner", lazy="dynamic")
    notifications = db.relationship("Notification", back_populates="user", lazy="dynamic")
