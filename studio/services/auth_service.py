from studio.errors import AppError
from studio.extensions import bcrypt, db
from studio.models import User
from studio.models.base import utcnow
from studio.services.profile_service import ProfileService
from sqlalchemy.exc import IntegrityError

MIN_PASSWORD_LENGTH = 8


class AuthService:
    @staticmethod
    def register_vendor(full_name, email, password, company_name=""):
        normalized_email = (email or "").strip().lower()
        full_name = (full_name or "").strip()
        if not full_name or not normalized_email or not password:
            raise AppError("Nama, email, dan kata sandi wajib diisi.", 400)
        if "@" not in normalized_email:
            raise AppError("Alamat email tidak valid.", 400)
        if len(password) < MIN_PASSWORD_LENGTH:
            raise AppError(f"Kata sandi minimal {MIN_PASSWORD_LENGTH} karakter.", 400)

        if User.query.filter_by(email=normalized_email).first():
            raise AppError("Email sudah terdaftar.", 409)

        user = User(
            full_name=full_name,
            email=normalized_email,
            role="vendor",
            password_hash=bcrypt.generate_password_hash(password).decode("utf-8"),
        )
        try:
            db.session.add(user)
            db.session.flush()
            # Every vendor starts with a profile so the public pages have something to show.
            ProfileService.create_profile(user, company_name)
            db.session.commit()
        except IntegrityError as exc:
            db.session.rollback()
            message = str(getattr(exc, "orig", exc)).lower()
            if "users.email" in message:
                raise AppError("Email sudah terdaftar.", 409) from exc
            raise AppError("Akun tidak dapat dibuat karena data tidak valid.", 400) from exc
        return user

    @staticmethod
    def authenticate_user(email, password):
        user = User.query.filter_by(email=(email or "").strip().lower()).first()
        if not user:
            raise AppError("Email atau kata sandi salah.", 401)

        try:
            is_valid = bcrypt.check_password_hash(user.password_hash, password or "")
        except ValueError:
            is_valid = False

        if not is_valid:
            raise AppError("Email atau kata sandi salah.", 401)
        if not user.is_active_user:
            raise AppError("Akun tidak aktif.", 403)
        user.last_login = utcnow()
        db.session.commit()
        return user

    @staticmethod
    def user_to_dict(user):
        return {
            "id": user.id,
            "full_name": user.full_name,
            "email": user.email,
            "role": user.role,
        }
