from flask import jsonify
from sqlalchemy.exc import IntegrityError

GENERIC_BOOKING_FAILURE = "Terjadi kesalahan saat mengirim booking. Silakan coba lagi."
GENERIC_FORM_FAILURE = "Terjadi kesalahan saat mengirim formulir. Silakan coba lagi."


class AppError(Exception):
    status_code = 400

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ValidationError(AppError):
    status_code = 400


class StoreError(AppError):
    """A record store call was rejected or could not be completed."""

    status_code = 502


class BookingError(AppError):
    status_code = 500

    def __init__(self, message=GENERIC_BOOKING_FAILURE, status_code=None):
        super().__init__(message, status_code)


class DuplicateSubmissionError(AppError):
    status_code = 409

    def __init__(self, message="Booking sedang diproses.", status_code=None):
        super().__init__(message, status_code)


def register_error_handlers(app):
    @app.errorhandler(AppError)
    def handle_app_error(err):
        return jsonify({"error": err.message}), err.status_code

    @app.errorhandler(IntegrityError)
    def handle_integrity_error(_err):
        app.logger.warning("Database integrity error")
        return jsonify({"error": "Conflict. Resource already exists."}), 409

    @app.errorhandler(400)
    def bad_request(_err):
        return jsonify({"error": "Bad request"}), 400

    @app.errorhandler(401)
    def unauthorized(_err):
        return jsonify({"error": "Unauthorized"}), 401

    @app.errorhandler(403)
    def forbidden(_err):
        return jsonify({"error": "Forbidden"}), 403

    @app.errorhandler(404)
    def not_found(_err):
        return jsonify({"error": "Not found"}), 404

    @app.errorhandler(413)
    def too_large(_err):
        return jsonify({"error": "Ukuran file tidak boleh melebihi 10MB."}), 413

    @app.errorhandler(429)
    def too_many_requests(_err):
        return jsonify({"error": "Too many requests"}), 429

    @app.errorhandler(500)
    def server_error(_err):
        app.logger.exception("Internal server error")
        return jsonify({"error": "Internal server error"}), 500
