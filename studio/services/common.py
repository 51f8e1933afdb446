from studio.errors import AppError
from studio.extensions import db
from studio.validators import clean_text


def get_owned(model, vendor_id, record_id, label="Data"):
    row = model.owned_by(vendor_id).filter(model.id == record_id).first()
    if row is None:
        raise AppError(f"{label} tidak ditemukan.", 404)
    return row


def delete_owned(model, vendor_id, record_id, label="Data"):
    row = get_owned(model, vendor_id, record_id, label)
    db.session.delete(row)
    db.session.commit()
    return True


def text_or_none(payload, name):
    return clean_text(payload.get(name)) or None
