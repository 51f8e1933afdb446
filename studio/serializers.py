"""Row dictionaries for models.

The record store and the JSON routes share these so a stored row looks the
same whether it comes back from a write or from a listing.
"""


def _iso(value):
    return value.isoformat() if value is not None else None


def _money(value):
    return str(value) if value is not None else None


def client_to_dict(client):
    return {
        "id": client.id,
        "user_id": client.user_id,
        "name": client.name,
        "email": client.email,
        "phone": client.phone,
        "whatsapp": client.whatsapp or "",
        "instagram": client.instagram or "",
        "client_type": client.client_type,
        "status": client.status,
        "since": _iso(client.since),
        "last_contact": _iso(client.last_contact),
        "portal_access_id": client.portal_access_id,
        "created_at": _iso(client.created_at),
    }


def package_to_dict(package):
    return {
        "id": package.id,
        "user_id": package.user_id,
        "name": package.name,
        "price": _money(package.price),
        "processing_time": package.processing_time,
        "photographers": package.photographers or "",
        "videographers": package.videographers or "",
        "physical_items": package.physical_items or [],
        "digital_items": package.digital_items or [],
        "cover_image": package.cover_image or "",
        "created_at": _iso(package.created_at),
    }


def addon_to_dict(addon):
    return {
        "id": addon.id,
        "user_id": addon.user_id,
        "name": addon.name,
        "price": _money(addon.price),
    }


def project_to_dict(project):
    return {
        "id": project.id,
        "user_id": project.user_id,
        "project_name": project.project_name,
        "client_id": project.client_id,
        "client_name": project.client_name,
        "project_type": project.project_type,
        "package_id": project.package_id,
        "package_name": project.package_name,
        "add_ons": project.add_ons or [],
        "date": _iso(project.date),
        "deadline_date": _iso(project.deadline_date),
        "location": project.location,
        "progress": project.progress,
        "status": project.status,
        "booking_status": project.booking_status,
        "rejection_reason": project.rejection_reason or "",
        "total_cost": _money(project.total_cost),
        "amount_paid": _money(project.amount_paid),
        "payment_status": project.payment_status,
        "discount_amount": _money(project.discount_amount),
        "promo_code_id": project.promo_code_id,
        "notes": project.notes or "",
        "dp_proof_url": project.dp_proof_url or "",
        "submission_key": project.submission_key,
        "created_at": _iso(project.created_at),
    }


def lead_to_dict(lead):
    return {
        "id": lead.id,
        "user_id": lead.user_id,
        "name": lead.name,
        "contact_channel": lead.contact_channel,
        "location": lead.location,
        "status": lead.status,
        "date": _iso(lead.date),
        "notes": lead.notes or "",
        "whatsapp": lead.whatsapp or "",
        "created_at": _iso(lead.created_at),
    }


def transaction_to_dict(transaction):
    return {
        "id": transaction.id,
        "user_id": transaction.user_id,
        "project_id": transaction.project_id,
        "date": _iso(transaction.date),
        "description": transaction.description,
        "amount": _money(transaction.amount),
        "type": transaction.type,
        "category": transaction.category,
        "method": transaction.method,
        "created_at": _iso(transaction.created_at),
    }


def promo_code_to_dict(promo):
    return {
        "id": promo.id,
        "user_id": promo.user_id,
        "code": promo.code,
        "discount_type": promo.discount_type,
        "discount_value": _money(promo.discount_value),
        "is_active": promo.is_active,
        "usage_count": promo.usage_count,
        "max_usage": promo.max_usage,
        "expiry_date": _iso(promo.expiry_date),
        "created_at": _iso(promo.created_at),
    }


def feedback_to_dict(feedback):
    return {
        "id": feedback.id,
        "client_name": feedback.client_name,
        "rating": feedback.rating,
        "satisfaction": feedback.satisfaction,
        "feedback": feedback.feedback,
        "date": _iso(feedback.date),
    }


def team_member_to_dict(member):
    return {
        "id": member.id,
        "name": member.name,
        "role": member.role,
        "email": member.email or "",
        "phone": member.phone or "",
        "standard_fee": _money(member.standard_fee),
        "portal_access_id": member.portal_access_id,
    }
