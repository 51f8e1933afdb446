from studio.errors import ValidationError
from studio.extensions import db
from studio.models import AddOn, Package
from studio.services.common import delete_owned, get_owned, text_or_none
from studio.validators import clean_text, parse_amount, require_text


def _item_list(raw, label):
    if raw is None or raw == "":
        return []
    if isinstance(raw, str):
        raw = raw.splitlines()
    if not isinstance(raw, list):
        raise ValidationError(f"{label} harus berupa daftar.")
    return [clean_text(item) for item in raw if clean_text(item)]


def _physical_items(raw):
    """Physical items are {name, price} entries; bare names get price 0."""
    if not isinstance(raw, list):
        raw = _item_list(raw, "Item fisik")
    items = []
    for item in raw:
        if isinstance(item, dict):
            name, price = clean_text(item.get("name")), item.get("price")
        else:
            name, price = clean_text(item), None
        if name:
            items.append({"name": name, "price": str(parse_amount(price, "Harga item fisik"))})
    return items


def _price(payload, label):
    if payload.get("price") in (None, ""):
        raise ValidationError(f"Wajib diisi: {label}.")
    return parse_amount(payload.get("price"), label)


class PackageService:
    @staticmethod
    def list_packages(vendor_id):
        return Package.owned_by(vendor_id).order_by(Package.created_at.desc()).all()

    @staticmethod
    def create_package(vendor_id, payload):
        package = Package(
            user_id=vendor_id,
            name=require_text(payload.get("name"), "Nama paket"),
            price=_price(payload, "Harga paket"),
            processing_time=clean_text(payload.get("processing_time")),
            photographers=text_or_none(payload, "photographers"),
            videographers=text_or_none(payload, "videographers"),
            physical_items=_physical_items(payload.get("physical_items")),
            digital_items=_item_list(payload.get("digital_items"), "Item digital"),
            cover_image=text_or_none(payload, "cover_image"),
        )
        db.session.add(package)
        db.session.commit()
        return package

    @staticmethod
    def update_package(vendor_id, package_id, payload):
        package = get_owned(Package, vendor_id, package_id, "Paket")
        if "name" in payload:
            package.name = require_text(payload.get("name"), "Nama paket")
        if "price" in payload:
            package.price = _price(payload, "Harga paket")
        if "processing_time" in payload:
            package.processing_time = clean_text(payload.get("processing_time"))
        for name in ("photographers", "videographers", "cover_image"):
            if name in payload:
                setattr(package, name, text_or_none(payload, name))
        if "physical_items" in payload:
            package.physical_items = _physical_items(payload.get("physical_items"))
        if "digital_items" in payload:
            package.digital_items = _item_list(payload.get("digital_items"), "Item digital")
        db.session.commit()
        return package

    @staticmethod
    def delete_package(vendor_id, package_id):
        return delete_owned(Package, vendor_id, package_id, "Paket")

    @staticmethod
    def list_addons(vendor_id):
        return AddOn.owned_by(vendor_id).order_by(AddOn.name.asc()).all()

    @staticmethod
    def create_addon(vendor_id, payload):
        addon = AddOn(
            user_id=vendor_id,
            name=require_text(payload.get("name"), "Nama add-on"),
            price=_price(payload, "Harga add-on"),
        )
        db.session.add(addon)
        db.session.commit()
        return addon

    @staticmethod
    def update_addon(vendor_id, addon_id, payload):
        addon = get_owned(AddOn, vendor_id, addon_id, "Add-on")
        if "name" in payload:
            addon.name = require_text(payload.get("name"), "Nama add-on")
        if "price" in payload:
            addon.price = _price(payload, "Harga add-on")
        db.session.commit()
        return addon

    @staticmethod
    def delete_addon(vendor_id, addon_id):
        return delete_owned(AddOn, vendor_id, addon_id, "Add-on")
