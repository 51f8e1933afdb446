from decimal import Decimal

from studio.extensions import cache
from studio.services import AuthService, NotificationService


def create_client(api, name="Rina"):
    response = api.post("/api/v1/clients", json={"name": name, "email": "rina@example.com", "phone": "0811"})
    assert response.status_code == 201
    return response.get_json()


def test_register_creates_vendor_with_profile(client):
    response = client.post(
        "/api/v1/auth/register",
        json={"full_name": "Dewi", "email": "Dewi@Studio.id", "password": "rahasia123", "company_name": "Dewi Foto"},
    )
    assert response.status_code == 201
    assert response.get_json()["role"] == "vendor"

    profile = client.get("/api/v1/profile").get_json()
    assert profile["company_name"] == "Dewi Foto"
    assert profile["email"] == "dewi@studio.id"
    assert profile["currency_code"] == "IDR"


def test_duplicate_registration_conflicts(client, vendor):
    response = client.post(
        "/api/v1/auth/register",
        json={"full_name": "Lain", "email": "owner@vena.local", "password": "rahasia123"},
    )
    assert response.status_code == 409


def test_bad_login_is_401(client, vendor):
    response = client.post("/api/v1/auth/login", json={"email": "owner@vena.local", "password": "salah"})
    assert response.status_code == 401


def test_dashboard_requires_login(client):
    assert client.get("/api/v1/clients").status_code == 401
    assert client.get("/api/v1/auth/me").status_code == 401


def test_profile_update_validates_shapes(logged_in):
    response = logged_in.put("/api/v1/profile", json={"company_name": "Vena Baru", "income_categories": ["DP"]})
    assert response.status_code == 200
    assert response.get_json()["income_categories"] == ["DP"]

    assert logged_in.put("/api/v1/profile", json={"notification_settings": []}).status_code == 400


def test_profile_update_refreshes_public_catalog(app, logged_in, vendor):
    cache.init_app(app, config={"CACHE_TYPE": "SimpleCache"})
    url = f"/api/v1/public/{vendor.id}/packages"
    assert logged_in.get(url).get_json()["studio"]["company_name"] == "Vena Pictures"

    assert logged_in.put("/api/v1/profile", json={"company_name": "Vena Baru"}).status_code == 200
    assert logged_in.get(url).get_json()["studio"]["company_name"] == "Vena Baru"


def test_client_crud(logged_in):
    created = create_client(logged_in)
    assert created["status"] == "Aktif"
    assert created["portal_access_id"]

    updated = logged_in.patch(f"/api/v1/clients/{created['id']}", json={"status": "Tidak Aktif"}).get_json()
    assert updated["status"] == "Tidak Aktif"
    assert logged_in.patch(f"/api/v1/clients/{created['id']}", json={"status": "Aneh"}).status_code == 400

    assert logged_in.delete(f"/api/v1/clients/{created['id']}").status_code == 200
    assert logged_in.get("/api/v1/clients").get_json() == []


def test_records_are_scoped_to_their_vendor(app, logged_in):
    created = create_client(logged_in)
    logged_in.post("/api/v1/auth/logout")

    AuthService.register_vendor("Orang Lain", "lain@vena.local", "rahasia123")
    logged_in.post("/api/v1/auth/login", json={"email": "lain@vena.local", "password": "rahasia123"})

    assert logged_in.get("/api/v1/clients").get_json() == []
    assert logged_in.get(f"/api/v1/clients/{created['id']}").status_code == 404
    assert logged_in.delete(f"/api/v1/clients/{created['id']}").status_code == 404


def test_package_and_addon_crud(logged_in):
    package = logged_in.post(
        "/api/v1/packages",
        json={
            "name": "Gold",
            "price": "5000000",
            "digital_items": "File edit\nVideo",
            "physical_items": [{"name": "Album", "price": "750000"}, "Cetak 16R"],
        },
    ).get_json()
    assert package["digital_items"] == ["File edit", "Video"]
    assert package["physical_items"] == [{"name": "Album", "price": "750000"}, {"name": "Cetak 16R", "price": "0"}]

    assert logged_in.post("/api/v1/packages", json={"name": "Tanpa Harga"}).status_code == 400
    assert logged_in.post("/api/v1/packages", json={"name": "Minus", "price": "-1"}).status_code == 400

    addon = logged_in.post("/api/v1/packages/addons", json={"name": "Drone", "price": "500000"}).get_json()
    renamed = logged_in.patch(f"/api/v1/packages/addons/{addon['id']}", json={"name": "Drone 4K"}).get_json()
    assert renamed["name"] == "Drone 4K"
    assert [a["name"] for a in logged_in.get("/api/v1/packages/addons").get_json()] == ["Drone 4K"]


def test_promo_code_validation(logged_in):
    created = logged_in.post(
        "/api/v1/promo-codes",
        json={"code": " disc10 ", "discount_type": "percentage", "discount_value": "10", "max_usage": 5},
    )
    assert created.status_code == 201
    assert created.get_json()["code"] == "DISC10"
    assert created.get_json()["usage_count"] == 0

    duplicate = logged_in.post(
        "/api/v1/promo-codes", json={"code": "DISC10", "discount_type": "fixed", "discount_value": "1000"}
    )
    assert duplicate.status_code == 409

    too_much = logged_in.post(
        "/api/v1/promo-codes", json={"code": "BIG", "discount_type": "percentage", "discount_value": "150"}
    )
    assert too_much.status_code == 400

    bad_type = logged_in.post(
        "/api/v1/promo-codes", json={"code": "ODD", "discount_type": "bogo", "discount_value": "10"}
    )
    assert bad_type.status_code == 400

    promo_id = created.get_json()["id"]
    updated = logged_in.patch(f"/api/v1/promo-codes/{promo_id}", json={"is_active": False}).get_json()
    assert updated["is_active"] is False


def test_project_payment_flow_and_invoice(logged_in):
    client_row = create_client(logged_in)
    package = logged_in.post("/api/v1/packages", json={"name": "Gold", "price": "5000000"}).get_json()
    addon = logged_in.post("/api/v1/packages/addons", json={"name": "Drone", "price": "500000"}).get_json()

    project = logged_in.post(
        "/api/v1/projects",
        json={
            "client_id": client_row["id"],
            "package_id": package["id"],
            "add_on_ids": [addon["id"]],
            "date": "2025-05-01",
            "location": "Surabaya",
        },
    ).get_json()
    assert Decimal(project["total_cost"]) == Decimal("5500000")
    assert project["payment_status"] == "Belum Bayar"
    assert project["project_name"] == "Acara Rina"

    dp = logged_in.post(
        "/api/v1/transactions",
        json={"type": "Pemasukan", "amount": "2000000", "description": "DP", "project_id": project["id"]},
    )
    assert dp.status_code == 201
    assert logged_in.get(f"/api/v1/projects/{project['id']}").get_json()["payment_status"] == "DP Terbayar"

    logged_in.post(
        "/api/v1/transactions",
        json={"type": "Pemasukan", "amount": "3500000", "description": "Pelunasan", "project_id": project["id"]},
    )
    assert logged_in.get(f"/api/v1/projects/{project['id']}").get_json()["payment_status"] == "Lunas"

    logged_in.post("/api/v1/transactions", json={"type": "Pengeluaran", "amount": "750000", "description": "Sewa"})
    summary = logged_in.get("/api/v1/transactions/summary").get_json()
    assert Decimal(summary["income"]) == Decimal("5500000")
    assert Decimal(summary["expense"]) == Decimal("750000")
    assert Decimal(summary["balance"]) == Decimal("4750000")

    invoice = logged_in.get(f"/api/v1/projects/{project['id']}/invoice").get_json()
    assert invoice["total"] == "Rp 5.500.000"
    assert invoice["balance_due"] == "Rp 0"
    assert invoice["payment_status"] == "Lunas"

    pdf = logged_in.get(f"/api/v1/projects/{project['id']}/invoice?format=pdf")
    assert pdf.status_code == 200
    assert pdf.mimetype == "application/pdf"
    assert pdf.data.startswith(b"%PDF")


def test_transaction_validation(logged_in):
    assert logged_in.post("/api/v1/transactions", json={"type": "Hadiah", "amount": "1"}).status_code == 400
    assert (
        logged_in.post(
            "/api/v1/transactions", json={"type": "Pemasukan", "amount": "0", "description": "Nol"}
        ).status_code
        == 400
    )


def test_lead_and_team(logged_in):
    lead = logged_in.post("/api/v1/leads", json={"name": "Andi", "contact_channel": "Instagram"}).get_json()
    assert lead["status"] == "Sedang Diskusi"
    moved = logged_in.patch(f"/api/v1/leads/{lead['id']}", json={"status": "Menunggu Follow Up"}).get_json()
    assert moved["status"] == "Menunggu Follow Up"

    member = logged_in.post(
        "/api/v1/team", json={"name": "Joko", "role": "Fotografer", "standard_fee": "750000"}
    ).get_json()
    portal = logged_in.get(f"/api/v1/portal/freelancer/{member['portal_access_id']}").get_json()
    assert portal["member"]["name"] == "Joko"
    assert logged_in.delete(f"/api/v1/team/{member['id']}").status_code == 200


def test_notification_endpoints(logged_in, vendor):
    service = NotificationService.for_vendor(vendor.id)
    first = service.notify("Booking baru", "A")
    service.notify("Prospek baru", "B")

    body = logged_in.get("/api/v1/notifications/me").get_json()
    assert [item["title"] for item in body["items"]] == ["Prospek baru", "Booking baru"]
    assert body["unread"] == 2

    assert logged_in.post(f"/api/v1/notifications/{first.token}/read").status_code == 200
    assert logged_in.get("/api/v1/notifications/me").get_json()["unread"] == 1
    assert logged_in.post("/api/v1/notifications/NOTIF-0-abcdef/read").status_code == 404

    logged_in.post("/api/v1/notifications/me/read")
    assert logged_in.get("/api/v1/notifications/me").get_json()["unread"] == 0
