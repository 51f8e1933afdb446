import pytest

from studio import create_app
from studio.extensions import db
from studio.services import AuthService
from studio.store import MemoryRecordStore


@pytest.fixture
def app():
    app = create_app("testing")
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def vendor(app):
    return AuthService.register_vendor("Vena Owner", "owner@vena.local", "rahasia123", company_name="Vena Pictures")


@pytest.fixture
def logged_in(client, vendor):
    response = client.post("/api/v1/auth/login", json={"email": "owner@vena.local", "password": "rahasia123"})
    assert response.status_code == 200
    return client


@pytest.fixture
def memory_store():
    store = MemoryRecordStore()
    package = store.add_package(1, name="Paket Gold", price="5000000")
    drone = store.add_addon(1, name="Drone", price="500000")
    store.add_addon(1, name="Album Tambahan", price="750000")
    store.add_promo_code(1, code="DISC10", discount_type="percentage", discount_value="10", max_usage=5)
    store.add_promo_code(
        1,
        code="EXPIRED5",
        discount_type="percentage",
        discount_value="5",
        expiry_date="2020-01-01T00:00:00+00:00",
    )
    store.package = package
    store.drone = drone
    return store
