import itertools
import os

# baza w pamieci zamiast postgresa; musi byc ustawione przed importem storefront
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-secret"

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from storefront.api import create_app
from storefront.api.deps import get_cart_repo
from storefront.data.bootstrap import init_db
from storefront.data.database import Base, SessionLocal, engine
from storefront.data.models import ProductModel, UserModel
from storefront.domain.schemas import AuthUser
from storefront.repos.cart_repo import CartRepo
from storefront.utils.security import create_access_token, hash_password
from storefront.utils.settings import AUTH_COOKIE_NAME


class FakeRedis:
    """Minimalny zamiennik klienta redis dla CartRepo (get/set)."""

    def __init__(self):
        self.store = {}
        self.ttl = {}

    def get(self, name):
        return self.store.get(name)

    def set(self, name, value, ex=None):
        self.store[name] = value
        self.ttl[name] = ex
        return True


@pytest.fixture
def fake_redis():
    return FakeRedis()


@pytest.fixture
def app(fake_redis):
    application = create_app()
    application.dependency_overrides[get_cart_repo] = lambda: CartRepo(client=fake_redis)
    return application


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    init_db()
    session = SessionLocal()
    yield session
    session.close()
    Base.metadata.drop_all(bind=engine)


_ids = itertools.count(1)


@pytest.fixture
def make_user():
    def _make(role="USER", name=None, email=None, password="password123") -> AuthUser:
        n = next(_ids)
        with SessionLocal() as s:
            user = UserModel(
                name=name or f"User {n}",
                email=email or f"user{n}@example.com",
                password_hash=hash_password(password),
                role=role,
            )
            s.add(user)
            s.commit()
            s.refresh(user)
            return AuthUser(id=user.id, email=user.email, role=user.role)

    return _make


@pytest.fixture
def make_product():
    def _make(price="20.00", stock=10, name=None, **extra) -> int:
        n = next(_ids)
        data = {
            "name": name or f"Product {n}",
            "description": "",
            "price": Decimal(price),
            "images": [],
            "videos": [],
            "sizes": ["S", "M", "L"],
            "colors": ["black", "white"],
            "category": "UPPER_WEAR",
            "gender": "UNISEX",
            "stock": stock,
        }
        data.update(extra)
        with SessionLocal() as s:
            product = ProductModel(**data)
            s.add(product)
            s.commit()
            return product.id

    return _make


def login_as(client: TestClient, user: AuthUser | None) -> None:
    client.cookies.delete(AUTH_COOKIE_NAME)
    if user is not None:
        client.cookies.set(AUTH_COOKIE_NAME, create_access_token(user.id, user.email, user.role.value))


ADDRESS = {
    "full_name": "Jan Kowalski",
    "line1": "Main St 1",
    "line2": "",
    "city": "Tbilisi",
    "state": "TB",
    "postal_code": "0100",
    "country": "GE",
    "phone": "+995555000000",
}


def order_payload(product_id: int, price="25.00", quantity=3, shipping="0.00", **overrides) -> dict:
    subtotal = Decimal(price) * quantity
    payload = {
        "items": [
            {"product_id": product_id, "quantity": quantity, "price": price, "size": "M", "color": "black"}
        ],
        "address": dict(ADDRESS),
        "subtotal": str(subtotal),
        "shipping": shipping,
        "total": str(subtotal + Decimal(shipping)),
    }
    payload.update(overrides)
    return payload
