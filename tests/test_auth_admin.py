from datetime import datetime, timedelta, timezone
from decimal import Decimal

import jwt

from conftest import login_as, order_payload
from storefront.services.analytics_service import AnalyticsService
from storefront.utils.security import decode_access_token
from storefront.utils.settings import AUTH_COOKIE_NAME


def test_register_login_me_logout(client):
    resp = client.post(
        "/auth/register",
        json={"name": "Nino", "email": "Nino@Example.com", "password": "supersecret"},
    )
    assert resp.status_code == 201
    user = resp.json()["user"]
    assert user["email"] == "nino@example.com"
    assert user["role"] == "USER"
    assert "password_hash" not in user
    assert client.cookies.get(AUTH_COOKIE_NAME)

    assert client.get("/auth/me").json()["user"]["id"] == user["id"]

    client.post("/auth/logout")
    client.cookies.delete(AUTH_COOKIE_NAME)
    assert client.get("/auth/me").status_code == 401

    resp = client.post("/auth/login", json={"email": "nino@example.com", "password": "supersecret"})
    assert resp.status_code == 200
    assert client.get("/auth/me").status_code == 200


def test_duplicate_email_is_409(client, make_user):
    make_user(email="taken@example.com")
    resp = client.post(
        "/auth/register",
        json={"name": "Other", "email": "TAKEN@example.com", "password": "supersecret"},
    )
    assert resp.status_code == 409
    assert resp.json() == {"error": "Email already registered"}


def test_bad_credentials_are_401(client, make_user):
    make_user(email="giorgi@example.com", password="rightpass1")
    resp = client.post("/auth/login", json={"email": "giorgi@example.com", "password": "wrongpass"})
    assert resp.status_code == 401
    assert resp.json() == {"error": "Invalid credentials"}


def test_register_validation(client):
    resp = client.post("/auth/register", json={"name": "A", "email": "nope", "password": "short"})
    assert resp.status_code == 400
    assert resp.json()["error"]


def test_tampered_token_is_ignored(client, make_user):
    user = make_user()
    forged = jwt.encode({"sub": str(user.id), "email": user.email, "role": "ADMIN"}, "not-the-secret", algorithm="HS256")
    client.cookies.set(AUTH_COOKIE_NAME, forged)
    assert client.get("/auth/me").status_code == 401
    assert decode_access_token("garbage") is None


def test_update_profile(client, make_user):
    make_user(email="other@example.com")
    login_as(client, make_user(name="Old Name"))

    body = client.put("/auth/profile", json={"name": "New Name", "avatar": "https://x/a.png"}).json()
    assert body["user"]["name"] == "New Name"
    assert body["user"]["avatar"] == "https://x/a.png"

    resp = client.put("/auth/profile", json={"email": "other@example.com"})
    assert resp.status_code == 409


def test_role_change_applies_after_token_reissue(client, make_user):
    admin = make_user(role="ADMIN")
    user = make_user(password="password123")

    login_as(client, admin)
    resp = client.put(f"/admin/users/{user.id}", json={"role": "ADMIN"})
    assert resp.status_code == 200
    assert resp.json()["role"] == "ADMIN"

    # stary token nadal ma role USER
    login_as(client, user)
    assert client.get("/admin/users").status_code == 403

    client.cookies.delete(AUTH_COOKIE_NAME)
    client.post("/auth/login", json={"email": user.email, "password": "password123"})
    assert client.get("/admin/users").status_code == 200


def test_admin_cannot_change_or_delete_self(client, make_user):
    admin = make_user(role="ADMIN")
    login_as(client, admin)
    assert client.put(f"/admin/users/{admin.id}", json={"role": "USER"}).status_code == 400
    assert client.delete(f"/admin/users/{admin.id}").status_code == 400
    assert client.delete("/admin/users/9999").status_code == 404


def test_admin_user_listing_and_delete(client, make_user):
    admin = make_user(role="ADMIN", name="Boss")
    make_user(name="Tamar Search")
    victim = make_user(name="Levan")

    login_as(client, admin)
    body = client.get("/admin/users", params={"search": "tamar"}).json()
    assert [u["name"] for u in body["users"]] == ["Tamar Search"]

    admins = client.get("/admin/users", params={"role": "ADMIN"}).json()
    assert [u["id"] for u in admins["users"]] == [admin.id]
    assert client.get("/admin/users", params={"role": "ALL"}).json()["total"] == 3

    assert client.delete(f"/admin/users/{victim.id}").json() == {"success": True}
    assert client.get("/admin/users").json()["total"] == 2


def test_analytics_summary(client, make_user, make_product):
    user = make_user()
    admin = make_user(role="ADMIN")
    pid = make_product(price="25.00")

    login_as(client, user)
    first = client.post("/orders", json=order_payload(pid)).json()
    client.post("/orders", json=order_payload(pid, quantity=1, shipping="8.99"))

    login_as(client, admin)
    client.put(f"/orders/{first['id']}", json={"status": "CANCELLED"})

    body = client.get("/admin/analytics", params={"period": 7}).json()
    stats = body["stats"]
    assert stats["total_orders"] == 2
    # anulowane nie wchodza do przychodu
    assert Decimal(stats["total_revenue"]) == Decimal("33.99")
    assert stats["total_users"] == 2
    assert stats["total_products"] == 1
    assert {s["name"]: s["value"] for s in body["order_status_data"]} == {"CANCELLED": 1, "PENDING": 1}
    assert sum(p["orders"] for p in body["revenue_chart_data"]) == 2

    login_as(client, user)
    assert client.get("/admin/analytics").status_code == 403


def test_analytics_window_excludes_old_orders(db):
    svc = AnalyticsService(db)
    future = datetime.now(timezone.utc) + timedelta(days=400)
    summary = svc.summary(period_days=30, now=future)
    assert summary["stats"]["total_orders"] == 0
    assert summary["revenue_chart_data"] == []


def test_health(client):
    assert client.get("/health").json()["status"] == "ok"
