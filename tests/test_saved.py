from conftest import login_as


def test_toggle_twice_restores_membership(client, make_user, make_product):
    login_as(client, make_user())
    pid = make_product()

    before = client.get("/saved").json()["ids"]
    first = client.post("/saved", json={"product_id": pid}).json()
    assert first == {"saved": True, "message": "Added to saved items"}
    assert client.get("/saved").json()["ids"] == before + [pid]

    second = client.post("/saved", json={"product_id": pid}).json()
    assert second["saved"] is False
    assert client.get("/saved").json()["ids"] == before


def test_saved_list_is_per_user(client, make_user, make_product):
    alice = make_user()
    bob = make_user()
    a = make_product(name="Hoodie")
    b = make_product(name="Cap")

    login_as(client, alice)
    client.post("/saved", json={"product_id": a})
    client.post("/saved", json={"product_id": b})

    body = client.get("/saved").json()
    assert sorted(body["ids"]) == sorted([a, b])
    assert {p["name"] for p in body["products"]} == {"Hoodie", "Cap"}

    login_as(client, bob)
    assert client.get("/saved").json() == {"products": [], "ids": []}


def test_unknown_product_is_404(client, make_user):
    login_as(client, make_user())
    resp = client.post("/saved", json={"product_id": 4242})
    assert resp.status_code == 404
    assert resp.json() == {"error": "Product not found"}


def test_saved_requires_login(client):
    assert client.get("/saved").status_code == 401
