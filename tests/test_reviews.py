from conftest import login_as, order_payload


def _buy(client, user, pid):
    login_as(client, user)
    resp = client.post("/orders", json=order_payload(pid))
    assert resp.status_code == 201
    return resp.json()["id"]


def test_review_requires_purchase(client, make_user, make_product):
    login_as(client, make_user())
    pid = make_product()

    resp = client.post("/reviews", json={"product_id": pid, "rating": 5, "comment": "Great!"})
    assert resp.status_code == 403
    assert resp.json() == {"error": "You can only review products you have purchased"}


def test_review_requires_login(client, make_product):
    resp = client.post("/reviews", json={"product_id": make_product(), "rating": 5, "comment": "Great!"})
    assert resp.status_code == 401


def test_second_submission_updates(client, make_user, make_product):
    user = make_user()
    pid = make_product()
    _buy(client, user, pid)

    first = client.post("/reviews", json={"product_id": pid, "rating": 4, "comment": "Nice fabric"})
    assert first.status_code == 201
    assert first.json()["message"] == "Review created"

    second = client.post("/reviews", json={"product_id": pid, "rating": 2, "comment": "Shrunk after wash"})
    assert second.status_code == 200
    assert second.json()["message"] == "Review updated"
    assert second.json()["review"]["id"] == first.json()["review"]["id"]

    listing = client.get("/reviews", params={"product_id": pid}).json()
    assert listing["total_reviews"] == 1
    assert listing["reviews"][0]["rating"] == 2
    assert listing["reviews"][0]["comment"] == "Shrunk after wash"


def test_cancelled_order_does_not_qualify(client, make_user, make_product):
    user = make_user()
    admin = make_user(role="ADMIN")
    pid = make_product()
    order_id = _buy(client, user, pid)

    login_as(client, admin)
    client.put(f"/orders/{order_id}", json={"status": "CANCELLED"})

    login_as(client, user)
    resp = client.post("/reviews", json={"product_id": pid, "rating": 5, "comment": "Great!"})
    assert resp.status_code == 403


def test_listing_flags_and_average(client, make_user, make_product):
    alice = make_user()
    bob = make_user()
    carol = make_user()
    pid = make_product()

    for user, rating in ((alice, 5), (bob, 4)):
        _buy(client, user, pid)
        client.post("/reviews", json={"product_id": pid, "rating": rating, "comment": "Solid"})

    login_as(client, None)
    anon = client.get("/reviews", params={"product_id": pid}).json()
    assert anon["total_reviews"] == 2
    assert anon["average_rating"] == 4.5
    assert anon["can_review"] is False
    assert anon["has_reviewed"] is False
    assert anon["reviews"][0]["user"]["id"] == bob.id

    login_as(client, alice)
    mine = client.get("/reviews", params={"product_id": pid}).json()
    assert mine["can_review"] is True
    assert mine["has_reviewed"] is True

    login_as(client, carol)
    other = client.get("/reviews", params={"product_id": pid}).json()
    assert other["can_review"] is False


def test_average_rounds_half_up(client, make_user, make_product):
    pid = make_product()
    for rating in (5, 4, 4, 4):
        _buy(client, make_user(), pid)
        resp = client.post("/reviews", json={"product_id": pid, "rating": rating, "comment": "Solid"})
        assert resp.status_code == 201

    body = client.get("/reviews", params={"product_id": pid}).json()
    # 17 / 4 = 4.25
    assert body["average_rating"] == 4.3
    assert body["total_reviews"] == 4


def test_review_validation(client, make_user, make_product):
    user = make_user()
    pid = make_product()
    _buy(client, user, pid)

    assert client.post("/reviews", json={"product_id": pid, "rating": 6, "comment": "Great!"}).status_code == 400
    assert client.post("/reviews", json={"product_id": pid, "rating": 3, "comment": "no"}).status_code == 400


def test_empty_listing(client, make_product):
    body = client.get("/reviews", params={"product_id": make_product()}).json()
    assert body == {
        "reviews": [],
        "average_rating": 0.0,
        "total_reviews": 0,
        "can_review": False,
        "has_reviewed": False,
    }
