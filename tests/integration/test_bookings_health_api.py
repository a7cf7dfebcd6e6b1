def test_booking_status_public_view(client, store):
    store.upsert("CMI-AAAAAA", {"price": 105, "email": "ada@example.com", "phone": "0700"})

    r = client.get("/api/bookings/CMI-AAAAAA")

    assert r.status_code == 200
    data = r.json()
    assert data["bookingRef"] == "CMI-AAAAAA"
    assert data["status"] == "pending"
    assert data["price"] == 105
    assert data["paidAt"] is None
    assert "email" not in data and "phone" not in data
    assert "no-store" in r.headers["cache-control"]


def test_booking_status_after_payment(client, store):
    store.upsert("CMI-AAAAAA", {"price": 105})
    store.mark_paid("CMI-AAAAAA")

    data = client.get("/api/bookings/CMI-AAAAAA").json()
    assert data["status"] == "paid"
    assert data["paidAt"]


def test_booking_status_unknown_ref(client):
    r = client.get("/api/bookings/CMI-ZZZZZZ")
    assert r.status_code == 404
    assert r.json() == {"detail": "Booking not found"}


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"ok": True}


def test_health_store(client, store):
    store.upsert("CMI-AAAAAA", {"price": 55})

    info = client.get("/health/store").json()
    assert info["readable"] is True
    assert info["count"] == 1


def test_health_store_corrupt_file(client, store):
    store.path.write_text("[{", encoding="utf-8")

    r = client.get("/health/store")
    assert r.status_code == 503
    assert r.json()["readable"] is False


def test_health_rate_limit_disabled_in_tests(client):
    info = client.get("/health/rate-limit").json()
    assert info["enabled"] is False


def test_pages_are_served(client):
    for path in ("/", "/index.html", "/success.html", "/cancel.html"):
        r = client.get(path)
        assert r.status_code == 200
        assert "text/html" in r.headers["content-type"]

    assert client.get("/favicon.ico").status_code == 204
    assert client.get("/js/app.js").status_code == 200


def test_success_page_tracks_booking_status(client):
    page = client.get("/success.html").text
    assert "/js/success.js" in page

    script = client.get("/js/success.js")
    assert script.status_code == 200
    assert "/api/bookings/" in script.text
