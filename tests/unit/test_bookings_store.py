import json
import re
from concurrent.futures import ThreadPoolExecutor

import pytest

from collectmyitem.bookings.models import booking_fields_from_request, new_booking_ref, public_view
from collectmyitem.bookings.store import (
    BookingAlreadyPaidError,
    BookingStore,
    BookingStoreError,
    STATUS_PAID,
    STATUS_PENDING,
)


def test_upsert_creates_pending_booking(store):
    booking = store.upsert("CMI-AAAAAA", {"price": 105, "name": "Ada"})

    assert booking["bookingRef"] == "CMI-AAAAAA"
    assert booking["status"] == STATUS_PENDING
    assert booking["price"] == 105
    assert booking["createdAt"].endswith("Z")
    # le fichier est un tableau JSON lisible
    on_disk = json.loads(store.path.read_text(encoding="utf-8"))
    assert isinstance(on_disk, list) and on_disk[0]["bookingRef"] == "CMI-AAAAAA"


def test_upsert_twice_merges_without_duplicate(store):
    first = store.upsert("CMI-AAAAAA", {"price": 105, "name": "Ada"})
    second = store.upsert("CMI-AAAAAA", {"phone": "0700", "price": 110})

    assert len(store.list_all()) == 1
    assert second["name"] == "Ada"
    assert second["phone"] == "0700"
    assert second["price"] == 110
    assert second["createdAt"] == first["createdAt"]


def test_upsert_cannot_overwrite_protected_fields(store):
    store.upsert("CMI-AAAAAA", {"price": 55})
    booking = store.upsert("CMI-AAAAAA", {"status": "paid", "paidAt": "2020-01-01", "bookingRef": "X", "createdAt": "x"})

    assert booking["status"] == STATUS_PENDING
    assert booking["bookingRef"] == "CMI-AAAAAA"
    assert "paidAt" not in booking
    assert booking["createdAt"] != "x"


def test_upsert_requires_ref(store):
    with pytest.raises(ValueError):
        store.upsert("", {"price": 55})


def test_mark_paid_sets_status_and_timestamp(store):
    store.upsert("CMI-AAAAAA", {"price": 55})
    booking = store.mark_paid("CMI-AAAAAA", stripeSessionId="cs_test_1")

    assert booking["status"] == STATUS_PAID
    assert booking["paidAt"].endswith("Z")
    assert booking["stripeSessionId"] == "cs_test_1"
    assert store.get("CMI-AAAAAA")["status"] == STATUS_PAID


def test_mark_paid_is_idempotent(store):
    store.upsert("CMI-AAAAAA", {"price": 55})
    first = store.mark_paid("CMI-AAAAAA")
    second = store.mark_paid("CMI-AAAAAA")

    assert second["paidAt"] == first["paidAt"]
    assert len(store.list_all()) == 1


def test_upsert_refuses_paid_booking(store):
    store.upsert("CMI-AAAAAA", {"price": 145, "itemSize": "xl"})
    store.mark_paid("CMI-AAAAAA")
    before = store.path.read_bytes()

    with pytest.raises(BookingAlreadyPaidError):
        store.upsert("CMI-AAAAAA", {"price": 35, "itemSize": "small"})

    assert store.path.read_bytes() == before
    booking = store.get("CMI-AAAAAA")
    assert booking["price"] == 145
    assert booking["itemSize"] == "xl"


def test_mark_paid_unknown_ref_leaves_file_unchanged(store):
    store.upsert("CMI-AAAAAA", {"price": 55})
    before = store.path.read_bytes()

    assert store.mark_paid("CMI-ZZZZZZ") is None
    assert store.path.read_bytes() == before


def test_mark_paid_without_file_creates_nothing(store):
    assert store.mark_paid("CMI-ZZZZZZ") is None
    assert not store.path.exists()


def test_missing_or_empty_file_is_empty_store(store):
    assert store.list_all() == []
    store.path.write_text("", encoding="utf-8")
    assert store.list_all() == []
    assert store.get("CMI-AAAAAA") is None


@pytest.mark.parametrize("content", ["{not json", '{"bookingRef": "CMI-AAAAAA"}'])
def test_corrupt_file_raises_store_error(store, content):
    store.path.write_text(content, encoding="utf-8")

    with pytest.raises(BookingStoreError):
        store.list_all()
    with pytest.raises(BookingStoreError):
        store.upsert("CMI-AAAAAA", {"price": 55})
    # le fichier corrompu n'est pas écrasé
    assert store.path.read_text(encoding="utf-8") == content


def test_concurrent_upserts_lose_no_update(tmp_path):
    path = tmp_path / "bookings.json"
    refs = [f"CMI-{i:06d}" for i in range(25)]

    # deux instances sur le même fichier partagent le même verrou
    def _write(ref):
        BookingStore(path).upsert(ref, {"price": 55})

    with ThreadPoolExecutor(max_workers=8) as pool:
        list(pool.map(_write, refs))

    stored = {b["bookingRef"] for b in BookingStore(path).list_all()}
    assert stored == set(refs)


def test_new_booking_ref_format():
    refs = {new_booking_ref() for _ in range(50)}
    assert all(re.fullmatch(r"CMI-[A-Z0-9]{6}", ref) for ref in refs)
    assert len(refs) > 1


def test_booking_fields_from_request_keeps_client_price_aside():
    fields = booking_fields_from_request(
        {"itemSize": "large", "email": "a@b.c", "price": 1, "status": "paid", "unexpected": "x", "notes": None}
    )
    assert fields == {"itemSize": "large", "email": "a@b.c", "clientPrice": 1}


def test_public_view_hides_contact_details():
    view = public_view({"bookingRef": "CMI-AAAAAA", "status": "pending", "price": 55, "email": "a@b.c", "createdAt": "t"})
    assert view == {"bookingRef": "CMI-AAAAAA", "status": "pending", "price": 55, "createdAt": "t", "paidAt": None}
