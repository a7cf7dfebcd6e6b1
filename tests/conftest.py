import hashlib
import hmac
import json
import os
import time
from typing import Any, Dict, Generator

import pytest
from fastapi.testclient import TestClient

# Pas de Redis en tests: à poser avant l'import de l'app
os.environ.setdefault("DISABLE_FASTAPI_LIMITER_INIT_FOR_TESTS", "1")

from collectmyitem import config
from collectmyitem.app import app as fastapi_app
from collectmyitem.bookings.store import BookingStore, get_store
from collectmyitem.payments import stripe_client

WEBHOOK_SECRET = "whsec_test_secret"
BASE_URL = "https://collect.test"

# Marquage automatique selon le dossier
def pytest_collection_modifyitems(config, items):
    for item in items:
        nodeid = item.nodeid.replace("\\", "/")
        if "/unit/" in nodeid:
            item.add_marker(pytest.mark.unit)
        elif "/integration/" in nodeid:
            item.add_marker(pytest.mark.integration)

@pytest.fixture(autouse=True)
def _test_settings(monkeypatch, tmp_path):
    # Configuration figée: aucun test ne dépend du .env local ni n'écrit dans le répertoire courant
    monkeypatch.setattr(config, "STRIPE_SECRET_KEY", "sk_test_dummy")
    monkeypatch.setattr(config, "STRIPE_WEBHOOK_SECRET", WEBHOOK_SECRET)
    monkeypatch.setattr(config, "BASE_URL", BASE_URL)
    monkeypatch.setattr(config, "TRAVEL_POLICY", "zone")
    monkeypatch.setattr(config, "BOOKINGS_FILE", tmp_path / "bookings.json")
    monkeypatch.delenv("LOCAL_RATE_LIMIT_FALLBACK", raising=False)

@pytest.fixture
def store(tmp_path) -> BookingStore:
    return BookingStore(tmp_path / "bookings.json")

@pytest.fixture(scope="session")
def app():
    return fastapi_app

@pytest.fixture()
def client(app, store) -> Generator[TestClient, None, None]:
    app.dependency_overrides[get_store] = lambda: store
    try:
        with TestClient(app) as c:
            yield c
    finally:
        app.dependency_overrides.pop(get_store, None)

@pytest.fixture
def fake_checkout(monkeypatch):
    """Remplace l'appel Stripe Checkout; expose les kwargs reçus."""
    calls = []

    def _fake_create_session(**kwargs):
        calls.append(kwargs)
        return {"id": f"cs_test_{len(calls)}", "url": f"https://checkout.stripe.test/c/pay/cs_test_{len(calls)}"}

    monkeypatch.setattr(stripe_client, "create_session", _fake_create_session)
    return calls

# --- Webhook Stripe ---

def _sign_payload(payload: bytes, secret: str = WEBHOOK_SECRET) -> str:
    # Schéma v1: HMAC-SHA256 de "<t>.<payload>"
    ts = int(time.time())
    signature = hmac.new(secret.encode("utf-8"), f"{ts}.".encode("utf-8") + payload, hashlib.sha256).hexdigest()
    return f"t={ts},v1={signature}"

def _make_event(event_type: str, booking_ref: str = None, session_id: str = "cs_test_123") -> Dict[str, Any]:
    metadata = {"bookingRef": booking_ref} if booking_ref else {}
    return {
        "id": "evt_test_1",
        "object": "event",
        "type": event_type,
        "data": {"object": {"id": session_id, "object": "checkout.session", "metadata": metadata}},
    }

@pytest.fixture
def sign_payload():
    return _sign_payload

@pytest.fixture
def make_event():
    return _make_event

@pytest.fixture
def signed_event():
    """Fabrique (payload brut, en-têtes signés) pour un événement Stripe."""
    def _build(event_type: str, booking_ref: str = None, secret: str = WEBHOOK_SECRET):
        payload = json.dumps(_make_event(event_type, booking_ref)).encode("utf-8")
        return payload, {"stripe-signature": _sign_payload(payload, secret), "content-type": "application/json"}
    return _build
