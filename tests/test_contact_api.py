from conftest import OWNER_EMAIL, now_ms

from studio_site.core.config import settings


def _payload(**overrides):
    payload = {
        "name": "Jo",
        "email": "jo@x.com",
        "message": "1234567890",
        "website": "",
        "formStartedAt": now_ms() - 3000,
    }
    payload.update(overrides)
    return payload


def test_clean_submission_sends_both_emails(client, dispatcher):
    resp = client.post("/api/contact", json=_payload())

    assert resp.status_code == 200
    data = resp.json()
    assert data["ok"] is True
    assert set(data["debug"]) == {"owner", "confirmation"}
    assert [m.to for m in dispatcher.sent] == [OWNER_EMAIL, "jo@x.com"]


def test_instant_honeypot_submission_is_silently_absorbed(client, dispatcher):
    resp = client.post("/api/contact", json=_payload(website="spam", formStartedAt=now_ms()))

    assert resp.status_code == 200
    assert resp.json() == {"ok": True}
    assert dispatcher.sent == []


def test_slow_honeypot_submission_is_flagged_without_confirmation(client, dispatcher):
    resp = client.post(
        "/api/contact", json=_payload(website="spam", formStartedAt=now_ms() - 5000)
    )

    assert resp.status_code == 200
    assert resp.json()["ok"] is True
    assert len(dispatcher.sent) == 1
    assert dispatcher.sent[0].to == OWNER_EMAIL
    assert dispatcher.sent[0].subject.startswith("[Possible spam]")


def test_legacy_company_honeypot_is_honored(client, dispatcher):
    resp = client.post("/api/contact", json=_payload(company="Acme", formStartedAt=now_ms()))

    assert resp.status_code == 200
    assert dispatcher.sent == []


def test_too_fast_is_rejected_and_never_rate_limited(client, dispatcher):
    for _ in range(8):
        resp = client.post("/api/contact", json=_payload(formStartedAt=now_ms()))
        assert resp.status_code == 429
        assert resp.json() == {"ok": False, "error": "too_fast"}

    assert client.post("/api/contact", json=_payload()).status_code == 200


def test_malformed_json_is_invalid_json(client):
    resp = client.post(
        "/api/contact", content=b"{not json", headers={"Content-Type": "application/json"}
    )
    assert resp.status_code == 400
    assert resp.json() == {"ok": False, "error": "invalid_json"}


def test_empty_body_is_invalid_json(client):
    resp = client.post("/api/contact", content=b"")
    assert resp.json() == {"ok": False, "error": "invalid_json"}


def test_validation_errors_map_to_codes(client, dispatcher):
    cases = [
        (_payload(name="J"), "invalid_name"),
        (_payload(email="a b@c.com"), "invalid_email"),
        (_payload(message="123456789"), "invalid_message"),
    ]
    for payload, code in cases:
        resp = client.post("/api/contact", json=payload)
        assert resp.status_code == 400
        assert resp.json() == {"ok": False, "error": code}
    assert dispatcher.sent == []


def test_rate_limit_is_per_forwarded_client(client):
    headers = {"X-Forwarded-For": "203.0.113.5, 10.0.0.1"}
    for _ in range(5):
        assert client.post("/api/contact", json=_payload(), headers=headers).status_code == 200

    resp = client.post("/api/contact", json=_payload(), headers=headers)
    assert resp.status_code == 429
    assert resp.json() == {"ok": False, "error": "rate_limited"}

    other = client.post("/api/contact", json=_payload(), headers={"X-Real-IP": "198.51.100.1"})
    assert other.status_code == 200


def test_missing_destination_is_server_error(client, api_handler):
    api_handler.to_email = ""

    resp = client.post("/api/contact", json=_payload())

    assert resp.status_code == 500
    assert resp.json() == {"ok": False, "error": "missing_to_email"}


def test_production_mode_omits_debug(client, api_handler):
    api_handler.is_production = True

    resp = client.post("/api/contact", json=_payload())

    assert resp.json() == {"ok": True}


def test_response_carries_trace_and_security_headers(client):
    resp = client.post("/api/contact", json=_payload(), headers={"X-Trace-Id": "trace-123"})

    assert resp.headers["X-Trace-Id"] == "trace-123"
    assert resp.headers["X-Content-Type-Options"] == "nosniff"


def test_app_wide_limit_renders_rate_limited(client, dispatcher):
    # Malformed bodies count toward the app-wide limit but never reach the handler
    for _ in range(settings.rate_limit_requests):
        resp = client.post(
            "/api/contact", content=b"{not json", headers={"Content-Type": "application/json"}
        )
        assert resp.status_code == 400

    resp = client.post("/api/contact", json=_payload())

    assert resp.status_code == 429
    assert resp.json() == {"ok": False, "error": "rate_limited"}
    assert dispatcher.sent == []
