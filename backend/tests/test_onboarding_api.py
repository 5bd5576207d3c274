"""
API tests for the onboarding flow: send-code -> verify-code -> register-passkey
-> token-ingestion -> list/revoke tokens
"""
import re
from datetime import timedelta
from freezegun import freeze_time

PHONE = "+5511999990000"


def _send_code(client, phone=PHONE):
    response = client.post("/api/send-code", json={"phone": phone})
    assert response.status_code == 200, response.text
    return response.json()


def _verify(client, phone, data):
    return client.post("/api/verify-code", json={
        "phone": phone,
        "otp": data["codePreview"],
        "flowToken": data["flowToken"],
    })


def test_full_onboarding_scenario(client):
    with freeze_time("2026-01-10 12:00:00") as frozen:
        sent = _send_code(client)
        assert re.fullmatch(r"\d{6}", sent["codePreview"])
        assert sent["flowToken"]
        # 2026-01-10T12:01:00Z in epoch milliseconds
        assert sent["expiresAt"] == 1768046460000

        frozen.tick(timedelta(seconds=30))
        response = _verify(client, PHONE, sent)
        assert response.status_code == 200
        assert response.json() == {"success": True}

        frozen.tick(timedelta(minutes=2))
        response = client.post("/api/register-passkey", json={"phone": PHONE, "credentialId": "cred-1"})
        assert response.status_code == 200
        assert response.json() == {"success": True}

        response = client.post("/oauth/token-ingestion", json={"phone": PHONE, "credentialId": "cred-1"})
        assert response.status_code == 200
        issued = response.json()
        assert issued["access_token"].startswith("atk_")
        assert issued["refresh_token"].startswith("rtk_")
        assert issued["expires_in"] == 900
        assert issued["issued_at"] == "2026-01-10T12:02:30.000Z"

    response = client.get("/oauth/tokens", params={"phone": PHONE})
    assert response.status_code == 200
    tokens = response.json()
    assert len(tokens) == 1
    assert tokens[0]["access_token"] == issued["access_token"]
    assert tokens[0]["credential_id"] == "cred-1"
    assert tokens[0]["revoked"] is False
    assert tokens[0]["revoked_at"] is None

    response = client.post("/oauth/tokens/revoke", json={"accessToken": issued["access_token"]})
    assert response.status_code == 200
    assert response.json() == {"success": True}

    response = client.post("/oauth/tokens/revoke", json={"accessToken": issued["access_token"]})
    assert response.status_code == 404
    assert response.json()["error"] == "NotFound"

    tokens = client.get("/oauth/tokens", params={"phone": PHONE}).json()
    assert tokens[0]["revoked"] is True
    assert tokens[0]["revoked_at"] is not None


def test_verify_after_expiry_returns_400_expired(client):
    with freeze_time("2026-01-10 12:00:00") as frozen:
        sent = _send_code(client)
        frozen.tick(timedelta(seconds=61))
        response = _verify(client, PHONE, sent)

    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "Expired"
    assert "expired" in body["detail"].lower()


def test_send_code_requires_phone(client):
    for payload in ({}, {"phone": ""}, {"phone": "   "}):
        response = client.post("/api/send-code", json=payload)
        assert response.status_code == 400
        assert response.json()["error"] == "InvalidInput"


def test_send_code_with_non_string_phone_is_invalid_input(client):
    response = client.post("/api/send-code", json={"phone": {"nested": True}})
    assert response.status_code == 400
    assert response.json()["error"] == "InvalidInput"


def test_verify_wrong_code_returns_400(client):
    sent = _send_code(client)
    wrong = "000000" if sent["codePreview"] != "000000" else "111111"
    response = client.post("/api/verify-code", json={
        "phone": PHONE, "otp": wrong, "flowToken": sent["flowToken"],
    })
    assert response.status_code == 400
    assert response.json()["error"] == "NotFound"


def test_verify_twice_fails_second_time(client):
    sent = _send_code(client)
    assert _verify(client, PHONE, sent).status_code == 200
    response = _verify(client, PHONE, sent)
    assert response.status_code == 400
    assert response.json()["error"] == "NotFound"


def test_old_code_fails_after_resend(client):
    old = _send_code(client)
    new = _send_code(client)
    assert _verify(client, PHONE, old).status_code == 400
    assert _verify(client, PHONE, new).status_code == 200


def test_register_passkey_requires_verified_code(client):
    _send_code(client)
    response = client.post("/api/register-passkey", json={"phone": PHONE, "credentialId": "cred-1"})
    assert response.status_code == 400
    assert response.json()["error"] == "Unauthorized"


def test_register_passkey_missing_fields(client):
    response = client.post("/api/register-passkey", json={"phone": PHONE})
    assert response.status_code == 400
    assert response.json()["error"] == "InvalidInput"


def test_token_ingestion_without_binding(client):
    response = client.post("/oauth/token-ingestion", json={"phone": PHONE, "credentialId": "cred-1"})
    assert response.status_code == 400
    assert response.json()["error"] == "Unauthorized"


def test_list_tokens_requires_phone(client):
    assert client.get("/oauth/tokens").status_code == 400
    assert client.get("/oauth/tokens", params={"phone": " "}).status_code == 400


def test_revoke_requires_access_token(client):
    response = client.post("/oauth/tokens/revoke", json={})
    assert response.status_code == 400
    assert response.json()["error"] == "InvalidInput"


def test_code_preview_can_be_disabled(client, monkeypatch):
    from app.core.config import settings

    monkeypatch.setattr(settings, "OTP_CODE_PREVIEW_ENABLED", False)
    sent = _send_code(client)
    assert "codePreview" in sent
    assert sent["codePreview"] is None
    assert sent["flowToken"]


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["ok"] is True
