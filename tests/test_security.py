"""Tests for access token encoding and verification."""

import base64
import json
import time

from cashless_hub_api.app.core.config import settings
from cashless_hub_api.app.core.security import (
    _b64_url_encode,
    _sign,
    create_access_token,
    decode_access_token,
    is_tenant_admin,
)


CLAIMS = {"userId": "u1", "email": "a@example.com", "globalRole": "END_USER", "tenantId": "t1", "tenantRole": "TENANT_ADMIN"}


def _payload(token):
    payload_b64 = token.split(".")[1]
    return json.loads(base64.urlsafe_b64decode(payload_b64 + "=" * (-len(payload_b64) % 4)))


def test_round_trip_adds_type_and_expiry():
    payload = decode_access_token(create_access_token(CLAIMS))

    assert payload["tenantId"] == "t1"
    assert payload["type"] == "access"
    assert "exp" in payload


def test_expired_token_is_rejected():
    token = create_access_token(CLAIMS, expires_delta=-10)

    assert decode_access_token(token) is None


def test_tampered_payload_is_rejected():
    header, _, signature = create_access_token(CLAIMS).split(".")
    forged = dict(_payload(create_access_token(CLAIMS)), tenantId="t2")
    forged_b64 = base64.urlsafe_b64encode(json.dumps(forged).encode()).rstrip(b"=").decode()

    assert decode_access_token(f"{header}.{forged_b64}.{signature}") is None


def test_token_signed_with_other_secret_is_rejected(monkeypatch):
    token = create_access_token(CLAIMS)
    monkeypatch.setattr(settings, "secret_key", "rotated")

    assert decode_access_token(token) is None


def test_malformed_tokens_are_rejected():
    for token in ("", "abc", "a.b", "a.b.c", "!!.??.**"):
        assert decode_access_token(token) is None


def _signed(claims):
    header_b64 = _b64_url_encode(json.dumps({"alg": "HS256", "typ": "JWT"}).encode("utf-8"))
    payload_b64 = _b64_url_encode(json.dumps(claims).encode("utf-8"))
    signature = _sign(f"{header_b64}.{payload_b64}".encode("utf-8"), settings.secret_key)
    return f"{header_b64}.{payload_b64}.{_b64_url_encode(signature)}"


def test_token_of_another_type_is_rejected():
    refresh = _signed(dict(CLAIMS, type="refresh", exp=int(time.time()) + 600))
    untyped = _signed(dict(CLAIMS, exp=int(time.time()) + 600))

    assert decode_access_token(_signed(dict(CLAIMS, type="access", exp=int(time.time()) + 600))) is not None
    assert decode_access_token(refresh) is None
    assert decode_access_token(untyped) is None


def test_refresh_token_is_refused_by_the_api(client):
    refresh = _signed(dict(CLAIMS, type="refresh", exp=int(time.time()) + 600))

    response = client.get("/api/v1/events", headers={"Authorization": f"Bearer {refresh}"})

    assert response.status_code == 401
    assert response.json()["code"] == "AUTH_TOKEN_INVALID"


def test_tenant_admin_detection():
    assert is_tenant_admin({"tenantRole": "TENANT_ADMIN"})
    assert is_tenant_admin({"globalRole": "SUPERADMIN"})
    assert not is_tenant_admin({"tenantRole": "TENANT_STAFF", "globalRole": "END_USER"})
