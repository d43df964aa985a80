"""
Access token handling and tenant context resolution.

This module implements a lightweight JSON Web Token (JWT) mechanism
using HMAC-SHA256 signatures and base64url encoding.  Tokens are
issued by the authentication service with the claims ``userId``,
``email``, ``globalRole``, ``tenantId``, ``tenantRole`` and
``type`` (always ``"access"``), plus an expiration timestamp
(``exp``).  The secret key from the application settings is used to
sign and verify them.

The FastAPI dependencies at the bottom of the module turn the bearer
token into the caller context:

* ``get_current_user`` decodes the token (401 on failure);
* ``require_tenant`` demands a tenant context (403 otherwise);
* ``require_tenant_admin`` additionally demands a tenant admin or a
  super administrator.
"""

import base64
import hashlib
import hmac
import json
import time
from enum import Enum
from typing import Any, Dict, Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from .config import settings
from .errors import ErrorCode, ForbiddenError, UnauthorizedError


class UserRole(str, Enum):
    SUPERADMIN = "SUPERADMIN"
    TENANT_ADMIN = "TENANT_ADMIN"
    TENANT_STAFF = "TENANT_STAFF"
    END_USER = "END_USER"


def _b64_url_encode(data: bytes) -> str:
    """Base64-url encode bytes without padding."""
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("utf-8")


def _b64_url_decode(data: str) -> bytes:
    """Decode base64-url encoded string, adding padding if necessary."""
    padding = "=" * (-len(data) % 4)
    return base64.urlsafe_b64decode(data + padding)


def _sign(message: bytes, secret: str) -> bytes:
    return hmac.new(secret.encode("utf-8"), message, hashlib.sha256).digest()


def create_access_token(data: Dict[str, Any], expires_delta: Optional[int] = None) -> str:
    """Create a signed access token with the given claims.

    The payload is extended with ``type="access"`` and an ``exp``
    field holding the expiration time as a UNIX timestamp.  The token
    has the form ``header.payload.signature`` where each part is
    base64url encoded.  Clients send it as ``Authorization: Bearer
    <token>``.

    Parameters
    ----------
    data : dict
        Claims to embed (``userId``, ``email``, ``globalRole`` and
        optionally ``tenantId``/``tenantRole``).
    expires_delta : Optional[int]
        Lifetime of the token in seconds.  Defaults to
        ``settings.access_token_expire_minutes * 60``.
    """
    to_encode = dict(data)
    to_encode["type"] = "access"
    exp_seconds = expires_delta if expires_delta is not None else settings.access_token_expire_minutes * 60
    to_encode["exp"] = int(time.time()) + exp_seconds
    header = {"alg": "HS256", "typ": "JWT"}
    header_b64 = _b64_url_encode(json.dumps(header, separators=(",", ":")).encode("utf-8"))
    payload_b64 = _b64_url_encode(json.dumps(to_encode, separators=(",", ":")).encode("utf-8"))
    signing_input = f"{header_b64}.{payload_b64}".encode("utf-8")
    signature_b64 = _b64_url_encode(_sign(signing_input, settings.secret_key))
    return f"{header_b64}.{payload_b64}.{signature_b64}"


def decode_access_token(token: str) -> Optional[Dict[str, Any]]:
    """Verify and decode an access token.

    Returns the payload when the signature matches, the token has not
    expired and its ``type`` is ``"access"``; otherwise ``None``.
    """
    parts = token.split(".")
    if len(parts) != 3:
        return None
    header_b64, payload_b64, signature_b64 = parts
    signing_input = f"{header_b64}.{payload_b64}".encode("utf-8")
    expected_sig = _sign(signing_input, settings.secret_key)
    try:
        actual_sig = _b64_url_decode(signature_b64)
        if not hmac.compare_digest(expected_sig, actual_sig):
            return None
        data = json.loads(_b64_url_decode(payload_b64).decode("utf-8"))
    except (ValueError, UnicodeDecodeError):
        # binascii.Error and json.JSONDecodeError are ValueError subclasses
        return None
    if not isinstance(data, dict):
        return None
    if data.get("type") != "access":
        return None
    exp = data.get("exp")
    if not isinstance(exp, (int, float)) or int(exp) < int(time.time()):
        return None
    return data


security = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Dict[str, Any]:
    """Dependency that returns the decoded claims of the caller.

    A missing or non-bearer ``Authorization`` header yields
    ``AUTH_TOKEN_MISSING``; a token that fails verification yields
    ``AUTH_TOKEN_INVALID``.  Both are 401.
    """
    if credentials is None:
        raise UnauthorizedError(ErrorCode.AUTH_TOKEN_MISSING)
    payload = decode_access_token(credentials.credentials)
    if not payload:
        raise UnauthorizedError(ErrorCode.AUTH_TOKEN_INVALID)
    return payload


def require_tenant(current_user: Dict[str, Any] = Depends(get_current_user)) -> str:
    """Dependency returning the caller's tenant id.

    Tokens issued outside of a tenant context (e.g. a super admin
    logged in globally) carry no ``tenantId`` and are rejected here.
    """
    tenant_id = current_user.get("tenantId")
    if not tenant_id:
        raise ForbiddenError(ErrorCode.AUTH_TENANT_CONTEXT_REQUIRED)
    return str(tenant_id)


def is_tenant_admin(current_user: Dict[str, Any]) -> bool:
    return (
        current_user.get("globalRole") == UserRole.SUPERADMIN.value
        or current_user.get("tenantRole") == UserRole.TENANT_ADMIN.value
    )


def require_tenant_admin(
    tenant_id: str = Depends(require_tenant),
    current_user: Dict[str, Any] = Depends(get_current_user),
) -> Dict[str, Any]:
    """Dependency allowing only tenant admins and super admins."""
    if not is_tenant_admin(current_user):
        raise ForbiddenError(ErrorCode.AUTH_INSUFFICIENT_PERMISSIONS)
    return current_user

