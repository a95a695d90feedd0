"""
Security helpers for password hashing and JWT authentication.

This module implements a lightweight JSON Web Token (JWT) mechanism
using HMAC‑SHA256 signatures and base64url encoding.  Tokens carry the
account id in the ``sub`` claim together with ``iat`` and ``exp``
timestamps.  A secret key from the application settings is used to
sign and verify the token.  Passwords are hashed with PBKDF2‑HMAC
(SHA‑256) and a random per‑password salt.
"""

import base64
import binascii
import hashlib
import hmac
import json
import os
import time
from typing import Any, Dict, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from .config import settings
from .db import MAX_ROW_ID
from .errors import InvalidToken, Unauthenticated


PASSWORD_ITERATIONS = 100_000


def _b64_url_encode(data: bytes) -> str:
    """Base64‑url encode bytes without padding."""
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("utf-8")


def _b64_url_decode(data: str) -> bytes:
    """Decode base64‑url encoded string, adding padding if necessary."""
    padding = '=' * (-len(data) % 4)
    return base64.urlsafe_b64decode(data + padding)


def _sign(message: bytes, secret: str) -> bytes:
    """Compute HMAC‑SHA256 signature of a message using the given secret."""
    return hmac.new(secret.encode("utf-8"), message, hashlib.sha256).digest()


def create_access_token(
    data: Dict[str, Any],
    expires_delta: Optional[int] = None,
    secret_key: Optional[str] = None,
) -> str:
    """Create a signed JWT token with the given payload.

    The payload is extended with ``iat`` and ``exp`` fields holding
    UNIX timestamps.  The token is a string of the form
    ``header.payload.signature``, where each part is base64url encoded.

    Parameters
    ----------
    data : dict
        Claims to embed in the token (e.g. ``{"sub": "42"}``).
    expires_delta : Optional[int]
        Lifetime of the token in seconds.  Defaults to
        ``settings.access_token_expire_minutes * 60``.
    secret_key : Optional[str]
        Signing key.  Defaults to ``settings.secret_key``.
    """
    to_encode = data.copy()
    now = int(time.time())
    exp_seconds = expires_delta if expires_delta is not None else settings.access_token_expire_minutes * 60
    to_encode["iat"] = now
    to_encode["exp"] = now + exp_seconds
    header = {"alg": "HS256", "typ": "JWT"}
    header_b64 = _b64_url_encode(json.dumps(header, separators=(',', ':')).encode("utf-8"))
    payload_b64 = _b64_url_encode(json.dumps(to_encode, separators=(',', ':')).encode("utf-8"))
    signing_input = f"{header_b64}.{payload_b64}".encode("utf-8")
    signature = _sign(signing_input, secret_key or settings.secret_key)
    return f"{header_b64}.{payload_b64}.{_b64_url_encode(signature)}"


def issue_token(account_id: int, expires_delta: Optional[int] = None, secret_key: Optional[str] = None) -> str:
    """Issue a bearer token bound to ``account_id``."""
    return create_access_token({"sub": str(account_id)}, expires_delta=expires_delta, secret_key=secret_key)


def verify_token(token: Optional[str], secret_key: Optional[str] = None) -> int:
    """Verify a bearer token and return the account id it was issued for.

    Raises
    ------
    Unauthenticated
        The token is missing or malformed: wrong number of segments,
        undecodable base64 or JSON, or no integer ``sub`` claim.
    InvalidToken
        The signature does not match or the token has expired.
    """
    if not token:
        raise Unauthenticated()
    parts = token.split('.')
    if len(parts) != 3:
        raise Unauthenticated("Malformed token")
    header_b64, payload_b64, signature_b64 = parts
    try:
        actual_sig = _b64_url_decode(signature_b64)
        payload = json.loads(_b64_url_decode(payload_b64).decode("utf-8"))
    except (binascii.Error, UnicodeDecodeError, ValueError):
        raise Unauthenticated("Malformed token")
    if not isinstance(payload, dict):
        raise Unauthenticated("Malformed token")

    signing_input = f"{header_b64}.{payload_b64}".encode("utf-8")
    expected_sig = _sign(signing_input, secret_key or settings.secret_key)
    # Constant‑time comparison to prevent timing attacks
    if not hmac.compare_digest(expected_sig, actual_sig):
        raise InvalidToken()
    exp = payload.get("exp")
    if not isinstance(exp, int) or exp < int(time.time()):
        raise InvalidToken()

    try:
        account_id = int(payload["sub"])
    except (KeyError, TypeError, ValueError):
        raise Unauthenticated("Malformed token")
    if not 1 <= account_id <= MAX_ROW_ID:
        raise Unauthenticated("Malformed token")
    return account_id


security = HTTPBearer(auto_error=False)


def get_current_account_id(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> int:
    """Dependency resolving the ``Authorization: Bearer`` header to an account id.

    The signing key comes from the settings the application was built
    with.  Whether the account still exists is left to the handler.
    """
    if credentials is None:
        raise Unauthenticated()
    return verify_token(credentials.credentials, secret_key=request.app.state.settings.secret_key)


def hash_password(password: str) -> str:
    """Hash a password using PBKDF2‑HMAC with SHA‑256.

    A 16‑byte random salt is generated for each password.  The
    resulting string contains the salt and hash separated by a
    ``$`` (salt in hex, then hash in hex).
    """
    salt = os.urandom(16)
    dk = hashlib.pbkdf2_hmac('sha256', password.encode('utf-8'), salt, PASSWORD_ITERATIONS)
    return f"{salt.hex()}${dk.hex()}"


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plain password against a stored salt+hash string.

    Returns ``False`` for a wrong password as well as for a stored value
    that is not in the ``salthex$hashhex`` format.
    """
    try:
        salt_hex, hash_hex = hashed_password.split('$', 1)
        salt = bytes.fromhex(salt_hex)
        stored_hash = bytes.fromhex(hash_hex)
    except ValueError:
        return False
    dk = hashlib.pbkdf2_hmac('sha256', plain_password.encode('utf-8'), salt, PASSWORD_ITERATIONS)
    return hmac.compare_digest(dk, stored_hash)
