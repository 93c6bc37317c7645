"""Admin credential checks."""
from __future__ import annotations

import base64
import binascii
import secrets


def secrets_match(candidate: str | None, expected: str) -> bool:
    """Compare a supplied secret against the configured one in constant time."""
    if candidate is None:
        return False
    return secrets.compare_digest(candidate.encode("utf-8"), expected.encode("utf-8"))


def decode_basic_credentials(authorization: str | None) -> tuple[str, str] | None:
    """Decode an ``Authorization: Basic`` header into ``(username, password)``.

    Args:
        authorization: Raw header value, possibly missing.

    Returns:
        The decoded pair, or None if the header is absent, uses another scheme,
        or is not valid base64 ``user:pass`` text.
    """
    if not authorization:
        return None
    scheme, _, param = authorization.partition(" ")
    if scheme.lower() != "basic" or not param:
        return None
    try:
        decoded = base64.b64decode(param.strip(), validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError):
        return None
    username, separator, password = decoded.partition(":")
    if not separator:
        return None
    return username, password


def is_admin_request(
    *,
    authorization: str | None,
    shared_secret: str | None,
    admin_user: str,
    admin_pass: str,
) -> bool:
    """Return True if the request carries valid admin credentials.

    Basic credentials must match both the configured user and password. The
    legacy shared secret (header or query parameter) only has to match the
    password.
    """
    credentials = decode_basic_credentials(authorization)
    if credentials is not None:
        username, password = credentials
        # Evaluate both comparisons so timing does not reveal which one failed.
        user_ok = secrets_match(username, admin_user)
        pass_ok = secrets_match(password, admin_pass)
        if user_ok and pass_ok:
            return True
    return secrets_match(shared_secret, admin_pass)
