"""HMAC-signed cookie values with an embedded expiry.

Format: ``{value}.{expires_unix}.{hex_hmac}``

The signature covers both the value and the expiry, so neither can be altered
without the server secret. Values may themselves contain dots.
"""

import hashlib
import hmac
import time

__all__ = ["sign_value", "unsign_value"]


def sign_value(secret: str, value: str, ttl_seconds: int) -> str:
    """Sign *value* so it verifies for *ttl_seconds*."""
    expires = str(int(time.time()) + ttl_seconds)
    sig = _sign(secret, f"{value}.{expires}")
    return f"{value}.{expires}.{sig}"


def unsign_value(secret: str, signed: str | None) -> str | None:
    """Return the original value, or None if malformed, tampered or expired."""
    if not signed:
        return None

    parts = signed.rsplit(".", 2)
    if len(parts) != 3:
        return None

    value, expires_str, sig = parts
    try:
        expires = int(expires_str)
    except ValueError:
        return None

    if time.time() > expires:
        return None

    expected = _sign(secret, f"{value}.{expires_str}")
    if not hmac.compare_digest(sig.encode(), expected.encode()):
        return None
    return value


def _sign(key: str, message: str) -> str:
    return hmac.new(key.encode(), message.encode(), hashlib.sha256).hexdigest()
