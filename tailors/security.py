"""
Tailors Backend - Token and Password Primitives
===============================================

What:  Issues and verifies HS256 bearer tokens (python-jose) and hashes and
       checks the shop password (bcrypt).
How:   Plain functions of their inputs. No I/O, no module-level secret: the
       caller passes the secret taken from Settings.
Who:   ``BearerAuth`` calls ``verify_token``; the auth service calls
       ``issue_token`` and ``verify_password``.

Failure reporting:
    ``verify_token`` raises ``InvalidTokenError`` with a tagged ``reason``
    ("expired", "claims" or "invalid"). The HTTP layer collapses every reason
    into one generic 401; the tag exists for logs and callers that need it.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import bcrypt
from jose import ExpiredSignatureError, JWTError, jwt
from jose.exceptions import JWTClaimsError

DEFAULT_ALGORITHM = "HS256"

# bcrypt only looks at the first 72 bytes of a password
_BCRYPT_MAX_BYTES = 72


class InvalidTokenError(Exception):
    """Token could not be verified. ``reason`` says why."""

    def __init__(self, reason: str, detail: str = ""):
        self.reason = reason
        self.detail = detail
        super().__init__(f"{reason}: {detail}" if detail else reason)


def issue_token(
    subject: str,
    secret: str,
    expires_minutes: int,
    algorithm: str = DEFAULT_ALGORITHM,
    extra: Optional[Dict[str, Any]] = None,
) -> str:
    """
    Create a signed token carrying ``sub``, ``iat`` and ``exp``.

    ``sub`` is always a string; jose rejects non-string subjects on decode.
    """
    now = datetime.now(timezone.utc)
    payload: Dict[str, Any] = {}
    if extra:
        payload.update(extra)
    payload.update(
        {
            "sub": str(subject),
            "iat": int(now.timestamp()),
            "exp": int((now + timedelta(minutes=expires_minutes)).timestamp()),
        }
    )
    return jwt.encode(payload, secret, algorithm=algorithm)


def verify_token(token: str, secret: str, algorithm: str = DEFAULT_ALGORITHM) -> Dict[str, Any]:
    """
    Return the decoded claims of a validly signed, unexpired token.

    Raises:
        InvalidTokenError: expired, bad claims, bad signature or malformed.
    """
    try:
        return jwt.decode(token, secret, algorithms=[algorithm])
    except ExpiredSignatureError as exc:
        raise InvalidTokenError("expired", str(exc)) from exc
    except JWTClaimsError as exc:
        raise InvalidTokenError("claims", str(exc)) from exc
    except JWTError as exc:
        raise InvalidTokenError("invalid", str(exc)) from exc


def _password_bytes(password: str) -> bytes:
    return (password or "").encode("utf-8")[:_BCRYPT_MAX_BYTES]


def hash_password(password: str, rounds: int = 12) -> str:
    return bcrypt.hashpw(_password_bytes(password), bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(plain_password: str, password_hash: str) -> bool:
    """False for a wrong password and for a missing or unparseable hash."""
    if not password_hash:
        return False
    try:
        return bcrypt.checkpw(_password_bytes(plain_password), password_hash.encode("utf-8"))
    except ValueError:
        return False
