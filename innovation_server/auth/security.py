from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Mapping, Optional

import jwt


_JWT_ALG = "HS256"
DEFAULT_EXPIRES_IN = timedelta(days=7)


class AuthError(Exception):
    """Token could not be verified."""

    kind = "auth_error"


class InvalidToken(AuthError):
    kind = "token_invalid"


class ExpiredToken(AuthError):
    kind = "token_expired"


class MalformedToken(AuthError):
    kind = "token_malformed"


def issue_token(
    payload: Mapping[str, Any],
    *,
    secret: str,
    expires_in: timedelta = DEFAULT_EXPIRES_IN,
    now: Optional[datetime] = None,
) -> str:
    """Sign arbitrary claims. `iat` and `exp` are always set by the server."""
    if not secret:
        raise ValueError("jwt_secret_blank")

    issued = now or datetime.now(timezone.utc)
    claims: Dict[str, Any] = dict(payload)
    claims["iat"] = int(issued.timestamp())
    claims["exp"] = int((issued + expires_in).timestamp())
    return jwt.encode(claims, secret, algorithm=_JWT_ALG)


def verify_token(token: str, *, secret: str) -> Dict[str, Any]:
    """Decode and verify a token, raising a typed AuthError on failure."""
    if not secret:
        raise ValueError("jwt_secret_blank")
    if not token:
        raise MalformedToken("token_blank")

    try:
        return jwt.decode(token, secret, algorithms=[_JWT_ALG])
    except jwt.ExpiredSignatureError as e:
        raise ExpiredToken(str(e)) from e
    # InvalidSignatureError subclasses DecodeError, so it must come first.
    except jwt.InvalidSignatureError as e:
        raise InvalidToken(str(e)) from e
    except jwt.DecodeError as e:
        raise MalformedToken(str(e)) from e
    except jwt.InvalidTokenError as e:
        raise InvalidToken(str(e)) from e
