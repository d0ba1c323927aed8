from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import Depends, Header, Request

from innovation_server.errors import Forbidden, InternalError, Unauthorized

from .crud import get_user_by_email, is_admin
from .security import AuthError, verify_token


def _debug(msg: str) -> None:
    print(f"[auth] {msg}")


def get_cfg(request: Request) -> Any:
    cfg = getattr(request.app.state, "cfg", None)
    if cfg is None:
        raise InternalError("server_config_missing")
    return cfg


def get_db(request: Request) -> Any:
    db = getattr(request.app.state, "db", None)
    if db is None:
        raise InternalError("database_missing")
    return db


def verify_jwt(
    request: Request,
    authorization: Optional[str] = Header(default=None),
) -> Dict[str, Any]:
    """Authenticate a request from `Authorization: Bearer <jwt>`.

    The decoded claims are returned and also kept on `request.state.decoded`.
    Every failure is the same 401 so callers cannot tell missing from bad tokens.
    """

    if not authorization:
        raise Unauthorized()

    parts = authorization.split()
    if len(parts) < 2:
        raise Unauthorized()
    token = parts[1]

    cfg = get_cfg(request)
    try:
        decoded = verify_token(token, secret=cfg.ACCESS_TOKEN_SECRET)
    except AuthError as e:
        _debug(f"token rejected: {e.kind}")
        raise Unauthorized()
    except ValueError as e:
        # Blank ACCESS_TOKEN_SECRET: a server fault, not a bad token.
        _debug(f"token not verified: {e}")
        raise InternalError()

    request.state.decoded = decoded
    return decoded


def require_admin(
    request: Request,
    decoded: Dict[str, Any] = Depends(verify_jwt),
) -> Dict[str, Any]:
    """Allow only callers whose stored user has role "admin".

    The role is read from the database on every call, never from the token.
    """
    email = decoded.get("email")
    user = get_user_by_email(get_db(request), email)
    if not is_admin(user):
        _debug(f"admin required: email={email!r}")
        raise Forbidden()
    return decoded
