"""Authentication / authorization helpers.

Auth is deliberately small:

- `POST /jwt` signs whatever claims the caller sends (normally `{email}`)
- `verify_jwt` accepts `Authorization: Bearer <token>` and exposes the claims
- `require_admin` re-reads the caller's role from the users collection

There is no password check and no revocation; a token stays valid until it
expires (7 days by default).
"""

from .deps import require_admin, verify_jwt
from .security import AuthError, ExpiredToken, InvalidToken, MalformedToken, issue_token, verify_token

__all__ = [
    "verify_jwt",
    "require_admin",
    "issue_token",
    "verify_token",
    "AuthError",
    "ExpiredToken",
    "InvalidToken",
    "MalformedToken",
]
