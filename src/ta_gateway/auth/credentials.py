"""Staff session credentials forwarded to the backend.

The dashboard does not issue tokens itself: staff log in against the CMS
JWT endpoint and send that token back on every request. Signature checks
are the backend's job (it holds the secret); here the token is only read
unverified to refuse an expired session before any network call.
"""

from datetime import UTC, datetime

from jose import JWTError, jwt

from src.ta_common.errors import NotAuthenticatedError

NONCE_HEADER = "X-WP-Nonce"


def token_expiry(token: str) -> datetime | None:
    """Read the `exp` claim without verifying the signature.

    Returns None when the token carries no expiry.
    Raises NotAuthenticatedError when the token is not a readable JWT.
    """
    try:
        claims = jwt.get_unverified_claims(token)
    except JWTError:
        raise NotAuthenticatedError("Invalid session token") from None
    exp = claims.get("exp")
    if exp is None:
        return None
    try:
        return datetime.fromtimestamp(int(exp), UTC)
    except (TypeError, ValueError, OverflowError):
        raise NotAuthenticatedError("Invalid session token") from None


def is_token_expired(token: str, now: datetime | None = None) -> bool:
    expiry = token_expiry(token)
    if expiry is None:
        return False
    return expiry <= (now or datetime.now(UTC))


class StaffCredentials:
    """AuthHeadersProvider for one staff request."""

    def __init__(self, token: str | None, nonce: str | None = None) -> None:
        self.token = token
        self.nonce = nonce

    def auth_headers(self) -> dict[str, str]:
        if not self.token:
            raise NotAuthenticatedError()
        if is_token_expired(self.token):
            raise NotAuthenticatedError("Session expired, please log in again")

        headers = {"Authorization": f"Bearer {self.token}"}
        if self.nonce:
            headers[NONCE_HEADER] = self.nonce
        return headers
