"""Access token verification.

Tokens are issued by the authentication service; this module only checks
them and extracts the user identifier.
"""

from datetime import datetime, timedelta, timezone
from typing import Any

import jwt
import structlog

from productstore.domain.exceptions import UnauthorizedError

logger = structlog.get_logger()


class TokenVerifier:
    """Verifies signed access tokens.

    Example usage:
        verifier = TokenVerifier(settings.jwt_secret)
        user_id = verifier.verify(token)
    """

    def __init__(self, secret: str, algorithm: str = "HS256") -> None:
        self.secret = secret
        self.algorithm = algorithm

    def decode(self, token: str) -> dict[str, Any]:
        """Decode and verify a token.

        Args:
            token: Encoded JWT.

        Returns:
            Token payload.

        Raises:
            UnauthorizedError: If the token is expired or invalid.
        """
        try:
            return jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except jwt.ExpiredSignatureError as e:
            raise UnauthorizedError("Token expired") from e
        except jwt.InvalidTokenError as e:
            logger.warning("Invalid access token", error=str(e))
            raise UnauthorizedError("Invalid token") from e

    def verify(self, token: str) -> str:
        """Verify a token and return the user ID it carries.

        Raises:
            UnauthorizedError: If the token is invalid or has no user ID.
        """
        payload = self.decode(token)
        user_id = payload.get("id") or payload.get("sub")
        if not user_id:
            raise UnauthorizedError("Invalid token")
        return str(user_id)


def create_access_token(
    user_id: str,
    secret: str,
    algorithm: str = "HS256",
    expires_in: timedelta = timedelta(days=1),
) -> str:
    """Mint an access token for a user.

    Used by the seed script and tests; production tokens come from the
    authentication service.
    """
    now = datetime.now(timezone.utc)
    payload = {
        "id": user_id,
        "iat": now,
        "exp": now + expires_in,
    }
    return jwt.encode(payload, secret, algorithm=algorithm)
