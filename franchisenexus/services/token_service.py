"""
Bearer token service - stateless JWT issuance and validation.

Tokens carry only what is needed to find the user again:
    {"sub": <email>, "iat": <issued at>, "exp": <expiry>}
signed with HMAC (HS256 by default) using the server-held secret.

Validation fails closed and never explains why a token was rejected.
"""
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Dict, Optional
import logging
import jwt

from franchisenexus.config import settings
from franchisenexus.domain.errors import InvalidTokenError

logger = logging.getLogger(__name__)

REQUIRED_CLAIMS = ["sub", "iat", "exp"]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TokenService:
    """Issue and verify signed bearer tokens"""

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        expiration: timedelta = timedelta(hours=24),
        clock: Callable[[], datetime] = _utcnow,
    ):
        if not secret:
            raise ValueError("Token secret must not be empty")
        self._secret = secret
        self._algorithm = algorithm
        self._expiration = expiration
        self._clock = clock

    def issue_token(self, user) -> str:
        """
        Create a signed token for a user.

        Args:
            user: Any object with an ``email`` attribute (the token subject)

        Returns:
            Encoded JWT string
        """
        now = self._clock()
        payload = {
            "sub": user.email,
            "iat": now,
            "exp": now + self._expiration,
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def extract_claims(self, token: str) -> Dict[str, Any]:
        """
        Verify the signature and structure of a token and return its claims.

        Time-based claims are not checked here; validate_token judges
        them against the service clock.

        Raises:
            InvalidTokenError: On any signature or structural failure
        """
        try:
            return jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={
                    "require": REQUIRED_CLAIMS,
                    "verify_exp": False,
                    "verify_iat": False,
                    "verify_nbf": False,
                },
            )
        except jwt.InvalidTokenError as e:
            logger.warning(f"Token rejected: {type(e).__name__}")
            raise InvalidTokenError() from e

    def extract_subject(self, token: str) -> str:
        """
        Return the subject (user email) of a verified token.

        Raises:
            InvalidTokenError: If the token is malformed or its signature is invalid
        """
        subject = self.extract_claims(token).get("sub")
        if not isinstance(subject, str) or not subject:
            logger.warning("Token rejected: empty subject")
            raise InvalidTokenError()
        return subject

    def is_expired(self, claims: Dict[str, Any]) -> bool:
        """Expired means the expiry lies strictly before now."""
        exp = claims.get("exp")
        if isinstance(exp, bool) or not isinstance(exp, (int, float)):
            return True
        return exp < self._clock().timestamp()

    def is_issued_in_future(self, claims: Dict[str, Any]) -> bool:
        """A token issued after now was not minted by this clock."""
        iat = claims.get("iat")
        if isinstance(iat, bool) or not isinstance(iat, (int, float)):
            return True
        return iat > self._clock().timestamp()

    def validate_token(self, token: str, expected_subject: str) -> bool:
        """
        Check a token against the user it claims to belong to.

        Returns False if the signature is invalid, the token is malformed,
        its subject differs from expected_subject, or its timestamps do not
        bracket the current time (expired, or issued after now).
        """
        try:
            claims = self.extract_claims(token)
        except InvalidTokenError:
            return False

        if claims.get("sub") != expected_subject:
            logger.warning("Token rejected: subject mismatch")
            return False

        if self.is_expired(claims):
            logger.warning("Token rejected: expired")
            return False

        if self.is_issued_in_future(claims):
            logger.warning("Token rejected: issued in the future")
            return False

        return True


_token_service: Optional[TokenService] = None


def get_token_service() -> TokenService:
    """Process-wide token service built from settings."""
    global _token_service
    if _token_service is None:
        _token_service = TokenService(
            secret=settings.jwt_secret,
            algorithm=settings.jwt_algorithm,
            expiration=timedelta(hours=settings.jwt_expiration_hours),
        )
    return _token_service
