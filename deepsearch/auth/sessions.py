"""Signed cookie sessions.

A session is the JSON form of ``Session`` signed with itsdangerous and
checked against ``AuthConfig.session_max_age`` on every request.
"""

import hmac
import logging
from datetime import UTC, datetime, timedelta

from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer
from pydantic import ValidationError

from deepsearch.auth.config import AuthConfig, get_auth_config
from deepsearch.models.schemas import Session, SessionUser

logger = logging.getLogger(__name__)

SESSION_COOKIE = "deepsearch_session"
_SALT = "deepsearch-session"


class SessionResolver:
    """Issues and resolves signed session tokens."""

    def __init__(self, config: AuthConfig | None = None) -> None:
        self._config = config or get_auth_config()
        self._serializer = URLSafeTimedSerializer(self._config.secret, salt=_SALT)

    @property
    def max_age(self) -> int:
        return self._config.session_max_age

    def verify_password(self, password: str) -> bool:
        """Check a login password against the configured one in constant time."""
        return hmac.compare_digest(
            password.encode("utf-8"), self._config.password.encode("utf-8")
        )

    def issue(self, user_name: str) -> tuple[str, Session]:
        """Create a signed token for a new session.

        Args:
            user_name: Display name of the signed-in user.

        Returns:
            The cookie token and the session it encodes.
        """
        expires_at = datetime.now(UTC) + timedelta(seconds=self._config.session_max_age)
        session = Session(user=SessionUser(name=user_name), expires_at=expires_at.isoformat())
        token = self._serializer.dumps(session.model_dump(mode="json"))
        return token, session

    def resolve(self, token: str | None) -> Session | None:
        """Resolve the session encoded in a cookie token.

        Args:
            token: Raw cookie value, or None when the cookie is absent.

        Returns:
            The session, or None if the token is missing, tampered or expired.
        """
        if not token:
            return None

        try:
            data = self._serializer.loads(token, max_age=self._config.session_max_age)
        except SignatureExpired:
            logger.info("Rejected expired session cookie")
            return None
        except BadSignature:
            logger.warning("Rejected session cookie with invalid signature")
            return None

        try:
            return Session.model_validate(data)
        except ValidationError as e:
            logger.warning(f"Rejected malformed session payload: {e}")
            return None
