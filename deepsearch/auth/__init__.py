"""Session authentication for the chat endpoint.

Sessions live in a signed, time-limited cookie. A request without a valid
session, or whose session has no user, is unauthorized.
"""

from deepsearch.auth.config import AuthConfig, get_auth_config
from deepsearch.auth.sessions import SESSION_COOKIE, SessionResolver

__all__ = ["SESSION_COOKIE", "AuthConfig", "SessionResolver", "get_auth_config"]
