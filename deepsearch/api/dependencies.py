"""FastAPI dependencies for sessions and the agent service."""

from typing import Annotated

from fastapi import Depends, HTTPException, Request, status

from deepsearch.auth.sessions import SESSION_COOKIE, SessionResolver
from deepsearch.models.schemas import Session

# Module-level singleton instance
_session_resolver: SessionResolver | None = None


def get_session_resolver() -> SessionResolver:
    """Get or create the global session resolver.

    Returns:
        The SessionResolver instance.

    Raises:
        ValueError: If auth secrets are not configured.
    """
    global _session_resolver
    if _session_resolver is None:
        _session_resolver = SessionResolver()
    return _session_resolver


async def get_current_session(
    request: Request,
    resolver: Annotated[SessionResolver, Depends(get_session_resolver)],
) -> Session | None:
    """Resolve the session from the request cookie, if any."""
    return resolver.resolve(request.cookies.get(SESSION_COOKIE))


async def require_user(
    session: Annotated[Session | None, Depends(get_current_session)],
) -> Session:
    """Require a session with a signed-in user.

    Raises:
        HTTPException: 401 if there is no session or it has no user.
    """
    if session is None or session.user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
        )
    return session
