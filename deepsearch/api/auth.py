"""Login, logout and session lookup endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Response, status

from deepsearch.api.dependencies import get_current_session, get_session_resolver
from deepsearch.auth.sessions import SESSION_COOKIE, SessionResolver
from deepsearch.models.schemas import LoginRequest, Session

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/login")
async def login(
    credentials: LoginRequest,
    response: Response,
    resolver: Annotated[SessionResolver, Depends(get_session_resolver)],
) -> Session:
    """Sign in with a display name and the shared password.

    Sets the signed session cookie on success.

    Raises:
        401: Wrong password.
    """
    if not resolver.verify_password(credentials.password):
        logger.warning(f"Failed login attempt for {credentials.name!r}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
        )

    token, session = resolver.issue(credentials.name)
    response.set_cookie(
        SESSION_COOKIE,
        token,
        max_age=resolver.max_age,
        httponly=True,
        samesite="lax",
    )
    logger.info(f"Signed in {credentials.name!r}")
    return session


@router.get("/session")
async def current_session(
    session: Annotated[Session | None, Depends(get_current_session)],
) -> Session | None:
    """Return the current session, or null when signed out."""
    return session


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
async def logout() -> Response:
    """Clear the session cookie."""
    response = Response(status_code=status.HTTP_204_NO_CONTENT)
    response.delete_cookie(SESSION_COOKIE)
    return response
