"""Shared request dependencies: the session user."""
from fastapi import HTTPException, Request, status

SESSION_USER_KEY = "user_id"


def get_session_user_id(request: Request) -> int | None:
    """User id bound to the browser session, or None."""
    user_id = request.session.get(SESSION_USER_KEY)
    return int(user_id) if user_id is not None else None


def require_user_id(request: Request) -> int:
    """FastAPI dependency: session user id, 401 when nobody is logged in."""
    user_id = get_session_user_id(request)
    if user_id is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Login required")
    return user_id
