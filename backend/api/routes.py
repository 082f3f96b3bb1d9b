"""API route handlers: health, session user and flash messages."""
from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from api.deps import SESSION_USER_KEY, require_user_id
from db import get_db
from repositories.user_repository import get_user
from schemas.bookings import FlashMessage, SessionLogin, SessionResponse
from schemas.health import HealthResponse
from utils.flash import pop_flashes

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
def health() -> HealthResponse:
    """Health check endpoint."""
    return HealthResponse()


@router.post("/session", response_model=SessionResponse)
def open_session(body: SessionLogin, request: Request, db: Session = Depends(get_db)) -> SessionResponse:
    """Bind an existing user to the browser session (credential checks happen upstream)."""
    user = get_user(db, body.user_id)
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    request.session[SESSION_USER_KEY] = user.id
    return SessionResponse(user_id=user.id, name=user.name, email=user.email)


@router.get("/session", response_model=SessionResponse)
def current_session(user_id: int = Depends(require_user_id), db: Session = Depends(get_db)) -> SessionResponse:
    """The user bound to this session."""
    user = get_user(db, user_id)
    if user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Login required")
    return SessionResponse(user_id=user.id, name=user.name, email=user.email)


@router.delete("/session", status_code=status.HTTP_204_NO_CONTENT)
def close_session(request: Request) -> None:
    """Forget the session user."""
    request.session.pop(SESSION_USER_KEY, None)


@router.get("/flash", response_model=list[FlashMessage])
def read_flash(request: Request) -> list[FlashMessage]:
    """Return and clear pending flash messages."""
    return [FlashMessage(**m) for m in pop_flashes(request)]
