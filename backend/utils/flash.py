"""Flash messages stored in the signed session cookie until the next read."""
from starlette.requests import Request

_FLASH_KEY = "_flashes"


def flash(request: Request, category: str, message: str) -> None:
    """Queue a message ('success' or 'error') for the page shown after the redirect."""
    pending = list(request.session.get(_FLASH_KEY, []))
    pending.append({"category": category, "message": message})
    request.session[_FLASH_KEY] = pending


def pop_flashes(request: Request) -> list[dict[str, str]]:
    """Return and clear all pending messages."""
    return request.session.pop(_FLASH_KEY, [])
