"""User repository: get and create."""
from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from models.user import User


def create_user(session: Session, name: str, email: str) -> User:
    """Create a user, commit, and return it."""
    user = User(name=name, email=email)
    session.add(user)
    session.commit()
    session.refresh(user)
    return user


def get_user(session: Session, user_id: int) -> Optional[User]:
    """Return a user by id or None."""
    return session.get(User, user_id)


def get_user_by_email(session: Session, email: str) -> Optional[User]:
    """Return a user by email or None."""
    return session.execute(select(User).where(User.email == email)).scalar_one_or_none()


def count_users(session: Session) -> int:
    """Return the number of users (for seeding)."""
    result = session.execute(select(func.count()).select_from(User))
    return result.scalar() or 0
