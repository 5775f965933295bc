"""Credential store: queries and writes against the users table."""

from datetime import UTC, datetime

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from artshop.models import User


def normalize_email(email: str) -> str:
    """Emails are unique case-insensitively; store and look up lowercased."""
    return email.strip().lower()


class UserStore:
    """Thin wrapper over a Session so services never import a global engine."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get_by_id(self, user_id: int) -> User | None:
        return self.session.query(User).filter(User.id == user_id).first()

    def get_by_email(self, email: str) -> User | None:
        return (
            self.session.query(User)
            .filter(User.email == normalize_email(email))
            .first()
        )

    def get_by_username(self, username: str) -> User | None:
        return self.session.query(User).filter(User.username == username).first()

    def list_all(self) -> list[User]:
        return self.session.query(User).order_by(User.id).all()

    def add(self, user: User) -> User:
        """
        Insert a new user and commit. Raises IntegrityError on a unique
        constraint race after rolling back.
        """
        self.session.add(user)
        try:
            self.session.commit()
        except IntegrityError:
            self.session.rollback()
            raise
        self.session.refresh(user)
        return user

    def save(self, user: User) -> None:
        """Commit pending changes to an existing user and bump updated_at."""
        user.updated_at = datetime.now(UTC)
        self.session.commit()
