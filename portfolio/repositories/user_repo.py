from typing import Optional

from sqlalchemy import or_

from portfolio.db.base import User as DbUser
from portfolio.domain.entities import User as DomainUser
from portfolio.domain.interfaces import IUserRepository


class UserRepository(IUserRepository):
    """Repository for User persistence operations.

    This implementation:
    - Implements IUserRepository interface (Dependency Inversion)
    - Handles data access only (Single Responsibility)
    - Maps between domain entities and database models; the password hash
      never leaves the repository except through get_credentials
    """

    def __init__(self, db_session) -> None:
        self.db = db_session

    def get_by_id(self, user_id: int) -> Optional[DomainUser]:
        db_user = self.db.get(DbUser, user_id)
        return self._to_domain(db_user) if db_user else None

    def get_by_username(self, username: str) -> Optional[DomainUser]:
        db_user = self.db.query(DbUser).filter_by(username=username).first()
        return self._to_domain(db_user) if db_user else None

    def get_by_email(self, email: str) -> Optional[DomainUser]:
        db_user = self.db.query(DbUser).filter_by(email=email).first()
        return self._to_domain(db_user) if db_user else None

    def get_credentials(self, identifier: str) -> Optional[tuple[DomainUser, str]]:
        """Get a user by username or email, with its password hash."""
        db_user = (
            self.db.query(DbUser)
            .filter(or_(DbUser.username == identifier, DbUser.email == identifier))
            .first()
        )
        if db_user is None:
            return None
        return self._to_domain(db_user), db_user.password_hash

    def create(self, user: DomainUser, password_hash: str) -> DomainUser:
        db_user = DbUser(
            username=user.username,
            email=user.email,
            password_hash=password_hash,
        )
        self.db.add(db_user)
        self.db.flush()
        return self._to_domain(db_user)

    def _to_domain(self, db_user: DbUser) -> DomainUser:
        """Convert database model to domain entity."""
        return DomainUser(
            id=db_user.id,
            username=db_user.username,
            email=db_user.email,
            created_at=db_user.created_at,
        )
