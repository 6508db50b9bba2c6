import logging
from typing import Callable, ContextManager

from sqlalchemy.exc import IntegrityError

from portfolio.core.exceptions import ConflictError, InvalidCredentialsError
from portfolio.core.security import create_user_token, hash_password, verify_password
from portfolio.domain.entities import User as DomainUser
from portfolio.services.unit_of_work import UnitOfWork, unit_of_work

logger = logging.getLogger(__name__)


class UserService:
    """Application service for accounts and authentication.

    This service:
    - Keeps credential rules out of controllers and repositories
    - Never exposes password hashes; callers only see User entities and tokens
    """

    def __init__(
        self, uow_factory: Callable[[], ContextManager[UnitOfWork]] = unit_of_work
    ) -> None:
        self.uow_factory = uow_factory

    def authenticate(self, identifier: str, password: str) -> DomainUser:
        """Check a username-or-email and password pair.

        Raises:
            InvalidCredentialsError: unknown user or wrong password
        """
        with self.uow_factory() as uow:
            credentials = uow.users.get_credentials(identifier)

        if credentials is None:
            logger.info(
                "Login failed: unknown user",
                extra={"context": {"identifier": identifier}},
            )
            raise InvalidCredentialsError("Invalid username or password")

        user, password_hash = credentials
        if not verify_password(password, password_hash):
            logger.info(
                "Login failed: wrong password",
                extra={"context": {"user_id": user.id}},
            )
            raise InvalidCredentialsError("Invalid username or password")

        logger.info("User logged in", extra={"context": {"user_id": user.id}})
        return user

    def login(self, identifier: str, password: str) -> tuple[str, DomainUser]:
        """Authenticate and issue a signed access token."""
        user = self.authenticate(identifier, password)
        return self.issue_token(user), user

    @staticmethod
    def issue_token(user: DomainUser) -> str:
        return create_user_token(user.id, user.username, user.email)

    def register(self, username: str, email: str, password: str) -> DomainUser:
        """Create an account.

        Raises:
            ConflictError: USERNAME_TAKEN or EMAIL_TAKEN
        """
        with self.uow_factory() as uow:
            if uow.users.get_by_username(username) is not None:
                raise ConflictError("Username already taken", code="USERNAME_TAKEN")
            if uow.users.get_by_email(email) is not None:
                raise ConflictError("Email already registered", code="EMAIL_TAKEN")

            try:
                user = uow.users.create(
                    DomainUser(username=username, email=email), hash_password(password)
                )
            except IntegrityError as exc:
                # Lost a race against another registration; the index names the column
                if "email" in str(exc.orig).lower():
                    raise ConflictError(
                        "Email already registered", code="EMAIL_TAKEN"
                    ) from exc
                raise ConflictError(
                    "Username already taken", code="USERNAME_TAKEN"
                ) from exc

        logger.info(
            "User registered",
            extra={"context": {"user_id": user.id, "username": user.username}},
        )
        return user

    def ensure_user(self, username: str, email: str, password: str) -> bool:
        """Create the account unless the username or email already exists.

        Returns True when a new account was created.
        """
        with self.uow_factory() as uow:
            if uow.users.get_by_username(username) or uow.users.get_by_email(email):
                return False
            uow.users.create(
                DomainUser(username=username, email=email), hash_password(password)
            )
        logger.info("Account created", extra={"context": {"username": username}})
        return True
