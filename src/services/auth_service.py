"""Auth service — registration and login business logic.

Pure business logic with no HTTP dependencies.
Raises domain errors that route handlers map to HTTP status codes.
"""

import logging

from domain.model.errors import ConflictError, UnauthorizedError
from domain.model.user import NewUser, PublicUser, SignupMethod, to_public
from port.password_hasher import PasswordHasher
from port.user_directory import UserDirectory
from port.user_repository import UserRepository

logger = logging.getLogger(__name__)

USER_EXISTS_MESSAGE = "User already exists"
INVALID_CREDENTIALS_MESSAGE = "Invalid credentials"


class AuthService:
    def __init__(self, directory: UserDirectory, repo: UserRepository, hasher: PasswordHasher):
        self.directory = directory
        self.repo = repo
        self.hasher = hasher

    def register(self, username: str, email: str, password: str) -> PublicUser:
        """Register a new local account.

        The existence pre-check only gives a friendly error in the common case;
        the store's unique indexes are what actually enforce uniqueness, so a
        conflict raised by the insert itself is reported the same way.

        Raises:
            ConflictError: username or email already registered
        """
        if self.directory.exists_by_email_or_username(email, username):
            logger.info("Registration rejected: user exists", extra={"email": email, "username": username})
            raise ConflictError(USER_EXISTS_MESSAGE)

        try:
            user = self.directory.create(NewUser(
                username=username,
                email=email,
                password=password,
                signup_method=SignupMethod.LOCAL,
                first_name='',
                last_name='',
            ))
        except ConflictError:
            logger.warning("Registration lost a uniqueness race", extra={"email": email, "username": username})
            raise ConflictError(USER_EXISTS_MESSAGE) from None

        logger.info("User registered", extra={"userId": user.id, "email": email})
        return user

    def login(self, email: str, password: str) -> PublicUser:
        """Check credentials and return the matching user.

        Doesn't reveal whether the email exists: an unknown email and a wrong
        password raise the same error after the same amount of hashing work.

        Raises:
            UnauthorizedError: invalid credentials (deliberately vague)
        """
        user = self.repo.find_by_email(email, include_secret=True)
        stored_hash = user.password_hash if user else None
        if not self.hasher.verify(password, stored_hash) or user is None:
            logger.info("Login failed", extra={"email": email})
            raise UnauthorizedError(INVALID_CREDENTIALS_MESSAGE)

        logger.info("User logged in", extra={"userId": user.id})
        return to_public(user)
