"""
Auth Service - registration, login and bearer token resolution.

Login failures are indistinguishable to the client whether the email is
unknown or the password is wrong. Token resolution never raises: anything
that does not check out yields an anonymous (None) caller.
"""

from typing import Optional, Tuple
import logging

from franchisenexus.db.models import UserModel
from franchisenexus.domain.errors import DuplicateEmailError, InvalidCredentialsError, InvalidTokenError
from franchisenexus.domain.roles import Caller
from franchisenexus.domain.unit_of_work import AbstractUnitOfWork
from franchisenexus.schemas import RegisterRequest
from franchisenexus.services.token_service import TokenService
from franchisenexus.utils.password_hash import hash_password, verify_password

logger = logging.getLogger(__name__)


class AuthService:
    """Application service for identity operations"""

    def __init__(self, token_service: TokenService):
        self._tokens = token_service

    async def register(
        self,
        uow: AbstractUnitOfWork,
        request: RegisterRequest
    ) -> Tuple[UserModel, str]:
        """
        Register a new user and issue a token.

        Returns:
            (user, token)

        Raises:
            DuplicateEmailError: If the email is already registered
        """
        if await uow.users.exists_by_email(request.email):
            logger.warning("Registration rejected: email already in use")
            raise DuplicateEmailError(request.email)

        user = UserModel(
            first_name=request.first_name,
            last_name=request.last_name,
            email=request.email,
            password_hash=hash_password(request.password),
            phone_number=request.phone_number,
            role=request.role,
        )
        user = await uow.users.add(user)
        await uow.commit()

        logger.info(f"Registered user {user.id} ({user.role.label})")
        return user, self._tokens.issue_token(user)

    async def login(
        self,
        uow: AbstractUnitOfWork,
        email: str,
        password: str
    ) -> Tuple[UserModel, str]:
        """
        Verify credentials and issue a token.

        Raises:
            InvalidCredentialsError: Unknown email or wrong password (same error for both)
        """
        user = await uow.users.get_by_email(email)

        if not user:
            logger.warning("Login attempt failed: unknown email")
            raise InvalidCredentialsError()

        if not verify_password(password, user.password_hash):
            logger.warning(f"Login attempt failed: invalid password for user {user.id}")
            raise InvalidCredentialsError()

        logger.info(f"User authenticated successfully: {user.id}")
        return user, self._tokens.issue_token(user)

    async def resolve_caller(
        self,
        uow: AbstractUnitOfWork,
        token: Optional[str]
    ) -> Optional[Caller]:
        """
        Resolve a bearer token to the caller it identifies.

        Returns:
            Caller if the token is valid and its user exists, None otherwise
        """
        if not token:
            return None

        try:
            email = self._tokens.extract_subject(token)
        except InvalidTokenError:
            return None

        user = await uow.users.get_by_email(email)
        if not user:
            logger.warning("Token rejected: subject does not resolve to a user")
            return None

        if not self._tokens.validate_token(token, user.email):
            return None

        return Caller(user_id=user.id, email=user.email, role=user.role)
