import logging

from booking.domain.models import Principal
from booking.domain.exceptions import UnauthenticatedError, MissingFieldsError
from booking.application.interfaces import PasswordHasher, TokenService


logger = logging.getLogger(__name__)


class LoginUseCase:
    def __init__(self, unit_of_work, password_hasher: PasswordHasher, token_service: TokenService):
        self._uow = unit_of_work
        self._hasher = password_hasher
        self._tokens = token_service

    async def __call__(self, email: str, password: str) -> dict:
        """Проверка email + пароль, выдача access-токена"""
        if not email or not password:
            raise MissingFieldsError("Email and password are required")

        async with self._uow() as uow:
            user = await uow.users.get_by_email(email.strip().lower())

        if not user or not self._hasher.verify(password, user.password_hash):
            raise UnauthenticatedError("Invalid email or password")

        principal = Principal(id=user.id, email=user.email, role=user.role)
        logger.info(f"Вход пользователя {user.id}")
        return {
            "access_token": self._tokens.issue(principal),
            "token_type": "bearer",
            "user": principal,
        }
