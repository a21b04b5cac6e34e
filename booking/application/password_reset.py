"""
Жизненный цикл токена сброса пароля.

Токен выдается по запросу forgot-password, действует ограниченное время
и гасится при успешном сбросе. Неизвестный и просроченный токен
для вызывающего неразличимы.
"""

import logging
import secrets
from datetime import datetime, timedelta, timezone
from typing import Callable

from booking.domain.models import User
from booking.domain.exceptions import (
    InvalidOrExpiredTokenError, MissingFieldsError, NotificationError, WeakPasswordError
)
from booking.application.interfaces import EmailService, PasswordHasher


logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ForgotPasswordUseCase:
    def __init__(
        self,
        unit_of_work,
        email_service: EmailService,
        app_url: str,
        token_ttl: timedelta = timedelta(hours=1),
        clock: Callable[[], datetime] = _utcnow,
    ):
        self._uow = unit_of_work
        self._email = email_service
        self._app_url = app_url.rstrip("/")
        self._token_ttl = token_ttl
        self._clock = clock

    async def __call__(self, email: str) -> None:
        if not email:
            raise MissingFieldsError("Email is required")

        async with self._uow() as uow:
            user = await uow.users.get_by_email(email.strip().lower())
            if not user:
                # Не раскрываем, зарегистрирован ли email
                logger.info("Запрошен сброс пароля для незарегистрированного email")
                return

            token = secrets.token_hex(32)
            expiry = self._clock() + self._token_ttl
            await uow.users.set_reset_token(user.id, token, expiry)
            await uow.commit()

        reset_link = f"{self._app_url}/auth/reset-password?token={token}"
        try:
            sent = await self._email.send(
                to=user.email, full_name=user.full_name, email_type="forgot-password", resetLink=reset_link
            )
        except Exception as e:
            logger.error(f"Ошибка отправки письма сброса пароля для {user.id}: {e}")
            sent = False

        if not sent:
            # Письмо не ушло, гасим токен
            async with self._uow() as uow:
                await uow.users.set_reset_token(user.id, None, None)
                await uow.commit()
            raise NotificationError("Failed to send reset password email")

        logger.info(f"Токен сброса пароля выдан пользователю {user.id}")


class ValidateResetTokenUseCase:
    def __init__(self, unit_of_work, clock: Callable[[], datetime] = _utcnow):
        self._uow = unit_of_work
        self._clock = clock

    async def __call__(self, token: str) -> User:
        if not token:
            raise MissingFieldsError("Reset password token is required")

        async with self._uow() as uow:
            user = await uow.users.get_by_valid_reset_token(token, self._clock())
        if not user:
            raise InvalidOrExpiredTokenError()
        return user


class ResetPasswordUseCase:
    def __init__(
        self,
        unit_of_work,
        password_hasher: PasswordHasher,
        min_length: int = 8,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self._uow = unit_of_work
        self._hasher = password_hasher
        self._min_length = min_length
        self._clock = clock

    async def __call__(self, token: str, new_password: str) -> None:
        if not token or not new_password:
            raise MissingFieldsError("Token and password are required")
        if len(new_password) < self._min_length:
            raise WeakPasswordError(self._min_length)

        async with self._uow() as uow:
            user = await uow.users.get_by_valid_reset_token(token, self._clock())
            if not user:
                raise InvalidOrExpiredTokenError()

            password_hash = self._hasher.hash(new_password)
            await uow.users.update_password_and_clear_token(user.id, password_hash)
            await uow.commit()

        logger.info(f"Пароль пользователя {user.id} сброшен")
