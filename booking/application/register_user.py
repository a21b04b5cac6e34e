import logging
import uuid
from datetime import datetime, timezone
from typing import Optional, Mapping, Any
from pydantic import BaseModel

from booking.domain.models import User, Role
from booking.domain.exceptions import ConflictError, MissingFieldsError
from booking.application.authorization import AuthorizationGate
from booking.application.interfaces import PasswordHasher, EmailService
from booking.application.notifications import notify


logger = logging.getLogger(__name__)


class RegisterUserDTO(BaseModel):
    full_name: str
    email: str
    password: str
    phone_number: str


def _build_user(data: RegisterUserDTO, password_hash: str, role: Role) -> User:
    now = datetime.now(timezone.utc)
    return User(
        id=str(uuid.uuid4()),
        full_name=data.full_name,
        email=data.email.strip().lower(),
        phone_number=data.phone_number,
        password_hash=password_hash,
        role=role,
        created_at=now,
        updated_at=now,
    )


def _require_fields(data: RegisterUserDTO) -> None:
    if not all([data.full_name, data.email, data.password, data.phone_number]):
        raise MissingFieldsError()


class SignUpUseCase:
    """Регистрация клиента. Письмо-подтверждение отправляется после коммита."""

    def __init__(self, unit_of_work, password_hasher: PasswordHasher, email_service: EmailService):
        self._uow = unit_of_work
        self._hasher = password_hasher
        self._email = email_service

    async def __call__(self, data: RegisterUserDTO) -> User:
        _require_fields(data)
        logger.info("Регистрация нового клиента")

        async with self._uow() as uow:
            existing = await uow.users.get_by_email(data.email.strip().lower())
            if existing:
                raise ConflictError()

            user = _build_user(data, self._hasher.hash(data.password), Role.CUSTOMER)
            await uow.users.create(user)
            await uow.commit()
        logger.info(f"Пользователь создан: {user.id}")

        await notify(self._email, user.email, user.full_name, "register-verification")
        return user


class CreateAdminUseCase:
    """Создание администратора. Доступно только SUPER_ADMIN."""

    def __init__(self, unit_of_work, gate: AuthorizationGate, password_hasher: PasswordHasher):
        self._uow = unit_of_work
        self._gate = gate
        self._hasher = password_hasher

    async def __call__(self, claim: Optional[Mapping[str, Any]], data: RegisterUserDTO) -> User:
        principal = self._gate.check(claim, [Role.SUPER_ADMIN])
        _require_fields(data)

        async with self._uow() as uow:
            existing = await uow.users.get_by_email_or_phone(data.email.strip().lower(), data.phone_number)
            if existing:
                raise ConflictError()

            user = _build_user(data, self._hasher.hash(data.password), Role.ADMIN)
            await uow.users.create(user)
            await uow.commit()

        logger.info(f"Администратор {user.id} создан пользователем {principal.id}")
        return user
