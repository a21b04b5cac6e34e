"""Tests for sign-up, admin creation and login."""

import pytest

from booking.application.authorization import AuthorizationGate
from booking.application.login import LoginUseCase
from booking.application.register_user import CreateAdminUseCase, RegisterUserDTO, SignUpUseCase
from booking.domain.exceptions import (
    ConflictError, ForbiddenError, MissingFieldsError, UnauthenticatedError
)
from booking.domain.models import Role
from booking.infrastructure.security import BcryptPasswordHasher, JWTTokenService

from fakes import InMemoryUnitOfWork, RecordingEmailService, make_user


@pytest.fixture
def hasher() -> BcryptPasswordHasher:
    return BcryptPasswordHasher(rounds=4)


@pytest.fixture
def uow() -> InMemoryUnitOfWork:
    return InMemoryUnitOfWork()


def signup_dto(**overrides) -> RegisterUserDTO:
    data = dict(
        full_name="Siti Rahma",
        email="Siti@Example.com",
        password="s3cret-pass",
        phone_number="+628111111111",
    )
    data.update(overrides)
    return RegisterUserDTO(**data)


class TestSignUp:
    @pytest.mark.asyncio
    async def test_creates_customer_and_sends_email(self, uow, hasher) -> None:
        email = RecordingEmailService()

        user = await SignUpUseCase(uow, hasher, email)(signup_dto())

        stored = uow.store.users[user.id]
        assert stored.role == Role.CUSTOMER
        assert stored.email == "siti@example.com"
        assert hasher.verify("s3cret-pass", stored.password_hash)
        assert email.sent[0]["email_type"] == "register-verification"

    @pytest.mark.asyncio
    async def test_duplicate_email_conflicts_without_new_record(self, uow, hasher) -> None:
        existing = make_user("user-1", email="siti@example.com")
        uow.store.users[existing.id] = existing
        email = RecordingEmailService()

        with pytest.raises(ConflictError):
            await SignUpUseCase(uow, hasher, email)(signup_dto())

        assert list(uow.store.users) == ["user-1"]
        assert email.sent == []

    @pytest.mark.asyncio
    async def test_email_failure_keeps_user(self, uow, hasher) -> None:
        email = RecordingEmailService(error=RuntimeError("smtp down"))

        user = await SignUpUseCase(uow, hasher, email)(signup_dto())

        assert user.id in uow.store.users

    @pytest.mark.asyncio
    async def test_missing_fields(self, uow, hasher) -> None:
        with pytest.raises(MissingFieldsError):
            await SignUpUseCase(uow, hasher, RecordingEmailService())(signup_dto(phone_number=""))

        assert uow.store.users == {}


class TestCreateAdmin:
    @pytest.mark.asyncio
    async def test_super_admin_creates_admin(self, uow, hasher) -> None:
        use_case = CreateAdminUseCase(uow, AuthorizationGate(), hasher)

        user = await use_case({"sub": "root-1", "role": "SUPER_ADMIN"}, signup_dto())

        assert uow.store.users[user.id].role == Role.ADMIN

    @pytest.mark.asyncio
    async def test_admin_cannot_create_admin(self, uow, hasher) -> None:
        use_case = CreateAdminUseCase(uow, AuthorizationGate(), hasher)

        with pytest.raises(ForbiddenError):
            await use_case({"sub": "admin-1", "role": "ADMIN"}, signup_dto())

        assert uow.store.users == {}

    @pytest.mark.asyncio
    async def test_duplicate_phone_conflicts(self, uow, hasher) -> None:
        existing = make_user("user-1", email="other@example.com", phone_number="+628111111111")
        uow.store.users[existing.id] = existing
        use_case = CreateAdminUseCase(uow, AuthorizationGate(), hasher)

        with pytest.raises(ConflictError):
            await use_case({"sub": "root-1", "role": "SUPER_ADMIN"}, signup_dto())


class TestLogin:
    @pytest.mark.asyncio
    async def test_issues_token_with_role(self, uow, hasher) -> None:
        user = make_user("admin-1", email="admin@example.com", role=Role.ADMIN, password_hash=hasher.hash("adm1n-pass"))
        uow.store.users[user.id] = user
        tokens = JWTTokenService("test-secret")

        result = await LoginUseCase(uow, hasher, tokens)("ADMIN@example.com", "adm1n-pass")

        claim = tokens.decode(result["access_token"])
        assert claim["sub"] == "admin-1"
        assert claim["role"] == "ADMIN"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("email,password", [("admin@example.com", "wrong-pass"), ("nobody@example.com", "adm1n-pass")])
    async def test_invalid_credentials_are_uniform(self, uow, hasher, email, password) -> None:
        user = make_user("admin-1", email="admin@example.com", password_hash=hasher.hash("adm1n-pass"))
        uow.store.users[user.id] = user

        with pytest.raises(UnauthenticatedError) as exc_info:
            await LoginUseCase(uow, hasher, JWTTokenService("test-secret"))(email, password)

        assert str(exc_info.value) == "Invalid email or password"
