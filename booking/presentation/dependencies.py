from datetime import timedelta
from typing import Optional
from fastapi import Depends, Request

from booking.config import settings
from booking.database import Database
from booking.application.authorization import AuthorizationGate
from booking.application.interfaces import TokenService
from booking.infrastructure.unit_of_work import UnitOfWork
from booking.infrastructure.security import BcryptPasswordHasher, JWTTokenService
from booking.infrastructure.http_clients import HTTPEmailClient
from booking.application.create_order import CreateOrderUseCase
from booking.application.get_order import GetOrderUseCase, ListOrdersUseCase
from booking.application.create_payment import CreatePaymentUseCase
from booking.application.get_payment import GetPaymentUseCase
from booking.application.upload_payment_proof import UploadPaymentProofUseCase
from booking.application.status_lifecycle import SetOrderStatusUseCase, SetPaymentStatusUseCase
from booking.application.password_reset import (
    ForgotPasswordUseCase, ValidateResetTokenUseCase, ResetPasswordUseCase
)
from booking.application.register_user import SignUpUseCase, CreateAdminUseCase
from booking.application.login import LoginUseCase


def get_database(request: Request) -> Database:
    return request.app.state.database


def get_uow(db: Database = Depends(get_database)):
    return UnitOfWork(db.session_factory)


def get_gate():
    return AuthorizationGate()


def get_password_hasher():
    return BcryptPasswordHasher(rounds=settings.BCRYPT_ROUNDS)


def get_token_service():
    return JWTTokenService(
        settings.JWT_SECRET_KEY, settings.JWT_ALGORITHM, settings.ACCESS_TOKEN_EXPIRE_MINUTES
    )


def get_email_service():
    return HTTPEmailClient(settings.EMAIL_SERVICE_URL, settings.API_TOKEN)


def get_claim(request: Request, tokens: TokenService = Depends(get_token_service)) -> Optional[dict]:
    """Claim из заголовка Authorization: Bearer <token>. None, если токена нет или он невалиден."""
    authorization = request.headers.get("Authorization", "")
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token:
        return None
    return tokens.decode(token.strip())


# Фабрики для создания use cases

def get_sign_up_use_case(uow=Depends(get_uow), hasher=Depends(get_password_hasher), email=Depends(get_email_service)):
    return SignUpUseCase(uow, hasher, email)


def get_create_admin_use_case(uow=Depends(get_uow), gate=Depends(get_gate), hasher=Depends(get_password_hasher)):
    return CreateAdminUseCase(uow, gate, hasher)


def get_login_use_case(uow=Depends(get_uow), hasher=Depends(get_password_hasher), tokens=Depends(get_token_service)):
    return LoginUseCase(uow, hasher, tokens)


def get_forgot_password_use_case(uow=Depends(get_uow), email=Depends(get_email_service)):
    return ForgotPasswordUseCase(
        uow, email, settings.APP_URL, token_ttl=timedelta(minutes=settings.RESET_TOKEN_EXPIRE_MINUTES)
    )


def get_validate_reset_token_use_case(uow=Depends(get_uow)):
    return ValidateResetTokenUseCase(uow)


def get_reset_password_use_case(uow=Depends(get_uow), hasher=Depends(get_password_hasher)):
    return ResetPasswordUseCase(uow, hasher, min_length=settings.PASSWORD_MIN_LENGTH)


def get_create_order_use_case(uow=Depends(get_uow), gate=Depends(get_gate)):
    return CreateOrderUseCase(uow, gate)


def get_get_order_use_case(uow=Depends(get_uow), gate=Depends(get_gate)):
    return GetOrderUseCase(uow, gate)


def get_list_orders_use_case(uow=Depends(get_uow), gate=Depends(get_gate)):
    return ListOrdersUseCase(uow, gate)


def get_set_order_status_use_case(uow=Depends(get_uow), gate=Depends(get_gate)):
    return SetOrderStatusUseCase(uow, gate)


def get_create_payment_use_case(uow=Depends(get_uow), gate=Depends(get_gate)):
    return CreatePaymentUseCase(uow, gate)


def get_get_payment_use_case(uow=Depends(get_uow), gate=Depends(get_gate)):
    return GetPaymentUseCase(uow, gate)


def get_set_payment_status_use_case(uow=Depends(get_uow), gate=Depends(get_gate), email=Depends(get_email_service)):
    return SetPaymentStatusUseCase(uow, gate, email)


def get_upload_payment_proof_use_case(uow=Depends(get_uow), gate=Depends(get_gate), email=Depends(get_email_service)):
    return UploadPaymentProofUseCase(uow, gate, email)
