from typing import List, Optional
from fastapi import APIRouter, Depends, status

from booking.presentation.dependencies import (
    get_claim,
    get_sign_up_use_case,
    get_create_admin_use_case,
    get_login_use_case,
    get_forgot_password_use_case,
    get_validate_reset_token_use_case,
    get_reset_password_use_case,
    get_create_order_use_case,
    get_get_order_use_case,
    get_list_orders_use_case,
    get_set_order_status_use_case,
    get_create_payment_use_case,
    get_get_payment_use_case,
    get_set_payment_status_use_case,
    get_upload_payment_proof_use_case,
)
from booking.presentation.schemas import (
    ApiResponse, ErrorResponse, MessageResponse, UserResponse, LoginResponse, PrincipalResponse, TokenValidResponse,
    SignUpRequest, LoginRequest, ForgotPasswordRequest, ValidateResetTokenRequest, ResetPasswordRequest,
    CreateOrderRequest, OrderStatusRequest, OrderResponse,
    CreatePaymentRequest, PaymentStatusRequest, PaymentProofRequest, PaymentResponse,
)
from booking.application.register_user import RegisterUserDTO, SignUpUseCase, CreateAdminUseCase
from booking.application.login import LoginUseCase
from booking.application.password_reset import (
    ForgotPasswordUseCase, ValidateResetTokenUseCase, ResetPasswordUseCase
)
from booking.application.create_order import CreateOrderDTO, CreateOrderUseCase
from booking.application.get_order import GetOrderUseCase, ListOrdersUseCase
from booking.application.status_lifecycle import SetOrderStatusUseCase, SetPaymentStatusUseCase
from booking.application.create_payment import CreatePaymentDTO, CreatePaymentUseCase
from booking.application.get_payment import GetPaymentUseCase
from booking.application.upload_payment_proof import PaymentProofDTO, UploadPaymentProofUseCase

router = APIRouter()

ERRORS = {
    400: {"model": ErrorResponse},
    401: {"model": ErrorResponse},
    403: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
}


def _register_dto(request: SignUpRequest) -> RegisterUserDTO:
    return RegisterUserDTO(
        full_name=request.full_name or "",
        email=request.email or "",
        password=request.password or "",
        phone_number=request.phone_number or "",
    )


# Auth

@router.post(
    "/auth/signup",
    response_model=ApiResponse[UserResponse],
    responses={400: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
    status_code=status.HTTP_201_CREATED
)
async def sign_up(request: SignUpRequest, use_case: SignUpUseCase = Depends(get_sign_up_use_case)):
    """Регистрация клиента"""
    user = await use_case(_register_dto(request))
    return ApiResponse(message="User registered successfully", data=UserResponse.from_domain(user))


@router.post("/auth/login", response_model=ApiResponse[LoginResponse], responses=ERRORS)
async def login(request: LoginRequest, use_case: LoginUseCase = Depends(get_login_use_case)):
    """Вход по email и паролю"""
    result = await use_case(request.email, request.password)
    return ApiResponse(
        message="Login successful",
        data=LoginResponse(
            access_token=result["access_token"],
            token_type=result["token_type"],
            user=PrincipalResponse(**result["user"].model_dump()),
        ),
    )


@router.post("/auth/forgot-password", response_model=MessageResponse, responses=ERRORS)
async def forgot_password(
    request: ForgotPasswordRequest,
    use_case: ForgotPasswordUseCase = Depends(get_forgot_password_use_case)
):
    """Запрос ссылки для сброса пароля"""
    await use_case(request.email)
    return MessageResponse(message="If the email is registered, a reset password link has been sent")


@router.post("/auth/validate-reset-token", response_model=ApiResponse[TokenValidResponse], responses=ERRORS)
async def validate_reset_token(
    request: ValidateResetTokenRequest,
    use_case: ValidateResetTokenUseCase = Depends(get_validate_reset_token_use_case)
):
    """Проверка токена сброса пароля"""
    await use_case(request.token)
    return ApiResponse(message="Token valid", data=TokenValidResponse(valid=True))


@router.post("/auth/reset-password", response_model=MessageResponse, responses=ERRORS)
async def reset_password(
    request: ResetPasswordRequest,
    use_case: ResetPasswordUseCase = Depends(get_reset_password_use_case)
):
    """Сброс пароля по токену"""
    await use_case(request.token, request.password)
    return MessageResponse(message="Password has been reset successfully")


# Users

@router.post(
    "/users",
    response_model=ApiResponse[UserResponse],
    responses={**ERRORS, 409: {"model": ErrorResponse}},
    status_code=status.HTTP_201_CREATED
)
async def create_admin(
    request: SignUpRequest,
    claim: Optional[dict] = Depends(get_claim),
    use_case: CreateAdminUseCase = Depends(get_create_admin_use_case)
):
    """Создание администратора (только SUPER_ADMIN)"""
    user = await use_case(claim, _register_dto(request))
    return ApiResponse(message="User registered successfully", data=UserResponse.from_domain(user))


# Orders

@router.get("/orders", response_model=ApiResponse[List[OrderResponse]], responses=ERRORS)
async def list_orders(
    claim: Optional[dict] = Depends(get_claim),
    use_case: ListOrdersUseCase = Depends(get_list_orders_use_case)
):
    """Список заказов"""
    orders = await use_case(claim)
    return ApiResponse(message="Order retrieved successfully", data=[OrderResponse.from_domain(o) for o in orders])


@router.post(
    "/orders",
    response_model=ApiResponse[OrderResponse],
    responses=ERRORS,
    status_code=status.HTTP_201_CREATED
)
async def create_order(
    request: CreateOrderRequest,
    claim: Optional[dict] = Depends(get_claim),
    use_case: CreateOrderUseCase = Depends(get_create_order_use_case)
):
    """Создать новый заказ"""
    dto = CreateOrderDTO(
        order_type=request.order_type,
        departure_date=request.departure_date,
        note=request.note
    )
    order = await use_case(claim, dto)
    return ApiResponse(message="Order created successfully", data=OrderResponse.from_domain(order))


@router.get("/orders/{order_id}", response_model=ApiResponse[OrderResponse], responses=ERRORS)
async def get_order(
    order_id: str,
    claim: Optional[dict] = Depends(get_claim),
    use_case: GetOrderUseCase = Depends(get_get_order_use_case)
):
    """Получить заказ по ID"""
    order = await use_case(claim, order_id)
    return ApiResponse(message="Order retrieved successfully", data=OrderResponse.from_domain(order))


@router.put("/orders/{order_id}/status", response_model=ApiResponse[OrderResponse], responses=ERRORS)
async def set_order_status(
    order_id: str,
    request: OrderStatusRequest,
    claim: Optional[dict] = Depends(get_claim),
    use_case: SetOrderStatusUseCase = Depends(get_set_order_status_use_case)
):
    """Смена статуса заказа (ADMIN, SUPER_ADMIN)"""
    order = await use_case(claim, order_id, request.order_status)
    return ApiResponse(message="Order status updated successfully", data=OrderResponse.from_domain(order))


# Payments

@router.post(
    "/payments",
    response_model=ApiResponse[PaymentResponse],
    responses=ERRORS,
    status_code=status.HTTP_201_CREATED
)
async def create_payment(
    request: CreatePaymentRequest,
    claim: Optional[dict] = Depends(get_claim),
    use_case: CreatePaymentUseCase = Depends(get_create_payment_use_case)
):
    """Регистрация платежа администратором"""
    dto = CreatePaymentDTO(
        order_id=request.order_id,
        sender_name=request.sender_name,
        transfer_date=request.transfer_date,
        total_price=request.total_price,
        proof_url=request.proof_url
    )
    payment = await use_case(claim, dto)
    return ApiResponse(message="Payment created successfully", data=PaymentResponse.from_domain(payment))


@router.get("/payments/{payment_id}", response_model=ApiResponse[PaymentResponse], responses=ERRORS)
async def get_payment(
    payment_id: str,
    claim: Optional[dict] = Depends(get_claim),
    use_case: GetPaymentUseCase = Depends(get_get_payment_use_case)
):
    """Получить платеж по ID"""
    payment = await use_case(claim, payment_id)
    return ApiResponse(message="Payment retrieved successfully", data=PaymentResponse.from_domain(payment))


@router.put("/payments/{payment_id}/status", response_model=ApiResponse[PaymentResponse], responses=ERRORS)
async def set_payment_status(
    payment_id: str,
    request: PaymentStatusRequest,
    claim: Optional[dict] = Depends(get_claim),
    use_case: SetPaymentStatusUseCase = Depends(get_set_payment_status_use_case)
):
    """Смена статуса платежа (ADMIN, SUPER_ADMIN)"""
    payment = await use_case(claim, payment_id, request.status, request.note)
    return ApiResponse(message="Payment status updated successfully", data=PaymentResponse.from_domain(payment))


@router.post("/payments/{payment_id}/proof", response_model=ApiResponse[PaymentResponse], responses=ERRORS)
async def upload_payment_proof(
    payment_id: str,
    request: PaymentProofRequest,
    claim: Optional[dict] = Depends(get_claim),
    use_case: UploadPaymentProofUseCase = Depends(get_upload_payment_proof_use_case)
):
    """Загрузка подтверждения оплаты клиентом"""
    dto = PaymentProofDTO(
        sender_name=request.sender_name,
        transfer_date=request.transfer_date,
        proof_url=request.proof_url
    )
    payment = await use_case(claim, payment_id, dto)
    return ApiResponse(message="Payment proof uploaded successfully", data=PaymentResponse.from_domain(payment))
