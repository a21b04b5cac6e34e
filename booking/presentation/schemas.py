from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime
from typing import Any, Generic, Optional, TypeVar, Union

from booking.domain.models import Role, OrderType, OrderStatus, PaymentStatus

T = TypeVar("T")


class RequestModel(BaseModel):
    """Тела запросов принимают camelCase от фронтенда и snake_case"""
    model_config = ConfigDict(populate_by_name=True)


class ApiResponse(BaseModel, Generic[T]):
    message: str
    data: Optional[T] = None


class MessageResponse(BaseModel):
    message: str


class ErrorResponse(BaseModel):
    message: str
    data: Any = Field(default_factory=list)


# Auth

class SignUpRequest(RequestModel):
    full_name: Optional[str] = Field(default=None, alias="fullName")
    email: Optional[str] = None
    password: Optional[str] = None
    phone_number: Optional[str] = Field(default=None, alias="phoneNumber")


class LoginRequest(RequestModel):
    email: Optional[str] = None
    password: Optional[str] = None


class ForgotPasswordRequest(RequestModel):
    email: Optional[str] = None


class ValidateResetTokenRequest(RequestModel):
    token: Optional[str] = None


class ResetPasswordRequest(RequestModel):
    token: Optional[str] = None
    password: Optional[str] = None


class UserResponse(BaseModel):
    id: str
    full_name: str
    email: str
    phone_number: str
    role: Role
    created_at: datetime

    @classmethod
    def from_domain(cls, user):
        return cls(
            id=user.id,
            full_name=user.full_name,
            email=user.email,
            phone_number=user.phone_number,
            role=user.role,
            created_at=user.created_at,
        )


class PrincipalResponse(BaseModel):
    id: str
    email: Optional[str] = None
    role: Role


class LoginResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: PrincipalResponse


class TokenValidResponse(BaseModel):
    valid: bool = True


# Orders

class CreateOrderRequest(RequestModel):
    order_type: Optional[str] = Field(default=None, alias="orderType")
    departure_date: Optional[datetime] = Field(default=None, alias="departureDate")
    note: Optional[str] = None


class OrderStatusRequest(RequestModel):
    order_status: Optional[str] = Field(default=None, alias="orderStatus")


class OrderResponse(BaseModel):
    id: str
    user_id: str
    order_type: OrderType
    order_status: OrderStatus
    departure_date: datetime
    note: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_domain(cls, order):
        return cls(
            id=order.id,
            user_id=order.user_id,
            order_type=order.order_type,
            order_status=order.order_status,
            departure_date=order.departure_date,
            note=order.note,
            created_at=order.created_at,
            updated_at=order.updated_at,
        )


# Payments

class CreatePaymentRequest(RequestModel):
    order_id: Optional[str] = Field(default=None, alias="orderId")
    sender_name: Optional[str] = Field(default=None, alias="senderName")
    transfer_date: Optional[datetime] = Field(default=None, alias="transferDate")
    total_price: Optional[Union[str, float]] = Field(default=None, alias="totalPrice")
    proof_url: Optional[str] = Field(default=None, alias="proofUrl")


class PaymentStatusRequest(RequestModel):
    status: Optional[str] = None
    note: Optional[str] = None


class PaymentProofRequest(RequestModel):
    sender_name: Optional[str] = Field(default=None, alias="senderName")
    transfer_date: Optional[datetime] = Field(default=None, alias="transferDate")
    proof_url: Optional[str] = Field(default=None, alias="proofUrl")


class PaymentResponse(BaseModel):
    id: str
    order_id: str
    sender_name: str
    transfer_date: datetime
    total_price: float
    proof_url: Optional[str] = None
    note: Optional[str] = None
    payment_status: PaymentStatus
    approved_by_admin_id: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_domain(cls, payment):
        return cls(**payment.model_dump())
