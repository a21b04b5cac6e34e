from datetime import datetime
from enum import Enum
from typing import Optional
from pydantic import BaseModel


class Role(str, Enum):
    SUPER_ADMIN = "SUPER_ADMIN"
    ADMIN = "ADMIN"
    CUSTOMER = "CUSTOMER"


class OrderType(str, Enum):
    TRANSPORT = "TRANSPORT"
    TOUR = "TOUR"


class OrderStatus(str, Enum):
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    CANCELED = "CANCELED"
    COMPLETED = "COMPLETED"


class PaymentStatus(str, Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


ADMIN_ROLES = frozenset({Role.SUPER_ADMIN, Role.ADMIN})


class Principal(BaseModel):
    """Аутентифицированный пользователь запроса"""
    id: str
    email: Optional[str] = None
    role: Role


class User(BaseModel):
    """Domain Entity: пользователь"""
    id: str
    full_name: str
    email: str
    phone_number: str
    password_hash: str
    role: Role = Role.CUSTOMER
    reset_password_token: Optional[str] = None
    reset_password_expiry: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime


class Order(BaseModel):
    """Domain Entity: заказ"""
    id: str
    user_id: str
    order_type: OrderType
    order_status: OrderStatus = OrderStatus.PENDING
    departure_date: datetime
    note: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class Payment(BaseModel):
    """Domain Entity: платеж по заказу"""
    id: str
    order_id: str
    sender_name: str
    transfer_date: datetime
    total_price: float
    proof_url: Optional[str] = None
    note: Optional[str] = None
    payment_status: PaymentStatus = PaymentStatus.PENDING
    approved_by_admin_id: Optional[str] = None
    created_at: datetime
    updated_at: datetime
