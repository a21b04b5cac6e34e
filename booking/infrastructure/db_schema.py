from sqlalchemy import Table, Column, String, Float, Enum, DateTime, ForeignKey, MetaData, Text
from sqlalchemy.sql import func

from booking.domain.models import Role, OrderType, OrderStatus, PaymentStatus

metadata = MetaData()


users_tbl = Table(
    "users",
    metadata,
    Column("id", String, primary_key=True),
    Column("full_name", String, nullable=False),
    Column("email", String, unique=True, nullable=False, index=True),
    Column("phone_number", String, nullable=False),
    Column("password", String, nullable=False),
    Column("role", Enum(Role, name="role"), nullable=False, default=Role.CUSTOMER),
    Column("reset_password_token", String, nullable=True, index=True),
    Column("reset_password_expiry", DateTime(timezone=True), nullable=True),
    Column("created_at", DateTime(timezone=True), server_default=func.now()),
    Column("updated_at", DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
)


orders_tbl = Table(
    "orders",
    metadata,
    Column("id", String, primary_key=True),
    Column("user_id", String, ForeignKey("users.id"), nullable=False, index=True),
    Column("order_type", Enum(OrderType, name="order_type"), nullable=False),
    Column("order_status", Enum(OrderStatus, name="order_status"), nullable=False, default=OrderStatus.PENDING),
    Column("departure_date", DateTime(timezone=True), nullable=False),
    Column("note", Text, nullable=True),
    Column("created_at", DateTime(timezone=True), server_default=func.now()),
    Column("updated_at", DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
)


payments_tbl = Table(
    "payments",
    metadata,
    Column("id", String, primary_key=True),
    Column("order_id", String, ForeignKey("orders.id"), nullable=False, index=True),
    Column("sender_name", String, nullable=False),
    Column("transfer_date", DateTime(timezone=True), nullable=False),
    Column("total_price", Float, nullable=False),
    Column("proof_url", String, nullable=True),
    Column("note", Text, nullable=True),
    Column("payment_status", Enum(PaymentStatus, name="payment_status"), nullable=False, default=PaymentStatus.PENDING),
    Column("approved_by_admin_id", String, ForeignKey("users.id"), nullable=True),
    Column("created_at", DateTime(timezone=True), server_default=func.now()),
    Column("updated_at", DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
)
