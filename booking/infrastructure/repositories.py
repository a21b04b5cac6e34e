from typing import Optional, List
from datetime import datetime, timezone
from sqlalchemy import select, insert, update, or_
from sqlalchemy.ext.asyncio import AsyncSession

from booking.domain.models import (
    User, Order, Payment, Role, OrderType, OrderStatus, PaymentStatus
)
from booking.infrastructure.db_schema import users_tbl, orders_tbl, payments_tbl
from booking.application.interfaces import UserRepository, OrderRepository, PaymentRepository


class SQLAlchemyUserRepository(UserRepository):
    def __init__(self, session: AsyncSession):
        self._session = session

    async def get_by_id(self, user_id: str) -> Optional[User]:
        return await self._fetch_one(users_tbl.c.id == user_id)

    async def get_by_email(self, email: str) -> Optional[User]:
        return await self._fetch_one(users_tbl.c.email == email)

    async def get_by_email_or_phone(self, email: str, phone_number: str) -> Optional[User]:
        return await self._fetch_one(
            or_(users_tbl.c.email == email, users_tbl.c.phone_number == phone_number)
        )

    async def get_by_valid_reset_token(self, token: str, now: datetime) -> Optional[User]:
        return await self._fetch_one(
            users_tbl.c.reset_password_token == token,
            users_tbl.c.reset_password_expiry > now,
        )

    async def create(self, user: User) -> None:
        stmt = insert(users_tbl).values(
            id=user.id,
            full_name=user.full_name,
            email=user.email,
            phone_number=user.phone_number,
            password=user.password_hash,
            role=user.role,
            created_at=user.created_at,
            updated_at=user.updated_at
        )
        await self._session.execute(stmt)

    async def set_reset_token(self, user_id: str, token: Optional[str], expiry: Optional[datetime]) -> None:
        stmt = (
            update(users_tbl)
            .where(users_tbl.c.id == user_id)
            .values(
                reset_password_token=token,
                reset_password_expiry=expiry,
                updated_at=datetime.now(timezone.utc)
            )
        )
        await self._session.execute(stmt)

    async def update_password_and_clear_token(self, user_id: str, password_hash: str) -> None:
        stmt = (
            update(users_tbl)
            .where(users_tbl.c.id == user_id)
            .values(
                password=password_hash,
                reset_password_token=None,
                reset_password_expiry=None,
                updated_at=datetime.now(timezone.utc)
            )
        )
        await self._session.execute(stmt)

    async def _fetch_one(self, *criteria) -> Optional[User]:
        result = await self._session.execute(select(users_tbl).where(*criteria).limit(1))
        row = result.fetchone()
        return self._to_domain(row) if row else None

    def _to_domain(self, row) -> User:
        """Трансформация DB → Domain"""
        return User(
            id=row.id,
            full_name=row.full_name,
            email=row.email,
            phone_number=row.phone_number,
            password_hash=row.password,
            role=Role(row.role),
            reset_password_token=row.reset_password_token,
            reset_password_expiry=row.reset_password_expiry,
            created_at=row.created_at,
            updated_at=row.updated_at
        )


class SQLAlchemyOrderRepository(OrderRepository):
    def __init__(self, session: AsyncSession):
        self._session = session

    async def get_by_id(self, order_id: str) -> Optional[Order]:
        result = await self._session.execute(
            select(orders_tbl).where(orders_tbl.c.id == order_id)
        )
        row = result.fetchone()
        return self._to_domain(row) if row else None

    async def list_all(self) -> List[Order]:
        result = await self._session.execute(
            select(orders_tbl).order_by(orders_tbl.c.created_at.desc())
        )
        return [self._to_domain(row) for row in result.fetchall()]

    async def create(self, order: Order) -> None:
        stmt = insert(orders_tbl).values(
            id=order.id,
            user_id=order.user_id,
            order_type=order.order_type,
            order_status=order.order_status,
            departure_date=order.departure_date,
            note=order.note,
            created_at=order.created_at,
            updated_at=order.updated_at
        )
        await self._session.execute(stmt)

    async def update_status(self, order_id: str, status: OrderStatus) -> Optional[Order]:
        stmt = (
            update(orders_tbl)
            .where(orders_tbl.c.id == order_id)
            .values(
                order_status=status,
                updated_at=datetime.now(timezone.utc)
            )
            .returning(*orders_tbl.c)
        )
        result = await self._session.execute(stmt)
        row = result.fetchone()
        return self._to_domain(row) if row else None

    def _to_domain(self, row) -> Order:
        """Трансформация DB → Domain"""
        return Order(
            id=row.id,
            user_id=row.user_id,
            order_type=OrderType(row.order_type),
            order_status=OrderStatus(row.order_status),
            departure_date=row.departure_date,
            note=row.note,
            created_at=row.created_at,
            updated_at=row.updated_at
        )


class SQLAlchemyPaymentRepository(PaymentRepository):
    def __init__(self, session: AsyncSession):
        self._session = session

    async def get_by_id(self, payment_id: str) -> Optional[Payment]:
        result = await self._session.execute(
            select(payments_tbl).where(payments_tbl.c.id == payment_id)
        )
        row = result.fetchone()
        return self._to_domain(row) if row else None

    async def get_for_user(self, payment_id: str, user_id: str) -> Optional[Payment]:
        result = await self._session.execute(
            select(payments_tbl)
            .join(orders_tbl, orders_tbl.c.id == payments_tbl.c.order_id)
            .where(payments_tbl.c.id == payment_id, orders_tbl.c.user_id == user_id)
        )
        row = result.fetchone()
        return self._to_domain(row) if row else None

    async def create(self, payment: Payment) -> None:
        stmt = insert(payments_tbl).values(
            id=payment.id,
            order_id=payment.order_id,
            sender_name=payment.sender_name,
            transfer_date=payment.transfer_date,
            total_price=payment.total_price,
            proof_url=payment.proof_url,
            note=payment.note,
            payment_status=payment.payment_status,
            approved_by_admin_id=payment.approved_by_admin_id,
            created_at=payment.created_at,
            updated_at=payment.updated_at
        )
        await self._session.execute(stmt)

    async def update_status(self, payment_id: str, status: PaymentStatus, note: Optional[str]) -> Optional[Payment]:
        return await self._update(payment_id, payment_status=status, note=note)

    async def update_proof(
        self, payment_id: str, sender_name: str, transfer_date: datetime, proof_url: str
    ) -> Optional[Payment]:
        return await self._update(
            payment_id,
            sender_name=sender_name,
            transfer_date=transfer_date,
            proof_url=proof_url,
            payment_status=PaymentStatus.PENDING,
        )

    async def _update(self, payment_id: str, **values) -> Optional[Payment]:
        stmt = (
            update(payments_tbl)
            .where(payments_tbl.c.id == payment_id)
            .values(updated_at=datetime.now(timezone.utc), **values)
            .returning(*payments_tbl.c)
        )
        result = await self._session.execute(stmt)
        row = result.fetchone()
        return self._to_domain(row) if row else None

    def _to_domain(self, row) -> Payment:
        """Трансформация DB → Domain"""
        return Payment(
            id=row.id,
            order_id=row.order_id,
            sender_name=row.sender_name,
            transfer_date=row.transfer_date,
            total_price=row.total_price,
            proof_url=row.proof_url,
            note=row.note,
            payment_status=PaymentStatus(row.payment_status),
            approved_by_admin_id=row.approved_by_admin_id,
            created_at=row.created_at,
            updated_at=row.updated_at
        )
