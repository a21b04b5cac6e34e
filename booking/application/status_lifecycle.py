import logging
from enum import Enum
from typing import Optional, Type, TypeVar, Mapping, Any

from booking.domain.models import Order, Payment, OrderStatus, PaymentStatus, ADMIN_ROLES
from booking.domain.exceptions import (
    InvalidStatusValueError, MissingFieldsError, OrderNotFoundError, PaymentNotFoundError
)
from booking.application.authorization import AuthorizationGate
from booking.application.interfaces import EmailService
from booking.application.notifications import notify


logger = logging.getLogger(__name__)

StatusT = TypeVar("StatusT", bound=Enum)


def normalize_status(status_cls: Type[StatusT], value: str, message: str = "Invalid status") -> StatusT:
    """Приводит значение к верхнему регистру и проверяет принадлежность enum"""
    normalized = value.upper() if isinstance(value, str) else value
    try:
        return status_cls(normalized)
    except ValueError:
        raise InvalidStatusValueError(str(value), message)


class SetOrderStatusUseCase:
    """Смена статуса заказа администратором. Граф переходов не проверяется."""

    def __init__(self, unit_of_work, gate: AuthorizationGate):
        self._uow = unit_of_work
        self._gate = gate

    async def __call__(self, claim: Optional[Mapping[str, Any]], order_id: str, requested_status: str) -> Order:
        principal = self._gate.check(claim, ADMIN_ROLES)

        if not order_id or not requested_status:
            raise MissingFieldsError()
        status = normalize_status(OrderStatus, requested_status, "Invalid order status")

        async with self._uow() as uow:
            order = await uow.orders.get_by_id(order_id)
            if not order:
                raise OrderNotFoundError()

            updated = await uow.orders.update_status(order_id, status)
            await uow.commit()

        logger.info(f"Статус заказа {order_id}: {order.order_status.value} -> {status.value} (by {principal.id})")
        return updated


class SetPaymentStatusUseCase:
    """Смена статуса платежа администратором с письмом клиенту."""

    def __init__(self, unit_of_work, gate: AuthorizationGate, email_service: EmailService):
        self._uow = unit_of_work
        self._gate = gate
        self._email = email_service

    async def __call__(
        self,
        claim: Optional[Mapping[str, Any]],
        payment_id: str,
        requested_status: str,
        note: Optional[str] = None,
    ) -> Payment:
        principal = self._gate.check(claim, ADMIN_ROLES)

        async with self._uow() as uow:
            payment = await uow.payments.get_by_id(payment_id)
            if not payment:
                raise PaymentNotFoundError()

            if not requested_status:
                raise MissingFieldsError()
            # Для отклонения нужна причина
            if isinstance(requested_status, str) and requested_status.upper() == PaymentStatus.REJECTED.value and not note:
                raise MissingFieldsError("Note is required for rejected status")
            status = normalize_status(PaymentStatus, requested_status)

            updated = await uow.payments.update_status(payment_id, status, note or None)

            order = await uow.orders.get_by_id(payment.order_id)
            customer = await uow.users.get_by_id(order.user_id) if order else None
            await uow.commit()

        logger.info(f"Статус платежа {payment_id}: {payment.payment_status.value} -> {status.value} (by {principal.id})")

        if customer is not None:
            if status == PaymentStatus.APPROVED:
                await notify(
                    self._email, customer.email, customer.full_name, "payment-approval",
                    paymentId=payment_id, orderId=payment.order_id, totalPrice=payment.total_price,
                )
            elif status == PaymentStatus.REJECTED:
                await notify(
                    self._email, customer.email, customer.full_name, "payment-rejection",
                    paymentId=payment_id, note=note,
                )

        return updated
