import logging
import math
import uuid
from datetime import datetime, timezone
from typing import Optional, Mapping, Any, Union
from pydantic import BaseModel

from booking.domain.models import Payment, PaymentStatus, ADMIN_ROLES
from booking.domain.exceptions import InvalidFieldError, MissingFieldsError, OrderNotFoundError
from booking.application.authorization import AuthorizationGate


logger = logging.getLogger(__name__)


class CreatePaymentDTO(BaseModel):
    order_id: Optional[str] = None
    sender_name: Optional[str] = None
    transfer_date: Optional[datetime] = None
    total_price: Optional[Union[str, float]] = None
    proof_url: Optional[str] = None


class CreatePaymentUseCase:
    """Регистрация платежа администратором. Статус всегда PENDING."""

    def __init__(self, unit_of_work, gate: AuthorizationGate):
        self._uow = unit_of_work
        self._gate = gate

    async def __call__(self, claim: Optional[Mapping[str, Any]], dto: CreatePaymentDTO) -> Payment:
        principal = self._gate.check(claim, ADMIN_ROLES)

        price_missing = dto.total_price is None or dto.total_price == ""
        if price_missing or not all([dto.order_id, dto.sender_name, dto.transfer_date, dto.proof_url]):
            raise MissingFieldsError("All fields are required")
        try:
            total_price = float(dto.total_price)
        except ValueError:
            raise InvalidFieldError("Total price must be a valid number")
        # nan и inf float() принимает
        if not math.isfinite(total_price):
            raise InvalidFieldError("Total price must be a valid number")

        now = datetime.now(timezone.utc)
        payment = Payment(
            id=str(uuid.uuid4()),
            order_id=dto.order_id,
            sender_name=dto.sender_name,
            transfer_date=dto.transfer_date,
            total_price=total_price,
            proof_url=dto.proof_url,
            payment_status=PaymentStatus.PENDING,
            approved_by_admin_id=principal.id,
            created_at=now,
            updated_at=now,
        )
        async with self._uow() as uow:
            order = await uow.orders.get_by_id(dto.order_id)
            if not order:
                raise OrderNotFoundError()
            await uow.payments.create(payment)
            await uow.commit()

        logger.info(f"Платеж {payment.id} создан для заказа {dto.order_id}")
        return payment
