import logging
import uuid
from datetime import datetime, timezone
from typing import Optional, Mapping, Any
from pydantic import BaseModel

from booking.domain.models import Order, OrderStatus, OrderType
from booking.domain.exceptions import MissingFieldsError
from booking.application.authorization import AuthorizationGate


logger = logging.getLogger(__name__)


class CreateOrderDTO(BaseModel):
    order_type: Optional[str] = None
    departure_date: Optional[datetime] = None
    note: Optional[str] = None


class CreateOrderUseCase:
    def __init__(self, unit_of_work, gate: AuthorizationGate):
        self._uow = unit_of_work
        self._gate = gate

    async def __call__(self, claim: Optional[Mapping[str, Any]], order_data: CreateOrderDTO) -> Order:
        principal = self._gate.check(claim)

        if not order_data.order_type or not order_data.departure_date:
            raise MissingFieldsError("Missing required fields: orderType or departureDate")

        order_type = OrderType.TRANSPORT if order_data.order_type.upper() == "TRANSPORT" else OrderType.TOUR
        logger.info(f"Создание заказа {order_type.value} для пользователя {principal.id}")

        now = datetime.now(timezone.utc)
        order = Order(
            id=str(uuid.uuid4()),
            user_id=principal.id,
            order_type=order_type,
            order_status=OrderStatus.PENDING,
            departure_date=order_data.departure_date,
            note=order_data.note,
            created_at=now,
            updated_at=now,
        )
        async with self._uow() as uow:
            await uow.orders.create(order)
            await uow.commit()

        logger.info(f"Заказ создан: {order.id}")
        return order
