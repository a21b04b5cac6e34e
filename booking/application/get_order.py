from typing import List, Optional, Mapping, Any

from booking.domain.models import Order, ADMIN_ROLES
from booking.domain.exceptions import OrderNotFoundError
from booking.application.authorization import AuthorizationGate


class GetOrderUseCase:
    def __init__(self, unit_of_work, gate: AuthorizationGate):
        self._uow = unit_of_work
        self._gate = gate

    async def __call__(self, claim: Optional[Mapping[str, Any]], order_id: str) -> Order:
        self._gate.check(claim)
        async with self._uow() as uow:
            order = await uow.orders.get_by_id(order_id)
            if not order:
                raise OrderNotFoundError()
            return order


class ListOrdersUseCase:
    def __init__(self, unit_of_work, gate: AuthorizationGate):
        self._uow = unit_of_work
        self._gate = gate

    async def __call__(self, claim: Optional[Mapping[str, Any]]) -> List[Order]:
        self._gate.check(claim, ADMIN_ROLES)
        async with self._uow() as uow:
            return await uow.orders.list_all()
