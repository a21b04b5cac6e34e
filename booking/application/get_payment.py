from typing import Optional, Mapping, Any

from booking.domain.models import Payment
from booking.domain.exceptions import PaymentNotFoundError
from booking.application.authorization import AuthorizationGate


class GetPaymentUseCase:
    def __init__(self, unit_of_work, gate: AuthorizationGate):
        self._uow = unit_of_work
        self._gate = gate

    async def __call__(self, claim: Optional[Mapping[str, Any]], payment_id: str) -> Payment:
        self._gate.check(claim)
        async with self._uow() as uow:
            payment = await uow.payments.get_by_id(payment_id)
            if not payment:
                raise PaymentNotFoundError()
            return payment
