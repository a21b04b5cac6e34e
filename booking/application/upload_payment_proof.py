import logging
from datetime import datetime
from typing import Optional, Mapping, Any
from pydantic import BaseModel

from booking.domain.models import Payment, Role
from booking.domain.exceptions import MissingFieldsError, PaymentNotFoundError
from booking.application.authorization import AuthorizationGate
from booking.application.interfaces import EmailService
from booking.application.notifications import notify


logger = logging.getLogger(__name__)


class PaymentProofDTO(BaseModel):
    sender_name: Optional[str] = None
    transfer_date: Optional[datetime] = None
    proof_url: Optional[str] = None


class UploadPaymentProofUseCase:
    """Клиент прикладывает подтверждение перевода, платеж снова ждет проверки."""

    def __init__(self, unit_of_work, gate: AuthorizationGate, email_service: EmailService):
        self._uow = unit_of_work
        self._gate = gate
        self._email = email_service

    async def __call__(self, claim: Optional[Mapping[str, Any]], payment_id: str, dto: PaymentProofDTO) -> Payment:
        principal = self._gate.check(claim, [Role.CUSTOMER])

        async with self._uow() as uow:
            # Чужой платеж для клиента не существует
            payment = await uow.payments.get_for_user(payment_id, principal.id)
            if not payment:
                raise PaymentNotFoundError()

            if not dto.sender_name or not dto.transfer_date or not dto.proof_url:
                raise MissingFieldsError()

            updated = await uow.payments.update_proof(payment_id, dto.sender_name, dto.transfer_date, dto.proof_url)
            customer = await uow.users.get_by_id(principal.id)
            await uow.commit()

        logger.info(f"Подтверждение оплаты загружено для платежа {payment_id}")
        if customer is not None:
            await notify(self._email, customer.email, customer.full_name, "payment-verification")
        return updated
