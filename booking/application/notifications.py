import logging

from booking.application.interfaces import EmailService


logger = logging.getLogger(__name__)


async def notify(email_service: EmailService, to: str, full_name: str, email_type: str, **extra) -> bool:
    """
    Отправка письма после коммита основной операции.

    Ошибка отправки только логируется и не откатывает основной результат.
    """
    try:
        sent = await email_service.send(to=to, full_name=full_name, email_type=email_type, **extra)
    except Exception as e:
        logger.error(f"Ошибка отправки письма '{email_type}' для {to}: {e}")
        return False

    if sent:
        logger.info(f"Отправлено письмо '{email_type}' для {to}")
    else:
        logger.warning(f"Не отправлено письмо '{email_type}' для {to}")
    return sent
