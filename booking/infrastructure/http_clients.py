import httpx
import logging
import asyncio
from typing import Optional


logger = logging.getLogger(__name__)


class HTTPEmailClient:
    def __init__(
        self,
        base_url: str,
        api_token: str,
        max_retries: int = 3,
        retry_delay: float = 1.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._api_token = api_token
        self._max_retries = max_retries
        self._retry_delay = retry_delay
        self._transport = transport

    async def send(self, to: str, full_name: str, email_type: str, **extra) -> bool:
        """Отправка письма через email-сервис с повторными попытками"""
        payload = {"to": to, "fullName": full_name, "emailType": email_type, **extra}

        for attempt in range(self._max_retries):
            try:
                async with httpx.AsyncClient(transport=self._transport) as client:
                    response = await client.post(
                        f"{self._base_url}/api/email/send",
                        json=payload,
                        headers={"X-API-Key": self._api_token},
                        timeout=10.0
                    )

                    if response.status_code in (200, 201):
                        logger.info(f"Письмо {email_type} отправлено (попытка {attempt + 1})")
                        return True
                    elif 400 <= response.status_code < 500:
                        # Повтор не поможет
                        logger.error(f"Email-сервис отклонил письмо {email_type}: {response.status_code}")
                        return False
                    else:
                        logger.warning(f"Email-сервис вернул статус {response.status_code}")

            except httpx.RequestError as e:
                logger.warning(f"Ошибка отправки письма (попытка {attempt + 1}/{self._max_retries}): {e}")

            if attempt < self._max_retries - 1:
                await asyncio.sleep(self._retry_delay)

        logger.error(f"Не удалось отправить письмо {email_type} после {self._max_retries} попыток")
        return False
