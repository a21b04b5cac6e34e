import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
from jose import jwt, JWTError

from booking.domain.models import Principal
from booking.application.interfaces import PasswordHasher, TokenService


logger = logging.getLogger(__name__)


class BcryptPasswordHasher(PasswordHasher):
    """Один и тот же алгоритм и cost для регистрации и сброса пароля"""

    def __init__(self, rounds: int = 10):
        self._rounds = rounds

    def hash(self, password: str) -> str:
        return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=self._rounds)).decode("utf-8")

    def verify(self, password: str, password_hash: str) -> bool:
        try:
            return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
        except ValueError:
            logger.warning("Некорректный формат хеша пароля")
            return False


class JWTTokenService(TokenService):
    def __init__(self, secret_key: str, algorithm: str = "HS256", expire_minutes: int = 60 * 24):
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._expire_minutes = expire_minutes

    def issue(self, principal: Principal, expires_delta: Optional[timedelta] = None) -> str:
        exp = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=self._expire_minutes))
        payload = {
            "sub": principal.id,
            "email": principal.email,
            "role": principal.role.value,
            "type": "access",
            "exp": exp,
        }
        return jwt.encode(payload, self._secret_key, algorithm=self._algorithm)

    def decode(self, token: str) -> Optional[dict]:
        try:
            payload = jwt.decode(token, self._secret_key, algorithms=[self._algorithm])
        except JWTError as e:
            logger.info(f"Токен не прошел проверку: {e}")
            return None
        if payload.get("type") != "access":
            return None
        return payload
