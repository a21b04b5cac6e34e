import logging
from typing import Iterable, Mapping, Optional, Any

from booking.domain.models import Principal, Role
from booking.domain.exceptions import UnauthenticatedError, ForbiddenError


logger = logging.getLogger(__name__)


class AuthorizationGate:
    """
    Проверка вызывающего перед любой привилегированной операцией.

    Принимает уже проверенный claim (payload JWT) и необязательный список ролей.
    Без списка ролей проверяется только аутентификация.
    """

    def check(
        self,
        claim: Optional[Mapping[str, Any]],
        allowed_roles: Optional[Iterable[Role]] = None,
    ) -> Principal:
        principal = self._to_principal(claim)

        roles = frozenset(Role(r) for r in allowed_roles) if allowed_roles else frozenset()
        if roles and principal.role not in roles:
            logger.warning(f"Доступ запрещен: пользователь {principal.id} с ролью {principal.role.value}")
            raise ForbiddenError()

        return principal

    @staticmethod
    def _to_principal(claim: Optional[Mapping[str, Any]]) -> Principal:
        if not claim:
            raise UnauthenticatedError()

        user_id = claim.get("id") or claim.get("sub")
        role = claim.get("role")
        if not user_id or not role:
            raise UnauthenticatedError()

        try:
            return Principal(id=str(user_id), email=claim.get("email"), role=Role(role))
        except ValueError:
            logger.warning(f"Неизвестная роль в claim: {role}")
            raise UnauthenticatedError()
