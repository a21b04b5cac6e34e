from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional, List
from booking.domain.models import User, Order, Payment, OrderStatus, PaymentStatus, Principal


class UserRepository(ABC):
    @abstractmethod
    async def get_by_id(self, user_id: str) -> Optional[User]:
        pass

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[User]:
        pass

    @abstractmethod
    async def get_by_email_or_phone(self, email: str, phone_number: str) -> Optional[User]:
        pass

    @abstractmethod
    async def get_by_valid_reset_token(self, token: str, now: datetime) -> Optional[User]:
        """Пользователь с совпадающим токеном и reset_password_expiry > now"""
        pass

    @abstractmethod
    async def create(self, user: User) -> None:
        pass

    @abstractmethod
    async def set_reset_token(self, user_id: str, token: Optional[str], expiry: Optional[datetime]) -> None:
        pass

    @abstractmethod
    async def update_password_and_clear_token(self, user_id: str, password_hash: str) -> None:
        """Одним UPDATE: новый хеш пароля и обнуление токена сброса"""
        pass


class OrderRepository(ABC):
    @abstractmethod
    async def get_by_id(self, order_id: str) -> Optional[Order]:
        pass

    @abstractmethod
    async def list_all(self) -> List[Order]:
        pass

    @abstractmethod
    async def create(self, order: Order) -> None:
        pass

    @abstractmethod
    async def update_status(self, order_id: str, status: OrderStatus) -> Optional[Order]:
        pass


class PaymentRepository(ABC):
    @abstractmethod
    async def get_by_id(self, payment_id: str) -> Optional[Payment]:
        pass

    @abstractmethod
    async def get_for_user(self, payment_id: str, user_id: str) -> Optional[Payment]:
        """Платеж, чей заказ принадлежит пользователю"""
        pass

    @abstractmethod
    async def create(self, payment: Payment) -> None:
        pass

    @abstractmethod
    async def update_status(self, payment_id: str, status: PaymentStatus, note: Optional[str]) -> Optional[Payment]:
        pass

    @abstractmethod
    async def update_proof(
        self, payment_id: str, sender_name: str, transfer_date: datetime, proof_url: str
    ) -> Optional[Payment]:
        pass


class UnitOfWork(ABC):
    @property
    @abstractmethod
    def users(self) -> UserRepository:
        pass

    @property
    @abstractmethod
    def orders(self) -> OrderRepository:
        pass

    @property
    @abstractmethod
    def payments(self) -> PaymentRepository:
        pass

    @abstractmethod
    async def __call__(self):
        pass

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass


class PasswordHasher(ABC):
    @abstractmethod
    def hash(self, password: str) -> str:
        pass

    @abstractmethod
    def verify(self, password: str, password_hash: str) -> bool:
        pass


class TokenService(ABC):
    @abstractmethod
    def issue(self, principal: Principal) -> str:
        pass

    @abstractmethod
    def decode(self, token: str) -> Optional[dict]:
        """Возвращает claim или None, если токен не прошел проверку"""
        pass


class EmailService(ABC):
    @abstractmethod
    async def send(self, to: str, full_name: str, email_type: str, **extra) -> bool:
        pass
