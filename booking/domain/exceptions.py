class DomainException(Exception):
    pass


class UnauthenticatedError(DomainException):
    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message)


class ForbiddenError(DomainException):
    def __init__(self, message: str = "Forbidden"):
        super().__init__(message)


class NotFoundError(DomainException):
    pass


class OrderNotFoundError(NotFoundError):
    def __init__(self, message: str = "Order not found"):
        super().__init__(message)


class PaymentNotFoundError(NotFoundError):
    def __init__(self, message: str = "Payment not found"):
        super().__init__(message)


class InvalidStatusValueError(DomainException):
    def __init__(self, value: str, message: str = "Invalid status"):
        self.value = value
        super().__init__(message)


class InvalidOrExpiredTokenError(DomainException):
    def __init__(self, message: str = "Reset password token is invalid or has expired"):
        super().__init__(message)


class WeakPasswordError(DomainException):
    def __init__(self, min_length: int):
        self.min_length = min_length
        super().__init__(f"Password must be at least {min_length} characters")


class MissingFieldsError(DomainException):
    def __init__(self, message: str = "Missing required fields"):
        super().__init__(message)


class ConflictError(DomainException):
    def __init__(self, message: str = "User already exists"):
        super().__init__(message)


class NotificationError(DomainException):
    pass


class InvalidFieldError(DomainException):
    pass
