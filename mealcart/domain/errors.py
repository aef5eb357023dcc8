# mealcart/domain/errors.py
"""Failures raised by the cart, order and user services.

Routers map them onto HTTP status codes, see ``mealcart.api.deps.to_http``.
"""


class ServiceError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidInputError(ServiceError, ValueError):
    status_code = 400


class PromoExpiredError(InvalidInputError):
    status_code = 400


class NotFoundError(ServiceError, LookupError):
    status_code = 404


class UnauthorizedError(ServiceError, PermissionError):
    status_code = 401
