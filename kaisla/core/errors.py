"""Service-level errors. Each carries the HTTP status the API layer responds with."""

from fastapi import status


class ServiceError(Exception):
    """Base for errors raised by services and rendered as {"detail": message}."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        self.message = message
        self.cause = cause
        super().__init__(message)


class BadRequestError(ServiceError):
    status_code = status.HTTP_400_BAD_REQUEST


class UnauthorizedError(ServiceError):
    status_code = status.HTTP_401_UNAUTHORIZED


class NotFoundError(ServiceError):
    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(ServiceError):
    status_code = status.HTTP_409_CONFLICT


class PayloadTooLargeError(ServiceError):
    status_code = status.HTTP_413_REQUEST_ENTITY_TOO_LARGE
