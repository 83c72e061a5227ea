from typing import NoReturn

from fastapi import status
from libs.result import Error

from src.app import errors

# Fixed mapping from use case error codes to HTTP status
STATUS_BY_CODE = {
    errors.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    errors.ACCESS_DENIED: status.HTTP_403_FORBIDDEN,
    errors.VALIDATION_ERROR: status.HTTP_400_BAD_REQUEST,
    errors.LIMIT_EXCEEDED: status.HTTP_409_CONFLICT,
    errors.CONFLICT: status.HTTP_409_CONFLICT,
    errors.INVALID_CREDENTIALS: status.HTTP_401_UNAUTHORIZED,
    errors.TENANT_INACTIVE: status.HTTP_403_FORBIDDEN,
    errors.USER_INACTIVE: status.HTTP_403_FORBIDDEN,
}


class ClientError(Exception):
    def __init__(self, base_error: Error, status_code: int = status.HTTP_400_BAD_REQUEST):
        self.base_error = base_error
        self.status_code = status_code
        super().__init__(base_error.message)


class ServerError(Exception):
    def __init__(self, base_error: Error):
        self.base_error = base_error
        super().__init__(base_error.message)


def raise_for_error(error: Error) -> NoReturn:
    """Raise the ClientError mapped to error.code, or ServerError if unmapped"""
    status_code = STATUS_BY_CODE.get(error.code)
    if status_code is None:
        raise ServerError(error)
    raise ClientError(error, status_code=status_code)
