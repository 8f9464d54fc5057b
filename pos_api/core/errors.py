# pos_api/core/errors.py

from fastapi import HTTPException, status

from pos_api.services.errors import ErrorKind, ServiceError


STATUS_BY_KIND = {
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.INSUFFICIENT_STOCK: status.HTTP_400_BAD_REQUEST,
    ErrorKind.INVALID_STATE: status.HTTP_409_CONFLICT,
    ErrorKind.INVALID_OPERATION: status.HTTP_400_BAD_REQUEST,
    ErrorKind.CONFLICT: status.HTTP_409_CONFLICT,
}


def to_http_exception(error: ServiceError) -> HTTPException:
    return HTTPException(
        status_code=STATUS_BY_KIND.get(error.kind, status.HTTP_400_BAD_REQUEST),
        detail={
            "error": error.kind.value,
            "message": error.message,
            **({"details": dict(error.details)} if error.details else {}),
        },
    )


def unwrap(result):
    """Return a service result, or raise the matching HTTPException."""
    if isinstance(result, ServiceError):
        raise to_http_exception(result)
    return result
