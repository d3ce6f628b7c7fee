"""Maps domain errors to HTTP responses.

Registered as REST_FRAMEWORK["EXCEPTION_HANDLER"]. Responses carry the error
code and the user-safe message only.
"""

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

from cinema.domain.errors import DomainError, ErrorCode

STATUS_BY_CODE = {
    ErrorCode.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.REFERENCE_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.INVALID_IDENTIFIER: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_VALUE: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_QUANTITY: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_TEMPORAL_VALUE: status.HTTP_400_BAD_REQUEST,
    ErrorCode.SEAT_TAKEN: status.HTTP_409_CONFLICT,
    ErrorCode.ALREADY_PAID: status.HTTP_409_CONFLICT,
    ErrorCode.CONFLICT: status.HTTP_409_CONFLICT,
}


def exception_handler(exc, context):
    if isinstance(exc, DomainError):
        return Response(
            {"code": exc.code.value, "message": exc.message},
            status=STATUS_BY_CODE[exc.code],
        )
    return drf_exception_handler(exc, context)
