# draftroom/api/exceptions.py

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

from draftroom.exceptions import DraftError, InvalidConfiguration, NotFound

STATUS_BY_ERROR = {
    NotFound: status.HTTP_404_NOT_FOUND,
    InvalidConfiguration: status.HTTP_400_BAD_REQUEST,
}


def draft_exception_handler(exc, context):
    """
    DRF exception handler: draft errors become {"error": code, "detail": msg}.
    Anything else goes through DRF's default handling.
    """
    if isinstance(exc, DraftError):
        http_status = STATUS_BY_ERROR.get(type(exc), status.HTTP_409_CONFLICT)
        return Response({"error": exc.code, "detail": str(exc)}, status=http_status)

    return exception_handler(exc, context)
