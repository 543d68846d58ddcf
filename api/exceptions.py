"""
Error taxonomy of the API and the DRF exception handler that renders it.

Every failure leaving a view ends up here and is turned into a JSON body:

* validation failures -> 400 ``{"message", "errors"}``; failures made only of
  uniqueness violations -> 409, made only of unresolved references -> 400
  with ``"Invalid reference ID provided"``;
* not found -> 404, conflicts -> 409, blocked deletes -> 400 with
  ``charactersCount``;
* anything else -> 500 ``{"error", "message"}``, with ``"stack"`` only when
  ``API_EXPOSE_TRACEBACKS`` is enabled.
"""

import logging
import traceback

from django.conf import settings
from django.http import Http404
from rest_framework import status
from rest_framework.exceptions import APIException, NotFound, ValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler, set_rollback

from .storage import ErrorKind, StorageError

logger = logging.getLogger(__name__)

UNIQUE_CODES = {'unique'}
REFERENCE_CODES = {'does_not_exist', 'incorrect_type'}


class ConflictError(APIException):
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'Resource already exists.'
    default_code = 'conflict'


class BadReferenceError(APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Invalid reference ID provided'
    default_code = 'bad_reference'


class BlockedDeleteError(APIException):
    """Raised when a delete is refused because characters still reference the record."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Cannot delete while characters are using it'
    default_code = 'blocked_delete'

    def __init__(self, detail=None, characters_count=0):
        super().__init__(detail)
        self.characters_count = characters_count


def to_api_exception(error: StorageError, label: str = 'Resource') -> APIException:
    """Maps a StorageError onto the API exception for its kind."""
    if error.kind is ErrorKind.NOT_FOUND:
        return NotFound(f"{label} not found")
    if error.kind is ErrorKind.CONFLICT:
        return ConflictError(f"{label} conflicts with an existing record")
    if error.kind is ErrorKind.PROTECTED:
        return BlockedDeleteError(
            f"Cannot delete {label.lower()} while characters are using it",
            characters_count=error.blocking_count,
        )
    return APIException(error.message)


def _flatten_codes(codes):
    if isinstance(codes, dict):
        for value in codes.values():
            yield from _flatten_codes(value)
    elif isinstance(codes, (list, tuple)):
        for value in codes:
            yield from _flatten_codes(value)
    else:
        yield codes


def _first_message(detail):
    if isinstance(detail, dict):
        for value in detail.values():
            return _first_message(value)
    elif isinstance(detail, (list, tuple)):
        for value in detail:
            return _first_message(value)
    return str(detail)


def _validation_response(exc: ValidationError) -> Response:
    errors = exc.detail if isinstance(exc.detail, dict) else {'non_field_errors': exc.detail}
    codes = set(_flatten_codes(exc.get_codes()))

    if codes and codes <= UNIQUE_CODES:
        message = _first_message(errors)
        logger.warning("Conflict: %s", message)
        return Response({'message': message, 'errors': errors}, status=status.HTTP_409_CONFLICT)

    if codes and codes <= REFERENCE_CODES:
        message = BadReferenceError.default_detail
    else:
        message = 'Validation failed'
    return Response({'message': message, 'errors': errors}, status=status.HTTP_400_BAD_REQUEST)


def server_error_body(exc: Exception) -> dict:
    body = {
        'error': 'Something went wrong!',
        'message': str(exc),
    }
    if getattr(settings, 'API_EXPOSE_TRACEBACKS', False):
        body['stack'] = ''.join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    return body


def api_exception_handler(exc, context):
    """
    DRF ``EXCEPTION_HANDLER``. Guarantees a JSON response for every failure
    raised inside an API view.
    """
    if isinstance(exc, StorageError):
        exc = to_api_exception(exc)

    if isinstance(exc, ValidationError):
        set_rollback()
        return _validation_response(exc)

    response = exception_handler(exc, context)
    if response is not None:
        if isinstance(exc, Http404):
            exc = NotFound()
        body = {'message': _first_message(exc.detail) if isinstance(exc, APIException) else str(exc)}
        if isinstance(exc, BlockedDeleteError):
            body['charactersCount'] = exc.characters_count
        response.data = body
        return response

    view = context.get('view')
    logger.error("Unhandled error in %s.", view.__class__.__name__ if view else 'API view', exc_info=exc)
    set_rollback()
    return Response(server_error_body(exc), status=status.HTTP_500_INTERNAL_SERVER_ERROR)
