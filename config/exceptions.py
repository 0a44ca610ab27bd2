"""
Uniform JSON error responses for the API.

Every error leaves the API as ``{"code": ..., "message": ...}`` where code is
one of the values in :class:`ErrorCode`. Domain exceptions raised by the
services are ``APIException`` subclasses whose ``default_code`` already is a
taxonomy code; framework exceptions are mapped here.
"""

import logging

from django.core.exceptions import PermissionDenied as DjangoPermissionDenied
from django.http import Http404
from rest_framework import exceptions, status
from rest_framework.response import Response
from rest_framework.views import set_rollback

logger = logging.getLogger(__name__)


class ErrorCode:
    AUTH_REQUIRED = 'AUTH_REQUIRED'
    FORBIDDEN = 'FORBIDDEN'
    VALIDATION_ERROR = 'VALIDATION_ERROR'
    NOT_FOUND = 'NOT_FOUND'
    STATE_ERROR = 'STATE_ERROR'
    INTERNAL_ERROR = 'INTERNAL_ERROR'

    ALL = {
        AUTH_REQUIRED,
        FORBIDDEN,
        VALIDATION_ERROR,
        NOT_FOUND,
        STATE_ERROR,
        INTERNAL_ERROR,
    }


GENERIC_ERROR_MESSAGE = 'Internal server error'


def first_error_message(detail):
    """Return the first human readable message from a DRF error detail."""
    if isinstance(detail, dict):
        for field, value in detail.items():
            message = first_error_message(value)
            if field in ('non_field_errors', 'detail'):
                return message
            return f'{field}: {message}'
        return 'Invalid input.'
    if isinstance(detail, (list, tuple)):
        return first_error_message(detail[0]) if detail else 'Invalid input.'
    return str(detail)


def error_code_for(exc):
    """Map an APIException onto the error taxonomy."""
    if isinstance(exc, (exceptions.ValidationError, exceptions.ParseError)):
        return ErrorCode.VALIDATION_ERROR
    if isinstance(exc, (exceptions.NotAuthenticated, exceptions.AuthenticationFailed)):
        return ErrorCode.AUTH_REQUIRED
    if isinstance(exc, exceptions.PermissionDenied):
        return ErrorCode.FORBIDDEN
    if isinstance(exc, exceptions.NotFound):
        return ErrorCode.NOT_FOUND

    code = getattr(exc, 'default_code', None)
    if code in ErrorCode.ALL:
        return code

    if exc.status_code == status.HTTP_404_NOT_FOUND:
        return ErrorCode.NOT_FOUND
    if exc.status_code < 500:
        return ErrorCode.VALIDATION_ERROR
    return ErrorCode.INTERNAL_ERROR


def api_exception_handler(exc, context):
    """DRF exception handler producing taxonomy-shaped error bodies."""
    if isinstance(exc, Http404):
        exc = exceptions.NotFound()
    elif isinstance(exc, DjangoPermissionDenied):
        exc = exceptions.PermissionDenied()

    if isinstance(exc, exceptions.APIException):
        headers = {}
        if getattr(exc, 'auth_header', None):
            headers['WWW-Authenticate'] = exc.auth_header
        if getattr(exc, 'wait', None):
            headers['Retry-After'] = '%d' % exc.wait

        code = error_code_for(exc)
        if code == ErrorCode.INTERNAL_ERROR:
            logger.error('API error in %s: %s', _view_name(context), exc.detail)

        set_rollback()
        return Response(
            {'code': code, 'message': first_error_message(exc.detail)},
            status=exc.status_code,
            headers=headers,
        )

    logger.exception('Unhandled error in %s', _view_name(context))
    set_rollback()
    return Response(
        {'code': ErrorCode.INTERNAL_ERROR, 'message': GENERIC_ERROR_MESSAGE},
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


def _view_name(context):
    view = context.get('view') if context else None
    return view.__class__.__name__ if view is not None else 'unknown view'
