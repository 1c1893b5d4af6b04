"""
Standardized API response helpers.

Provides consistent JSON response format across all API endpoints:

    Success:  {"success": true, "data": {...}, "message": "..."}
    Error:    {"success": false, "error": "Polish error message"}

Usage:
    from utils.api_response import api_success, api_error

    return api_success(data=reservation, message=get_message('reservation_created'))
    return api_error(get_message('data_required'), status=400)
"""

import logging
from typing import Any

from flask import jsonify, request

from utils.errors import ReservationServiceError
from utils.messages import get_message

logger = logging.getLogger(__name__)


def api_success(
    data: Any = None,
    message: str | None = None,
    status: int = 200,
    **extra_fields: Any
) -> tuple:
    """
    Build a standardized success JSON response.

    Args:
        data: Optional payload to include as 'data' key (dict or list).
        message: Optional success message.
        status: HTTP status code (default 200).
        **extra_fields: Additional top-level fields (e.g. count).

    Returns:
        Tuple of (Response, status_code)
    """
    response = {'success': True}

    if data is not None:
        response['data'] = data

    if message:
        response['message'] = message

    if extra_fields:
        response.update(extra_fields)

    return jsonify(response), status


def api_error(error: str, status: int = 400, **extra_fields: Any) -> tuple:
    """
    Build a standardized error JSON response.

    Args:
        error: Error message.
        status: HTTP status code (default 400).
        **extra_fields: Additional top-level fields.

    Returns:
        Tuple of (Response, status_code)
    """
    response = {'success': False, 'error': error}

    if extra_fields:
        response.update(extra_fields)

    return jsonify(response), status


def service_error(error: ReservationServiceError, message_key: str) -> tuple:
    """
    Map an engine failure to the operation's single user-facing message.
    The internal kind is only logged.

    Args:
        error: Raised engine error
        message_key: MESSAGES key of the failed operation

    Returns:
        Tuple of (Response, status_code)
    """
    logger.warning('%s %s failed: %s %s %s', request.method, request.path,
                   error.kind, error.message, error.context or '')
    return api_error(get_message(message_key), status=error.status_code)
