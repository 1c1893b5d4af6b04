"""
API routes for service-level JSON endpoints.
"""

from flask import Blueprint, current_app

from models.lake import get_lake_names
from utils.api_response import api_success, service_error
from utils.errors import ReservationServiceError

api_bp = Blueprint('api', __name__)


@api_bp.route('/health')
def health_check():
    """
    Health check endpoint (no authentication required).

    Returns:
        JSON with status and version
    """
    return api_success(
        status='ok',
        version=current_app.config.get('APP_VERSION', '1.0.0'),
        app=current_app.config.get('APP_NAME')
    )


@api_bp.route('/lakes')
def list_lakes():
    """Names of every lake (public)."""
    try:
        names = get_lake_names()
    except ReservationServiceError as e:
        return service_error(e, 'operation_failed')
    return api_success(data=names, count=len(names))
