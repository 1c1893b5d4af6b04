"""
Flask extensions initialization.
Extensions are initialized here and then initialized with the app in app.py.
"""

import hmac

from flask import current_app
from flask_login import LoginManager, UserMixin

from utils.api_response import api_error
from utils.messages import get_message

# Initialize Flask-Login
login_manager = LoginManager()


class Operator(UserMixin):
    """Lake operator authenticated by the admin API token."""

    id = 'operator'


@login_manager.request_loader
def load_operator_from_request(request):
    """
    Authenticate a request by its bearer token.

    Args:
        request: Incoming Flask request

    Returns:
        Operator or None if the token is missing or wrong
    """
    header = request.headers.get('Authorization', '')
    scheme, _, token = header.partition(' ')
    if scheme.lower() != 'bearer' or not token:
        return None

    expected = current_app.config.get('ADMIN_API_TOKEN') or ''
    if expected and hmac.compare_digest(token.strip(), expected):
        return Operator()
    return None


@login_manager.unauthorized_handler
def unauthorized():
    """JSON 401 instead of a login redirect."""
    return api_error(get_message('unauthorized'), status=401)
