"""
Reservations blueprint.
Assembles reservation and competition routes under /reservations.
"""

from flask import Blueprint

reservations_bp = Blueprint('reservations', __name__)

from blueprints.reservations import competitions  # noqa: E402
from blueprints.reservations import routes  # noqa: E402

routes.register_routes(reservations_bp)
competitions.register_routes(reservations_bp)
