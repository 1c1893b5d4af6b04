"""Spots blueprint: spot management and public availability calendar."""

from flask import Blueprint

spots_bp = Blueprint('spots', __name__)

from blueprints.spots import routes  # noqa: E402

routes.register_routes(spots_bp)
