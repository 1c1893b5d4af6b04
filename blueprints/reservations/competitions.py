"""
Competition routes.
Operator-only endpoints to block whole-lake date ranges.
"""

from flask import request
from flask_login import login_required

from models.competition import create_competition, delete_competition, get_competitions
from utils.api_response import api_error, api_success, service_error
from utils.errors import ReservationServiceError
from utils.messages import get_message


def register_routes(bp):
    """Register competition routes on the blueprint."""

    @bp.route('/reservations/<lake_name>/competition', methods=['POST'])
    @login_required
    def add_competition(lake_name):
        """
        Create a competition.

        Request body:
            dates: [epoch seconds], timestamp (optional), name (optional)
        """
        payload = request.get_json(silent=True)
        if not isinstance(payload, dict) or not payload:
            return api_error(get_message('data_required'), status=400)

        try:
            competition = create_competition(lake_name, payload)
        except ReservationServiceError as e:
            return service_error(e, 'competition_create_failed')
        return api_success(data=competition, message=get_message('competition_created'), status=201)

    @bp.route('/reservations/delete/<lake_name>/competition/<competition_id>', methods=['DELETE'])
    @login_required
    def remove_competition(lake_name, competition_id):
        try:
            delete_competition(lake_name, competition_id)
        except ReservationServiceError as e:
            return service_error(e, 'competition_delete_failed')
        return api_success(message=get_message('competition_deleted'))

    @bp.route('/reservations/<lake_name>/competition', methods=['GET'])
    @login_required
    def list_competitions(lake_name):
        """Competitions of ?year= (default: current), oldest first."""
        try:
            competitions = get_competitions(lake_name, request.args.get('year', ''))
        except ReservationServiceError as e:
            return service_error(e, 'competition_fetch_failed')
        return api_success(data=competitions, count=len(competitions))
