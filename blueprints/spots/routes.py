"""
Spot routes.
Public reads (spot details, blocked-date calendar) and operator management.
"""

from flask import request
from flask_login import login_required

from models.spot import (
    add_spot, delete_spot, get_spot_by_id, get_spot_calendar, get_spots,
    update_all_spots, update_spot
)
from utils.api_response import api_error, api_success, service_error
from utils.errors import ReservationServiceError
from utils.messages import get_message


def register_routes(bp):
    """Register spot routes on the blueprint."""

    # =========================================================================
    # PUBLIC READS
    # =========================================================================

    @bp.route('/spots/<lake_name>', methods=['GET'])
    def list_spots(lake_name):
        try:
            spots = get_spots(lake_name)
        except ReservationServiceError as e:
            return service_error(e, 'spot_fetch_failed')
        return api_success(data=spots, count=len(spots))

    @bp.route('/spots/<lake_name>/<spot_id>', methods=['GET'])
    def get_spot(lake_name, spot_id):
        try:
            spot = get_spot_by_id(lake_name, spot_id)
        except ReservationServiceError as e:
            return service_error(e, 'spot_fetch_failed')
        return api_success(data=spot)

    @bp.route('/spots/<lake_name>/<spot_id>/unavailable', methods=['GET'])
    def spot_calendar(lake_name, spot_id):
        """
        Blocked dates of a spot.

        Query params:
            year: Year bucket (default: current)

        Returns:
            JSON list of epoch-second date keys, ascending
        """
        try:
            dates = get_spot_calendar(lake_name, spot_id, request.args.get('year', ''))
        except ReservationServiceError as e:
            return service_error(e, 'spot_fetch_failed')
        return api_success(data=dates)

    # =========================================================================
    # OPERATOR MANAGEMENT
    # =========================================================================

    @bp.route('/spots/<lake_name>', methods=['POST'])
    @login_required
    def create_spot(lake_name):
        """Add a spot: {number, info?, options?}."""
        payload = request.get_json(silent=True)
        if not isinstance(payload, dict) or not payload:
            return api_error(get_message('data_required'), status=400)

        try:
            spot_id = add_spot(lake_name, payload)
        except ReservationServiceError as e:
            return service_error(e, 'spot_create_failed')
        return api_success(data={'spotId': spot_id}, message=get_message('spot_created'), status=201)

    @bp.route('/spots/<lake_name>/<spot_id>', methods=['PUT'])
    @login_required
    def edit_spot(lake_name, spot_id):
        payload = request.get_json(silent=True)
        if not isinstance(payload, dict) or not payload:
            return api_error(get_message('data_required'), status=400)

        try:
            spot = update_spot(lake_name, spot_id, payload)
        except ReservationServiceError as e:
            return service_error(e, 'spot_update_failed')
        return api_success(data=spot, message=get_message('spot_updated'))

    @bp.route('/spots/<lake_name>', methods=['PUT'])
    @login_required
    def edit_all_spots(lake_name):
        """Apply {info: {priceList, spotCapacity}, options} to every spot."""
        payload = request.get_json(silent=True)
        if not isinstance(payload, dict) or 'info' not in payload:
            return api_error(get_message('data_required'), status=400)

        try:
            spots = update_all_spots(lake_name, payload.get('info'), payload.get('options'))
        except ReservationServiceError as e:
            return service_error(e, 'spots_update_failed')
        return api_success(data=spots, message=get_message('spots_updated'))

    @bp.route('/spots/<lake_name>/<spot_id>', methods=['DELETE'])
    @login_required
    def remove_spot(lake_name, spot_id):
        try:
            delete_spot(lake_name, spot_id)
        except ReservationServiceError as e:
            return service_error(e, 'spot_delete_failed')
        return api_success(message=get_message('spot_deleted'))
