"""
Reservation routes.
Create/read/update/delete endpoints plus the operator query lists.
"""

from flask import current_app, request
from flask_login import login_required

from blueprints.reservations.services import notify_reservation
from models.lake import get_all_lakes, require_lake
from models.reservation_crud import (
    create_reservation, delete_reservation, get_reservation_by_id, update_reservation
)
from models.reservation_queries import (
    query_all, query_by_spot, query_confirmed, query_deposit_paid,
    query_deposit_unpaid, query_not_confirmed, query_todays, query_todays_combined
)
from utils.api_response import api_error, api_success, service_error
from utils.crypto import decrypt_pii
from utils.errors import InvalidInput, ReservationServiceError
from utils.messages import get_message


def get_page_args() -> dict:
    """
    Read pagination and name filter from the query string.

    Query params:
        offset: Slice start (default 0)
        limit: Page size (default ITEMS_PER_PAGE)
        filter: Case-insensitive full-name substring

    Raises:
        InvalidInput: If offset/limit are not integers
    """
    try:
        offset = int(request.args.get('offset') or 0)
        limit = int(request.args.get('limit') or current_app.config['ITEMS_PER_PAGE'])
    except ValueError:
        raise InvalidInput('offset and limit must be integers')

    return {
        'offset': offset,
        'limit': limit,
        'name_filter': request.args.get('filter', '')
    }


def register_routes(bp):
    """Register reservation routes on the blueprint."""

    # =========================================================================
    # CRUD
    # =========================================================================

    @bp.route('/reservations/<lake_name>', methods=['POST'])
    def create(lake_name):
        """
        Create a pending reservation (public).

        Request body:
            fullName, phone, email, data: [{spotId, dates: [{date, priceForDate}]}],
            price, deposit fields, timestamp (optional)

        Returns:
            JSON with the new reservation (plaintext PII)
        """
        payload = request.get_json(silent=True)
        if not isinstance(payload, dict) or not payload:
            return api_error(get_message('data_required'), status=400)

        try:
            stored = create_reservation(lake_name, payload)
        except ReservationServiceError as e:
            return service_error(e, 'reservation_create_failed')

        reservation = decrypt_pii(stored)
        notify_reservation(reservation, 'pending', lake_name)
        return api_success(data=reservation, message=get_message('reservation_created'), status=201)

    @bp.route('/reservations/update/<lake_name>/<reservation_id>', methods=['PUT'])
    @login_required
    def update(lake_name, reservation_id):
        """Update a reservation and send the confirmation mail."""
        payload = request.get_json(silent=True)
        if not isinstance(payload, dict) or not payload:
            return api_error(get_message('data_required'), status=400)

        try:
            reservation = update_reservation(lake_name, reservation_id, payload)
        except ReservationServiceError as e:
            return service_error(e, 'reservation_update_failed')

        notify_reservation(reservation, 'confirmed', lake_name)
        return api_success(data=reservation, message=get_message('reservation_updated'))

    @bp.route('/reservations/one/<lake_name>/<reservation_id>', methods=['GET'])
    def get_one(lake_name, reservation_id):
        """Get one reservation (public summary page)."""
        try:
            reservation = get_reservation_by_id(lake_name, reservation_id)
        except ReservationServiceError as e:
            return service_error(e, 'reservation_fetch_failed')
        return api_success(data=reservation)

    @bp.route('/reservations/delete/<lake_name>/<reservation_id>', methods=['DELETE'])
    @login_required
    def delete(lake_name, reservation_id):
        """Reject a reservation: delete it and send the rejection mail."""
        try:
            reservation = delete_reservation(lake_name, reservation_id)
        except ReservationServiceError as e:
            return service_error(e, 'reservation_delete_failed')

        notify_reservation(reservation, 'rejected', lake_name)
        return api_success(message=get_message('reservation_deleted'))

    @bp.route('/reservations/delete-confirmed/<lake_name>/<reservation_id>', methods=['DELETE'])
    @login_required
    def delete_confirmed(lake_name, reservation_id):
        """Delete a confirmed reservation without notifying the customer."""
        try:
            delete_reservation(lake_name, reservation_id)
        except ReservationServiceError as e:
            return service_error(e, 'reservation_delete_failed')
        return api_success(message=get_message('reservation_deleted'))

    # =========================================================================
    # QUERIES
    # =========================================================================

    def _list(query, lake_name, *args, **kwargs):
        try:
            lake = require_lake(lake_name)
            reservations = query(lake, *args, **kwargs, **get_page_args())
        except ReservationServiceError as e:
            return service_error(e, 'reservation_fetch_failed')
        return api_success(data=reservations, count=len(reservations))

    @bp.route('/reservations/not-confirmed/<lake_name>', methods=['GET'])
    @login_required
    def list_not_confirmed(lake_name):
        """Reservations awaiting confirmation (no deposit required), oldest first."""
        return _list(query_not_confirmed, lake_name, year=request.args.get('year', ''))

    @bp.route('/reservations/confirmed/<lake_name>/<year>', methods=['GET'])
    @login_required
    def list_confirmed(lake_name, year):
        return _list(query_confirmed, lake_name, year=year)

    @bp.route('/reservations/all/<lake_name>/<year>', methods=['GET'])
    @login_required
    def list_all(lake_name, year):
        return _list(query_all, lake_name, year=year)

    @bp.route('/reservations/byspots/<lake_name>/<spot_id>', methods=['GET'])
    @login_required
    def list_by_spot(lake_name, spot_id):
        return _list(query_by_spot, lake_name, spot_id, year=request.args.get('year', ''))

    @bp.route('/reservations/deposit-paid/<lake_name>', methods=['GET'])
    @login_required
    def list_deposit_paid(lake_name):
        return _list(query_deposit_paid, lake_name, year=request.args.get('year', ''))

    @bp.route('/reservations/deposit-non-paid/<lake_name>', methods=['GET'])
    @login_required
    def list_deposit_unpaid(lake_name):
        return _list(query_deposit_unpaid, lake_name, year=request.args.get('year', ''))

    @bp.route('/reservations/todays/<lake_name>', methods=['GET'])
    @login_required
    def list_todays(lake_name):
        """
        Reservations whose stay on a spot starts on a day.

        Query params:
            date: Target day as epoch seconds (required)
            year: Year bucket (default: current)
        """
        date = request.args.get('date')
        if not date:
            return api_error(get_message('date_required'), status=400)
        return _list(query_todays, lake_name, date, year=request.args.get('year', ''))

    @bp.route('/reservations/todaysall', methods=['GET'])
    @login_required
    def list_todays_combined():
        """Arrivals on a day across every lake; entries carry lakeName."""
        date = request.args.get('date')
        if not date:
            return api_error(get_message('date_required'), status=400)

        try:
            reservations = query_todays_combined(
                get_all_lakes(), date, year=request.args.get('year', ''), **get_page_args()
            )
        except ReservationServiceError as e:
            return service_error(e, 'reservation_fetch_failed')
        return api_success(data=reservations, count=len(reservations))
