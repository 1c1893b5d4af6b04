"""
Reservation CRUD operations.

Two layers:
- add_/change_/remove_reservation mutate a lake aggregate in memory and keep
  the spot availability index in sync. They never touch storage.
- create_/update_/delete_reservation wrap them in lake_transaction() so each
  runs as one serialized load -> mutate -> persist step per lake.

Validation and conflict checks always run before the aggregate is mutated.
"""

import copy
import logging

from models.availability import (
    block, check_spot_availability_bulk, dates_held_by_competitions,
    dates_held_by_reservations, date_key, find_spot, iter_entry_dates, unblock
)
from models.identifiers import build_reservation_id, year_of
from models.lake import lake_transaction, require_lake
from utils.crypto import PII_FIELDS, decrypt_pii, get_field_cipher
from utils.datetime_helpers import get_epoch_now, year_of_timestamp
from utils.errors import DateConflict, InvalidInput, NotFound
from utils.validators import validate_contact_fields

logger = logging.getLogger(__name__)

# Field defaults for a new reservation; also the set of updatable fields.
RESERVATION_DEFAULTS = {
    'fullName': '',
    'phone': '',
    'email': '',
    'data': [],
    'confirmed': False,
    'rejected': False,
    'price': 0,
    'fullPaymentMethod': '',
    'fullPaymentStatus': '',
    'depositPrice': 0,
    'depositSoFar': 0,
    'isDepositPaid': False,
    'isDepositRequired': False,
}

UPDATABLE_FIELDS = tuple(RESERVATION_DEFAULTS)


# =============================================================================
# PAYLOAD NORMALIZATION
# =============================================================================

def normalize_entries(entries) -> list:
    """
    Validate and copy a reservation's `data` list.

    Args:
        entries: [{spotId, dates: [{date, priceForDate}]}]

    Returns:
        list: Copy with date values normalized to epoch-second strings

    Raises:
        InvalidInput: If the structure is malformed or a date is not numeric
    """
    if not isinstance(entries, list) or not entries:
        raise InvalidInput('Reservation must contain at least one spot entry')

    normalized = []
    for entry in entries:
        if not isinstance(entry, dict) or not entry.get('spotId'):
            raise InvalidInput('Spot entry without spotId')

        dates = entry.get('dates')
        if not isinstance(dates, list) or not dates:
            raise InvalidInput(f'Spot entry {entry.get("spotId")} has no dates')

        normalized_dates = []
        for date_obj in dates:
            if not isinstance(date_obj, dict) or not _is_numeric(date_obj.get('date')):
                raise InvalidInput(f'Invalid date in spot entry {entry["spotId"]}')
            normalized_dates.append({
                'date': date_key(date_obj['date']),
                'priceForDate': date_obj.get('priceForDate', 0)
            })

        normalized.append({'spotId': entry['spotId'], 'dates': normalized_dates})

    return normalized


def _is_numeric(value) -> bool:
    if isinstance(value, bool) or value is None:
        return False
    try:
        float(value)
    except (TypeError, ValueError):
        return False
    return True


def _normalize_timestamp(timestamp) -> str:
    if timestamp in (None, ''):
        return get_epoch_now()
    if not _is_numeric(timestamp):
        raise InvalidInput(f'Invalid timestamp: {timestamp!r}')
    return str(timestamp)


def _check_contact_fields(payload: dict, partial: bool = False) -> None:
    invalid = validate_contact_fields(payload, partial=partial)
    if invalid:
        logger.warning('Rejected reservation payload, invalid fields: %s', invalid)
        raise InvalidInput(f'Invalid fields: {", ".join(invalid)}', fields=invalid)


def _find_spot_or_none(lake: dict, spot_id: str):
    try:
        return find_spot(lake, spot_id)
    except NotFound:
        return None


# =============================================================================
# AGGREGATE OPERATIONS
# =============================================================================

def find_reservation(lake: dict, reservation_id: str) -> tuple:
    """
    Locate a reservation within its year bucket.

    Returns:
        tuple: (year, index, record)

    Raises:
        InvalidIdentifier: If the id is malformed
        NotFound: If the reservation is absent
    """
    year = year_of(reservation_id)
    bucket = lake.get('reservations', {}).get(year) or []
    for index, reservation in enumerate(bucket):
        if reservation.get('id') == reservation_id:
            return year, index, reservation
    raise NotFound(f'Reservation {reservation_id} not found', reservation_id=reservation_id)


def add_reservation(lake: dict, payload: dict, cipher=None) -> dict:
    """
    Create a pending reservation on a lake aggregate.

    Args:
        lake: Lake aggregate (mutated)
        payload: Reservation fields with plaintext fullName/phone/email
        cipher: Field cipher (defaults to the app cipher)

    Returns:
        dict: Stored reservation (PII encrypted)

    Raises:
        InvalidInput: Bad name/phone/email or malformed data
        NotFound: Unknown spot
        DateConflict: Any requested date already blocked for the year
    """
    cipher = cipher or get_field_cipher()

    _check_contact_fields(payload)
    entries = normalize_entries(payload.get('data'))
    timestamp = _normalize_timestamp(payload.get('timestamp'))
    year = year_of_timestamp(timestamp)

    availability = check_spot_availability_bulk(lake, entries, year)
    if not availability['all_available']:
        logger.warning('Date conflict on lake %s: %s', lake.get('name'), availability['unavailable'])
        raise DateConflict('Requested dates are unavailable', unavailable=availability['unavailable'])

    record = {'id': build_reservation_id(lake['name'], timestamp)}
    for field, default in RESERVATION_DEFAULTS.items():
        record[field] = copy.deepcopy(payload.get(field, default))
    for field in PII_FIELDS:
        record[field] = cipher.encrypt(record[field])
    record['data'] = entries
    record['timestamp'] = timestamp
    record['confirmed'] = False
    record['rejected'] = False

    lake.setdefault('reservations', {}).setdefault(year, []).append(record)
    for spot_id, key in iter_entry_dates(entries):
        block(find_spot(lake, spot_id), year, key)

    logger.info('Reservation %s created on lake %s', record['id'], lake['name'])
    return record


def change_reservation(lake: dict, reservation_id: str, new_data: dict, cipher=None) -> dict:
    """
    Update an existing reservation on a lake aggregate.

    Only UPDATABLE_FIELDS are applied; id and timestamp never change.
    When `data` is supplied the old dates are released and the new ones
    booked (clear-then-add), after checking the new dates are free.

    Returns:
        dict: Merged record with the caller's plaintext PII substituted back

    Raises:
        NotFound: Reservation or spot absent
        InvalidInput: Bad name/phone/email or malformed data
        DateConflict: New dates held by another reservation or competition
    """
    cipher = cipher or get_field_cipher()

    year, index, stored = find_reservation(lake, reservation_id)
    _check_contact_fields(new_data, partial=True)

    changes = {field: copy.deepcopy(new_data[field]) for field in UPDATABLE_FIELDS if field in new_data}
    if 'data' in changes:
        changes['data'] = normalize_entries(changes['data'])
    for field in PII_FIELDS:
        if field in changes:
            changes[field] = cipher.encrypt(changes[field])

    if 'data' in changes:
        _rebook_dates(lake, year, stored, changes['data'])

    updated = dict(stored)
    updated.update(changes)
    lake['reservations'][year][index] = updated

    logger.info('Reservation %s updated on lake %s', reservation_id, lake.get('name'))

    result = decrypt_pii(updated, cipher)
    for field in PII_FIELDS:
        if field in new_data:
            result[field] = new_data[field]
    return result


def remove_reservation(lake: dict, reservation_id: str, cipher=None) -> dict:
    """
    Remove a reservation and release exactly the (spot, year, date) triples it held.

    Returns:
        dict: Former record with PII decrypted

    Raises:
        NotFound: If the reservation is absent
    """
    cipher = cipher or get_field_cipher()

    year, index, stored = find_reservation(lake, reservation_id)
    del lake['reservations'][year][index]
    _release_dates(lake, year, stored.get('data'))

    logger.info('Reservation %s deleted from lake %s', reservation_id, lake.get('name'))
    return decrypt_pii(stored, cipher)


def _rebook_dates(lake: dict, year: str, stored: dict, new_entries: list) -> None:
    own = set(iter_entry_dates(stored.get('data')))

    availability = check_spot_availability_bulk(lake, new_entries, year, ignore=own)
    if not availability['all_available']:
        logger.warning('Date conflict updating %s: %s', stored.get('id'), availability['unavailable'])
        raise DateConflict('Requested dates are unavailable', unavailable=availability['unavailable'])

    competition_dates = dates_held_by_competitions(lake, year)
    for spot_id, key in own:
        spot = _find_spot_or_none(lake, spot_id)
        if spot is not None and key not in competition_dates:
            unblock(spot, year, key)

    for spot_id, key in iter_entry_dates(new_entries):
        block(find_spot(lake, spot_id), year, key)


def _release_dates(lake: dict, year: str, entries: list) -> None:
    # Dates still held by another live reservation or a competition stay blocked
    still_held = dates_held_by_reservations(lake, year)
    competition_dates = dates_held_by_competitions(lake, year)

    for spot_id, key in iter_entry_dates(entries):
        if (spot_id, key) in still_held or key in competition_dates:
            continue
        spot = _find_spot_or_none(lake, spot_id)
        if spot is not None:
            unblock(spot, year, key)


# =============================================================================
# CREATE / UPDATE / DELETE (per-lake critical section)
# =============================================================================

def create_reservation(lake_name: str, payload: dict) -> dict:
    """
    Create a reservation on a stored lake.

    Returns:
        dict: Stored reservation (PII encrypted)
    """
    with lake_transaction(lake_name) as lake:
        return add_reservation(lake, payload)


def update_reservation(lake_name: str, reservation_id: str, new_data: dict) -> dict:
    """
    Update a reservation on a stored lake.

    Returns:
        dict: Merged record with plaintext PII
    """
    with lake_transaction(lake_name) as lake:
        return change_reservation(lake, reservation_id, new_data)


def delete_reservation(lake_name: str, reservation_id: str) -> dict:
    """
    Delete a reservation from a stored lake.

    Returns:
        dict: Former record with plaintext PII (for notification)
    """
    with lake_transaction(lake_name) as lake:
        return remove_reservation(lake, reservation_id)


# =============================================================================
# READ
# =============================================================================

def get_reservation_by_id(lake_name: str, reservation_id: str) -> dict:
    """
    Get a reservation with PII decrypted.

    Raises:
        NotFound: Lake or reservation absent
        InvalidIdentifier: Malformed id
    """
    lake = require_lake(lake_name)
    _, _, reservation = find_reservation(lake, reservation_id)
    return decrypt_pii(reservation)
