"""
Spot management operations.
Spots live inside their lake document; every write goes through lake_transaction().
"""

import copy
import logging

from models.availability import dates_held_by_reservations, find_spot, get_unavailable_dates
from models.lake import lake_transaction, new_spot, require_lake
from utils.datetime_helpers import get_current_year
from utils.errors import InvalidInput

logger = logging.getLogger(__name__)

# Fields a caller may change on a single spot
SPOT_UPDATABLE_FIELDS = ('number', 'info', 'options')


def public_spot(spot: dict) -> dict:
    """Spot without its availability index."""
    return {
        'spotId': spot.get('spotId'),
        'number': spot.get('number'),
        'info': spot.get('info'),
        'options': spot.get('options'),
    }


# =============================================================================
# WRITE
# =============================================================================

def add_spot(lake_name: str, spot: dict) -> str:
    """
    Add a spot to a lake.

    Args:
        lake_name: Lake name
        spot: {number, info?, options?}

    Returns:
        str: New spot id

    Raises:
        InvalidInput: If the spot number is missing
        NotFound: If the lake does not exist
    """
    number = spot.get('number')
    if number in (None, ''):
        raise InvalidInput('Spot number is required')

    with lake_transaction(lake_name) as lake:
        created = new_spot(lake_name, number,
                           info=copy.deepcopy(spot.get('info')),
                           options=copy.deepcopy(spot.get('options')))
        lake['spots'].append(created)

    logger.info('Spot %s added to lake %s', created['spotId'], lake_name)
    return created['spotId']


def update_spot(lake_name: str, spot_id: str, changes: dict) -> dict:
    """
    Update number/info/options of one spot.
    spotId and unavailableDates are never changed.

    Returns:
        dict: Updated spot (without availability index)
    """
    with lake_transaction(lake_name) as lake:
        spot = find_spot(lake, spot_id)
        for field in SPOT_UPDATABLE_FIELDS:
            if field in changes:
                spot[field] = copy.deepcopy(changes[field])
        if 'number' in changes:
            spot['number'] = str(spot['number'])
        updated = public_spot(spot)

    logger.info('Spot %s updated on lake %s', spot_id, lake_name)
    return updated


def update_all_spots(lake_name: str, info: dict, options: dict) -> list:
    """
    Apply a price list, capacity and options to every spot of a lake.
    Options are left untouched unless an options object is given.

    Returns:
        list: Updated spots (without availability index)
    """
    if not isinstance(info, dict):
        raise InvalidInput('Spot info must be an object')

    with lake_transaction(lake_name) as lake:
        for spot in lake['spots']:
            spot_info = dict(spot.get('info') or {})
            spot_info['priceList'] = copy.deepcopy(info.get('priceList'))
            spot_info['spotCapacity'] = info.get('spotCapacity')
            spot['info'] = spot_info
            if isinstance(options, dict):
                spot['options'] = copy.deepcopy(options)
        updated = [public_spot(spot) for spot in lake['spots']]

    logger.info('All %s spots updated on lake %s', len(updated), lake_name)
    return updated


def delete_spot(lake_name: str, spot_id: str) -> None:
    """
    Remove a spot from a lake.

    Raises:
        NotFound: Lake or spot absent
        InvalidInput: If a live reservation still uses the spot
    """
    with lake_transaction(lake_name) as lake:
        find_spot(lake, spot_id)

        for year in lake.get('reservations', {}):
            if any(held_spot == spot_id for held_spot, _ in dates_held_by_reservations(lake, year)):
                logger.warning('Refused to delete spot %s: reserved in %s', spot_id, year)
                raise InvalidInput(f'Spot {spot_id} has reservations in {year}', spot_id=spot_id)

        lake['spots'] = [s for s in lake['spots'] if s.get('spotId') != spot_id]

    logger.info('Spot %s deleted from lake %s', spot_id, lake_name)


# =============================================================================
# READ
# =============================================================================

def get_spot_by_id(lake_name: str, spot_id: str) -> dict:
    """Get a spot without its availability index."""
    return public_spot(find_spot(require_lake(lake_name), spot_id))


def get_spots(lake_name: str) -> list:
    """List every spot of a lake without availability indexes."""
    return [public_spot(spot) for spot in require_lake(lake_name)['spots']]


def get_spot_calendar(lake_name: str, spot_id: str, year: str = '') -> list:
    """Blocked dates of a spot for a year (default: current), ascending."""
    return get_unavailable_dates(require_lake(lake_name), spot_id, year or get_current_year())
