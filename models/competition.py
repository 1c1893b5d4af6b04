"""
Competition blocks.
A competition reserves its dates on every spot of a lake for its year.
"""

import copy
import logging

from models.availability import (
    block, dates_held_by_competitions, dates_held_by_reservations, date_key, unblock
)
from models.identifiers import build_reservation_id, year_of
from models.lake import lake_transaction, require_lake
from utils.datetime_helpers import get_current_year, get_epoch_now, year_of_timestamp
from utils.errors import InvalidInput, NotFound

logger = logging.getLogger(__name__)


def _normalize_dates(dates) -> list:
    if not isinstance(dates, list) or not dates:
        raise InvalidInput('Competition must block at least one date')

    normalized = []
    for value in dates:
        try:
            float(value)
        except (TypeError, ValueError):
            raise InvalidInput(f'Invalid competition date: {value!r}')
        key = date_key(value)
        if key not in normalized:
            normalized.append(key)
    return normalized


def add_competition(lake: dict, competition: dict) -> dict:
    """
    Add a competition to a lake aggregate and block its dates on every spot.
    Existing reservations are not checked; competitions may overlap them.

    Args:
        lake: Lake aggregate (mutated)
        competition: {dates: [epoch seconds], timestamp?, name?, ...}

    Returns:
        dict: Stored competition
    """
    dates = _normalize_dates(competition.get('dates'))
    timestamp = competition.get('timestamp') or get_epoch_now()
    try:
        year = year_of_timestamp(timestamp)
    except (TypeError, ValueError, OverflowError, OSError):
        raise InvalidInput(f'Invalid competition timestamp: {timestamp!r}')

    record = copy.deepcopy(competition)
    record.update({
        'id': build_reservation_id(lake['name'], timestamp),
        'dates': dates,
        'timestamp': str(timestamp)
    })

    lake.setdefault('competitions', {}).setdefault(year, []).append(record)
    for spot in lake.get('spots', []):
        for key in dates:
            block(spot, year, key)

    logger.info('Competition %s created on lake %s (%s dates)', record['id'], lake['name'], len(dates))
    return record


def remove_competition(lake: dict, competition_id: str) -> dict:
    """
    Remove a competition and unblock its dates on every spot.
    A date still blocked by another competition of the same year, or a
    (spot, date) pair held by a live reservation, stays blocked.

    Raises:
        InvalidIdentifier: Malformed id
        NotFound: Competition absent
    """
    year = year_of(competition_id)
    bucket = lake.get('competitions', {}).get(year) or []

    competition = next((c for c in bucket if c.get('id') == competition_id), None)
    if competition is None:
        raise NotFound(f'Competition {competition_id} not found', competition_id=competition_id)

    lake['competitions'][year] = [c for c in bucket if c.get('id') != competition_id]

    held = dates_held_by_reservations(lake, year)
    competition_dates = dates_held_by_competitions(lake, year)
    for spot in lake.get('spots', []):
        for key in competition.get('dates', []):
            key = date_key(key)
            if key in competition_dates or (spot.get('spotId'), key) in held:
                continue
            unblock(spot, year, key)

    logger.info('Competition %s deleted from lake %s', competition_id, lake.get('name'))
    return competition


def list_competitions(lake: dict, year: str = '') -> list:
    """Competitions of a year (default: current), oldest first."""
    year = year or get_current_year()
    competitions = lake.get('competitions', {}).get(year) or []
    return sorted(competitions, key=lambda c: float(c.get('timestamp') or 0))


def create_competition(lake_name: str, competition: dict) -> dict:
    with lake_transaction(lake_name) as lake:
        return add_competition(lake, competition)


def delete_competition(lake_name: str, competition_id: str) -> dict:
    with lake_transaction(lake_name) as lake:
        return remove_competition(lake, competition_id)


def get_competitions(lake_name: str, year: str = '') -> list:
    return list_competitions(require_lake(lake_name), year)
