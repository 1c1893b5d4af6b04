"""
Spot availability index.

Each spot keeps `unavailableDates`: {year: [date_key, ...]}, where a date
key is an epoch-seconds string. The list is treated as a set: block() never
inserts a duplicate and unblock() removes every occurrence.
"""

from utils.errors import NotFound


def date_key(value) -> str:
    """Normalize a date value (int or numeric string) to its stored key."""
    return str(value)


# =============================================================================
# SINGLE SPOT INDEX
# =============================================================================

def get_year_dates(spot: dict, year: str) -> list:
    """Get the blocked-date list of a spot for a year, creating it if absent."""
    unavailable = spot.get('unavailableDates')
    if unavailable is None:
        unavailable = spot['unavailableDates'] = {}
    return unavailable.setdefault(str(year), [])


def is_blocked(spot: dict, year: str, date) -> bool:
    """Check whether a date is blocked on a spot for a year (read-only)."""
    unavailable = spot.get('unavailableDates') or {}
    return date_key(date) in unavailable.get(str(year), [])


def block(spot: dict, year: str, date) -> None:
    """Block a date on a spot (idempotent)."""
    dates = get_year_dates(spot, year)
    key = date_key(date)
    if key not in dates:
        dates.append(key)


def unblock(spot: dict, year: str, date) -> None:
    """Unblock a date on a spot (idempotent)."""
    dates = get_year_dates(spot, year)
    key = date_key(date)
    dates[:] = [d for d in dates if d != key]


# =============================================================================
# LAKE-LEVEL HELPERS
# =============================================================================

def find_spot(lake: dict, spot_id: str) -> dict:
    """
    Find a spot of a lake by id.

    Raises:
        NotFound: If the lake has no such spot
    """
    for spot in lake.get('spots', []):
        if spot.get('spotId') == spot_id:
            return spot
    raise NotFound(f'Spot {spot_id} not found in lake {lake.get("name")}', spot_id=spot_id)


def get_unavailable_dates(lake: dict, spot_id: str, year: str) -> list:
    """Sorted copy of a spot's blocked dates for a year."""
    spot = find_spot(lake, spot_id)
    unavailable = spot.get('unavailableDates') or {}
    return sorted(unavailable.get(str(year), []), key=_numeric_key)


def iter_entry_dates(entries: list):
    """Yield (spot_id, date_key) for every date of a reservation's data entries."""
    for entry in entries or []:
        for date_obj in entry.get('dates', []):
            yield entry.get('spotId'), date_key(date_obj.get('date'))


def check_spot_availability_bulk(lake: dict, entries: list, year: str,
                                 ignore: set = None) -> dict:
    """
    Check every requested (spot, date) pair of a reservation payload.

    Args:
        lake: Lake aggregate
        entries: Reservation `data` list [{spotId, dates: [{date, priceForDate}]}]
        year: Year bucket to check against
        ignore: (spot_id, date_key) pairs to treat as free (the caller's own dates)

    Returns:
        dict: {
            'all_available': bool,
            'unavailable': [{'spotId': str, 'date': str}, ...]
        }

    Raises:
        NotFound: If an entry references an unknown spot
    """
    ignore = ignore or set()
    unavailable = []

    for spot_id, key in iter_entry_dates(entries):
        spot = find_spot(lake, spot_id)
        if (spot_id, key) in ignore:
            continue
        if is_blocked(spot, year, key):
            unavailable.append({'spotId': spot_id, 'date': key})

    return {
        'all_available': len(unavailable) == 0,
        'unavailable': unavailable
    }


def dates_held_by_reservations(lake: dict, year: str, exclude_id: str = None) -> set:
    """(spot_id, date_key) pairs held by live reservations of a year."""
    held = set()
    for reservation in lake.get('reservations', {}).get(year, []):
        if reservation.get('id') == exclude_id:
            continue
        held.update(iter_entry_dates(reservation.get('data')))
    return held


def dates_held_by_competitions(lake: dict, year: str, exclude_id: str = None) -> set:
    """Date keys blocked lake-wide by competitions of a year."""
    held = set()
    for competition in lake.get('competitions', {}).get(year, []):
        if competition.get('id') == exclude_id:
            continue
        held.update(date_key(d) for d in competition.get('dates', []))
    return held


def _numeric_key(value: str):
    try:
        return float(value)
    except ValueError:
        return float('inf')
