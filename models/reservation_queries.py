"""
Reservation read queries.

Every query runs the same pipeline over one year bucket:
predicate -> sort by creation timestamp -> (offset, limit) slice ->
decrypt PII -> case-insensitive full-name filter.
"""

from utils.crypto import decrypt_pii, get_field_cipher
from utils.datetime_helpers import day_of_timestamp, get_current_year
from utils.errors import InvalidInput, NotFound

SECONDS_PER_DAY = 86400


# =============================================================================
# PIPELINE
# =============================================================================

def get_year_bucket(lake: dict, year: str = '') -> list:
    """
    Get the reservations of a year (default: current year).

    Raises:
        NotFound: If the lake has no bucket for that year
    """
    year = year or get_current_year()
    reservations = lake.get('reservations', {})
    if year not in reservations:
        raise NotFound(f'No reservations for {year} in lake {lake.get("name")}', year=year)
    return reservations[year]


def _timestamp_key(record: dict) -> float:
    try:
        return float(record.get('timestamp') or 0)
    except (TypeError, ValueError):
        return 0.0


def run_query(records: list, predicate=None, descending: bool = True,
              offset: int = 0, limit: int = None, name_filter: str = '',
              cipher=None) -> list:
    """
    Apply the shared query pipeline to a list of stored records.

    Args:
        records: Stored (encrypted) reservations
        predicate: Optional record filter applied first
        descending: Newest first when True
        offset: Slice start
        limit: Slice length (None = no limit)
        name_filter: Case-insensitive substring of the decrypted fullName

    Returns:
        list: Decrypted reservations
    """
    cipher = cipher or get_field_cipher()

    if offset < 0 or (limit is not None and limit < 0):
        raise InvalidInput('offset and limit must not be negative')

    selected = [r for r in records if predicate is None or predicate(r)]
    selected.sort(key=_timestamp_key, reverse=descending)

    end = None if limit is None else offset + limit
    page = [decrypt_pii(r, cipher) for r in selected[offset:end]]

    if not name_filter:
        return page

    needle = name_filter.lower()
    return [r for r in page if needle in (r.get('fullName') or '').lower()]


# =============================================================================
# STATE QUERIES
# =============================================================================

def query_not_confirmed(lake: dict, year: str = '', **page) -> list:
    """Unconfirmed reservations without a required deposit, oldest first."""
    return run_query(
        get_year_bucket(lake, year),
        lambda r: not r.get('confirmed') and not r.get('isDepositRequired'),
        descending=False, **page
    )


def query_confirmed(lake: dict, year: str = '', **page) -> list:
    """Confirmed reservations, newest first."""
    return run_query(get_year_bucket(lake, year), lambda r: r.get('confirmed'), **page)


def query_all(lake: dict, year: str = '', **page) -> list:
    """All reservations of a year, newest first."""
    return run_query(get_year_bucket(lake, year), **page)


def query_by_spot(lake: dict, spot_id: str, year: str = '', **page) -> list:
    """Reservations with at least one entry on the spot, newest first."""
    return run_query(
        get_year_bucket(lake, year),
        lambda r: any(entry.get('spotId') == spot_id for entry in r.get('data') or []),
        **page
    )


def query_deposit_paid(lake: dict, year: str = '', **page) -> list:
    return run_query(get_year_bucket(lake, year), lambda r: r.get('isDepositPaid'), **page)


def query_deposit_unpaid(lake: dict, year: str = '', **page) -> list:
    """Reservations awaiting a required deposit and not yet confirmed."""
    return run_query(
        get_year_bucket(lake, year),
        lambda r: (r.get('isDepositRequired')
                   and not r.get('isDepositPaid')
                   and not r.get('confirmed')),
        **page
    )


# =============================================================================
# DAY QUERIES
# =============================================================================

def create_individual_reservations(reservations: list) -> list:
    """
    Split reservations into one record per spot entry.

    Each record carries every parent field and a single-entry `data`
    list whose dates are sorted ascending.
    """
    individual = []
    for reservation in reservations or []:
        for entry in reservation.get('data') or []:
            record = {k: v for k, v in reservation.items() if k != 'data'}
            record['data'] = [{
                'spotId': entry.get('spotId'),
                'dates': sorted(entry.get('dates') or [], key=lambda d: float(d['date']))
            }]
            individual.append(record)
    return individual


def _parse_target_day(date):
    if date in (None, ''):
        raise InvalidInput('Target date is required')
    try:
        return day_of_timestamp(date)
    except (TypeError, ValueError, OverflowError, OSError):
        raise InvalidInput(f'Invalid target date: {date!r}')


def _starts_on(record: dict, day) -> bool:
    dates = record['data'][0]['dates']
    return bool(dates) and day_of_timestamp(dates[0]['date']) == day


def _run_starts_on(record: dict, day) -> bool:
    # A stay starts at the first date or after a gap longer than one day
    previous = None
    for date_obj in record['data'][0]['dates']:
        current = float(date_obj['date'])
        if previous is None or current - previous > SECONDS_PER_DAY:
            if day_of_timestamp(current) == day:
                return True
        previous = current
    return False


def query_todays(lake: dict, date, year: str = '', **page) -> list:
    """
    Individual reservations whose earliest date falls on the target day.

    Args:
        lake: Lake aggregate
        date: Target day as epoch seconds
    """
    day = _parse_target_day(date)
    individual = create_individual_reservations(get_year_bucket(lake, year))
    return run_query(individual, lambda r: _starts_on(r, day), **page)


def query_todays_combined(lakes: list, date, year: str = '', **page) -> list:
    """
    Individual reservations of every lake with a stay starting on the target day.
    Lakes without the year bucket are skipped; each record gets `lakeName`.
    """
    day = _parse_target_day(date)
    year = year or get_current_year()

    individual = []
    for lake in lakes:
        bucket = lake.get('reservations', {}).get(year)
        if bucket is None:
            continue
        for record in create_individual_reservations(bucket):
            record['lakeName'] = lake.get('name')
            individual.append(record)

    return run_query(individual, lambda r: _run_starts_on(r, day), **page)
