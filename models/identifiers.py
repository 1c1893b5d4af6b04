"""
Composite identifiers for reservations, competitions and spots.

Format: <PREFIX>.<segment>.<uuid4>
- PREFIX  = upper('$LN' + first char of lake name + last char of lake name)
- segment = epoch seconds (reservations, competitions) or spot number (spots)

Reservation/competition ids carry their creation timestamp, so the year
bucket can be recovered from the id alone.
"""

from uuid import uuid4

from utils.datetime_helpers import year_of_timestamp
from utils.errors import InvalidIdentifier, InvalidInput


def lake_prefix(lake_name: str) -> str:
    """Build the '$LNxy' prefix for a lake name."""
    if not lake_name:
        raise InvalidInput('Lake name is required to build an identifier')
    return f'$LN{lake_name[0]}{lake_name[-1]}'.upper()


def build_reservation_id(lake_name: str, timestamp) -> str:
    """
    Build a reservation (or competition) id.

    Args:
        lake_name: Lake name
        timestamp: Creation time in epoch seconds

    Returns:
        str: e.g. '$LNOA.1718000000.1b4e28ba-2fa1-11d2-883f-0016d3cca427'
    """
    return f'{lake_prefix(lake_name)}.{timestamp}.{uuid4()}'


def build_spot_id(lake_name: str, spot_number) -> str:
    """Build a spot id from the lake name and the spot's display number."""
    return f'{lake_prefix(lake_name)}.{spot_number}.{uuid4()}'


def year_of(identifier: str) -> str:
    """
    Recover the year bucket from a reservation/competition id.

    Raises:
        InvalidIdentifier: If the id has no numeric timestamp segment
    """
    segments = (identifier or '').split('.')
    if len(segments) < 2:
        raise InvalidIdentifier(f'Malformed identifier: {identifier!r}')

    try:
        return year_of_timestamp(segments[1])
    except (ValueError, OverflowError, OSError):
        raise InvalidIdentifier(f'Identifier has no valid timestamp: {identifier!r}')
