"""
Tests for the spot availability index.
"""

import pytest

from models.availability import (
    block, check_spot_availability_bulk, dates_held_by_competitions,
    dates_held_by_reservations, get_unavailable_dates, is_blocked, unblock
)
from utils.errors import NotFound


@pytest.fixture
def lake_doc():
    """In-memory lake with two spots and no bookings."""
    return {
        'name': 'Okonek',
        'spots': [
            {'spotId': 'S1', 'number': '1', 'unavailableDates': {}},
            {'spotId': 'S2', 'number': '2'},
        ],
        'reservations': {},
        'competitions': {}
    }


class TestSpotIndex:
    """Tests for block/unblock on a single spot."""

    def test_block_then_is_blocked(self, lake_doc):
        spot = lake_doc['spots'][0]
        block(spot, '2024', 1719828000)

        assert is_blocked(spot, '2024', '1719828000') is True
        assert is_blocked(spot, '2025', '1719828000') is False

    def test_block_is_idempotent(self, lake_doc):
        spot = lake_doc['spots'][0]
        block(spot, '2024', '100')
        block(spot, '2024', 100)

        assert spot['unavailableDates']['2024'] == ['100']

    def test_unblock_is_idempotent(self, lake_doc):
        spot = lake_doc['spots'][0]
        block(spot, '2024', '100')
        unblock(spot, '2024', '100')
        unblock(spot, '2024', '100')

        assert is_blocked(spot, '2024', '100') is False

    def test_year_list_created_lazily(self, lake_doc):
        """Spot without unavailableDates gets the map on first block."""
        spot = lake_doc['spots'][1]
        assert is_blocked(spot, '2024', '100') is False
        assert 'unavailableDates' not in spot

        block(spot, '2024', '100')
        assert spot['unavailableDates'] == {'2024': ['100']}

    def test_block_does_not_touch_other_spots(self, lake_doc):
        block(lake_doc['spots'][0], '2024', '100')
        assert is_blocked(lake_doc['spots'][1], '2024', '100') is False

    def test_sorted_calendar(self, lake_doc):
        spot = lake_doc['spots'][0]
        for value in ['300', '100', '200']:
            block(spot, '2024', value)

        assert get_unavailable_dates(lake_doc, 'S1', '2024') == ['100', '200', '300']
        assert get_unavailable_dates(lake_doc, 'S1', '2030') == []


class TestCheckSpotAvailabilityBulk:
    """Tests for bulk availability checking."""

    def test_empty_entries(self, lake_doc):
        result = check_spot_availability_bulk(lake_doc, [], '2024')
        assert result['all_available'] is True
        assert result['unavailable'] == []

    def test_reports_each_blocked_pair(self, lake_doc):
        block(lake_doc['spots'][0], '2024', '100')
        entries = [
            {'spotId': 'S1', 'dates': [{'date': '100'}, {'date': '200'}]},
            {'spotId': 'S2', 'dates': [{'date': '100'}]},
        ]

        result = check_spot_availability_bulk(lake_doc, entries, '2024')

        assert result['all_available'] is False
        assert result['unavailable'] == [{'spotId': 'S1', 'date': '100'}]

    def test_ignore_own_dates(self, lake_doc):
        block(lake_doc['spots'][0], '2024', '100')
        entries = [{'spotId': 'S1', 'dates': [{'date': '100'}]}]

        result = check_spot_availability_bulk(lake_doc, entries, '2024', ignore={('S1', '100')})
        assert result['all_available'] is True

    def test_unknown_spot(self, lake_doc):
        with pytest.raises(NotFound):
            check_spot_availability_bulk(lake_doc, [{'spotId': 'nope', 'dates': [{'date': '1'}]}], '2024')

    def test_check_does_not_mutate(self, lake_doc):
        entries = [{'spotId': 'S2', 'dates': [{'date': '100'}]}]
        check_spot_availability_bulk(lake_doc, entries, '2024')
        assert 'unavailableDates' not in lake_doc['spots'][1]


class TestHeldDates:
    """Tests for ownership lookups used when releasing dates."""

    def test_reservation_and_competition_holdings(self, lake_doc):
        lake_doc['reservations']['2024'] = [
            {'id': 'r1', 'data': [{'spotId': 'S1', 'dates': [{'date': '100'}]}]},
            {'id': 'r2', 'data': [{'spotId': 'S2', 'dates': [{'date': 200}]}]},
        ]
        lake_doc['competitions']['2024'] = [{'id': 'c1', 'dates': ['300', 400]}]

        assert dates_held_by_reservations(lake_doc, '2024') == {('S1', '100'), ('S2', '200')}
        assert dates_held_by_reservations(lake_doc, '2024', exclude_id='r1') == {('S2', '200')}
        assert dates_held_by_competitions(lake_doc, '2024') == {'300', '400'}
        assert dates_held_by_competitions(lake_doc, '2025') == set()
