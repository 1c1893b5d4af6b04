"""
Tests for reservation read queries.
"""

import pytest

from conftest import DAY_2024_07_01, ONE_DAY, TEST_LAKE, TS_2024
from models.lake import create_lake, get_all_lakes, require_lake
from models.reservation_crud import create_reservation, update_reservation
from models.reservation_queries import (
    create_individual_reservations, query_all, query_by_spot, query_confirmed,
    query_deposit_paid, query_deposit_unpaid, query_not_confirmed,
    query_todays, query_todays_combined
)
from utils.datetime_helpers import get_current_year
from utils.errors import InvalidInput, NotFound

D = DAY_2024_07_01


def _dates(*offsets):
    return [str(D + offset * ONE_DAY) for offset in offsets]


@pytest.fixture
def three_reservations(app, spot_ids, make_payload):
    """Three reservations created one second apart, oldest first."""
    created = []
    for index, name in enumerate(['Jan Kowalski', 'Anna Nowak', 'Piotr Wiśniewski']):
        created.append(create_reservation(TEST_LAKE, make_payload(
            spot_ids[index % 2], _dates(index * 3), timestamp=TS_2024 + index, fullName=name
        )))
    return created


class TestStateQueries:
    """Tests for predicate + sort queries."""

    def test_not_confirmed(self, app, spot_ids, make_payload):
        """Scenario D."""
        confirmed = create_reservation(TEST_LAKE, make_payload(spot_ids[0], _dates(0)))
        pending = create_reservation(TEST_LAKE, make_payload(spot_ids[1], _dates(0)))
        update_reservation(TEST_LAKE, confirmed['id'], {'confirmed': True})

        result = query_not_confirmed(require_lake(TEST_LAKE), '2024')

        assert [r['id'] for r in result] == [pending['id']]
        assert result[0]['fullName'] == 'Jan Kowalski'

    def test_not_confirmed_excludes_deposit_required(self, app, spot_ids, make_payload):
        create_reservation(TEST_LAKE, make_payload(spot_ids[0], _dates(0), isDepositRequired=True))
        assert query_not_confirmed(require_lake(TEST_LAKE), '2024') == []

    def test_not_confirmed_oldest_first(self, three_reservations):
        result = query_not_confirmed(require_lake(TEST_LAKE), '2024')
        assert [r['id'] for r in result] == [r['id'] for r in three_reservations]

    def test_all_newest_first(self, three_reservations):
        result = query_all(require_lake(TEST_LAKE), '2024')
        assert [r['id'] for r in result] == [r['id'] for r in reversed(three_reservations)]

    def test_confirmed(self, three_reservations):
        update_reservation(TEST_LAKE, three_reservations[1]['id'], {'confirmed': True})
        result = query_confirmed(require_lake(TEST_LAKE), '2024')
        assert [r['id'] for r in result] == [three_reservations[1]['id']]

    def test_by_spot(self, three_reservations, spot_ids):
        result = query_by_spot(require_lake(TEST_LAKE), spot_ids[1], '2024')
        assert [r['id'] for r in result] == [three_reservations[1]['id']]

    def test_deposit_queries(self, app, spot_ids, make_payload):
        paid = create_reservation(TEST_LAKE, make_payload(
            spot_ids[0], _dates(0), isDepositRequired=True, isDepositPaid=True))
        unpaid = create_reservation(TEST_LAKE, make_payload(
            spot_ids[0], _dates(1), isDepositRequired=True))
        confirmed_unpaid = create_reservation(TEST_LAKE, make_payload(
            spot_ids[0], _dates(2), isDepositRequired=True))
        update_reservation(TEST_LAKE, confirmed_unpaid['id'], {'confirmed': True})

        lake = require_lake(TEST_LAKE)
        assert [r['id'] for r in query_deposit_paid(lake, '2024')] == [paid['id']]
        assert [r['id'] for r in query_deposit_unpaid(lake, '2024')] == [unpaid['id']]


class TestPipeline:
    """Tests for pagination, name filter and bucket handling."""

    def test_offset_and_limit(self, three_reservations):
        result = query_all(require_lake(TEST_LAKE), '2024', offset=1, limit=1)
        assert [r['id'] for r in result] == [three_reservations[1]['id']]

    def test_name_filter_case_insensitive(self, three_reservations):
        result = query_all(require_lake(TEST_LAKE), '2024', name_filter='NOWAK')
        assert [r['fullName'] for r in result] == ['Anna Nowak']

    def test_filter_applies_to_the_page(self, three_reservations):
        """The name filter runs after slicing."""
        result = query_all(require_lake(TEST_LAKE), '2024', limit=1, name_filter='nowak')
        assert result == []

    def test_negative_offset(self, three_reservations):
        with pytest.raises(InvalidInput):
            query_all(require_lake(TEST_LAKE), '2024', offset=-1)

    def test_missing_bucket(self, app, lake):
        with pytest.raises(NotFound):
            query_all(require_lake(TEST_LAKE), '2024')

    def test_empty_bucket(self, app, spot_ids, make_payload):
        from models.reservation_crud import delete_reservation

        stored = create_reservation(TEST_LAKE, make_payload(spot_ids[0], _dates(0)))
        delete_reservation(TEST_LAKE, stored['id'])

        assert query_all(require_lake(TEST_LAKE), '2024') == []

    def test_empty_year_means_current(self, app, spot_ids, make_payload):
        stored = create_reservation(TEST_LAKE, make_payload(spot_ids[0], _dates(0), timestamp=''))

        assert stored['id'] in [r['id'] for r in query_all(require_lake(TEST_LAKE), '')]
        assert get_current_year() in require_lake(TEST_LAKE)['reservations']


class TestDayQueries:
    """Tests for arrival-day queries."""

    def test_individual_reservations(self):
        reservation = {
            'id': 'r1', 'fullName': 'x', 'timestamp': '1', 'confirmed': False,
            'data': [
                {'spotId': 'S1', 'dates': [{'date': '300'}, {'date': '100'}]},
                {'spotId': 'S2', 'dates': [{'date': '200'}]},
            ]
        }

        individual = create_individual_reservations([reservation])

        assert len(individual) == 2
        assert individual[0]['id'] == 'r1'
        assert individual[0]['data'] == [{'spotId': 'S1', 'dates': [{'date': '100'}, {'date': '300'}]}]
        assert individual[1]['data'][0]['spotId'] == 'S2'
        assert reservation['data'][0]['dates'][0] == {'date': '300'}

    def test_todays_matches_earliest_date_only(self, app, spot_ids, make_payload):
        """Scenario E."""
        payload = make_payload(spot_ids[0], _dates(0, 1))
        payload['data'].append({'spotId': spot_ids[1], 'dates': [{'date': _dates(5)[0], 'priceForDate': 100}]})
        create_reservation(TEST_LAKE, payload)
        lake = require_lake(TEST_LAKE)

        result = query_todays(lake, D, '2024')
        assert len(result) == 1
        assert result[0]['data'][0]['spotId'] == spot_ids[0]

        assert query_todays(lake, D + ONE_DAY, '2024') == []
        assert [r['data'][0]['spotId'] for r in query_todays(lake, D + 5 * ONE_DAY, '2024')] == [spot_ids[1]]

    def test_todays_requires_date(self, app, lake):
        with pytest.raises(InvalidInput):
            query_todays(require_lake(TEST_LAKE), '', '2024')

    def test_combined_matches_each_stay_start(self, app, spot_ids, make_payload):
        create_reservation(TEST_LAKE, make_payload(spot_ids[0], _dates(0, 1, 5)))
        other = create_lake('Karp', spot_count=1)
        create_reservation('Karp', make_payload(other['spots'][0]['spotId'], _dates(5)))

        lakes = get_all_lakes()

        second_stay = query_todays_combined(lakes, D + 5 * ONE_DAY, '2024')
        assert sorted(r['lakeName'] for r in second_stay) == ['Karp', TEST_LAKE]

        assert len(query_todays_combined(lakes, D, '2024')) == 1
        assert query_todays_combined(lakes, D + ONE_DAY, '2024') == []

    def test_combined_skips_lakes_without_bucket(self, app, lake):
        assert query_todays_combined(get_all_lakes(), D, '2024') == []
