"""
Tests for spot management.
"""

import pytest

from conftest import DAY_2024_07_01, TEST_LAKE
from models.lake import require_lake
from models.reservation_crud import create_reservation
from models.spot import (
    add_spot, delete_spot, get_spot_by_id, get_spot_calendar, get_spots,
    update_all_spots, update_spot
)
from utils.errors import InvalidInput, NotFound


class TestSpotCrud:
    """Tests for adding, updating and deleting spots."""

    def test_add_spot(self, app, lake):
        spot_id = add_spot(TEST_LAKE, {'number': 3})

        spot = get_spot_by_id(TEST_LAKE, spot_id)
        assert spot['number'] == '3'
        assert spot_id.startswith('$LNOK.3.')
        assert 'unavailableDates' not in spot
        assert len(get_spots(TEST_LAKE)) == 3

    def test_add_spot_requires_number(self, app, lake):
        with pytest.raises(InvalidInput):
            add_spot(TEST_LAKE, {'info': {}})

    def test_update_spot_ignores_protected_fields(self, app, spot_ids):
        updated = update_spot(TEST_LAKE, spot_ids[0], {
            'number': 11, 'spotId': 'hijack', 'unavailableDates': {'2024': ['1']},
            'options': {'isDepositRequire': True}
        })

        assert updated['spotId'] == spot_ids[0]
        assert updated['number'] == '11'
        assert updated['options'] == {'isDepositRequire': True}
        assert require_lake(TEST_LAKE)['spots'][0]['unavailableDates'] == {}

    def test_update_all_spots(self, app, spot_ids):
        price_list = {'default': {'priceDay': 80, 'priceNight': 90}}
        options = {'isDepositRequire': True, 'depositValue': '30%'}

        updated = update_all_spots(TEST_LAKE, {'priceList': price_list, 'spotCapacity': 2}, options)

        assert len(updated) == 2
        for spot in updated:
            assert spot['info']['priceList'] == price_list
            assert spot['info']['spotCapacity'] == 2
            assert spot['info']['houseSpot'] is False
            assert spot['options'] == options

    def test_update_all_spots_keeps_options_when_omitted(self, app, spot_ids):
        before = [spot['options'] for spot in get_spots(TEST_LAKE)]

        updated = update_all_spots(TEST_LAKE, {'priceList': {}, 'spotCapacity': 3}, None)

        assert [spot['options'] for spot in updated] == before
        assert all(spot['options'] is not None for spot in get_spots(TEST_LAKE))

    def test_delete_spot(self, app, spot_ids):
        delete_spot(TEST_LAKE, spot_ids[1])

        assert [s['spotId'] for s in get_spots(TEST_LAKE)] == [spot_ids[0]]
        with pytest.raises(NotFound):
            get_spot_by_id(TEST_LAKE, spot_ids[1])

    def test_delete_reserved_spot_refused(self, app, spot_ids, make_payload):
        create_reservation(TEST_LAKE, make_payload(spot_ids[0], [DAY_2024_07_01]))

        with pytest.raises(InvalidInput):
            delete_spot(TEST_LAKE, spot_ids[0])
        assert len(get_spots(TEST_LAKE)) == 2

    def test_unknown_spot(self, app, lake):
        with pytest.raises(NotFound):
            update_spot(TEST_LAKE, 'missing', {'number': 1})
        with pytest.raises(NotFound):
            delete_spot(TEST_LAKE, 'missing')


class TestSpotCalendar:
    """Tests for the public blocked-date calendar."""

    def test_calendar_lists_booked_dates(self, app, spot_ids, make_payload):
        later, earlier = str(DAY_2024_07_01 + 86400), str(DAY_2024_07_01)
        create_reservation(TEST_LAKE, make_payload(spot_ids[0], [later, earlier]))

        assert get_spot_calendar(TEST_LAKE, spot_ids[0], '2024') == [earlier, later]
        assert get_spot_calendar(TEST_LAKE, spot_ids[1], '2024') == []
