"""
Pytest configuration and fixtures.
Ensures tests use an isolated test database, not the production database.
"""

import os
import tempfile

import pytest

# Set test database path BEFORE importing app
# This ensures all tests use an isolated database
TEST_DB_PATH = os.path.join(tempfile.gettempdir(), 'lake_reservations_test.db')
os.environ['DATABASE_PATH'] = TEST_DB_PATH

# Fixed instants (UTC noon / 10:00, same calendar day in Europe/Warsaw)
TS_2024 = 1718452800    # 2024-06-15 12:00 UTC, reservation creation time
TS_2025 = 1749988800    # 2025-06-15 12:00 UTC
DAY_2024_07_01 = 1719828000  # 2024-07-01 10:00 UTC, a booked night
ONE_DAY = 86400

TEST_LAKE = 'Okonek'


@pytest.fixture
def app(tmp_path):
    """Create test application with isolated database and backup dir."""
    from app import create_app
    from database import init_db

    app = create_app('test')
    app.config['DATABASE_PATH'] = str(tmp_path / 'lakes_test.db')
    app.config['BACKUP_DIR'] = str(tmp_path / 'backups')

    with app.app_context():
        init_db()
        yield app


@pytest.fixture
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture
def auth_headers(app):
    """Operator bearer-token headers."""
    return {'Authorization': f'Bearer {app.config["ADMIN_API_TOKEN"]}'}


@pytest.fixture
def lake(app):
    """A stored two-spot lake; returns its current document."""
    from models.lake import create_lake
    return create_lake(TEST_LAKE, spot_count=2)


@pytest.fixture
def spot_ids(lake):
    """Ids of the two spots of the test lake."""
    return [spot['spotId'] for spot in lake['spots']]


@pytest.fixture
def make_payload():
    """Factory for reservation payloads."""

    def _make(spot_id, dates, timestamp=TS_2024, **overrides):
        payload = {
            'fullName': 'Jan Kowalski',
            'phone': '+48600100200',
            'email': 'jan@example.com',
            'data': [{
                'spotId': spot_id,
                'dates': [{'date': str(d), 'priceForDate': 100} for d in dates]
            }],
            'timestamp': str(timestamp),
            'price': 100 * len(dates),
        }
        payload.update(overrides)
        return payload

    return _make
