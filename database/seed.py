"""
Database seed data.
Initial data population for fresh database installations.
"""

import json

DEMO_LAKE_NAME = 'Demo'
DEMO_SPOT_COUNT = 4


def seed_database(db):
    """Insert a demo lake with a few empty spots."""
    from models.lake import new_spot, normalize_lake

    lake = normalize_lake({
        'name': DEMO_LAKE_NAME,
        'spots': [new_spot(DEMO_LAKE_NAME, number) for number in range(1, DEMO_SPOT_COUNT + 1)]
    })

    db.execute(
        'INSERT INTO lakes (name, document) VALUES (?, ?)',
        (DEMO_LAKE_NAME, json.dumps(lake, ensure_ascii=False))
    )
