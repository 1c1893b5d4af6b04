"""
Database schema definitions.
Each lake is stored as one JSON document (spots, reservations, competitions).
"""


def drop_tables(db):
    """Drop all existing tables."""
    for table in ['lakes']:
        db.execute(f'DROP TABLE IF EXISTS {table}')


def create_tables(db):
    """Create all database tables."""

    db.execute('''
        CREATE TABLE lakes (
            name TEXT PRIMARY KEY,
            document TEXT NOT NULL,
            version INTEGER NOT NULL DEFAULT 1,
            created_at TEXT DEFAULT CURRENT_TIMESTAMP,
            updated_at TEXT DEFAULT CURRENT_TIMESTAMP
        )
    ''')


def create_indexes(db):
    """Create secondary indexes."""
    db.execute('CREATE INDEX IF NOT EXISTS idx_lakes_updated ON lakes(updated_at)')
