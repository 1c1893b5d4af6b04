"""
Database migrations.
Safe, idempotent migrations for lake document evolution.
"""

import json
import logging

from database.connection import get_db

logger = logging.getLogger(__name__)


def migrate_competitions_key():
    """
    Migration: rename the legacy 'competition' key of lake documents
    to 'competitions'.

    Safe to run multiple times - documents already migrated are skipped.

    Returns:
        int: Number of lake documents rewritten
    """
    db = get_db()
    rows = db.execute('SELECT name, document FROM lakes').fetchall()

    migrated = 0
    for row in rows:
        document = json.loads(row['document'])
        if 'competition' not in document:
            continue

        legacy = document.pop('competition') or {}
        competitions = document.setdefault('competitions', {})
        for year, entries in legacy.items():
            competitions.setdefault(year, []).extend(entries)

        db.execute(
            'UPDATE lakes SET document = ?, version = version + 1 WHERE name = ?',
            (json.dumps(document, ensure_ascii=False), row['name'])
        )
        migrated += 1

    db.commit()
    logger.info('competitions_key migration rewrote %s lake(s)', migrated)
    return migrated


def run_all_migrations():
    """Run every migration in order."""
    return {
        'competitions_key': migrate_competitions_key(),
    }
