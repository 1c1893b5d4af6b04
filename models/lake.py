"""
Lake repository.

A lake is one JSON document: {name, spots, reservations, competitions}.
Reservation and competition collections are keyed by year string.

Every mutation runs inside lake_transaction(), the single serialized
critical section per lake: a process-local lock plus a SQLite
BEGIN IMMEDIATE write transaction around load -> mutate -> save.
"""

import json
import logging
import os
import sqlite3
import threading
from contextlib import contextmanager

from flask import current_app

from database import get_db
from models.identifiers import build_spot_id
from utils.datetime_helpers import get_now
from utils.errors import InvalidInput, NotFound, PersistenceFailure

logger = logging.getLogger(__name__)

BACKUP_FILENAME = 'lakes_backup.json'

_locks_guard = threading.Lock()
_lake_locks = {}


# =============================================================================
# DOCUMENT SHAPE
# =============================================================================

def normalize_lake(document: dict) -> dict:
    """
    Ensure a lake document has every collection key.
    Older documents stored competitions under 'competition'; those
    entries are merged into 'competitions' per year.
    """
    lake = dict(document)
    legacy = lake.pop('competition', None) or {}
    competitions = dict(lake.get('competitions') or {})
    for year, entries in legacy.items():
        competitions[year] = list(competitions.get(year) or []) + list(entries or [])
    lake.setdefault('spots', [])
    lake['reservations'] = lake.get('reservations') or {}
    lake['competitions'] = competitions
    return lake


def new_spot(lake_name: str, number, info: dict = None, options: dict = None) -> dict:
    """Build a spot with default pricing/options and an empty availability index."""
    return {
        'spotId': build_spot_id(lake_name, number),
        'number': str(number),
        'unavailableDates': {},
        'info': info if info is not None else {
            'priceList': {
                'options': {'weekend': True},
                'default': {'priceDay': 100, 'priceNight': 100},
                'weekend': {'priceDay': 150, 'priceNight': 150},
                'specials': []
            },
            'description': '',
            'houseSpot': False,
            'houseSpotPrice': {
                'priceForMinimal': 200,
                'minNumberOfDays': 2,
                'priceForExtraDay': 200
            },
            'spotCapacity': 1
        },
        'options': options if options is not None else {
            'isDepositRequire': False,
            'depositValue': '50%',
            'depositRequiredSince': 2,
            'depositTerms': 0
        }
    }


# =============================================================================
# READ
# =============================================================================

def _decode(row) -> dict:
    try:
        return normalize_lake(json.loads(row['document']))
    except (TypeError, ValueError) as e:
        raise PersistenceFailure(f'Corrupted lake document: {e}')


def get_lake_by_name(name: str):
    """
    Load a lake document.

    Args:
        name: Lake name

    Returns:
        dict or None: Lake aggregate
    """
    try:
        row = get_db().execute(
            'SELECT document FROM lakes WHERE name = ?', (name,)
        ).fetchone()
    except sqlite3.Error as e:
        logger.exception('Failed to load lake %s', name)
        raise PersistenceFailure(str(e))

    return _decode(row) if row else None


def require_lake(name: str) -> dict:
    """
    Load a lake document or fail.

    Raises:
        NotFound: If the lake does not exist
    """
    lake = get_lake_by_name(name)
    if lake is None:
        raise NotFound(f'Lake {name} not found', lake=name)
    return lake


def get_all_lakes() -> list:
    """Load every lake document, ordered by name."""
    try:
        rows = get_db().execute(
            'SELECT document FROM lakes ORDER BY name'
        ).fetchall()
    except sqlite3.Error as e:
        logger.exception('Failed to load lakes')
        raise PersistenceFailure(str(e))

    return [_decode(row) for row in rows]


def get_lake_names() -> list:
    """List lake names."""
    try:
        rows = get_db().execute('SELECT name FROM lakes ORDER BY name').fetchall()
    except sqlite3.Error as e:
        raise PersistenceFailure(str(e))
    return [row['name'] for row in rows]


# =============================================================================
# WRITE
# =============================================================================

def create_lake(name: str, spot_count: int = 0) -> dict:
    """
    Create a lake with N generated spots numbered 1..N.

    Raises:
        InvalidInput: If the name is empty or already taken
    """
    name = (name or '').strip()
    if not name:
        raise InvalidInput('Lake name is required')

    lake = normalize_lake({
        'name': name,
        'spots': [new_spot(name, number) for number in range(1, spot_count + 1)]
    })

    db = get_db()
    try:
        db.execute(
            'INSERT INTO lakes (name, document) VALUES (?, ?)',
            (name, json.dumps(lake, ensure_ascii=False))
        )
        db.commit()
    except sqlite3.IntegrityError:
        db.rollback()
        raise InvalidInput(f'Lake {name} already exists', lake=name)
    except sqlite3.Error as e:
        db.rollback()
        logger.exception('Failed to create lake %s', name)
        raise PersistenceFailure(str(e))

    logger.info('Lake %s created with %s spots', name, spot_count)
    backup_lakes()
    return lake


def save_lake(lake: dict, db=None) -> None:
    """
    Write a lake document back (no commit; the caller owns the transaction).

    Raises:
        NotFound: If the lake row does not exist
        PersistenceFailure: On storage errors
    """
    db = db or get_db()
    try:
        cursor = db.execute('''
            UPDATE lakes
            SET document = ?, version = version + 1, updated_at = CURRENT_TIMESTAMP
            WHERE name = ?
        ''', (json.dumps(lake, ensure_ascii=False), lake['name']))
    except (sqlite3.Error, TypeError, ValueError) as e:
        logger.exception('Failed to save lake %s', lake.get('name'))
        raise PersistenceFailure(str(e))

    if cursor.rowcount == 0:
        raise NotFound(f'Lake {lake["name"]} not found', lake=lake['name'])


def get_lake_lock(lake_name: str) -> threading.Lock:
    """Process-local lock guarding one lake."""
    with _locks_guard:
        return _lake_locks.setdefault(lake_name, threading.Lock())


@contextmanager
def lake_transaction(lake_name: str):
    """
    Serialized load -> mutate -> save critical section for one lake.

    Yields the lake aggregate; on normal exit it is saved and committed,
    then a snapshot is written. On error the storage transaction is rolled
    back and the exception propagates; the yielded object must be discarded.

    Raises:
        NotFound: If the lake does not exist
        PersistenceFailure: On storage errors
    """
    with get_lake_lock(lake_name):
        db = get_db()
        try:
            db.execute('BEGIN IMMEDIATE')
        except sqlite3.Error as e:
            logger.exception('Could not lock lake %s', lake_name)
            raise PersistenceFailure(str(e))

        try:
            row = db.execute(
                'SELECT document FROM lakes WHERE name = ?', (lake_name,)
            ).fetchone()
            if row is None:
                raise NotFound(f'Lake {lake_name} not found', lake=lake_name)

            lake = _decode(row)
            yield lake

            save_lake(lake, db)
            db.commit()
        except sqlite3.Error as e:
            db.rollback()
            logger.exception('Transaction on lake %s failed', lake_name)
            raise PersistenceFailure(str(e))
        except Exception:
            db.rollback()
            raise

    backup_lakes()


# =============================================================================
# SNAPSHOT
# =============================================================================

def backup_lakes() -> bool:
    """
    Write a JSON snapshot of every lake to BACKUP_DIR.
    Best effort: failures are logged and never raised.

    Returns:
        bool: True if the snapshot was written
    """
    backup_dir = current_app.config.get('BACKUP_DIR')
    if not backup_dir:
        return False

    try:
        lakes = get_all_lakes()
        os.makedirs(backup_dir, exist_ok=True)
        path = os.path.join(backup_dir, BACKUP_FILENAME)
        tmp_path = f'{path}.{os.getpid()}.{threading.get_ident()}.tmp'
        with open(tmp_path, 'w', encoding='utf-8') as handle:
            json.dump({
                'created_at': get_now().isoformat(),
                'lakes': lakes
            }, handle, indent=2, ensure_ascii=False)
        os.replace(tmp_path, path)
    except (OSError, PersistenceFailure, TypeError, ValueError):
        logger.exception('Lake snapshot failed')
        return False

    logger.debug('Lake snapshot written to %s', backup_dir)
    return True
