"""
Field-level encryption for personally identifying reservation fields.

fullName, phone and email are stored as Fernet tokens inside lake documents
and decrypted on every value returned to a caller.
"""

import logging

from cryptography.fernet import Fernet, InvalidToken
from flask import current_app

from utils.errors import EncryptionFailure

logger = logging.getLogger(__name__)

PII_FIELDS = ('fullName', 'phone', 'email')


class FieldCipher:
    """Encrypt/decrypt single string values with a Fernet key."""

    def __init__(self, key):
        try:
            self._fernet = Fernet(key)
        except (ValueError, TypeError) as e:
            raise EncryptionFailure(f'Invalid encryption key: {e}')

    def encrypt(self, text) -> str:
        """Encrypt a value; empty values pass through unchanged."""
        if text is None or text == '':
            return text
        try:
            return self._fernet.encrypt(str(text).encode('utf-8')).decode('ascii')
        except (TypeError, ValueError) as e:
            logger.exception('Field encryption failed')
            raise EncryptionFailure(str(e))

    def decrypt(self, token) -> str:
        """Decrypt a value; plaintext and empty values pass through unchanged."""
        if token is None or token == '':
            return token
        try:
            return self._fernet.decrypt(str(token).encode('utf-8')).decode('utf-8')
        except InvalidToken:
            return token
        except (TypeError, ValueError, UnicodeError) as e:
            logger.exception('Field decryption failed')
            raise EncryptionFailure(str(e))


def get_field_cipher() -> FieldCipher:
    """Get the app-wide cipher, built lazily from ENCRYPTION_KEY."""
    cipher = current_app.extensions.get('field_cipher')
    if cipher is None:
        cipher = FieldCipher(current_app.config['ENCRYPTION_KEY'])
        current_app.extensions['field_cipher'] = cipher
    return cipher


def encrypt_pii(record: dict, cipher: FieldCipher = None) -> dict:
    """Return a copy of record with PII fields encrypted."""
    cipher = cipher or get_field_cipher()
    encrypted = dict(record)
    for field in PII_FIELDS:
        if field in encrypted:
            encrypted[field] = cipher.encrypt(encrypted[field])
    return encrypted


def decrypt_pii(record: dict, cipher: FieldCipher = None) -> dict:
    """Return a copy of record with PII fields decrypted."""
    cipher = cipher or get_field_cipher()
    decrypted = dict(record)
    for field in PII_FIELDS:
        if field in decrypted:
            decrypted[field] = cipher.decrypt(decrypted[field])
    return decrypted
