"""
Tests for PII field encryption.
"""

import pytest
from cryptography.fernet import Fernet

from utils.crypto import FieldCipher, decrypt_pii, encrypt_pii, get_field_cipher
from utils.errors import EncryptionFailure


@pytest.fixture
def cipher():
    return FieldCipher(Fernet.generate_key())


class TestFieldCipher:
    """Tests for single-value encryption."""

    def test_round_trip(self, cipher):
        for text in ['Jan Kowalski', 'Łukasz Żółć', '+48600100200', 'a@b.pl']:
            token = cipher.encrypt(text)
            assert token != text
            assert cipher.decrypt(token) == text

    def test_empty_values_pass_through(self, cipher):
        assert cipher.encrypt('') == ''
        assert cipher.decrypt('') == ''
        assert cipher.encrypt(None) is None

    def test_plaintext_passes_through_decrypt(self, cipher):
        assert cipher.decrypt('Jan Kowalski') == 'Jan Kowalski'

    def test_other_key_cannot_decrypt(self, cipher):
        token = FieldCipher(Fernet.generate_key()).encrypt('secret')
        assert cipher.decrypt(token) == token

    def test_invalid_key(self):
        with pytest.raises(EncryptionFailure):
            FieldCipher('not-a-key')


class TestRecordHelpers:
    """Tests for whole-record PII helpers."""

    def test_only_pii_fields_change(self, cipher):
        record = {'id': 'x', 'fullName': 'Jan', 'phone': '600100200', 'email': '', 'price': 10}

        encrypted = encrypt_pii(record, cipher)

        assert encrypted['id'] == 'x'
        assert encrypted['price'] == 10
        assert encrypted['email'] == ''
        assert encrypted['fullName'] != 'Jan'
        assert record['fullName'] == 'Jan'
        assert decrypt_pii(encrypted, cipher) == record

    def test_app_cipher_is_cached(self, app):
        assert get_field_cipher() is get_field_cipher()
