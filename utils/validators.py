"""
Input validation helper functions.
Provides validation for reservation contact fields.
"""

import re

FULL_NAME_MIN_LENGTH = 1
FULL_NAME_MAX_LENGTH = 40

PHONE_PATTERN = re.compile(r'^(\+\d{1,3})?\d{9,15}$')
EMAIL_PATTERN = re.compile(r'^[^\s@]+@[^\s@]+\.[^\s@]+$')


def validate_full_name(name: str) -> bool:
    """
    Validate reservation holder name length.

    Args:
        name: Full name as typed by the customer

    Returns:
        True if 1-40 characters long
    """
    if not isinstance(name, str):
        return False
    return FULL_NAME_MIN_LENGTH <= len(name) <= FULL_NAME_MAX_LENGTH


def validate_phone(phone: str) -> bool:
    """
    Validate phone number format.
    Accepts an optional '+' country code (1-3 digits) followed by 9-15 digits.

    Args:
        phone: Phone number to validate

    Returns:
        True if valid phone format
    """
    if not phone or not isinstance(phone, str):
        return False
    return bool(PHONE_PATTERN.fullmatch(phone))


def validate_email(email: str) -> bool:
    """
    Validate email format.

    Args:
        email: Email address to validate

    Returns:
        True if valid email format
    """
    if not email or not isinstance(email, str):
        return False
    return bool(EMAIL_PATTERN.fullmatch(email))


def validate_contact_fields(payload: dict, partial: bool = False) -> list:
    """
    Validate the contact fields of a reservation payload.

    Args:
        payload: Reservation payload
        partial: Only validate fields present in payload (updates)

    Returns:
        list: Names of invalid fields (empty if all valid)
    """
    errors = []

    if not partial or 'fullName' in payload:
        if not validate_full_name(payload.get('fullName')):
            errors.append('fullName')

    if not partial or 'phone' in payload:
        if not validate_phone(payload.get('phone')):
            errors.append('phone')

    # Email is optional; when given it must look like an address
    email = payload.get('email')
    if email and not validate_email(email):
        errors.append('email')

    return errors
