"""Reservation services package."""

from blueprints.reservations.services.notification_service import (  # noqa: F401
    notify_reservation,
    build_mail_content,
    MAIL_STATUSES,
)
