"""
Notification Service - reservation status e-mails.

Sends a plain-text + HTML message over SMTP when a reservation is placed
(pending), accepted (confirmed) or removed (rejected). Delivery is best
effort: failures are logged and reported as False, never raised.
"""

import logging
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from html import escape

from flask import current_app

from utils.datetime_helpers import from_epoch
from utils.messages import get_message

logger = logging.getLogger(__name__)

MAIL_STATUSES = ('pending', 'confirmed', 'rejected')


def build_mail_content(reservation: dict, status: str, lake_name: str) -> dict:
    """
    Build subject and body lines for a status e-mail.

    Args:
        reservation: Reservation with plaintext PII
        status: 'pending', 'confirmed' or 'rejected'
        lake_name: Lake the reservation belongs to

    Returns:
        dict with subject and lines
    """
    if status not in MAIL_STATUSES:
        raise ValueError(f'Unknown mail status: {status}')

    first_name = (reservation.get('fullName') or '').split(' ')[0]
    created = from_epoch(reservation.get('timestamp')).strftime('%d-%m-%Y')

    lines = [
        get_message(f'mail_{status}_header'),
        '',
        get_message('mail_greeting', name=first_name),
        get_message(f'mail_{status}_text1'),
    ]
    if status == 'pending':
        lines.append(get_message('mail_pending_text2'))

    lines += [
        '',
        get_message('mail_reservation_id', id=reservation.get('id')),
        get_message('mail_status', status=get_message(f'mail_status_{status}')),
        get_message('mail_phone', phone=reservation.get('phone') or ''),
        get_message('mail_created', date=created),
    ]

    # Rejected reservations no longer have a summary page
    if status != 'rejected':
        base_url = current_app.config.get('PUBLIC_BASE_URL', '')
        url = f'{base_url}{lake_name}/podsumowanie/{reservation.get("id")}'
        lines.append(get_message('mail_link', url=url))

    subject = get_message('mail_subject', date=created, app=current_app.config.get('APP_NAME', ''))
    return {'subject': subject, 'lines': lines}


def notify_reservation(reservation: dict, status: str, lake_name: str) -> bool:
    """
    Send a reservation status e-mail.

    Returns:
        True if sent, False if skipped or failed
    """
    to_email = (reservation.get('email') or '').strip()
    if not to_email:
        return False

    config = current_app.config
    server_host = (config.get('MAIL_SERVER') or '').strip()
    if not server_host:
        logger.debug('MAIL_SERVER not set; skipping %s mail for %s', status, reservation.get('id'))
        return False

    try:
        content = build_mail_content(reservation, status, lake_name)
    except (ValueError, TypeError, OverflowError, OSError):
        logger.exception('Could not build %s mail for %s', status, reservation.get('id'))
        return False

    user = (config.get('MAIL_USERNAME') or '').strip()
    password = config.get('MAIL_PASSWORD') or ''
    from_addr = (config.get('MAIL_DEFAULT_SENDER') or '').strip() or user

    body = '\n'.join(content['lines'])
    msg = MIMEMultipart('alternative')
    msg['Subject'] = content['subject']
    msg['From'] = from_addr
    msg['To'] = to_email
    msg.attach(MIMEText(body, 'plain', 'utf-8'))
    msg.attach(MIMEText(
        '<br>'.join(escape(line) for line in content['lines']), 'html', 'utf-8'
    ))

    try:
        with smtplib.SMTP(server_host, config.get('MAIL_PORT', 587), timeout=10) as server:
            server.starttls()
            if user and password:
                server.login(user, password)
            server.sendmail(from_addr, [to_email], msg.as_string())
        logger.info('Sent %s mail for reservation %s', status, reservation.get('id'))
        return True
    except (smtplib.SMTPException, OSError):
        logger.exception('Failed to send %s mail for reservation %s', status, reservation.get('id'))
        return False
