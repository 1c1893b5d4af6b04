"""
Centralized Polish user-facing messages.
All API and e-mail text in Polish for consistency.
"""

MESSAGES = {
    # Success messages
    'reservation_created': 'Rezerwacja złożona pomyślnie',
    'reservation_updated': 'Rezerwacja zaktualizowana',
    'reservation_deleted': 'Rezerwacja usunięta',
    'competition_created': 'Zawody dodane',
    'competition_deleted': 'Zawody usunięte',
    'spot_created': 'Stanowisko dodane',
    'spot_updated': 'Stanowisko zaktualizowane',
    'spots_updated': 'Stanowiska zaktualizowane',
    'spot_deleted': 'Stanowisko usunięte',

    # Operation failures (one per operation, shown regardless of cause)
    'reservation_create_failed': 'Nie można utworzyć rezerwacji!',
    'reservation_update_failed': 'Nie można zaktualizować rezerwacji!',
    'reservation_delete_failed': 'Nie można usunąć rezerwacji!',
    'reservation_fetch_failed': 'Nie można pobrać rezerwacji!',
    'competition_create_failed': 'Nie można dodać zawodów!',
    'competition_delete_failed': 'Nie można usunąć zawodów!',
    'competition_fetch_failed': 'Nie można pobrać zawodów!',
    'spot_create_failed': 'Nie można dodać stanowiska!',
    'spot_update_failed': 'Nie można zaktualizować stanowiska!',
    'spots_update_failed': 'Nie można zaktualizować stanowisk!',
    'spot_delete_failed': 'Nie można usunąć stanowiska!',
    'spot_fetch_failed': 'Nie można pobrać stanowiska!',
    'operation_failed': 'Operacja nie powiodła się!',

    # Validation messages
    'data_required': 'Brak danych!',
    'date_required': 'Data jest wymagana!',
    'unauthorized': 'Brak autoryzacji!',
    'not_found': 'Nie znaleziono zasobu!',
    'method_not_allowed': 'Niedozwolona metoda!',

    # E-mail subjects and headers
    'mail_pending_header': 'Rezerwacja złożona pomyślnie!',
    'mail_pending_text1': 'Twoja rezerwacja została pomyślnie złożona. '
                          'Poniżej możesz zobaczyć informacje dotyczące twojej rezerwacji.',
    'mail_pending_text2': 'W kolejnym mailu prześlemy potwierdzenie rezerwacji.',
    'mail_confirmed_header': 'Rezerwacja zaakceptowana!',
    'mail_confirmed_text1': 'Twoja rezerwacja została potwierdzona! '
                            'Poniżej możesz zobaczyć informacje dotyczące twojej rezerwacji.',
    'mail_rejected_header': 'Rezerwacja została odrzucona!',
    'mail_rejected_text1': 'Twoja rezerwacja została odrzucona. Przepraszamy za utrudnienia.',
    'mail_greeting': 'Dzień dobry {name},',
    'mail_reservation_id': 'Numer rezerwacji: {id}',
    'mail_phone': 'Telefon: {phone}',
    'mail_created': 'Data złożenia: {date}',
    'mail_link': 'Szczegóły rezerwacji: {url}',
    'mail_status': 'Status: {status}',
    'mail_status_pending': 'Oczekująca',
    'mail_status_confirmed': 'Potwierdzona',
    'mail_status_rejected': 'Odrzucona',
    'mail_subject': 'Rezerwacja z dnia {date} {app}',
}


def get_message(key: str, **kwargs) -> str:
    """
    Get message with optional formatting.

    Args:
        key: Message key
        **kwargs: Format parameters

    Returns:
        Formatted message or key if not found
    """
    message = MESSAGES.get(key, key)
    if kwargs:
        return message.format(**kwargs)
    return message
