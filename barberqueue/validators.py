# barberqueue/validators.py

"""Input normalisation shared by the account, queue and search operations."""

import re

from .errors import ValidationFailed


def normalize_phone(phone: str) -> str:
    """
    Strip formatting from a mobile number and check it.

    The result is exactly 10 digits and starts with 6, 7, 8 or 9.

    Raises:
        ValidationFailed: if the number does not match that shape
    """
    digits = re.sub(r"\D", "", phone or "")
    if len(digits) != 10:
        raise ValidationFailed("Phone number must be exactly 10 digits.")
    if digits[0] not in "6789":
        raise ValidationFailed("Phone number must start with 6, 7, 8, or 9.")
    return digits


def validate_coordinates(lat: float, long: float) -> None:
    if not -90 <= lat <= 90:
        raise ValidationFailed("Latitude must be between -90 and 90")
    if not -180 <= long <= 180:
        raise ValidationFailed("Longitude must be between -180 and 180")


def clean_service(service) -> str:
    # any non-empty service name is accepted; the catalogue is for display only
    if not isinstance(service, str) or not service.strip():
        raise ValidationFailed("Service is required and must be a non-empty string")
    return service.strip()
