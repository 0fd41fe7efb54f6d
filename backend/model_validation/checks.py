"""Format checks for common string fields (email, phone, URL).

These are primitives that validators call; they never raise for bad input.
"""

from typing import Optional

import phonenumbers
from email_validator import EmailNotValidError, validate_email
from phonenumbers import NumberParseException
from pydantic import AnyUrl, TypeAdapter, ValidationError

from model_validation.config import get_settings

URL_SCHEMES = {"http", "https", "ftp"}

_url_adapter = TypeAdapter(AnyUrl)


def is_blank(value: Optional[str]) -> bool:
    """True for None, empty, or whitespace-only strings."""
    return value is None or not value.strip()


def is_email_address(value: Optional[str]) -> bool:
    """Syntax check only — no DNS deliverability lookup."""
    if is_blank(value):
        return False
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def is_phone_number(value: Optional[str], region: Optional[str] = None) -> bool:
    """Check that ``value`` is a possible phone number.

    Numbers without a leading ``+`` are parsed against ``region`` (defaults to
    the configured DEFAULT_PHONE_REGION).
    """
    if is_blank(value):
        return False
    try:
        number = phonenumbers.parse(value, region or get_settings().DEFAULT_PHONE_REGION)
    except NumberParseException:
        return False
    return phonenumbers.is_possible_number(number)


def is_url(value: Optional[str]) -> bool:
    """Absolute http, https or ftp URL with a host."""
    if is_blank(value):
        return False
    try:
        url = _url_adapter.validate_python(value.strip())
    except ValidationError:
        return False
    return url.scheme in URL_SCHEMES and bool(url.host)
