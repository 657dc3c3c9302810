"""String format checks and regex helpers for the schema validator."""

from __future__ import annotations

import re
from datetime import date, datetime
from email.utils import parsedate_to_datetime
from functools import lru_cache
from typing import Callable
from urllib.parse import urlsplit


_EMAIL = re.compile(r'[^\s@]+@[^\s@]+\.[^\s@]+')
_DATE = re.compile(r'[0-9]{4}-[0-9]{2}-[0-9]{2}')
_IPV4 = re.compile(r'([0-9]{1,3}\.){3}[0-9]{1,3}')
_IPV6 = re.compile(r'([0-9a-fA-F]{1,4}:){7}[0-9a-fA-F]{1,4}')
_URI_SCHEME = re.compile(r'[A-Za-z][A-Za-z0-9+.\-]*')

# Schemes that cannot be used without an authority (host) part
_HOST_SCHEMES = {'http', 'https', 'ws', 'wss', 'ftp'}


# Cache for compiled regex patterns
@lru_cache(maxsize=256)
def compile_pattern(pattern: str) -> re.Pattern:
    """Compile and cache a regex pattern. Raises re.error on bad input."""
    return re.compile(pattern)


def parse_datetime(value: str) -> datetime:
    """
    Parse a date-time string in ISO 8601 or RFC 2822 form.

    Args:
        value: The datetime string

    Returns:
        Parsed datetime object
    """
    formats = [
        '%Y-%m-%dT%H:%M:%S.%fZ',
        '%Y-%m-%dT%H:%M:%SZ',
        '%Y-%m-%dT%H:%M:%S.%f%z',
        '%Y-%m-%dT%H:%M:%S%z',
        '%Y-%m-%dT%H:%M:%S.%f',
        '%Y-%m-%dT%H:%M:%S',
        '%Y-%m-%dT%H:%M',
        '%Y-%m-%d %H:%M:%S.%f',
        '%Y-%m-%d %H:%M:%S',
        '%Y-%m-%d',
    ]
    for f in formats:
        try:
            return datetime.strptime(value, f)
        except ValueError:
            continue

    # Try fromisoformat as fallback
    try:
        return datetime.fromisoformat(value.replace('Z', '+00:00'))
    except ValueError:
        pass

    try:
        return parsedate_to_datetime(value)
    except (TypeError, ValueError, IndexError):
        pass

    raise ValueError(f"Cannot parse datetime '{value}'")


def is_email(value: str) -> bool:
    return _EMAIL.fullmatch(value) is not None


def is_uri(value: str) -> bool:
    """Absolute URI: a scheme, and a host for the network schemes."""
    if not value or any(ch.isspace() for ch in value):
        return False
    try:
        parts = urlsplit(value)
    except ValueError:
        return False
    if not parts.scheme or not _URI_SCHEME.fullmatch(parts.scheme):
        return False
    if parts.scheme in _HOST_SCHEMES and not parts.netloc:
        return False
    return True


def is_date(value: str) -> bool:
    """Strict YYYY-MM-DD that is also a real calendar date."""
    if not _DATE.fullmatch(value):
        return False
    try:
        date.fromisoformat(value)
    except ValueError:
        return False
    return True


def is_date_time(value: str) -> bool:
    try:
        parse_datetime(value)
    except ValueError:
        return False
    return True


def is_ipv4(value: str) -> bool:
    return _IPV4.fullmatch(value) is not None


def is_ipv6(value: str) -> bool:
    return _IPV6.fullmatch(value) is not None


FORMAT_CHECKERS: dict[str, Callable[[str], bool]] = {
    'email': is_email,
    'uri': is_uri,
    'date': is_date,
    'date-time': is_date_time,
    'ipv4': is_ipv4,
    'ipv6': is_ipv6,
}


def check_format(value: str, fmt: str) -> bool:
    """
    Check a string against a named format.

    Unknown format names always pass.
    """
    checker = FORMAT_CHECKERS.get(fmt)
    if checker is None:
        return True
    return checker(value)
