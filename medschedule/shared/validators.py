"""Shared validation utilities"""

import re
from datetime import datetime
from typing import Optional

WEEKDAYS = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")

TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


def validate_date_string(value: str) -> str:
    """
    Validate a calendar date string.

    Args:
        value: Date in ``YYYY-MM-DD`` form

    Returns:
        The same string, stripped

    Raises:
        ValueError: If the string is not a real calendar date
    """
    value = (value or "").strip()
    try:
        datetime.strptime(value, "%Y-%m-%d")
    except ValueError as e:
        raise ValueError("Date must be a valid calendar date in YYYY-MM-DD format") from e
    return value


def validate_time_string(value: str) -> str:
    """Validate a 24-hour ``HH:MM`` time-of-day string"""
    value = (value or "").strip()
    if not TIME_PATTERN.match(value):
        raise ValueError("Time must be in 24-hour HH:MM format")
    return value


def validate_weekdays(days: list[str]) -> list[str]:
    """
    Normalize a list of weekday names.

    Returns lowercase names in calendar order without duplicates.

    Raises:
        ValueError: If a name is not a weekday
    """
    normalized = set()
    for day in days:
        name = (day or "").strip().lower()
        if name not in WEEKDAYS:
            raise ValueError(f"Unknown weekday: {day}")
        normalized.add(name)
    return [day for day in WEEKDAYS if day in normalized]


def validate_email(email: Optional[str]) -> Optional[str]:
    """
    Validate email format.

    Args:
        email: Email address string

    Returns:
        Lowercase email address

    Raises:
        ValueError: If email format is invalid
    """
    if not email:
        return email

    email = email.strip().lower()

    # Basic email validation pattern
    email_pattern = r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$"

    if not re.match(email_pattern, email):
        raise ValueError("Invalid email format")

    return email
