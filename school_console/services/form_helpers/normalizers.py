# /school_console/services/form_helpers/normalizers.py

"""Value normalizers applied when a form is flattened for submission."""

from datetime import date, datetime
from typing import Any


def upper(value: Any) -> Any:
    return value.strip().upper() if isinstance(value, str) else value


def strip(value: Any) -> Any:
    return value.strip() if isinstance(value, str) else value


def iso_date(value: Any) -> Any:
    """Renders dates as YYYY-MM-DD; anything else is passed through untouched."""
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, str) and len(value) >= 10:
        try:
            return date.fromisoformat(value[:10]).isoformat()
        except ValueError:
            return value
    return value
