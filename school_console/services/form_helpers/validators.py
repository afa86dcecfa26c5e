# /school_console/services/form_helpers/validators.py

"""
Validator factories for form leaves.

A validator takes the leaf's current value and returns `None` when the value
is acceptable, or a small error dict keyed by the validator name. Only
`required` complains about an empty value; every other validator lets empty
input through so optional fields stay valid until something is typed.
"""

import re
from typing import Any, Callable, Dict, Optional, Pattern, Sequence, Union

ValidationErrors = Dict[str, Any]
Validator = Callable[[Any], Optional[ValidationErrors]]

# --- Shared patterns ---
PATTERNS: Dict[str, Pattern] = {
    "EMAIL": re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$"),
    "PHONE": re.compile(r"^[0-9]{10,11}$"),
    "ROLL_NUMBER": re.compile(r"^[A-Z0-9]+$"),
    "CLASS_NAME": re.compile(r"^[A-Z0-9]+$"),
    "SECTION": re.compile(r"^[A-Z]$"),
    "DEPARTMENT_CODE": re.compile(r"^[A-Z]{2,6}$"),
    "COURSE_CODE": re.compile(r"^[A-Z]{2,4}\d{3,4}$"),
    "ACADEMIC_YEAR": re.compile(r"^\d{4}-\d{4}$"),
    "ZIP_CODE": re.compile(r"^[0-9]{5,6}$"),
}


def is_empty_input(value: Any) -> bool:
    return value is None or (hasattr(value, "__len__") and len(value) == 0)


def _as_number(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


# --- Validator factories ---

def required() -> Validator:
    def validate(value: Any) -> Optional[ValidationErrors]:
        if is_empty_input(value) or (isinstance(value, str) and not value.strip()):
            return {"required": True}
        return None
    return validate


def min_value(minimum: float) -> Validator:
    def validate(value: Any) -> Optional[ValidationErrors]:
        number = None if is_empty_input(value) else _as_number(value)
        if number is not None and number < minimum:
            return {"min": {"min": minimum, "actual": value}}
        return None
    return validate


def max_value(maximum: Union[float, Callable[[], float]]) -> Validator:
    """`maximum` may be a callable, evaluated on every check (e.g. the current year)."""
    def validate(value: Any) -> Optional[ValidationErrors]:
        number = None if is_empty_input(value) else _as_number(value)
        bound = maximum() if callable(maximum) else maximum
        if number is not None and number > bound:
            return {"max": {"max": bound, "actual": value}}
        return None
    return validate


def min_length(length: int) -> Validator:
    def validate(value: Any) -> Optional[ValidationErrors]:
        if is_empty_input(value) or not hasattr(value, "__len__"):
            return None
        if len(value) < length:
            return {"minlength": {"requiredLength": length, "actualLength": len(value)}}
        return None
    return validate


def max_length(length: int) -> Validator:
    def validate(value: Any) -> Optional[ValidationErrors]:
        if value is None or not hasattr(value, "__len__"):
            return None
        if len(value) > length:
            return {"maxlength": {"requiredLength": length, "actualLength": len(value)}}
        return None
    return validate


def pattern(regex: Union[str, Pattern], label: str = "value") -> Validator:
    compiled = re.compile(regex) if isinstance(regex, str) else regex

    def validate(value: Any) -> Optional[ValidationErrors]:
        if is_empty_input(value):
            return None
        if compiled.fullmatch(str(value)) is None:
            return {"pattern": {"requiredPattern": compiled.pattern, "actualValue": value, "label": label}}
        return None
    return validate


def one_of(choices: Sequence[Any]) -> Validator:
    allowed = tuple(choices)

    def validate(value: Any) -> Optional[ValidationErrors]:
        if is_empty_input(value) or value in allowed:
            return None
        return {"oneOf": {"allowed": list(allowed), "actual": value}}
    return validate


def email() -> Validator:
    email_pattern = PATTERNS["EMAIL"]

    def validate(value: Any) -> Optional[ValidationErrors]:
        if is_empty_input(value):
            return None
        if email_pattern.fullmatch(str(value)) is None:
            return {"email": True}
        return None
    return validate


# --- Messages ---

def error_message(key: str, detail: Any = None, label: str = "field") -> str:
    """Human-readable text for one entry of a leaf's error dict."""
    if key == "required":
        return "This field is required"
    if key == "email":
        return "Please enter a valid email address"
    if key == "minlength":
        return f"Minimum {detail['requiredLength']} characters required"
    if key == "maxlength":
        return f"Maximum {detail['requiredLength']} characters allowed"
    if key == "min":
        return f"Value must be at least {detail['min']:g}"
    if key == "max":
        return f"Value must be at most {detail['max']:g}"
    if key == "oneOf":
        return "Please select a valid option"
    if key == "pattern":
        return f"Invalid {detail.get('label') or label} format"
    return f"Invalid {label}"
