from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date
from typing import Optional, Union

from ..core.constants import PLACEHOLDER_PREFIX
from ..core.exceptions import ValidationError
from .datetime_utils import parse_iso_date

_DURATION_RE = re.compile(r"^\d{2,7}:[0-5]\d:[0-5]\d$")
_PLACEHOLDER_RE = re.compile(rf"^{PLACEHOLDER_PREFIX}_(\d+)_(\d{{4}}-\d{{2}}-\d{{2}})$")


@dataclass(frozen=True)
class PlaceholderId:
    """A month-view row with no stored record: `absent_<employee>_<YYYY-MM-DD>`."""

    employee_id: int
    calendar_date: date

    def __str__(self) -> str:
        return placeholder_id(self.employee_id, self.calendar_date)


def placeholder_id(employee_id: int, day: date) -> str:
    return f"{PLACEHOLDER_PREFIX}_{employee_id}_{day.isoformat()}"


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def require_int(value, field_name: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise ValidationError(f"{field_name} must be an integer") from exc


def parse_record_id(value: Union[str, int]) -> Union[int, PlaceholderId]:
    """Parse a stored record id or a placeholder id from the month view."""
    if isinstance(value, int):
        return value
    text = require_non_empty(value, "record_id")
    if text.isdigit():
        return int(text)
    match = _PLACEHOLDER_RE.match(text)
    if not match:
        raise ValidationError(f"Invalid record id: {text!r}")
    return PlaceholderId(employee_id=int(match.group(1)), calendar_date=parse_iso_date(match.group(2)))


def require_duration(value: str, field_name: str) -> str:
    text = require_non_empty(value, field_name)
    if not _DURATION_RE.match(text):
        raise ValidationError(f"{field_name} must be HH:MM:SS")
    return text
