"""
Transaction Ledger Backend — Reusable Field Rules
==================================================

What:  Annotated types that carry one validation rule each, shared by the
       create and update request schemas of both entities.
Why:   A rule is written once and reused, so the create and update variants
       of a schema can only differ in which fields are required.

Rules:
    NonEmptyStr        string, at least one character
    NameStr            string, at least three characters
    OptionalStr        string or null
    NonNegativeNumber  finite number >= 0 (ints accepted, bools rejected)
    Number             any finite number
    CalendarDate       "MM/DD/YYYY" normalized to a date (YYYY-MM-DD)
"""

import re
from datetime import date, datetime
from typing import Annotated, Any, Optional

from pydantic import BeforeValidator, Field, StringConstraints
from pydantic_core import PydanticCustomError

DATE_INPUT_PATTERN = "MM/DD/YYYY"

_DATE_RE = re.compile(r"^\d{2}/\d{2}/\d{4}$")


def normalize_date(value: Any) -> Optional[date]:
    """
    Normalize a "MM/DD/YYYY" string into a calendar date.

    Empty strings and None mean "no date". Anything else that is not a real
    date written exactly as MM/DD/YYYY is rejected with the expected pattern
    and the actual value in the error context.
    """
    if value is None or value == "":
        return None
    if not isinstance(value, str):
        raise PydanticCustomError("string_type", "Input should be a valid string")
    try:
        if not _DATE_RE.match(value):
            raise ValueError(value)
        return datetime.strptime(value, "%m/%d/%Y").date()
    except ValueError:
        raise PydanticCustomError(
            "date_pattern",
            "Date must match the pattern {expected}",
            {"expected": DATE_INPUT_PATTERN, "actual": value},
        ) from None


NonEmptyStr = Annotated[str, StringConstraints(min_length=1)]
NameStr = Annotated[str, StringConstraints(min_length=3)]
OptionalStr = Optional[str]
NonNegativeNumber = Annotated[float, Field(ge=0, allow_inf_nan=False)]
Number = Annotated[float, Field(allow_inf_nan=False)]
CalendarDate = Annotated[Optional[date], BeforeValidator(normalize_date)]
