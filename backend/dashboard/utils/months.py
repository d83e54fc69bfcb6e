"""Month name resolution."""
from typing import Dict
from dashboard.exceptions import InvalidMonthError

MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)

_MONTH_LOOKUP: Dict[str, int] = {}
for _number, _name in enumerate(MONTH_NAMES, start=1):
    _MONTH_LOOKUP[_name.lower()] = _number
    _MONTH_LOOKUP[_name[:3].lower()] = _number


def parse_month(value: str) -> int:
    """
    Resolve a month name to its calendar number (1-12).

    Accepts full English names and three-letter abbreviations in any case,
    e.g. "March", "mar", "MAR".

    Raises:
        InvalidMonthError: If the value does not name a month
    """
    number = _MONTH_LOOKUP.get((value or "").strip().lower())
    if number is None:
        raise InvalidMonthError()
    return number


def month_name(number: int) -> str:
    """Return the full English name for a calendar month number."""
    return MONTH_NAMES[number - 1]
