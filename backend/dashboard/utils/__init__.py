from .months import MONTH_NAMES, month_name, parse_month
from .timestamp import parse_timestamp

__all__ = ["MONTH_NAMES", "month_name", "parse_month", "parse_timestamp"]
