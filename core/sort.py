import locale
from datetime import datetime
from functools import cmp_to_key
from typing import Any

from core.options import SortConfig, SortDirection
from db.models import Listing


def _sign(value: float) -> int:
    return (value > 0) - (value < 0)


def compare_values(a: Any, b: Any) -> int:
    """Numbers and timestamps compare by subtraction, anything else by locale collation."""
    if isinstance(a, datetime) and isinstance(b, datetime):
        return _sign((a - b).total_seconds())
    if isinstance(a, (int, float)) and isinstance(b, (int, float)):
        return _sign(a - b)
    return _sign(locale.strcoll(str(a), str(b)))


def sort_listings(listings: list[Listing], config: SortConfig) -> list[Listing]:
    """Return a new list ordered by one field. Ties keep their input order."""
    attribute = config.field.attribute
    descending = config.direction is SortDirection.DESC

    def compare(a: Listing, b: Listing) -> int:
        result = compare_values(getattr(a, attribute), getattr(b, attribute))
        return -result if descending else result

    # sorted() is stable, and negating the comparator keeps ties stable both ways.
    return sorted(listings, key=cmp_to_key(compare))
