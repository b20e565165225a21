from dataclasses import dataclass, field
from enum import Enum

from db.models import Listing, MileageRating, QualityTier


@dataclass(frozen=True)
class NumericRange:
    min: float | None = None
    max: float | None = None

    @property
    def is_configured(self) -> bool:
        # A lone bound does not activate the range.
        return self.min is not None and self.max is not None

    def contains(self, value: float) -> bool:
        return self.min <= value <= self.max


@dataclass
class VehicleFilters:
    price_range: NumericRange | None = None
    mileage_range: NumericRange | None = None
    year_range: NumericRange | None = None
    score_range: NumericRange | None = None
    makes: frozenset[str] = frozenset()
    models: frozenset[str] = frozenset()
    mileage_ratings: frozenset[MileageRating] = frozenset()
    quality_tiers: frozenset[QualityTier] = frozenset()
    # Zero accidents, clean title, at most two owners, not rental or fleet.
    clean_history: bool = False
    # Geographic radius filtering is not implemented; kept for URL round-trips.
    zip_code: str | None = None
    radius: int | None = None
    search_query: str = ""


class SortField(Enum):
    PRICE = "price"
    MILEAGE = "mileage"
    YEAR = "year"
    PRIORITY_SCORE = "priorityScore"
    FIRST_SEEN_AT = "firstSeenAt"
    MAKE = "make"
    MODEL = "model"

    @property
    def attribute(self) -> str:
        return _SORT_ATTRIBUTES[self]


_SORT_ATTRIBUTES = {
    SortField.PRICE: "price",
    SortField.MILEAGE: "mileage",
    SortField.YEAR: "year",
    SortField.PRIORITY_SCORE: "priority_score",
    SortField.FIRST_SEEN_AT: "first_seen_at",
    SortField.MAKE: "make",
    SortField.MODEL: "model",
}


class SortDirection(Enum):
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class SortConfig:
    field: SortField = SortField.PRIORITY_SCORE
    direction: SortDirection = SortDirection.DESC


@dataclass(frozen=True)
class PaginationConfig:
    page: int = 1
    page_size: int = 25


@dataclass
class VehicleQueryOptions:
    filters: VehicleFilters = field(default_factory=VehicleFilters)
    sort: SortConfig = field(default_factory=SortConfig)
    pagination: PaginationConfig = field(default_factory=PaginationConfig)


@dataclass
class VehicleQueryResult:
    data: list[Listing]
    total: int
    page: int
    page_size: int
    total_pages: int
    has_next: bool = False
    has_previous: bool = False
    source: str = ""
    rejected: int = 0
    active_filters: int = 0
