from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class MileageRating(Enum):
    EXCELLENT = "excellent"
    GOOD = "good"
    ACCEPTABLE = "acceptable"


class DealerType(Enum):
    FRANCHISE = "franchise"
    INDEPENDENT = "independent"
    UNKNOWN = "unknown"


class QualityTier(Enum):
    TOP_PICK = "top_pick"
    GOOD_BUY = "good_buy"
    CAUTION = "caution"


@dataclass
class Listing:
    # Identity
    vin: str
    make: str
    model: str
    year: int

    # Commercial
    price: int
    mileage: int
    reference_price: int | None = None
    price_change_percent: float | None = None

    # Quality signals
    title_clean: bool = False
    owner_count: int = 1
    accident_count: int = 0
    is_rental: bool = False
    is_fleet: bool = False

    # Market timing
    days_on_market: int = 0
    first_seen_at: datetime = field(default_factory=datetime.utcnow)
    last_updated_at: datetime = field(default_factory=datetime.utcnow)

    # Location / dealer
    current_location: str = "Location not available"
    distance_miles: float = 0
    dealer_name: str = "Dealer not listed"
    dealer_type: DealerType = DealerType.UNKNOWN

    # Build / media
    trim: str | None = None
    body_type: str | None = None
    highway_mpg: int | None = None
    images_url: list[str] = field(default_factory=list)
    source_url: str | None = None

    # Derived
    priority_score: int = 0
    score_factors: dict[str, int] = field(default_factory=dict)
    mileage_rating: MileageRating = MileageRating.ACCEPTABLE

    # User state
    reviewed_by_user: bool = False
    user_rating: int | None = None
    user_notes: str | None = None


SCHEMA = """
CREATE TABLE IF NOT EXISTS listings (
    vin TEXT PRIMARY KEY COLLATE NOCASE,
    make TEXT NOT NULL,
    model TEXT NOT NULL,
    year INTEGER NOT NULL,
    trim TEXT,
    body_type TEXT,
    price INTEGER NOT NULL,
    mileage INTEGER,
    msrp INTEGER,
    price_change_percent REAL,
    title_clean INTEGER,
    owner_count INTEGER,
    accident_count INTEGER,
    is_rental INTEGER,
    is_fleet INTEGER,
    days_on_market INTEGER,
    dealer_name TEXT,
    dealer_type TEXT,
    current_location TEXT,
    distance_miles REAL,
    highway_mpg INTEGER,
    photo_links TEXT DEFAULT '[]',
    source_url TEXT,
    priority_score INTEGER,
    reviewed_by_user INTEGER DEFAULT 0,
    user_rating INTEGER,
    user_notes TEXT,
    first_seen_at TEXT NOT NULL,
    last_updated_at TEXT NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_listings_make_model ON listings(make, model);
CREATE INDEX IF NOT EXISTS idx_listings_last_updated ON listings(last_updated_at);
"""
