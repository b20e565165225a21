"""Priority scoring for normalized listings.

Ten additive factors, each an integer. The tier boundaries keep the total
within 0..133 so no clamping is applied. Age is computed from an explicit
``current_year`` so scores never depend on the system clock.
"""

from dataclasses import dataclass, field
from enum import Enum

from db.models import DealerType, Listing, MileageRating, QualityTier

MAX_SCORE = 133
MIN_SCORE = 0

TOP_PICK_MIN_SCORE = 80
GOOD_BUY_MIN_SCORE = 65


class ScoreFactor(Enum):
    SINGLE_OWNER = "single_owner"
    CLEAN_TITLE = "clean_title"
    FRESHNESS = "listing_freshness"
    MILES_PER_YEAR = "miles_per_year"
    PRICE_VS_REFERENCE = "price_vs_reference"
    PRICE_DROP = "price_drop"
    MODEL_PREFERENCE = "model_preference"
    PHOTO_COVERAGE = "photo_coverage"
    HIGHWAY_EFFICIENCY = "highway_efficiency"
    DEALER_TYPE = "dealer_type"


FACTOR_LABELS = {
    ScoreFactor.SINGLE_OWNER: "Single owner",
    ScoreFactor.CLEAN_TITLE: "Clean title",
    ScoreFactor.FRESHNESS: "Fresh listing",
    ScoreFactor.MILES_PER_YEAR: "Low miles per year",
    ScoreFactor.PRICE_VS_REFERENCE: "Priced below MSRP",
    ScoreFactor.PRICE_DROP: "Recent price change",
    ScoreFactor.MODEL_PREFERENCE: "Model preference",
    ScoreFactor.PHOTO_COVERAGE: "Photo coverage",
    ScoreFactor.HIGHWAY_EFFICIENCY: "Highway efficiency",
    ScoreFactor.DEALER_TYPE: "Franchise dealer",
}


@dataclass(frozen=True)
class ModelPreferences:
    primary: tuple[str, ...] = ("RAV4", "CR-V")
    secondary: tuple[str, ...] = (
        "C-HR",
        "HR-V",
        "Highlander",
        "4Runner",
        "Venza",
        "Pilot",
        "Camry",
        "Accord",
    )

    def tier(self, model: str) -> int:
        """Return 1 or 2 for a preferred model, 0 otherwise."""
        name = model.strip().lower()
        if any(m.lower() in name for m in self.primary):
            return 1
        if any(m.lower() in name for m in self.secondary):
            return 2
        return 0


DEFAULT_PREFERENCES = ModelPreferences()


@dataclass
class ScoreBreakdown:
    total: int
    factors: dict[ScoreFactor, int] = field(default_factory=dict)

    def as_dict(self) -> dict[str, int]:
        return {factor.value: points for factor, points in self.factors.items()}


def vehicle_age(year: int, current_year: int) -> int:
    return max(current_year - year, 1)


def _freshness_points(days_on_market: int) -> int:
    if days_on_market < 7:
        return 15
    if days_on_market < 14:
        return 10
    if days_on_market < 30:
        return 5
    return 0


def _miles_per_year_points(mileage: int, year: int, current_year: int) -> int:
    # mileage / age < N  <=>  mileage < N * age, keeps everything integral
    age = vehicle_age(year, current_year)
    if mileage < 8000 * age:
        return 25
    if mileage < 12000 * age:
        return 15
    if mileage < 15000 * age:
        return 5
    return 0


def _price_vs_reference_points(price: int, reference_price: int | None) -> int:
    if not reference_price or reference_price <= 0:
        return 0
    below = (reference_price - price) * 100
    if below > 15 * reference_price:
        return 15
    if below > 10 * reference_price:
        return 10
    if below > 5 * reference_price:
        return 5
    return 0


def _price_drop_points(price_change_percent: float | None) -> int:
    if price_change_percent is None:
        return 0
    change = abs(price_change_percent)
    if change > 10:
        return 15
    if change > 5:
        return 10
    if change > 1:
        return 5
    return 0


def _model_points(model: str, preferences: ModelPreferences) -> int:
    tier = preferences.tier(model)
    if tier == 1:
        return 10
    if tier == 2:
        return 8
    return 5


def _photo_points(image_count: int) -> int:
    if image_count > 20:
        return 5
    if image_count < 5:
        return -5
    return 0


def score(
    listing: Listing,
    current_year: int,
    preferences: ModelPreferences = DEFAULT_PREFERENCES,
) -> ScoreBreakdown:
    """Score one listing. Pure: identical input always gives identical output."""
    factors = {
        ScoreFactor.SINGLE_OWNER: 20 if listing.owner_count == 1 else 0,
        ScoreFactor.CLEAN_TITLE: 15 if listing.title_clean else 0,
        ScoreFactor.FRESHNESS: _freshness_points(listing.days_on_market),
        ScoreFactor.MILES_PER_YEAR: _miles_per_year_points(
            listing.mileage, listing.year, current_year
        ),
        ScoreFactor.PRICE_VS_REFERENCE: _price_vs_reference_points(
            listing.price, listing.reference_price
        ),
        ScoreFactor.PRICE_DROP: _price_drop_points(listing.price_change_percent),
        ScoreFactor.MODEL_PREFERENCE: _model_points(listing.model, preferences),
        ScoreFactor.PHOTO_COVERAGE: _photo_points(len(listing.images_url)),
        ScoreFactor.HIGHWAY_EFFICIENCY: (
            5 if listing.highway_mpg is not None and listing.highway_mpg > 35 else 0
        ),
        ScoreFactor.DEALER_TYPE: 3 if listing.dealer_type is DealerType.FRANCHISE else 0,
    }
    return ScoreBreakdown(total=sum(factors.values()), factors=factors)


def explain(breakdown: ScoreBreakdown) -> list[str]:
    """Human-readable lines for each non-zero factor, in table order."""
    lines = []
    for factor in ScoreFactor:
        points = breakdown.factors.get(factor, 0)
        if points:
            lines.append(f"{FACTOR_LABELS[factor]} ({points:+d})")
    return lines


def mileage_rating(mileage: int, year: int, current_year: int) -> MileageRating:
    age = vehicle_age(year, current_year)
    if mileage < 10000 * age:
        return MileageRating.EXCELLENT
    if mileage < 15000 * age:
        return MileageRating.GOOD
    return MileageRating.ACCEPTABLE


def quality_tier(priority_score: int) -> QualityTier:
    if priority_score >= TOP_PICK_MIN_SCORE:
        return QualityTier.TOP_PICK
    if priority_score >= GOOD_BUY_MIN_SCORE:
        return QualityTier.GOOD_BUY
    return QualityTier.CAUTION
