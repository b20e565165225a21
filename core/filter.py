from core.options import NumericRange, VehicleFilters
from core.scoring import quality_tier
from db.models import Listing

MAX_CLEAN_HISTORY_OWNERS = 2


def _in_range(value: float, value_range: NumericRange | None) -> bool:
    if value_range is None or not value_range.is_configured:
        return True
    return value_range.contains(value)


def _in_set(value: str, allowed: frozenset[str]) -> bool:
    if not allowed:
        return True
    return value.casefold() in {item.casefold() for item in allowed}


def matches_price_filter(listing: Listing, filters: VehicleFilters) -> bool:
    return _in_range(listing.price, filters.price_range)


def matches_mileage_filter(listing: Listing, filters: VehicleFilters) -> bool:
    return _in_range(listing.mileage, filters.mileage_range)


def matches_year_filter(listing: Listing, filters: VehicleFilters) -> bool:
    return _in_range(listing.year, filters.year_range)


def matches_score_filter(listing: Listing, filters: VehicleFilters) -> bool:
    return _in_range(listing.priority_score, filters.score_range)


def matches_makes(listing: Listing, filters: VehicleFilters) -> bool:
    return _in_set(listing.make, filters.makes)


def matches_models(listing: Listing, filters: VehicleFilters) -> bool:
    return _in_set(listing.model, filters.models)


def matches_mileage_rating(listing: Listing, filters: VehicleFilters) -> bool:
    if not filters.mileage_ratings:
        return True
    return listing.mileage_rating in filters.mileage_ratings


def matches_quality_tier(listing: Listing, filters: VehicleFilters) -> bool:
    if not filters.quality_tiers:
        return True
    return quality_tier(listing.priority_score) in filters.quality_tiers


def has_clean_history(listing: Listing) -> bool:
    return (
        listing.title_clean
        and listing.accident_count == 0
        and listing.owner_count <= MAX_CLEAN_HISTORY_OWNERS
        and not listing.is_rental
        and not listing.is_fleet
    )


def matches_clean_history(listing: Listing, filters: VehicleFilters) -> bool:
    return not filters.clean_history or has_clean_history(listing)


def matches_search(listing: Listing, filters: VehicleFilters) -> bool:
    query = filters.search_query.strip().lower()
    if not query:
        return True
    return (
        query in listing.make.lower()
        or query in listing.model.lower()
        or query in listing.vin.lower()
    )


def matches_filters(listing: Listing, filters: VehicleFilters) -> bool:
    return (
        matches_price_filter(listing, filters)
        and matches_mileage_filter(listing, filters)
        and matches_year_filter(listing, filters)
        and matches_score_filter(listing, filters)
        and matches_makes(listing, filters)
        and matches_models(listing, filters)
        and matches_mileage_rating(listing, filters)
        and matches_quality_tier(listing, filters)
        and matches_clean_history(listing, filters)
        and matches_search(listing, filters)
    )


def apply_filters(listings: list[Listing], filters: VehicleFilters) -> list[Listing]:
    return [item for item in listings if matches_filters(item, filters)]


def count_active_filters(filters: VehicleFilters) -> int:
    """Number of configured filter dimensions, for the filter badge."""
    ranges = (filters.price_range, filters.mileage_range, filters.year_range, filters.score_range)
    count = sum(1 for r in ranges if r is not None and r.is_configured)
    count += bool(filters.makes)
    count += bool(filters.models)
    count += bool(filters.mileage_ratings)
    count += bool(filters.quality_tiers)
    count += bool(filters.clean_history)
    count += bool(filters.zip_code)
    count += bool(filters.search_query.strip())
    return count


def filter_options(listings: list[Listing]) -> dict[str, list]:
    """Distinct makes, models and years for filter dropdowns."""
    return {
        "makes": sorted({item.make for item in listings}),
        "models": sorted({item.model for item in listings}),
        "years": sorted({item.year for item in listings}, reverse=True),
    }
