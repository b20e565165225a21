"""Vehicle query orchestration.

Fetch raw records from the first source that delivers, else the built-in
fallback set, then normalize, filter, sort and paginate in that order.
Nothing is cached between calls.
"""

import logging
from collections.abc import Sequence
from datetime import date, datetime
from typing import Any

from config import settings
from core.fallback_data import FALLBACK_LISTINGS
from core.filter import apply_filters, count_active_filters, filter_options
from core.normalizer import normalize_many
from core.options import PaginationConfig, VehicleQueryOptions, VehicleQueryResult
from core.paginator import paginate, validate_pagination
from core.scoring import ModelPreferences
from core.sort import sort_listings
from core.sources import FeedSource, ListingSource, StoreSource
from db.models import Listing

log = logging.getLogger(__name__)

FALLBACK_SOURCE_NAME = "fallback"


def default_sources() -> list[ListingSource]:
    return [
        FeedSource(
            settings.listings_feed_url,
            headers=settings.feed_headers,
            limit=settings.feed_limit,
            timeout=settings.feed_timeout_seconds,
        ),
        StoreSource(settings.database_path, limit=settings.feed_limit),
    ]


def resolve_current_year(current_year: int | None = None) -> int:
    return current_year or settings.current_year or date.today().year


def preferences_from_settings() -> ModelPreferences:
    return ModelPreferences(
        primary=tuple(settings.primary_models),
        secondary=tuple(settings.secondary_models),
    )


async def load_raw_listings(
    sources: Sequence[ListingSource] | None = None,
    fallback: list[Any] = FALLBACK_LISTINGS,
) -> tuple[str, list[Any]]:
    """Try each source once, in order. Returns (source name, records)."""
    if sources is None:
        sources = default_sources()

    for source in sources:
        try:
            records = await source.fetch()
        except Exception as e:
            log.warning(f"Listing source '{source.name}' unavailable: {e}")
            continue
        return source.name, records

    log.warning(f"All listing sources unavailable, serving {len(fallback)} fallback listings")
    return FALLBACK_SOURCE_NAME, list(fallback)


def process_listings(
    listings: list[Listing], options: VehicleQueryOptions
) -> VehicleQueryResult:
    """Filter, sort and paginate already-normalized listings."""
    filtered = apply_filters(listings, options.filters)
    ordered = sort_listings(filtered, options.sort)
    page = paginate(ordered, options.pagination)
    return VehicleQueryResult(
        data=page.data,
        total=page.total,
        page=page.page,
        page_size=page.page_size,
        total_pages=page.total_pages,
        has_next=page.has_next,
        has_previous=page.has_previous,
        active_filters=count_active_filters(options.filters),
    )


async def _load_listings(
    sources: Sequence[ListingSource] | None,
    fallback: list[Any],
    current_year: int | None,
    now: datetime | None,
):
    source_name, raw = await load_raw_listings(sources, fallback)
    normalized = normalize_many(
        raw,
        resolve_current_year(current_year),
        now=now,
        preferences=preferences_from_settings(),
    )
    return source_name, normalized


async def fetch_vehicles(
    options: VehicleQueryOptions | None = None,
    sources: Sequence[ListingSource] | None = None,
    fallback: list[Any] = FALLBACK_LISTINGS,
    current_year: int | None = None,
    now: datetime | None = None,
) -> VehicleQueryResult:
    """Run one query. Only a malformed PaginationConfig raises (InvalidPagination)."""
    options = options or VehicleQueryOptions(
        pagination=PaginationConfig(page_size=settings.default_page_size)
    )
    validate_pagination(options.pagination)

    source_name, normalized = await _load_listings(sources, fallback, current_year, now)
    result = process_listings(normalized.listings, options)
    result.source = source_name
    result.rejected = normalized.rejected_count

    log.info(
        f"Query served from {source_name}: {result.total} matches, "
        f"page {result.page}/{result.total_pages}, {result.rejected} rejected"
    )
    return result


async def get_vehicle_by_vin(
    vin: str,
    sources: Sequence[ListingSource] | None = None,
    fallback: list[Any] = FALLBACK_LISTINGS,
    current_year: int | None = None,
) -> Listing | None:
    wanted = vin.strip().upper()
    _, normalized = await _load_listings(sources, fallback, current_year, None)
    for listing in normalized.listings:
        if listing.vin == wanted:
            return listing
    return None


async def get_filter_options(
    sources: Sequence[ListingSource] | None = None,
    fallback: list[Any] = FALLBACK_LISTINGS,
) -> dict[str, list]:
    _, normalized = await _load_listings(sources, fallback, None, None)
    return filter_options(normalized.listings)
