"""Query-string encoding of filter, sort and pagination state for shareable links.

Keys: minPrice maxPrice minMileage maxMileage minYear maxYear minScore
maxScore makes models mileageRating qualityTier cleanHistory q zip radius
sortBy order page pageSize. A missing key means the dimension is
unconfigured. Ranges are emitted and read back only as a min/max pair.
"""

import logging
import math
from collections.abc import Mapping
from enum import Enum
from urllib.parse import parse_qsl, urlencode

from config import settings
from core.options import (
    NumericRange,
    PaginationConfig,
    SortConfig,
    SortDirection,
    SortField,
    VehicleFilters,
    VehicleQueryOptions,
)
from core.paginator import clamp_pagination
from db.models import MileageRating, QualityTier

log = logging.getLogger(__name__)

RANGE_KEYS = {
    "price_range": ("minPrice", "maxPrice"),
    "mileage_range": ("minMileage", "maxMileage"),
    "year_range": ("minYear", "maxYear"),
    "score_range": ("minScore", "maxScore"),
}

DEFAULT_SORT = SortConfig()


def default_pagination() -> PaginationConfig:
    return PaginationConfig(page_size=settings.default_page_size)


def _format_number(value: float) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _parse_number(value: str | None) -> int | float | None:
    if value is None:
        return None
    value = value.strip()
    try:
        return int(value)
    except ValueError:
        pass
    try:
        number = float(value)
    except ValueError:
        number = math.nan
    if not math.isfinite(number):
        log.debug(f"Ignoring non-numeric query value {value!r}")
        return None
    return number


def _parse_int(value: str | None) -> int | None:
    number = _parse_number(value)
    return int(number) if number is not None else None


def _split_list(value: str | None) -> frozenset[str]:
    if not value:
        return frozenset()
    return frozenset(part.strip() for part in value.split(",") if part.strip())


def _split_enums(value: str | None, enum_cls: type[Enum]) -> frozenset:
    members = set()
    for part in _split_list(value):
        try:
            members.add(enum_cls(part.lower()))
        except ValueError:
            log.debug(f"Ignoring unknown {enum_cls.__name__} {part!r}")
    return frozenset(members)


def filters_to_query_params(filters: VehicleFilters) -> dict[str, str]:
    params: dict[str, str] = {}
    for attr, (min_key, max_key) in RANGE_KEYS.items():
        value_range: NumericRange | None = getattr(filters, attr)
        if value_range is not None and value_range.is_configured:
            params[min_key] = _format_number(value_range.min)
            params[max_key] = _format_number(value_range.max)
    if filters.makes:
        params["makes"] = ",".join(sorted(filters.makes))
    if filters.models:
        params["models"] = ",".join(sorted(filters.models))
    if filters.mileage_ratings:
        params["mileageRating"] = ",".join(sorted(r.value for r in filters.mileage_ratings))
    if filters.quality_tiers:
        params["qualityTier"] = ",".join(sorted(t.value for t in filters.quality_tiers))
    if filters.clean_history:
        params["cleanHistory"] = "true"
    if filters.search_query.strip():
        params["q"] = filters.search_query.strip()
    if filters.zip_code:
        params["zip"] = filters.zip_code
    if filters.radius is not None:
        params["radius"] = str(filters.radius)
    return params


def query_params_to_filters(params: Mapping[str, str]) -> VehicleFilters:
    ranges: dict[str, NumericRange] = {}
    for attr, (min_key, max_key) in RANGE_KEYS.items():
        low = _parse_number(params.get(min_key))
        high = _parse_number(params.get(max_key))
        if low is not None and high is not None:
            ranges[attr] = NumericRange(min=low, max=high)

    return VehicleFilters(
        **ranges,
        makes=_split_list(params.get("makes")),
        models=_split_list(params.get("models")),
        mileage_ratings=_split_enums(params.get("mileageRating"), MileageRating),
        quality_tiers=_split_enums(params.get("qualityTier"), QualityTier),
        clean_history=(params.get("cleanHistory") or "").strip().lower() == "true",
        zip_code=params.get("zip") or None,
        radius=_parse_int(params.get("radius")),
        search_query=(params.get("q") or "").strip(),
    )


def options_to_query_params(options: VehicleQueryOptions) -> dict[str, str]:
    """Full view state; default sort and pagination values are left out."""
    params = filters_to_query_params(options.filters)
    defaults = default_pagination()
    if options.sort.field is not DEFAULT_SORT.field:
        params["sortBy"] = options.sort.field.value
    if options.sort.direction is not DEFAULT_SORT.direction:
        params["order"] = options.sort.direction.value
    if options.pagination.page != defaults.page:
        params["page"] = str(options.pagination.page)
    if options.pagination.page_size != defaults.page_size:
        params["pageSize"] = str(options.pagination.page_size)
    return params


def query_params_to_options(
    params: Mapping[str, str], max_page_size: int | None = None
) -> VehicleQueryOptions:
    try:
        field = SortField(params.get("sortBy", DEFAULT_SORT.field.value))
    except ValueError:
        field = DEFAULT_SORT.field
    try:
        direction = SortDirection(params.get("order", DEFAULT_SORT.direction.value))
    except ValueError:
        direction = DEFAULT_SORT.direction

    defaults = default_pagination()
    page = _parse_int(params.get("page"))
    page_size = _parse_int(params.get("pageSize"))
    pagination = clamp_pagination(
        page if page is not None else defaults.page,
        page_size if page_size is not None else defaults.page_size,
        max_page_size,
    )

    return VehicleQueryOptions(
        filters=query_params_to_filters(params),
        sort=SortConfig(field=field, direction=direction),
        pagination=pagination,
    )


def build_query_string(options: VehicleQueryOptions) -> str:
    return urlencode(options_to_query_params(options), safe=",")


def parse_query_string(query: str) -> dict[str, str]:
    # Last occurrence of a repeated key wins.
    return dict(parse_qsl(query.lstrip("?"), keep_blank_values=False))
