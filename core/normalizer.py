import json
import logging
import math
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from core.scoring import (
    DEFAULT_PREFERENCES,
    MAX_SCORE,
    MIN_SCORE,
    ModelPreferences,
    mileage_rating,
    score,
)
from db.models import DealerType, Listing

log = logging.getLogger(__name__)

@dataclass(frozen=True)
class RejectedRecord:
    index: int
    vin: str | None
    reason: str


@dataclass
class NormalizeResult:
    listings: list[Listing] = field(default_factory=list)
    rejected: list[RejectedRecord] = field(default_factory=list)
    duplicates: int = 0

    @property
    def rejected_count(self) -> int:
        return len(self.rejected)


class _Rejected(Exception):
    pass


def _pick(raw: dict, *keys: str) -> Any:
    for key in keys:
        value = raw.get(key)
        if value is not None and value != "":
            return value
    return None


def _to_int(value: Any) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return round(value) if math.isfinite(value) else None
    if isinstance(value, str):
        cleaned = value.strip().replace(",", "").replace("$", "")
        try:
            number = float(cleaned)
        except ValueError:
            return None
        return round(number) if math.isfinite(number) else None
    return None


def _to_float(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            return None
    elif isinstance(value, str):
        try:
            number = float(value.strip().replace(",", "").replace("%", ""))
        except ValueError:
            return None
    else:
        return None
    # NaN and infinity are valid JSON to httpx but not usable numbers.
    return number if math.isfinite(number) else None


def _to_bool(value: Any, default: bool = False) -> bool:
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        return value.strip().lower() in ("true", "1", "yes", "y")
    return default


def _to_datetime(value: Any) -> datetime | None:
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value.strip():
        try:
            parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError:
            return None
    else:
        return None
    return _naive_utc(parsed)


def _naive_utc(value: datetime) -> datetime:
    if value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def _to_images(value: Any) -> list[str]:
    if isinstance(value, str):
        try:
            value = json.loads(value)
        except json.JSONDecodeError:
            return []
    if isinstance(value, (list, tuple)):
        return [str(url) for url in value if url]
    return []


def _fill(flat: dict, key: str, value: Any) -> None:
    if flat.get(key) is None:
        flat[key] = value


def _flatten(raw: dict) -> dict:
    """Merge Marketcheck-style nested build/dealer/media objects into one flat dict."""
    flat = dict(raw)
    build = raw.get("build")
    if isinstance(build, dict):
        for key in ("year", "make", "model", "trim", "body_type", "highway_mpg"):
            _fill(flat, key, build.get(key))
    dealer = raw.get("dealer")
    if isinstance(dealer, dict):
        _fill(flat, "dealer_name", dealer.get("name"))
        _fill(flat, "dealer_city", dealer.get("city"))
        _fill(flat, "dealer_state", dealer.get("state"))
        _fill(flat, "dealer_type", dealer.get("dealer_type"))
    media = raw.get("media")
    if isinstance(media, dict):
        _fill(flat, "photo_links", media.get("photo_links"))
    return flat


def _location(raw: dict) -> str:
    location = _pick(raw, "current_location", "location")
    if isinstance(location, str):
        return location
    city = _pick(raw, "city", "dealer_city")
    state = _pick(raw, "state", "dealer_state")
    if city and state:
        return f"{city}, {state}"
    return "Location not available"


def _title_clean(raw: dict) -> bool:
    if raw.get("title_clean") is not None:
        return _to_bool(raw["title_clean"])
    if raw.get("carfax_clean_title") is not None:
        return _to_bool(raw["carfax_clean_title"])
    status = raw.get("title_status")
    if isinstance(status, str):
        return status.strip().lower() == "clean"
    return False


def _owner_count(raw: dict) -> int:
    owners = _to_int(raw.get("owner_count"))
    if owners is not None:
        return max(owners, 1)
    if raw.get("carfax_1_owner") is not None:
        return 1 if _to_bool(raw["carfax_1_owner"]) else 2
    return 1


def _dealer_type(value: Any) -> DealerType:
    if isinstance(value, str):
        try:
            return DealerType(value.strip().lower())
        except ValueError:
            return DealerType.UNKNOWN
    return DealerType.UNKNOWN


def _supplied_score(value: Any) -> int | None:
    if isinstance(value, int) and not isinstance(value, bool):
        if MIN_SCORE <= value <= MAX_SCORE:
            return value
    return None


def _build(
    raw: Any,
    current_year: int,
    now: datetime,
    preferences: ModelPreferences,
) -> Listing:
    if not isinstance(raw, dict):
        raise _Rejected(f"not a record: {type(raw).__name__}")
    raw = _flatten(raw)

    vin = raw.get("vin")
    make = raw.get("make")
    model = raw.get("model")
    if not isinstance(vin, str) or not vin.strip():
        raise _Rejected("missing vin")
    if not isinstance(make, str) or not make.strip():
        raise _Rejected("missing make")
    if not isinstance(model, str) or not model.strip():
        raise _Rejected("missing model")
    year = _to_int(raw.get("year"))
    if year is None:
        raise _Rejected("missing year")
    price = _to_int(raw.get("price"))
    if price is None:
        raise _Rejected("missing price")

    first_seen = _to_datetime(_pick(raw, "first_seen_at", "first_seen_at_date", "created_at"))
    last_updated = _to_datetime(_pick(raw, "last_updated_at", "last_seen_at_date", "updated_at"))

    days_on_market = _to_int(_pick(raw, "days_on_market", "dom_active", "dom"))
    if days_on_market is None:
        days_on_market = (now - first_seen).days if first_seen else 0

    rating = _to_int(raw.get("user_rating"))

    listing = Listing(
        vin=vin.strip().upper(),
        make=make.strip(),
        model=model.strip(),
        year=year,
        price=price,
        mileage=max(_to_int(_pick(raw, "mileage", "miles")) or 0, 0),
        reference_price=_to_int(_pick(raw, "reference_price", "msrp")),
        price_change_percent=_to_float(raw.get("price_change_percent")),
        title_clean=_title_clean(raw),
        owner_count=_owner_count(raw),
        accident_count=max(_to_int(raw.get("accident_count")) or 0, 0),
        is_rental=_to_bool(raw.get("is_rental")),
        is_fleet=_to_bool(raw.get("is_fleet")),
        days_on_market=max(days_on_market, 0),
        first_seen_at=first_seen or now,
        last_updated_at=last_updated or first_seen or now,
        current_location=_location(raw),
        distance_miles=_to_float(_pick(raw, "distance_miles", "dist", "distance")) or 0,
        dealer_name=_pick(raw, "dealer_name") or "Dealer not listed",
        dealer_type=_dealer_type(raw.get("dealer_type")),
        trim=_pick(raw, "trim"),
        body_type=_pick(raw, "body_type"),
        highway_mpg=_to_int(raw.get("highway_mpg")),
        images_url=_to_images(_pick(raw, "images_url", "photo_links", "images")),
        source_url=_pick(raw, "source_url", "vdp_url", "url"),
        reviewed_by_user=_to_bool(raw.get("reviewed_by_user")),
        user_rating=rating if rating is not None and 1 <= rating <= 5 else None,
        user_notes=_pick(raw, "user_notes"),
    )

    breakdown = score(listing, current_year, preferences)
    supplied = _supplied_score(raw.get("priority_score"))
    listing.priority_score = breakdown.total if supplied is None else supplied
    listing.score_factors = breakdown.as_dict()
    listing.mileage_rating = mileage_rating(listing.mileage, listing.year, current_year)
    return listing


def normalize(
    raw: Any,
    current_year: int,
    now: datetime | None = None,
    preferences: ModelPreferences = DEFAULT_PREFERENCES,
) -> Listing | None:
    """Fill defaults on one raw record. Returns None when an identity field is missing."""
    try:
        return _build(raw, current_year, _naive_utc(now or datetime.utcnow()), preferences)
    except _Rejected as e:
        log.debug(f"Rejected record: {e}")
        return None


def normalize_many(
    raw_listings: list[Any],
    current_year: int,
    now: datetime | None = None,
    preferences: ModelPreferences = DEFAULT_PREFERENCES,
) -> NormalizeResult:
    now = _naive_utc(now or datetime.utcnow())
    result = NormalizeResult()
    seen_vins: set[str] = set()

    for index, raw in enumerate(raw_listings):
        try:
            listing = _build(raw, current_year, now, preferences)
        except _Rejected as e:
            vin = raw.get("vin") if isinstance(raw, dict) else None
            result.rejected.append(
                RejectedRecord(index=index, vin=vin if isinstance(vin, str) else None, reason=str(e))
            )
            log.debug(f"Rejected record #{index}: {e}")
            continue

        if listing.vin in seen_vins:
            result.duplicates += 1
            continue
        seen_vins.add(listing.vin)
        result.listings.append(listing)

    if result.rejected or result.duplicates:
        log.info(
            f"Normalized {len(result.listings)} listings "
            f"({result.rejected_count} rejected, {result.duplicates} duplicates)"
        )
    return result
