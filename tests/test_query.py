"""Query orchestration: source fallback chain, pipeline order, lookups."""

import asyncio
import logging
import math
from datetime import datetime

import httpx
import pytest

from core.errors import InvalidPagination
from core.fallback_data import FALLBACK_LISTINGS
from core.options import (
    NumericRange,
    PaginationConfig,
    SortConfig,
    SortDirection,
    SortField,
    VehicleFilters,
    VehicleQueryOptions,
)
from core.query import (
    FALLBACK_SOURCE_NAME,
    fetch_vehicles,
    get_filter_options,
    get_vehicle_by_vin,
    load_raw_listings,
)
from core.sources import CallableSource, FeedSource

CURRENT_YEAR = 2025
NOW = datetime(2025, 1, 15, 12, 0, 0)


def _source(name, records=None, error=None, calls=None):
    async def fetcher():
        if calls is not None:
            calls.append(name)
        if error is not None:
            raise error
        return records

    return CallableSource(name, fetcher)


def _run(options=None, sources=None, **kwargs):
    return asyncio.run(
        fetch_vehicles(options, sources=sources, current_year=CURRENT_YEAR, now=NOW, **kwargs)
    )


class TestSourceSelection:
    def test_primary_used_when_available(self, raw_record):
        records = [raw_record(i) for i in range(3)]
        result = _run(sources=[_source("primary", records), _source("secondary", [raw_record(9)])])

        assert result.source == "primary"
        assert result.total == 3

    def test_secondary_after_primary_failure(self, raw_record, caplog):
        sources = [
            _source("primary", error=ConnectionError("timed out")),
            _source("secondary", [raw_record(7)]),
        ]
        with caplog.at_level(logging.WARNING):
            result = _run(sources=sources)

        assert result.source == "secondary"
        assert [l.vin for l in result.data] == ["TESTVIN0000000007"]
        assert "primary" in caplog.text

    def test_fallback_when_everything_fails(self):
        sources = [
            _source("primary", error=RuntimeError("boom")),
            _source("secondary", error=OSError("disk gone")),
        ]
        result = _run(sources=sources)

        assert result.source == FALLBACK_SOURCE_NAME
        assert result.total == len(FALLBACK_LISTINGS)
        assert len(result.data) > 0

    @pytest.mark.parametrize("payload", [[], {"listings": []}, None, ["a", "b"]])
    def test_unusable_payload_falls_through(self, payload):
        result = _run(sources=[_source("primary", payload)])
        assert result.source == FALLBACK_SOURCE_NAME

    def test_each_source_tried_once_in_order(self, raw_record):
        calls = []
        sources = [
            _source("primary", error=RuntimeError("down"), calls=calls),
            _source("secondary", [raw_record()], calls=calls),
            _source("tertiary", [raw_record()], calls=calls),
        ]
        asyncio.run(load_raw_listings(sources))
        assert calls == ["primary", "secondary"]

    def test_custom_fallback(self, raw_record):
        result = _run(sources=[], fallback=[raw_record(1), raw_record(2)])
        assert result.source == FALLBACK_SOURCE_NAME
        assert result.total == 2


class TestPipeline:
    def test_filter_sort_then_paginate(self, raw_record):
        records = [raw_record(i) for i in range(10)]  # prices 20000..29000
        options = VehicleQueryOptions(
            filters=VehicleFilters(price_range=NumericRange(21000, 27000)),
            sort=SortConfig(SortField.PRICE, SortDirection.DESC),
            pagination=PaginationConfig(page=2, page_size=3),
        )
        result = _run(options, sources=[_source("primary", records)])

        assert [l.price for l in result.data] == [24000, 23000, 22000]
        assert result.total == 7
        assert result.total_pages == 3
        assert result.has_next
        assert result.has_previous
        assert result.active_filters == 1

    def test_default_options_sort_by_priority(self):
        result = _run(sources=[])
        scores = [l.priority_score for l in result.data]
        assert scores == sorted(scores, reverse=True)
        assert result.page == 1

    def test_rejected_records_are_counted(self, raw_record):
        records = [raw_record(0), {"make": "Toyota"}, "garbage", raw_record(1)]
        result = _run(sources=[_source("primary", records)])

        assert result.total == 2
        assert result.rejected == 2
        assert result.source == "primary"

    def test_non_finite_values_do_not_break_the_query(self, raw_record):
        records = [
            raw_record(0, mileage=math.nan),
            raw_record(1, price=math.inf),
            raw_record(2),
        ]
        result = _run(sources=[_source("primary", records)])

        assert result.source == "primary"
        assert {l.vin for l in result.data} == {"TESTVIN0000000000", "TESTVIN0000000002"}
        assert result.total == 2
        assert result.rejected == 1

    def test_feed_with_nan_literals(self):
        body = (
            b'[{"vin": "TESTVIN0000000001", "make": "Honda", "model": "CR-V", '
            b'"year": 2021, "price": 24000, "mileage": NaN, "highway_mpg": Infinity}]'
        )
        source = FeedSource(
            "https://feed.example.com/listings",
            transport=httpx.MockTransport(lambda request: httpx.Response(200, content=body)),
        )
        result = _run(sources=[source])

        assert result.source == "feed"
        assert result.data[0].mileage == 0
        assert result.data[0].highway_mpg is None

    def test_supplied_score_is_trusted(self, raw_record):
        result = _run(sources=[_source("primary", [raw_record(0, priority_score=3)])])
        assert result.data[0].priority_score == 3

    def test_page_past_end_is_empty(self, raw_record):
        options = VehicleQueryOptions(pagination=PaginationConfig(page=5, page_size=10))
        result = _run(options, sources=[_source("primary", [raw_record(0)])])
        assert result.data == []
        assert result.total == 1
        assert result.total_pages == 1

    def test_repeated_queries_are_identical(self):
        assert _run(sources=[]) == _run(sources=[])

    def test_invalid_pagination_raises_before_fetching(self, raw_record):
        calls = []
        options = VehicleQueryOptions(pagination=PaginationConfig(page=0))
        with pytest.raises(InvalidPagination):
            _run(options, sources=[_source("primary", [raw_record()], calls=calls)])
        assert calls == []


class TestLookups:
    def test_vehicle_by_vin_case_insensitive(self):
        listing = asyncio.run(
            get_vehicle_by_vin("4t1k61ak0mu123456", sources=[], current_year=CURRENT_YEAR)
        )
        assert listing is not None
        assert listing.model == "RAV4"
        assert listing.year == 2021

    def test_vehicle_by_vin_missing(self):
        assert asyncio.run(get_vehicle_by_vin("NOPE", sources=[], current_year=CURRENT_YEAR)) is None

    def test_filter_options_from_fallback(self):
        options = asyncio.run(get_filter_options(sources=[]))
        assert options["makes"] == ["Honda", "Toyota"]
        assert options["years"] == [2023, 2022, 2021, 2020, 2019]
        assert "RAV4" in options["models"]
