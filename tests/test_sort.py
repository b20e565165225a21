from datetime import datetime

from core.options import SortConfig, SortDirection, SortField
from core.sort import compare_values, sort_listings


def _priced(make_listing, *prices):
    return [
        make_listing(vin=f"VIN{i:014d}", price=price) for i, price in enumerate(prices)
    ]


class TestCompareValues:
    def test_numbers(self):
        assert compare_values(1, 2) == -1
        assert compare_values(2.5, 2.5) == 0
        assert compare_values(10, 2) == 1

    def test_datetimes(self):
        assert compare_values(datetime(2025, 1, 1), datetime(2025, 1, 2)) == -1

    def test_strings(self):
        assert compare_values("Honda", "Toyota") == -1
        assert compare_values("Toyota", "Toyota") == 0


class TestSortListings:
    def test_price_ascending(self, make_listing):
        listings = _priced(make_listing, 30000, 12000, 25000)
        result = sort_listings(listings, SortConfig(SortField.PRICE, SortDirection.ASC))
        assert [l.price for l in result] == [12000, 25000, 30000]

    def test_price_descending(self, make_listing):
        listings = _priced(make_listing, 30000, 12000, 25000)
        result = sort_listings(listings, SortConfig(SortField.PRICE, SortDirection.DESC))
        assert [l.price for l in result] == [30000, 25000, 12000]

    def test_ties_keep_input_order_both_ways(self, make_listing):
        listings = _priced(make_listing, 20000, 10000, 20000, 20000)
        ascending = sort_listings(listings, SortConfig(SortField.PRICE, SortDirection.ASC))
        descending = sort_listings(listings, SortConfig(SortField.PRICE, SortDirection.DESC))

        tied = [listings[0].vin, listings[2].vin, listings[3].vin]
        assert [l.vin for l in ascending[1:]] == tied
        assert [l.vin for l in descending[:3]] == tied

    def test_idempotent(self, make_listing):
        config = SortConfig(SortField.PRICE, SortDirection.DESC)
        once = sort_listings(_priced(make_listing, 5, 3, 9, 3, 7), config)
        assert sort_listings(once, config) == once

    def test_returns_new_list(self, make_listing):
        listings = _priced(make_listing, 3, 1, 2)
        original = list(listings)
        result = sort_listings(listings, SortConfig(SortField.PRICE, SortDirection.ASC))
        assert result is not listings
        assert listings == original

    def test_default_is_priority_descending(self, make_listing):
        listings = [
            make_listing(vin="A", priority_score=50),
            make_listing(vin="B", priority_score=90),
            make_listing(vin="C", priority_score=70),
        ]
        assert [l.vin for l in sort_listings(listings, SortConfig())] == ["B", "C", "A"]

    def test_text_field(self, make_listing):
        listings = [
            make_listing(vin="A", make="Toyota"),
            make_listing(vin="B", make="Acura"),
            make_listing(vin="C", make="Honda"),
        ]
        result = sort_listings(listings, SortConfig(SortField.MAKE, SortDirection.ASC))
        assert [l.make for l in result] == ["Acura", "Honda", "Toyota"]

    def test_first_seen(self, make_listing):
        listings = [
            make_listing(vin="A", first_seen_at=datetime(2025, 1, 3)),
            make_listing(vin="B", first_seen_at=datetime(2025, 1, 1)),
            make_listing(vin="C", first_seen_at=datetime(2025, 1, 2)),
        ]
        result = sort_listings(listings, SortConfig(SortField.FIRST_SEEN_AT, SortDirection.DESC))
        assert [l.vin for l in result] == ["A", "C", "B"]

    def test_empty(self):
        assert sort_listings([], SortConfig()) == []
