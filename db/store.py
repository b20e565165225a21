import json
from pathlib import Path

import aiosqlite

from db.models import SCHEMA, Listing

COLUMNS = (
    "vin", "make", "model", "year", "trim", "body_type", "price", "mileage", "msrp",
    "price_change_percent", "title_clean", "owner_count", "accident_count", "is_rental",
    "is_fleet", "days_on_market", "dealer_name", "dealer_type", "current_location",
    "distance_miles", "highway_mpg", "photo_links", "source_url", "priority_score",
    "reviewed_by_user", "user_rating", "user_notes", "first_seen_at", "last_updated_at",
)


class ListingStore:
    """Local SQLite cache of shortlisted listings.

    Rows come back as loosely-typed dicts in the same raw shape the remote
    feed uses, so both go through the same normalizer.
    """

    def __init__(self, db_path: Path | str):
        self.db_path = Path(db_path) if isinstance(db_path, str) else db_path
        self._connection: aiosqlite.Connection | None = None

    async def connect(self) -> None:
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._connection = await aiosqlite.connect(self.db_path)
        self._connection.row_factory = aiosqlite.Row
        await self._connection.executescript(SCHEMA)
        await self._connection.commit()

    async def close(self) -> None:
        if self._connection:
            await self._connection.close()
            self._connection = None

    async def __aenter__(self) -> "ListingStore":
        await self.connect()
        return self

    async def __aexit__(self, *exc) -> None:
        await self.close()

    @property
    def conn(self) -> aiosqlite.Connection:
        if not self._connection:
            raise RuntimeError("Database not connected")
        return self._connection

    # === Writes ===

    async def upsert_listings(self, listings: list[Listing]) -> int:
        placeholders = ", ".join("?" for _ in COLUMNS)
        updates = ", ".join(f"{c} = excluded.{c}" for c in COLUMNS if c != "vin")
        sql = (
            f"INSERT INTO listings ({', '.join(COLUMNS)}) VALUES ({placeholders}) "
            f"ON CONFLICT(vin) DO UPDATE SET {updates}"
        )
        await self.conn.executemany(sql, [self._listing_to_row(item) for item in listings])
        await self.conn.commit()
        return len(listings)

    async def delete_listing(self, vin: str) -> bool:
        cursor = await self.conn.execute("DELETE FROM listings WHERE vin = ?", (vin,))
        await self.conn.commit()
        return cursor.rowcount > 0

    # === Reads ===

    async def fetch_listings(self, limit: int = 1000) -> list[dict]:
        cursor = await self.conn.execute(
            "SELECT * FROM listings ORDER BY last_updated_at DESC LIMIT ?", (limit,)
        )
        rows = await cursor.fetchall()
        return [self._row_to_raw(row) for row in rows]

    async def get_listing(self, vin: str) -> dict | None:
        # vin column is COLLATE NOCASE
        cursor = await self.conn.execute("SELECT * FROM listings WHERE vin = ?", (vin.strip(),))
        row = await cursor.fetchone()
        return self._row_to_raw(row) if row else None

    async def count_listings(self) -> int:
        cursor = await self.conn.execute("SELECT COUNT(*) FROM listings")
        return (await cursor.fetchone())[0]

    def _listing_to_row(self, listing: Listing) -> tuple:
        return (
            listing.vin.upper(),
            listing.make,
            listing.model,
            listing.year,
            listing.trim,
            listing.body_type,
            listing.price,
            listing.mileage,
            listing.reference_price,
            listing.price_change_percent,
            int(listing.title_clean),
            listing.owner_count,
            listing.accident_count,
            int(listing.is_rental),
            int(listing.is_fleet),
            listing.days_on_market,
            listing.dealer_name,
            listing.dealer_type.value,
            listing.current_location,
            listing.distance_miles,
            listing.highway_mpg,
            json.dumps(listing.images_url),
            listing.source_url,
            listing.priority_score,
            int(listing.reviewed_by_user),
            listing.user_rating,
            listing.user_notes,
            listing.first_seen_at.isoformat(),
            listing.last_updated_at.isoformat(),
        )

    def _row_to_raw(self, row: aiosqlite.Row) -> dict:
        raw = {key: row[key] for key in row.keys()}
        for key in ("title_clean", "is_rental", "is_fleet", "reviewed_by_user"):
            if raw[key] is not None:
                raw[key] = bool(raw[key])
        return raw
