import asyncio
import logging
import sys
from logging.handlers import RotatingFileHandler

from config import settings
from core.query import fetch_vehicles
from core.scoring import quality_tier
from core.url_codec import parse_query_string, query_params_to_options

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging() -> None:
    log_level = getattr(logging, settings.log_level.upper(), logging.INFO)
    logging.basicConfig(level=log_level, format=LOG_FORMAT)

    settings.log_dir.mkdir(parents=True, exist_ok=True)
    file_handler = RotatingFileHandler(
        settings.log_dir / "vehicle-query.log",
        maxBytes=10 * 1024 * 1024,
        backupCount=5,
        encoding="utf-8",
    )
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    file_handler.setLevel(log_level)
    logging.getLogger().addHandler(file_handler)


async def main(query: str = "") -> None:
    options = query_params_to_options(
        parse_query_string(query), max_page_size=settings.max_page_size
    )
    result = await fetch_vehicles(options)

    print(
        f"{result.total} listings ({result.source}), "
        f"page {result.page}/{result.total_pages}, {result.active_filters} filters active"
    )
    for listing in result.data:
        print(
            f"{listing.priority_score:>4}  {quality_tier(listing.priority_score).value:<9} "
            f"{listing.year} {listing.make} {listing.model:<12} "
            f"${listing.price:>7,}  {listing.mileage:>7,} mi  {listing.vin}"
        )


if __name__ == "__main__":
    configure_logging()
    asyncio.run(main(sys.argv[1] if len(sys.argv) > 1 else ""))
