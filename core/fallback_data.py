"""Built-in listings served when no live source is available."""

IMAGE_BASE_URL = "https://images.example.com/listings"


def _gallery(slug: str, count: int) -> list[str]:
    return [f"{IMAGE_BASE_URL}/{slug}/{i}.jpg" for i in range(1, count + 1)]


FALLBACK_LISTINGS: list[dict] = [
    {
        "vin": "4T1K61AK0MU123456",
        "make": "Toyota",
        "model": "RAV4",
        "year": 2021,
        "body_type": "SUV",
        "price": 26500,
        "mileage": 28000,
        "reference_price": 31900,
        "title_status": "clean",
        "owner_count": 1,
        "accident_count": 0,
        "days_on_market": 4,
        "current_location": "San Francisco, CA",
        "distance_miles": 15,
        "dealer_name": "Bay Area Auto Sales",
        "dealer_type": "franchise",
        "highway_mpg": 35,
        "images_url": _gallery("rav4-2021", 24),
        "first_seen_at": "2025-01-08T09:00:00",
    },
    {
        "vin": "2HKRM4H75KH334455",
        "make": "Honda",
        "model": "CR-V",
        "year": 2020,
        "body_type": "SUV",
        "price": 24800,
        "mileage": 32000,
        "reference_price": 28400,
        "price_change_percent": -4.5,
        "title_status": "clean",
        "owner_count": 1,
        "accident_count": 0,
        "days_on_market": 9,
        "current_location": "Austin, TX",
        "distance_miles": 45,
        "dealer_name": "Austin Honda Center",
        "dealer_type": "franchise",
        "highway_mpg": 34,
        "images_url": _gallery("crv-2020", 18),
        "first_seen_at": "2025-01-03T14:30:00",
    },
    {
        "vin": "5TDDZ3DC7MS234567",
        "make": "Toyota",
        "model": "Camry",
        "year": 2021,
        "body_type": "Sedan",
        "price": 22900,
        "mileage": 18500,
        "reference_price": 26400,
        "title_status": "clean",
        "owner_count": 1,
        "accident_count": 0,
        "days_on_market": 12,
        "current_location": "Phoenix, AZ",
        "distance_miles": 60,
        "dealer_name": "Desert Toyota",
        "dealer_type": "franchise",
        "highway_mpg": 39,
        "images_url": _gallery("camry-2021", 22),
        "first_seen_at": "2024-12-30T10:15:00",
    },
    {
        "vin": "1HGCV1F34MA045678",
        "make": "Honda",
        "model": "Accord",
        "year": 2021,
        "body_type": "Sedan",
        "price": 23400,
        "mileage": 41000,
        "title_status": "clean",
        "owner_count": 2,
        "accident_count": 0,
        "days_on_market": 21,
        "current_location": "Denver, CO",
        "distance_miles": 80,
        "dealer_name": "Mile High Motors",
        "dealer_type": "independent",
        "highway_mpg": 38,
        "images_url": _gallery("accord-2021", 12),
        "first_seen_at": "2024-12-21T16:45:00",
    },
    {
        "vin": "2T1BURHE5LC456789",
        "make": "Toyota",
        "model": "Corolla",
        "year": 2020,
        "body_type": "Sedan",
        "price": 17900,
        "mileage": 36000,
        "reference_price": 20500,
        "price_change_percent": -7.2,
        "title_status": "clean",
        "owner_count": 1,
        "accident_count": 0,
        "days_on_market": 17,
        "current_location": "Sacramento, CA",
        "distance_miles": 90,
        "dealer_name": "Capitol Toyota",
        "dealer_type": "franchise",
        "highway_mpg": 38,
        "images_url": _gallery("corolla-2020", 9),
        "first_seen_at": "2024-12-26T11:00:00",
    },
    {
        "vin": "19XFC2F69ME567890",
        "make": "Honda",
        "model": "Civic",
        "year": 2021,
        "body_type": "Sedan",
        "price": 19800,
        "mileage": 27000,
        "title_status": "clean",
        "owner_count": 1,
        "accident_count": 0,
        "days_on_market": 35,
        "current_location": "Portland, OR",
        "distance_miles": 25,
        "dealer_name": "Rose City Honda",
        "dealer_type": "franchise",
        "highway_mpg": 40,
        "images_url": _gallery("civic-2021", 3),
        "first_seen_at": "2024-12-08T08:20:00",
    },
    {
        "vin": "5TDGZRBH8LS678901",
        "make": "Toyota",
        "model": "Highlander",
        "year": 2020,
        "body_type": "SUV",
        "price": 31500,
        "mileage": 52000,
        "reference_price": 36900,
        "title_status": "clean",
        "owner_count": 1,
        "accident_count": 0,
        "days_on_market": 6,
        "current_location": "Dallas, TX",
        "distance_miles": 30,
        "dealer_name": "Lone Star Toyota",
        "dealer_type": "franchise",
        "highway_mpg": 29,
        "images_url": _gallery("highlander-2020", 27),
        "first_seen_at": "2025-01-06T13:10:00",
    },
    {
        "vin": "5FNYF6H59MB789012",
        "make": "Honda",
        "model": "Pilot",
        "year": 2021,
        "body_type": "SUV",
        "price": 29800,
        "mileage": 47000,
        "title_status": "clean",
        "owner_count": 2,
        "accident_count": 0,
        "days_on_market": 28,
        "current_location": "Las Vegas, NV",
        "distance_miles": 70,
        "dealer_name": "Silver State Honda",
        "dealer_type": "franchise",
        "highway_mpg": 27,
        "images_url": _gallery("pilot-2021", 14),
        "first_seen_at": "2024-12-16T15:40:00",
    },
    {
        "vin": "JTEBU5JR2K5890123",
        "make": "Toyota",
        "model": "4Runner",
        "year": 2019,
        "body_type": "SUV",
        "price": 33900,
        "mileage": 61000,
        "price_change_percent": -12.5,
        "title_status": "clean",
        "owner_count": 2,
        "accident_count": 1,
        "days_on_market": 44,
        "current_location": "Boise, ID",
        "distance_miles": 95,
        "dealer_name": "Treasure Valley Auto",
        "dealer_type": "independent",
        "highway_mpg": 19,
        "images_url": _gallery("4runner-2019", 16),
        "first_seen_at": "2024-11-29T09:50:00",
    },
    {
        "vin": "3CZRU6H79NM901234",
        "make": "Honda",
        "model": "HR-V",
        "year": 2022,
        "body_type": "SUV",
        "price": 21900,
        "mileage": 14000,
        "reference_price": 24600,
        "title_status": "clean",
        "owner_count": 1,
        "accident_count": 0,
        "days_on_market": 2,
        "current_location": "San Diego, CA",
        "distance_miles": 40,
        "dealer_name": "Coastal Honda",
        "dealer_type": "franchise",
        "highway_mpg": 34,
        "images_url": _gallery("hrv-2022", 21),
        "first_seen_at": "2025-01-10T12:00:00",
    },
    {
        "vin": "JTNKHMBX5M1012345",
        "make": "Toyota",
        "model": "C-HR",
        "year": 2021,
        "body_type": "SUV",
        "price": 20500,
        "mileage": 30500,
        "title_status": "clean",
        "owner_count": 1,
        "accident_count": 0,
        "days_on_market": 15,
        "current_location": "Tucson, AZ",
        "distance_miles": 55,
        "dealer_name": "Old Pueblo Motors",
        "dealer_type": "independent",
        "highway_mpg": 31,
        "images_url": _gallery("chr-2021", 8),
        "first_seen_at": "2024-12-28T17:25:00",
    },
    {
        "vin": "2T3W1RFV8LW123456",
        "make": "Toyota",
        "model": "RAV4",
        "year": 2020,
        "body_type": "SUV",
        "price": 23900,
        "mileage": 58000,
        "title_status": "clean",
        "owner_count": 2,
        "accident_count": 0,
        "is_fleet": True,
        "days_on_market": 38,
        "current_location": "Columbus, OH",
        "distance_miles": 85,
        "dealer_name": "Buckeye Fleet Sales",
        "dealer_type": "independent",
        "highway_mpg": 35,
        "images_url": _gallery("rav4-2020", 6),
        "first_seen_at": "2024-12-05T10:05:00",
    },
    {
        "vin": "7FARW2H84PE234567",
        "make": "Honda",
        "model": "CR-V",
        "year": 2023,
        "body_type": "SUV",
        "price": 30900,
        "mileage": 9000,
        "reference_price": 34500,
        "price_change_percent": -2.1,
        "title_status": "clean",
        "owner_count": 1,
        "accident_count": 0,
        "days_on_market": 5,
        "current_location": "Seattle, WA",
        "distance_miles": 20,
        "dealer_name": "Emerald City Honda",
        "dealer_type": "franchise",
        "highway_mpg": 34,
        "images_url": _gallery("crv-2023", 30),
        "first_seen_at": "2025-01-07T09:30:00",
    },
    {
        "vin": "4T1G11AK3NU345678",
        "make": "Toyota",
        "model": "Camry",
        "year": 2022,
        "body_type": "Sedan",
        "price": 19900,
        "mileage": 71000,
        "title_status": "salvage",
        "owner_count": 3,
        "accident_count": 2,
        "is_rental": True,
        "days_on_market": 60,
        "current_location": "Orlando, FL",
        "distance_miles": 100,
        "dealer_name": "Sunshine Auto Outlet",
        "dealer_type": "independent",
        "highway_mpg": 39,
        "images_url": [],
        "first_seen_at": "2024-11-13T14:00:00",
    },
]
