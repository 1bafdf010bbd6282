#!/usr/bin/env python3
"""
Quick script to verify the upstream kiosk and geocode endpoints.

Usage:
    python scripts/check_upstream.py [--country us] [--postal 10001]
"""
import argparse
import asyncio
import os
import sys

from dotenv import load_dotenv

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app.context import Clock
from app.errors import LocatorError
from app.services.freshness import classify_stale, dataset_reference_time, filter_fresh
from app.services.geocoding import PostalCodeGeocoder
from app.services.kiosk_source import KioskSource

# Load environment variables
load_dotenv()


async def main(country: str, postal: str) -> int:
    kiosk_url = os.getenv("KIOSK_API_URL", "http://localhost:1880/api/public/locations")
    geocode_url = os.getenv("GEOCODE_API_URL", "http://localhost:1880/api/geocode")

    print(f"Kiosk API:   {kiosk_url}")
    print(f"Geocode API: {geocode_url}")

    try:
        kiosks = await KioskSource(kiosk_url).fetch_async()
    except LocatorError as e:
        print(f"\n❌ Kiosk fetch failed: {e}")
        return 1

    reference_time = dataset_reference_time(kiosks, Clock())
    fresh = filter_fresh(kiosks, reference_time)
    stale = [k for k in fresh if classify_stale(k, reference_time)]

    print(f"\n✅ {len(kiosks)} kiosks, newest report {reference_time.isoformat()}")
    print(f"  Fresh (10 days): {len(fresh)}")
    print(f"  Connectivity stale: {len(stale)}")

    try:
        coords = await PostalCodeGeocoder(geocode_url).resolve(country, postal)
    except LocatorError as e:
        print(f"\n❌ Geocode {country}/{postal} failed: {e.code}")
        return 1

    print(f"\n✅ Geocode {country}/{postal}: {coords.lat}, {coords.lon}")
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Check upstream kiosk services")
    parser.add_argument("--country", default="us")
    parser.add_argument("--postal", default="10001")
    args = parser.parse_args()

    sys.exit(asyncio.run(main(args.country, args.postal)))
