# scripts/setup/seed_db.py
"""
Seed the catalog from a JSON array of locations:
  [{"id": "loc1", "name": "Library", "lat": 42.0, "lng": -93.6, "tags": ["quiet"]}, ...]

All-or-nothing: a bad record rolls back the whole file.
Usage: python scripts/setup/seed_db.py data/locations.json [--skip-existing]
"""

import argparse
import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", ".."))

from sqlalchemy import func, select
from spotfinder.database import SessionLocal, create_tables
from spotfinder.models.location import Location
from spotfinder.models.tag import Tag
from spotfinder.services.seed_service import import_locations, load_seed_file


def main():
    parser = argparse.ArgumentParser(description="Import locations into the SpotFinder catalog")
    parser.add_argument("path", help="JSON file containing an array of locations")
    parser.add_argument("--skip-existing", action="store_true",
                        help="Skip records whose id is already in the catalog instead of failing")
    args = parser.parse_args()

    create_tables()
    records = load_seed_file(args.path)
    print(f"🌱 Found {len(records)} locations in {args.path}")

    db = SessionLocal()
    try:
        summary = import_locations(db, records, skip_existing=args.skip_existing)
    except Exception as e:
        print(f"❌ Seed failed, nothing was imported: {e}")
        sys.exit(1)
    else:
        print(f"✅ Inserted {summary.inserted} locations, skipped {len(summary.skipped)}")
        print("\nDatabase now contains:")
        print(f"  - {db.scalar(select(func.count()).select_from(Location))} locations")
        print(f"  - {db.scalar(select(func.count()).select_from(Tag))} unique tags")
    finally:
        db.close()


if __name__ == "__main__":
    main()
