"""Seed the configured database with sample repair assets.

Usage:
    MODE=local python seed_database.py
"""
import asyncio
import csv
from datetime import date, timedelta
from pathlib import Path

from api.assets import db_manager
from core.gateway import TableGateway
from db import AsyncSessionLocal, dispose_engine, init_db
from db_models.asset import Asset, AssetStatus

CSV_PATH = Path(__file__).resolve().parent / "data" / "sample_assets.csv"


async def seed_assets(csv_path: Path = CSV_PATH) -> int:
    """Insert every row of the CSV; completed rows are completed right away."""
    count = 0
    async with AsyncSessionLocal() as session:
        gw = TableGateway(session, Asset)

        _, existing = await gw.select()
        if existing > 0:
            print(f"Database already has {existing} assets, skipping seed")
            return 0

        with open(csv_path, newline='', encoding='utf-8') as f:
            for row in csv.DictReader(f):
                tracking_date = date.today() + timedelta(days=int(row['tracking_offset_days']))
                asset = await db_manager.create_asset(
                    gw,
                    asset_number=row['asset_number'],
                    name=row['name'],
                    tracking_date=tracking_date,
                )
                if row['status'] == AssetStatus.COMPLETED.value:
                    await db_manager.complete_asset(gw, asset.id, row['completed_by'])
                count += 1
                print(f"  Added: {asset.asset_number} - {asset.name}")

    return count


async def main() -> None:
    print("Creating database tables...")
    await init_db()
    print("[OK] Tables ready")

    count = await seed_assets()
    print(f"\n[OK] Seeded {count} assets")
    await dispose_engine()


if __name__ == "__main__":
    asyncio.run(main())
