"""
Acronym API: Seed Loader
===========================

What:  One-shot command that bulk-inserts a JSON dataset into the collection.
Who:   Run by hand when setting up a fresh database; never called by the API.

Usage:
    acronym-seed                         # loads SEED_DATA_PATH
    acronym-seed --data my.json --drop   # replace the collection contents

The dataset is a JSON array of {"acronym": ..., "definition": ...} objects.
"""

import asyncio
import json
import logging
from typing import Any, Dict, List, Optional

import aiofiles
import click
from motor.motor_asyncio import AsyncIOMotorClient

from acronym_api.config import Settings, settings as default_settings

logger = logging.getLogger(__name__)


async def read_dataset(path: str) -> List[Dict[str, Any]]:
    async with aiofiles.open(path, "r", encoding="utf-8") as f:
        raw = await f.read()

    records = json.loads(raw)
    if not isinstance(records, list):
        raise ValueError(f"{path} must contain a JSON array of acronym records")
    return records


async def batch_import(
    records: List[Dict[str, Any]],
    settings: Settings,
    drop: bool = False,
) -> int:
    """Insert `records` in one insert_many call; returns the inserted count."""
    client = AsyncIOMotorClient(
        settings.mongo_uri,
        serverSelectionTimeoutMS=settings.mongo_timeout_ms,
    )
    try:
        collection = client[settings.database_name][settings.collection_name]
        if drop:
            deleted = await collection.delete_many({})
            logger.info("Removed %d existing acronyms", deleted.deleted_count)
        if not records:
            return 0
        result = await collection.insert_many(records)
        return len(result.inserted_ids)
    finally:
        client.close()


@click.command()
@click.option(
    "--data",
    "data_path",
    default=None,
    help="JSON file to load (defaults to SEED_DATA_PATH).",
)
@click.option("--drop", is_flag=True, help="Delete existing acronyms before loading.")
def main(data_path: Optional[str], drop: bool) -> None:
    """Bulk-load acronym/definition pairs into MongoDB."""
    settings = default_settings
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    path = data_path or settings.seed_data_path

    async def run() -> int:
        records = await read_dataset(path)
        return await batch_import(records, settings, drop=drop)

    try:
        inserted = asyncio.run(run())
    except Exception as e:
        logger.error("Error during batch add: %s", e)
        raise click.ClickException(f"Batch import failed: {e}") from e

    click.echo(
        f"Inserted {inserted} acronyms into "
        f"{settings.database_name}.{settings.collection_name}"
    )


if __name__ == "__main__":
    main()
