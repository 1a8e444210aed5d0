from __future__ import annotations

import argparse
import logging
from typing import List

from pymongo.collection import Collection
from pymongo.database import Database
from pymongo.errors import CollectionInvalid

from customers_mongodb.connect_db import COLLECTION_NAME, get_database
from customers_mongodb.schema import customer_indexes, customers_schema

logger = logging.getLogger(__name__)


def ensure_indexes(collection: Collection) -> List[str]:
    """Create the country and unique email indexes; existing ones are a no-op."""
    names = []
    for index in customer_indexes:
        names.append(collection.create_index(index["keys"], unique=index["unique"]))
    logger.info("Indexes on %s: %s", collection.name, ", ".join(names))
    return names


def create_collections(db: Database) -> Collection:
    try:
        db.create_collection(COLLECTION_NAME)
    except CollectionInvalid:
        # already exists
        pass

    try:
        db.command("collMod", COLLECTION_NAME, validator={"$jsonSchema": customers_schema})
        print(f"✅ Created/updated collection '{COLLECTION_NAME}' with validation.")
    except Exception as e:
        print(f"⚠️ Failed to apply validator to '{COLLECTION_NAME}': {e}")

    collection = db[COLLECTION_NAME]
    ensure_indexes(collection)
    return collection


def main(argv: list[str] | None = None):
    parser = argparse.ArgumentParser(description="Create the customers collection with validation and indexes")
    parser.add_argument("uri", nargs="?", help="MongoDB connection string (default: MONGO_URI)")
    parser.add_argument("--db", help="Database name (default: DB_NAME)")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO)
    create_collections(get_database(args.uri, args.db))


if __name__ == "__main__":
    main()
