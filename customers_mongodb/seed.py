"""Seed the customers collection with the ten sample records.

Usage:
    python -m customers_mongodb.seed [mongodb://localhost:27017] [--db techtest] [--upsert]

Without --upsert this is a single-run script: on a collection that already
holds the sample data the unique email index rejects the first record and the
BulkWriteError propagates.
"""
from __future__ import annotations

import argparse
import copy
import logging

from bson import json_util
from pymongo.database import Database

from customers_mongodb.connect_db import COLLECTION_NAME, get_database
from customers_mongodb.create_collections import ensure_indexes
from customers_mongodb.schema import validate_customer
from customers_mongodb.seed_data import SAMPLE_CUSTOMERS

logger = logging.getLogger(__name__)


def seed_customers(db: Database, upsert: bool = False) -> list:
    """Create the indexes and insert the sample customers.

    Returns the ids of the documents that were inserted. In upsert mode the
    records are matched by email, so only missing ones produce an id.
    """
    collection = db[COLLECTION_NAME]
    ensure_indexes(collection)

    docs = copy.deepcopy(SAMPLE_CUSTOMERS)
    for doc in docs:
        validate_customer(doc)

    if not upsert:
        result = collection.insert_many(docs, ordered=True)
        logger.info("Inserted %d customers", len(result.inserted_ids))
        return list(result.inserted_ids)

    inserted = []
    for doc in docs:
        result = collection.update_one({"email": doc["email"]}, {"$set": doc}, upsert=True)
        if result.upserted_id is not None:
            inserted.append(result.upserted_id)
    logger.info("Upserted %d customers, %d new", len(docs), len(inserted))
    return inserted


def print_summary(db: Database, inserted: list) -> None:
    collection = db[COLLECTION_NAME]
    print(f"Inserted {len(inserted)} customer documents")

    print("\n--- Inserted documents ---")
    for doc in collection.find().limit(3):
        print(json_util.dumps(doc, indent=2, ensure_ascii=False))

    print("\n--- Collection summary ---")
    print(f"Total documents: {collection.count_documents({})}")
    print(f"Unique countries: {len(collection.distinct('address.country'))}")


def main(argv: list[str] | None = None):
    parser = argparse.ArgumentParser(description="Create indexes and insert the sample customers")
    parser.add_argument("uri", nargs="?", help="MongoDB connection string (default: MONGO_URI)")
    parser.add_argument("--db", help="Database name (default: DB_NAME)")
    parser.add_argument(
        "--upsert",
        action="store_true",
        help="Upsert by email instead of inserting, so the script can be re-run",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO)
    db = get_database(args.uri, args.db)
    inserted = seed_customers(db, upsert=args.upsert)
    print_summary(db, inserted)


if __name__ == "__main__":
    main()
