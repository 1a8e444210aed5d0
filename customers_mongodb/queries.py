"""Read queries, one email update and aggregations over the customers collection.

Usage:
    python -m customers_mongodb.queries [mongodb://localhost:27017] [--db techtest]

Every call is an independent round-trip; nothing here catches database errors.
"""
from __future__ import annotations

import argparse
import logging
from typing import Optional

from bson import json_util
from pymongo import DESCENDING
from pymongo.collection import Collection
from pymongo.database import Database

from customers_mongodb.connect_db import COLLECTION_NAME, get_database

logger = logging.getLogger(__name__)

CUSTOMER_PROJECTION = {"name": 1, "email": 1, "address.city": 1}


def find_by_country(collection: Collection, country: str) -> list[dict]:
    return list(collection.find({"address.country": country}, CUSTOMER_PROJECTION))


def find_by_name(collection: Collection, name: str) -> Optional[dict]:
    return collection.find_one({"name": name})


def update_email(collection: Collection, name: str, new_email: str) -> int:
    """Set the email of the first customer called `name`; returns modified count."""
    result = collection.update_one({"name": name}, {"$set": {"email": new_email}})
    logger.info("update_email(%s): matched=%d modified=%d", name, result.matched_count, result.modified_count)
    return result.modified_count


def count_by_country(collection: Collection) -> list[dict]:
    pipeline = [
        {"$group": {"_id": "$address.country", "total": {"$sum": 1}}},
        {"$sort": {"total": DESCENDING}},
    ]
    return list(collection.aggregate(pipeline))


def distinct_cities(collection: Collection) -> list[str]:
    return collection.distinct("address.city")


def distinct_countries(collection: Collection) -> list[str]:
    return collection.distinct("address.country")


def find_by_city(collection: Collection, city: str) -> list[dict]:
    return list(collection.find({"address.city": city}, {"name": 1, "email": 1}))


def collection_stats(collection: Collection) -> dict:
    return {
        "total": collection.count_documents({}),
        "countries": len(distinct_countries(collection)),
        "cities": len(distinct_cities(collection)),
    }


def _print_doc(doc) -> None:
    print(json_util.dumps(doc, indent=2, ensure_ascii=False))


def run_queries(
    db: Database,
    name: str = "Juan Pérez",
    new_email: str = "juan.perez.nuevo@email.com",
) -> None:
    collection = db[COLLECTION_NAME]

    print("=== MONGODB QUERIES ===\n")

    for i, country in enumerate(("Spain", "Brazil", "Argentina"), start=1):
        prefix = "" if i == 1 else "\n"
        print(f"{prefix}{i}. Customers from {country}:")
        for doc in find_by_country(collection, country):
            _print_doc(doc)

    print("\n=== EMAIL UPDATE ===")
    print("Customer before the update:")
    _print_doc(find_by_name(collection, name))

    modified = update_email(collection, name, new_email)
    print(f"\nDocuments updated: {modified}")

    print("Customer after the update:")
    _print_doc(find_by_name(collection, name))

    print("\n=== ADDITIONAL QUERIES ===")

    print("\n3.1 Customers per country:")
    for row in count_by_country(collection):
        _print_doc(row)

    print("\n3.2 Unique cities:")
    print(f"Cities: {', '.join(distinct_cities(collection))}")

    print("\n3.3 Customers by city:")
    for doc in find_by_city(collection, "São Paulo"):
        _print_doc(doc)

    stats = collection_stats(collection)
    print("\n=== FINAL STATISTICS ===")
    print(f"Total customers: {stats['total']}")
    print(f"Unique countries: {stats['countries']}")
    print(f"Unique cities: {stats['cities']}")


def main(argv: list[str] | None = None):
    parser = argparse.ArgumentParser(description="Run the customer queries, update and aggregations")
    parser.add_argument("uri", nargs="?", help="MongoDB connection string (default: MONGO_URI)")
    parser.add_argument("--db", help="Database name (default: DB_NAME)")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO)
    run_queries(get_database(args.uri, args.db))


if __name__ == "__main__":
    main()
