"""Copy every customer document into the MySQL customers/addresses tables.

Usage:
    python -m customers_mongodb.migrate [mongodb://localhost:27017] [--db techtest]

MySQL settings come from HOST, PORT_NUMBER, DATABASE_NAME, DATABASE_USER and
DATABASE_PASSWORD. Each record is upserted by its Mongo id, so the migration
can be re-run. A record that fails validation, or whose upsert still fails
after the retries, is written to the dead-letter log and skipped.
"""
from __future__ import annotations

import argparse
import logging
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List

import pymysql
from pydantic import ValidationError
from pymongo.database import Database

import customers_mysql
from customers_mongodb.connect_db import COLLECTION_NAME, get_database
from customers_mongodb.record import Customer

logger = logging.getLogger(__name__)
dead_letter_log = logging.getLogger(__name__ + ".dead_letter")


class MigrationError(Exception):
    pass


@dataclass
class MigrationReport:
    migrated: Dict[str, int] = field(default_factory=dict)
    dead_letters: List[Dict[str, Any]] = field(default_factory=list)
    stats: Dict[str, Any] = field(default_factory=dict)


def _dead_letter(report: MigrationReport, doc: dict, error: Exception) -> None:
    dead_letter_log.error("Customer %s sent to dead letter: %s", doc.get("_id"), error)
    report.dead_letters.append({"_id": str(doc.get("_id")), "error": str(error)})


def upsert_with_retry(
    conn,
    customer: Customer,
    max_retries: int = 3,
    delay: float = 2.0,
    backoff: float = 2.0,
    sleep: Callable[[float], None] = time.sleep,
) -> int:
    """Upsert one customer, retrying up to `max_retries` times on MySQL errors.

    Integrity errors (an email already owned by another customer) are not
    retried.
    """
    attempt = 0
    while True:
        try:
            return customers_mysql.upsert_customer(conn, customer)
        except pymysql.err.IntegrityError:
            raise
        except pymysql.MySQLError as e:
            if attempt >= max_retries:
                raise
            attempt += 1
            logger.warning(
                "Upsert of %s failed (%s); retry %d/%d in %.1fs",
                customer.mongo_id, e, attempt, max_retries, delay,
            )
            sleep(delay)
            delay *= backoff


def migrate_customers(
    db: Database,
    conn,
    max_retries: int = 3,
    delay: float = 2.0,
    backoff: float = 2.0,
    sleep: Callable[[float], None] = time.sleep,
) -> MigrationReport:
    if not customers_mysql.check_connection(conn):
        raise MigrationError("Cannot connect to MySQL")

    logger.info("=== Starting MongoDB to MySQL migration ===")
    report = MigrationReport()
    for doc in db[COLLECTION_NAME].find():
        try:
            customer = Customer.from_document(doc)
        except ValidationError as e:
            _dead_letter(report, doc, e)
            continue

        logger.info("Saving customer %s", customer.name)
        try:
            customer_id = upsert_with_retry(conn, customer, max_retries, delay, backoff, sleep)
        except pymysql.MySQLError as e:
            _dead_letter(report, doc, e)
            continue
        report.migrated[customer.mongo_id] = customer_id

    report.stats = customers_mysql.migration_stats(conn)
    logger.info("=== Migration finished: %s ===", report.stats)
    return report


def main(argv: list[str] | None = None):
    parser = argparse.ArgumentParser(description="Migrate MongoDB customers into MySQL")
    parser.add_argument("uri", nargs="?", help="MongoDB connection string (default: MONGO_URI)")
    parser.add_argument("--db", help="Database name (default: DB_NAME)")
    parser.add_argument("--create-tables", action="store_true", help="Create the MySQL tables first")
    parser.add_argument("--retries", type=int, default=3, help="Retries per record")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO)
    db = get_database(args.uri, args.db)
    conn = customers_mysql.get_connection()
    try:
        if args.create_tables:
            customers_mysql.create_tables(conn)
        report = migrate_customers(db, conn, max_retries=args.retries)
    finally:
        conn.close()

    print(f"✅ Migrated {len(report.migrated)} customers")
    if report.dead_letters:
        print(f"⚠️ {len(report.dead_letters)} customers in dead letter")
    stats = report.stats
    print(
        "Migration stats: {} customers, {} addresses, {} countries, {} cities".format(
            stats.get("total_customers"),
            stats.get("total_addresses"),
            stats.get("unique_countries"),
            stats.get("unique_cities"),
        )
    )


if __name__ == "__main__":
    main()
