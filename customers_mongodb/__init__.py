"""customers_mongodb package initializer

Administrative routines for the `customers` collection: connection helpers,
the collection validator and indexes, the seed and query scripts, and the
migration of customer documents into the relational store.

Run the scripts as modules from the project root, e.g.
`python -m customers_mongodb.seed mongodb://localhost:27017`.
"""

__all__ = [
    "connect_db",
    "create_collections",
    "migrate",
    "queries",
    "record",
    "schema",
    "seed",
    "seed_data",
]
