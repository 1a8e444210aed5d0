import sys
from pathlib import Path

import mongomock
import pytest

# Ensure project root on sys.path
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))


@pytest.fixture()
def db():
    # Fresh in-memory server per test
    client = mongomock.MongoClient()
    yield client["techtest"]
    client.close()


@pytest.fixture()
def customers(db):
    return db["customers"]


@pytest.fixture()
def seeded_db(db):
    from customers_mongodb.seed import seed_customers

    seed_customers(db)
    return db
