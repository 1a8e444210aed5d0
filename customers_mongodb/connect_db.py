# connect_db.py
import os
from typing import Optional

from dotenv import load_dotenv
from pymongo import MongoClient
from pymongo.database import Database

load_dotenv()
MONGO_URI = os.getenv("MONGO_URI", "mongodb://localhost:27017")
DB_NAME = os.getenv("DB_NAME", "techtest")
MONGO_TLS = os.getenv("MONGO_TLS", "false").lower() in ("1", "true", "yes")

COLLECTION_NAME = "customers"


def get_client(uri: Optional[str] = None) -> MongoClient:
    try:
        options = {"serverSelectionTimeoutMS": 5000}
        if MONGO_TLS:
            options["tls"] = True

        client = MongoClient(uri or MONGO_URI, **options)

        # Test the connection
        client.admin.command("ping")
        return client
    except Exception as e:
        print(f"❌ Failed to connect to MongoDB: {e}")
        raise


def get_database(uri: Optional[str] = None, name: Optional[str] = None) -> Database:
    name = name or DB_NAME
    db = get_client(uri)[name]
    print(f"✅ Connected to MongoDB database: {name}")
    return db


if __name__ == "__main__":
    get_database()
