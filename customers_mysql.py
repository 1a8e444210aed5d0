import logging
import os
from typing import Any, Dict

import pymysql
from dotenv import load_dotenv

from customers_mongodb.record import Customer

load_dotenv()

logger = logging.getLogger(__name__)


def get_connection() -> pymysql.connections.Connection:
    """Create a new MySQL connection using env vars.

    Autocommit is on so CREATE/PROCEDURE statements and upserts apply immediately.
    """
    return pymysql.connect(
        host=os.getenv("HOST", "localhost"),
        user=os.getenv("DATABASE_USER"),
        password=os.getenv("DATABASE_PASSWORD"),
        database=os.getenv("DATABASE_NAME", "techtest"),
        port=int(os.getenv("PORT_NUMBER", "3306")),
        charset="utf8mb4",
        cursorclass=pymysql.cursors.DictCursor,
        autocommit=True,
    )


create_table_statements = [
    """
    CREATE TABLE IF NOT EXISTS customers (
        id INT AUTO_INCREMENT PRIMARY KEY,
        mongo_id VARCHAR(64) NOT NULL,
        name VARCHAR(255) NOT NULL,
        email VARCHAR(255) NOT NULL,
        created_at TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP,
        updated_at TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP ON UPDATE CURRENT_TIMESTAMP,
        UNIQUE KEY uix_mongo_id (mongo_id),
        UNIQUE KEY uix_email (email)
    ) ENGINE=InnoDB DEFAULT CHARSET=utf8mb4;
    """,
    """
    CREATE TABLE IF NOT EXISTS addresses (
        id INT AUTO_INCREMENT PRIMARY KEY,
        customer_id INT NOT NULL,
        street VARCHAR(255),
        city VARCHAR(128),
        country VARCHAR(128),
        UNIQUE KEY uix_customer (customer_id),
        KEY ix_country (country),
        FOREIGN KEY (customer_id) REFERENCES customers(id)
            ON DELETE CASCADE ON UPDATE CASCADE
    ) ENGINE=InnoDB DEFAULT CHARSET=utf8mb4;
    """,
]

sp_statements = [
    "DROP PROCEDURE IF EXISTS sp_upsert_customer;",
    """
    CREATE PROCEDURE sp_upsert_customer(
        IN p_mongo_id VARCHAR(64),
        IN p_name VARCHAR(255),
        IN p_email VARCHAR(255),
        IN p_street VARCHAR(255),
        IN p_city VARCHAR(128),
        IN p_country VARCHAR(128)
    )
    BEGIN
        DECLARE v_id INT DEFAULT NULL;
        DECLARE EXIT HANDLER FOR SQLEXCEPTION
        BEGIN
            ROLLBACK;
            RESIGNAL;
        END;

        START TRANSACTION;

        SELECT id INTO v_id FROM customers WHERE mongo_id = p_mongo_id FOR UPDATE;

        -- keyed on mongo_id only; an email owned by another row fails on uix_email
        IF v_id IS NULL THEN
            INSERT INTO customers (mongo_id, name, email)
            VALUES (p_mongo_id, p_name, p_email);
            SET v_id = LAST_INSERT_ID();
        ELSE
            UPDATE customers SET name = p_name, email = p_email WHERE id = v_id;
        END IF;

        INSERT INTO addresses (customer_id, street, city, country)
        VALUES (v_id, p_street, p_city, p_country)
        ON DUPLICATE KEY UPDATE street = VALUES(street), city = VALUES(city), country = VALUES(country);

        COMMIT;

        SELECT v_id AS customer_id;
    END;
    """,
]


def create_tables(conn: pymysql.connections.Connection) -> None:
    with conn.cursor() as cur:
        for stmt in create_table_statements:
            cur.execute(stmt)
        for stmt in sp_statements:
            cur.execute(stmt)
    print("✅ Tables and procedures created for customers/addresses.")


def check_connection(conn: pymysql.connections.Connection) -> bool:
    try:
        conn.ping(reconnect=True)
    except pymysql.MySQLError as e:
        logger.error("MySQL connection check failed: %s", e)
        return False
    logger.info("MySQL connection check: OK")
    return True


def upsert_customer(conn: pymysql.connections.Connection, customer: Customer) -> int:
    """Invoke sp_upsert_customer; returns the relational customer id."""
    address = customer.address
    with conn.cursor() as cur:
        cur.callproc(
            "sp_upsert_customer",
            [
                customer.mongo_id,
                customer.name,
                customer.email,
                address.street,
                address.city,
                address.country,
            ],
        )
        row = cur.fetchone()
    if not row or row.get("customer_id") is None:
        raise pymysql.err.DataError(f"sp_upsert_customer returned no id for {customer.mongo_id}")
    return int(row["customer_id"])


def migration_stats(conn: pymysql.connections.Connection) -> Dict[str, Any]:
    with conn.cursor() as cur:
        cur.execute(
            """
            SELECT
                (SELECT COUNT(*) FROM customers) AS total_customers,
                (SELECT COUNT(*) FROM addresses) AS total_addresses,
                (SELECT COUNT(DISTINCT country) FROM addresses) AS unique_countries,
                (SELECT COUNT(DISTINCT city) FROM addresses) AS unique_cities
            """
        )
        row = cur.fetchone()
    return dict(row or {})


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    conn = get_connection()
    try:
        create_tables(conn)
    finally:
        conn.close()
