from unittest.mock import MagicMock

import pymysql
import pytest

import customers_mysql
from customers_mongodb.record import Address, Customer


def _conn(fetchone=None):
    conn = MagicMock()
    cur = conn.cursor.return_value.__enter__.return_value
    cur.fetchone.return_value = fetchone
    return conn, cur


def _customer():
    return Customer(
        mongo_id="64b7f0c2a1e4d3b2c1a09f88",
        name="María García",
        email="maria.garcia@email.com",
        address=Address(street="Av. Libertador 456", city="Buenos Aires", country="Argentina"),
    )


def test_upsert_customer_calls_procedure():
    conn, cur = _conn({"customer_id": 7})
    assert customers_mysql.upsert_customer(conn, _customer()) == 7
    cur.callproc.assert_called_once_with(
        "sp_upsert_customer",
        [
            "64b7f0c2a1e4d3b2c1a09f88",
            "María García",
            "maria.garcia@email.com",
            "Av. Libertador 456",
            "Buenos Aires",
            "Argentina",
        ],
    )


def test_upsert_customer_without_id_raises():
    conn, _ = _conn(None)
    with pytest.raises(pymysql.MySQLError):
        customers_mysql.upsert_customer(conn, _customer())


def test_check_connection():
    conn = MagicMock()
    assert customers_mysql.check_connection(conn) is True
    conn.ping.side_effect = pymysql.err.OperationalError(2003, "Can't connect")
    assert customers_mysql.check_connection(conn) is False


def test_create_tables_runs_every_statement(capsys):
    conn, cur = _conn()
    customers_mysql.create_tables(conn)
    expected = len(customers_mysql.create_table_statements) + len(customers_mysql.sp_statements)
    assert cur.execute.call_count == expected
    assert "customers/addresses" in capsys.readouterr().out


def test_migration_stats():
    row = {"total_customers": 10, "total_addresses": 10, "unique_countries": 5, "unique_cities": 9}
    conn, _ = _conn(row)
    assert customers_mysql.migration_stats(conn) == row


def _upsert_procedure():
    return next(s for s in customers_mysql.sp_statements if "CREATE PROCEDURE sp_upsert_customer" in s)


def test_upsert_procedure_never_updates_rows_by_email():
    body = _upsert_procedure()
    # the customers row is found by mongo_id; no upsert that could match uix_email
    assert "WHERE mongo_id = p_mongo_id" in body
    assert "WHERE id = v_id" in body
    customers_insert = body.split("INSERT INTO customers", 1)[1].split(";", 1)[0]
    assert "ON DUPLICATE KEY" not in customers_insert


def test_upsert_procedure_rolls_back_on_error():
    body = _upsert_procedure()
    assert "DECLARE EXIT HANDLER FOR SQLEXCEPTION" in body
    assert body.index("ROLLBACK") < body.index("RESIGNAL")
    assert body.index("START TRANSACTION") < body.index("INSERT INTO addresses") < body.index("COMMIT")
