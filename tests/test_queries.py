from customers_mongodb import queries


def test_find_by_country_projects_name_email_city(seeded_db):
    rows = queries.find_by_country(seeded_db.customers, "Spain")
    assert {r["name"] for r in rows} == {"Juan Pérez", "Carmen López"}
    for r in rows:
        assert set(r) == {"_id", "name", "email", "address"}
        assert set(r["address"]) == {"city"}


def test_find_by_country_unknown_is_empty(seeded_db):
    assert queries.find_by_country(seeded_db.customers, "Peru") == []


def test_find_by_name_missing_returns_none(seeded_db):
    assert queries.find_by_name(seeded_db.customers, "Nobody") is None


def test_update_email_then_lookup_returns_new_email(seeded_db):
    coll = seeded_db.customers
    before = queries.find_by_name(coll, "Juan Pérez")
    assert before["email"] == "juan.perez@email.com"

    modified = queries.update_email(coll, "Juan Pérez", "juan.perez.nuevo@email.com")
    assert modified == 1

    after = queries.find_by_name(coll, "Juan Pérez")
    assert after["_id"] == before["_id"]
    assert after["email"] == "juan.perez.nuevo@email.com"
    assert coll.count_documents({"email": "juan.perez@email.com"}) == 0


def test_update_email_unknown_name_modifies_nothing(seeded_db):
    assert queries.update_email(seeded_db.customers, "Nobody", "x@email.com") == 0


def test_count_by_country(seeded_db):
    rows = queries.count_by_country(seeded_db.customers)
    assert {r["_id"]: r["total"] for r in rows} == {
        "Argentina": 2,
        "Brazil": 2,
        "Mexico": 2,
        "Colombia": 2,
        "Spain": 2,
    }
    totals = [r["total"] for r in rows]
    assert totals == sorted(totals, reverse=True)


def test_count_by_country_sorted_descending(customers):
    customers.insert_many([
        {"name": "a", "email": "a@x", "address": {"city": "Lima", "country": "Peru"}},
        {"name": "b", "email": "b@x", "address": {"city": "Quito", "country": "Ecuador"}},
        {"name": "c", "email": "c@x", "address": {"city": "Cusco", "country": "Peru"}},
    ])
    rows = queries.count_by_country(customers)
    assert rows == [{"_id": "Peru", "total": 2}, {"_id": "Ecuador", "total": 1}]


def test_distinct_values(seeded_db):
    assert len(queries.distinct_cities(seeded_db.customers)) == 9
    assert len(queries.distinct_countries(seeded_db.customers)) == 5


def test_find_by_city(seeded_db):
    rows = queries.find_by_city(seeded_db.customers, "São Paulo")
    assert len(rows) == 2
    assert {r["name"] for r in rows} == {"Carlos Rodríguez", "Roberto Silva"}
    assert all("address" not in r for r in rows)


def test_collection_stats(seeded_db):
    assert queries.collection_stats(seeded_db.customers) == {
        "total": 10,
        "countries": 5,
        "cities": 9,
    }


def test_run_queries_prints_each_section(seeded_db, capsys):
    queries.run_queries(seeded_db)
    out = capsys.readouterr().out

    assert "1. Customers from Spain:" in out
    assert "3. Customers from Argentina:" in out
    assert "Documents updated: 1" in out
    assert "juan.perez.nuevo@email.com" in out
    assert "São Paulo" in out
    assert "Total customers: 10" in out
    assert "Unique cities: 9" in out
    assert seeded_db.customers.find_one({"name": "Juan Pérez"})["email"] == "juan.perez.nuevo@email.com"


def test_main_uses_given_uri(seeded_db, monkeypatch, capsys):
    calls = {}

    def fake_get_database(uri, name):
        calls["args"] = (uri, name)
        return seeded_db

    monkeypatch.setattr(queries, "get_database", fake_get_database)
    queries.main(["mongodb://example:27017", "--db", "techtest"])

    assert calls["args"] == ("mongodb://example:27017", "techtest")
    assert "Total customers: 10" in capsys.readouterr().out
