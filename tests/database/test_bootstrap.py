from pathlib import Path

from src.geo_attendance.geo_attendance.database import bootstrap
from src.geo_attendance.geo_attendance.database.bootstrap import _iter_sql_statements, _strip_create_db_and_use
from src.geo_attendance.geo_attendance.database.connection import DatabaseConnection, DBConfig

DATABASE_DIR = Path(__file__).resolve().parents[2] / "database"


def test_schema_splits_into_table_statements():
    sql = _strip_create_db_and_use((DATABASE_DIR / "schema.sql").read_text(encoding="utf-8"))
    statements = list(_iter_sql_statements(sql))

    assert len(statements) == 3
    assert all(s.upper().startswith("CREATE TABLE") for s in statements)
    assert not any("--" in s for s in statements)


def test_seed_is_single_upsert():
    statements = list(_iter_sql_statements((DATABASE_DIR / "seed.sql").read_text(encoding="utf-8")))
    assert len(statements) == 1
    assert statements[0].startswith("INSERT INTO cohort_members")


def test_semicolons_inside_quotes_and_comments_do_not_split():
    sql = "-- one; two\nINSERT INTO t VALUES ('a;b', \"c;d\");\nSELECT 1; -- trailing; note\n"
    assert list(_iter_sql_statements(sql)) == [
        "INSERT INTO t VALUES ('a;b', \"c;d\")",
        "SELECT 1",
    ]


def test_escaped_quote_stays_inside_literal():
    sql = "INSERT INTO t VALUES ('it\\'s; fine');"
    assert list(_iter_sql_statements(sql)) == ["INSERT INTO t VALUES ('it\\'s; fine')"]


def test_db_config_defaults_and_description_hide_password():
    cfg = DBConfig.from_dict({"host": "db", "password": "s3cret"})
    assert cfg.port == 3306
    assert cfg.database == "geo_attendance"
    assert cfg.describe() == "root@db:3306/geo_attendance"
    assert "s3cret" not in cfg.describe()

    other = DBConfig.from_dict({"host": "db", "database": "other"})
    assert DatabaseConnection.get_instance(cfg) is DatabaseConnection.get_instance(DBConfig.from_dict({"host": "db", "password": "s3cret"}))
    assert DatabaseConnection.get_instance(other) is not DatabaseConnection.get_instance(cfg)


def test_missing_tables_reports_only_absent_ones(monkeypatch):
    monkeypatch.setattr(bootstrap, "list_tables", lambda db_config: ["ATTENDANCE_SESSIONS", "cohort_members"])
    assert bootstrap.missing_tables({}) == ["attendance_records"]

    monkeypatch.setattr(bootstrap, "list_tables", lambda db_config: list(bootstrap.EXPECTED_TABLES))
    assert bootstrap.missing_tables({}) == []
