from pathlib import Path

import pytest

from sqlanalyzer.database import DatabaseConfig, DatabaseError, DatabaseManager
from sqlanalyzer.models import ColumnInfo


@pytest.fixture
def manager(tmp_path):
    mgr = DatabaseManager(DatabaseConfig(database_dir=tmp_path / "dbs"))
    mgr.init()
    yield mgr
    mgr.close()


def test_init_creates_directory(tmp_path):
    target = tmp_path / "a" / "b"
    mgr = DatabaseManager(DatabaseConfig(database_dir=target))
    mgr.init()
    assert target.is_dir()


def test_database_path_default_config():
    assert DatabaseManager().database_path("x") == Path("./databases") / "x.db"


def test_create_database_creates_file(manager, tmp_path):
    manager.create_database("shop")
    assert manager.database_path("shop") == tmp_path / "dbs" / "shop.db"
    assert manager.database_path("shop").exists()


def test_create_database_creates_missing_directory(tmp_path):
    mgr = DatabaseManager(DatabaseConfig(database_dir=tmp_path / "later"))
    mgr.create_database("shop")
    assert (tmp_path / "later" / "shop.db").exists()


def test_create_existing_database_fails(manager):
    manager.create_database("shop")
    with pytest.raises(DatabaseError) as info:
        manager.create_database("shop")
    assert str(info.value) == "la base de datos 'shop' ya existe"


def test_use_missing_database_fails(manager):
    with pytest.raises(DatabaseError) as info:
        manager.use_database("ghost")
    assert str(info.value) == "la base de datos 'ghost' no existe"


def test_use_database_sets_current(manager):
    manager.create_database("shop")
    manager.use_database("shop")
    assert manager.current_database == "shop"


def test_execute_without_selection_fails(manager):
    with pytest.raises(DatabaseError) as info:
        manager.execute_query("CREATE TABLE t (id INTEGER)")
    assert str(info.value) == "no hay ninguna base de datos seleccionada"


def test_info_without_selection_fails(manager):
    with pytest.raises(DatabaseError) as info:
        manager.get_database_info()
    assert str(info.value) == "no hay ninguna base de datos seleccionada"


def test_bad_query_fails(manager):
    manager.create_database("shop")
    manager.use_database("shop")
    with pytest.raises(DatabaseError) as info:
        manager.execute_query("INSERT INTO missing VALUES (1)")
    assert str(info.value).startswith("error al ejecutar consulta: ")


def test_database_info_reports_tables_and_rows(manager):
    manager.create_database("shop")
    manager.use_database("shop")
    manager.execute_query("CREATE TABLE items (id INTEGER, name TEXT)")
    manager.execute_query("INSERT INTO items (id, name) VALUES (1, 'pan'), (2, NULL)")
    info = manager.get_database_info()
    assert info.name == "shop"
    assert [t.name for t in info.tables] == ["items"]
    table = info.tables[0]
    assert table.columns == [ColumnInfo("id", "INTEGER"), ColumnInfo("name", "TEXT")]
    assert table.data == [{"id": 1, "name": "pan"}, {"id": 2, "name": None}]


def test_blob_values_become_text(manager):
    manager.create_database("shop")
    manager.use_database("shop")
    manager.execute_query("CREATE TABLE b (v BLOB)")
    manager.execute_query("INSERT INTO b VALUES (CAST('hola' AS BLOB))")
    assert manager.get_database_info().tables[0].data == [{"v": "hola"}]


def test_internal_tables_are_hidden(manager):
    manager.create_database("shop")
    manager.use_database("shop")
    manager.execute_query(
        "CREATE TABLE items (id INTEGER PRIMARY KEY AUTOINCREMENT, name TEXT);"
        "INSERT INTO items (name) VALUES ('a');"
    )
    names = [t.name for t in manager.get_database_info().tables]
    assert names == ["items"]


def test_rows_limited_to_one_hundred(manager):
    manager.create_database("shop")
    manager.use_database("shop")
    manager.execute_query(
        "CREATE TABLE n (v INTEGER);"
        "WITH RECURSIVE c(x) AS (SELECT 1 UNION ALL SELECT x + 1 FROM c WHERE x < 150) "
        "INSERT INTO n SELECT x FROM c;"
    )
    assert len(manager.get_database_info().tables[0].data) == 100


def test_delete_current_database(manager):
    manager.create_database("shop")
    manager.use_database("shop")
    manager.delete_database("shop")
    assert not manager.database_path("shop").exists()
    assert manager.current_database == ""
    with pytest.raises(DatabaseError):
        manager.execute_query("SELECT 1")


def test_delete_missing_database_fails(manager):
    with pytest.raises(DatabaseError) as info:
        manager.delete_database("ghost")
    assert str(info.value).startswith("error al eliminar la base de datos: ")


def test_close_deselects(manager):
    manager.create_database("shop")
    manager.use_database("shop")
    manager.close()
    with pytest.raises(DatabaseError):
        manager.get_database_info()