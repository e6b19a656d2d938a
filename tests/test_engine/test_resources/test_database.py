import pytest
import json
from higher_engine.errors import DataNotFoundError
from higher_engine.resources.database import Database

@pytest.fixture
def mock_db_path(tmp_path):
    # Setup mock directory structure in tmp_path
    schemas = tmp_path / "schemas"
    schemas.mkdir()

    database = tmp_path / "database"
    database.mkdir()
    (database / "items").mkdir()
    (database / "units").mkdir()

    item_schema = {
        "type": "object",
        "required": ["id", "hp_restore"],
        "properties": {
            "id": {"type": "string"},
            "hp_restore": {"type": "integer"}
        }
    }
    with open(schemas / "item.schema.json", "w") as f:
        json.dump(item_schema, f)

    return tmp_path

def test_load_all(mock_db_path):
    item_data = [
        {"id": "potion", "hp_restore": 50}
    ]
    with open(mock_db_path / "database" / "items" / "potion.json", "w") as f:
        json.dump(item_data, f)

    db = Database(mock_db_path)
    db.load_all()

    assert "potion" in db.items
    assert db.get_item("potion")["hp_restore"] == 50
    assert db.get_item("elixir") is None

def test_single_record_file(mock_db_path):
    with open(mock_db_path / "database" / "items" / "ether.json", "w") as f:
        json.dump({"id": "ether", "hp_restore": 0}, f)

    db = Database(mock_db_path)
    db.load_all()

    assert "ether" in db.items

def test_validation_error(mock_db_path):
    # Missing hp_restore
    item_data = [
        {"id": "broken"},
        {"id": "potion", "hp_restore": 50}
    ]
    with open(mock_db_path / "database" / "items" / "mixed.json", "w") as f:
        json.dump(item_data, f)

    db = Database(mock_db_path)
    db.load_all()

    assert "broken" not in db.items  # Skipped, the rest of the file still loads
    assert "potion" in db.items

def test_malformed_json_is_skipped(mock_db_path):
    (mock_db_path / "database" / "items" / "bad.json").write_text("{not json")

    db = Database(mock_db_path)
    db.load_all()

    assert db.items == {}

def test_missing_schema(mock_db_path):
    item_data = [{"id": "potion", "hp_restore": 50}]
    with open(mock_db_path / "database" / "items" / "potion.json", "w") as f:
        json.dump(item_data, f)

    (mock_db_path / "schemas" / "item.schema.json").unlink()

    db = Database(mock_db_path)
    db.load_all()

    # Categories without a schema are not loaded at all
    assert "potion" not in db.items

def test_require(mock_db_path):
    with open(mock_db_path / "database" / "items" / "potion.json", "w") as f:
        json.dump([{"id": "potion", "hp_restore": 50}], f)

    db = Database(mock_db_path)
    db.load_all()

    assert db.require("items", "potion")["id"] == "potion"

    with pytest.raises(DataNotFoundError) as exc:
        db.require("items", "elixir")
    assert exc.value.category == "items"
    assert exc.value.record_id == "elixir"
    assert isinstance(exc.value, KeyError)

    with pytest.raises(ValueError):
        db.require("weapons", "sword")
