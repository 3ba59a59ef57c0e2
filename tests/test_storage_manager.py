import pytest

import config
from storage_manager import StorageManager


@pytest.fixture
def storage(db):
    return StorageManager(db)


def test_history_round_trip(storage):
    records = [{'first_operand': 3.0, 'operation': 'add', 'second_operand': 4.0, 'result': 7.0}]
    assert storage.save_history(records) is True
    assert storage.load_history() == records


def test_empty_history(storage):
    assert storage.load_history() == []


@pytest.mark.parametrize("raw", ["{not json", '{"a": 1}', '"text"'])
def test_unreadable_history_is_ignored(storage, db, raw):
    db.save(config.HISTORY_KEY, raw)
    assert storage.load_history() == []


def test_clear_history(storage, db):
    storage.save_history([])
    storage.clear_history()
    assert db.load(config.HISTORY_KEY) is None


def test_theme_defaults_to_light(storage, db):
    assert storage.get_theme() == "light"
    db.save(config.THEME_KEY, "purple")
    assert storage.get_theme() == "light"


def test_toggle_theme(storage):
    assert storage.toggle_theme() == "dark"
    assert storage.get_theme() == "dark"
    assert storage.toggle_theme() == "light"


def test_set_invalid_theme(storage):
    with pytest.raises(ValueError):
        storage.set_theme("purple")


def test_separate_history_keys_do_not_collide(db):
    desktop = StorageManager(db)
    web = StorageManager(db, history_key=config.WEB_HISTORY_KEY)
    desktop.save_history([{'first_operand': 3.0, 'operation': 'add', 'second_operand': 4.0, 'result': 7.0}])
    web.save_history([])
    assert len(desktop.load_history()) == 1
