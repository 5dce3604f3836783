# tests/test_settings.py
from prep_planner.settings import get_last_import, get_setting, set_setting


def test_get_setting_default(store):
    assert get_setting(store, "theme") is None
    assert get_setting(store, "theme", "dark") == "dark"


def test_set_setting_overwrites(store):
    set_setting(store, "last_import", "2025-06-10T08:00:00")
    set_setting(store, "last_import", "2025-06-11T08:00:00")
    assert get_last_import(store) == "2025-06-11T08:00:00"
    assert store.count("settings") == 1
