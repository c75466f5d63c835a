# tests/test_audit.py
# store activity ends up in the csv event journal

import json

import pytest

import audit
from config_store import ConfigCorrupt, ConfigStore, StorageUnavailable
from materials import Material


def actions():
    return [r["action"] for r in audit.read_all()]


def test_journal_starts_empty(audit_dir):
    assert audit.read_all() == []
    assert not (audit_dir / "events.csv").exists()


def test_load_and_save_are_journaled(tmp_path):
    store = ConfigStore(tmp_path / "data")
    store.load()
    store.save()
    assert actions() == ["config_load", "config_save"]
    row = audit.read_all()[0]
    assert row["actor"] == "system"
    assert row["level"] == "INFO"
    assert json.loads(row["details_json"])["path"] == str(store.path)


def test_unknown_material_is_journaled(tmp_path):
    store = ConfigStore(tmp_path)
    store.path.write_text("fuelPower:\n  BOGUSMAT: 5.0\n", encoding="utf-8")
    store.load()
    rows = [r for r in audit.read_all() if r["action"] == "fuel_material_unknown"]
    assert len(rows) == 1
    assert rows[0]["level"] == "WARNING"
    assert json.loads(rows[0]["details_json"]) == {"key": "BOGUSMAT"}


def test_failed_load_is_journaled(tmp_path):
    store = ConfigStore(tmp_path)
    store.path.write_text("a: [1, 2\n", encoding="utf-8")
    with pytest.raises(ConfigCorrupt):
        store.load()
    assert actions() == ["config_load_fail"]
    assert audit.read_all()[0]["level"] == "ERROR"


def test_actor_recorded(tmp_path):
    audit.set_actor("  console ")
    ConfigStore(tmp_path).save()
    assert audit.read_all()[-1]["actor"] == "console"
    audit.set_actor("   ")
    audit.log("manual", "reloaded by hand")
    last = audit.read_all()[-1]
    assert last["actor"] == "system"
    assert json.loads(last["details_json"]) == {"msg": "reloaded by hand"}


@pytest.fixture
def broken_journal(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("x", encoding="utf-8")
    audit.configure(blocker / "logs")
    return blocker


def test_unwritable_journal_does_not_hide_corrupt_file(tmp_path, broken_journal, caplog):
    store = ConfigStore(tmp_path / "data")
    store.ensure_file()
    store.path.write_text("a: [1, 2\n", encoding="utf-8")
    with pytest.raises(ConfigCorrupt):
        store.load()
    assert any("config_load_fail" in r.getMessage() for r in caplog.records)


def test_unwritable_journal_does_not_fail_load_or_save(tmp_path, broken_journal):
    store = ConfigStore(tmp_path / "data")
    store.ensure_file()
    store.path.write_text("initialPower: 7.0\nfuelPower:\n  BOGUSMAT: 1.0\n  COAL: 2.0\n", encoding="utf-8")
    store.load()
    assert store.initial_power == 7.0
    assert store.fuel_power == {Material.COAL: 2.0}
    store.save()
    assert store.path.read_text(encoding="utf-8") == store.render()


def test_unwritable_journal_keeps_storage_error(tmp_path, broken_journal):
    store = ConfigStore(broken_journal / "data")
    with pytest.raises(StorageUnavailable):
        store.save()
