"""Tests for loading default/override properties."""

import json

from mailforge import config
from mailforge.models import ContentTransferEncoding, Recipient


def test_load_valid_file(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({
        "defaults": {
            "from_recipient": {"name": "Ops", "address": "ops@example.com"},
            "content_transfer_encoding": "base64",
        },
        "overrides": {"subject": "[staging]"},
    }))
    assert config.load_properties(path) is True
    assert config.get_defaults().from_recipient == Recipient(name="Ops", address="ops@example.com")
    assert config.get_defaults().content_transfer_encoding == ContentTransferEncoding.BASE_64
    assert config.get_overrides().present() == {"subject": "[staging]"}


def test_missing_file(tmp_path):
    assert config.load_properties(tmp_path / "absent.json") is False
    assert config.get_defaults().present() == {}


def test_invalid_json(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{not json")
    assert config.load_properties(path) is False


def test_invalid_properties_leave_state_untouched(tmp_path):
    config.set_defaults(config.EmailProperties(subject="kept"))
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"defaults": {"recipients": "nobody"}}))
    assert config.load_properties(path) is False
    assert config.get_defaults().subject == "kept"


def test_non_object_file(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("[]")
    assert config.load_properties(path) is False


def test_reset_properties():
    config.set_overrides(config.EmailProperties(subject="x"))
    config.reset_properties()
    assert config.get_overrides() == config.EmailProperties()
