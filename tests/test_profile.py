"""Tests for profile module."""

import json

import pytest

from groqchat.profile import create_profile, load_profile, validate_profile


def _valid_profile(tmp_path, **overrides):
    profile = {
        "model": "llama-3.1-8b-instant",
        "api_key": {"type": "env", "key": "GROQ_API_KEY"},
        "store_file": str(tmp_path / "store.json"),
        "logs_dir": str(tmp_path / "logs"),
    }
    profile.update(overrides)
    return profile


def _write(tmp_path, profile):
    path = tmp_path / "profile.json"
    path.write_text(json.dumps(profile), encoding="utf-8")
    return path


def test_load_profile_applies_defaults(tmp_path):
    """Missing optional fields get their defaults."""
    path = _write(tmp_path, _valid_profile(tmp_path))

    profile = load_profile(str(path))

    assert profile["timeout"] == 30
    assert profile["base_url"] == "https://api.groq.com/openai/v1"
    assert profile["exports_dir"].endswith(".groqchat/exports")


def test_load_profile_maps_home_paths(tmp_path, monkeypatch):
    """Home-prefixed paths are mapped to absolute paths."""
    monkeypatch.setenv("HOME", str(tmp_path))
    path = _write(tmp_path, _valid_profile(tmp_path, store_file="~/data/store.json"))

    profile = load_profile(str(path))

    assert profile["store_file"] == str((tmp_path / "data" / "store.json").resolve())


def test_load_profile_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError, match="Profile not found"):
        load_profile(str(tmp_path / "missing.json"))


def test_load_profile_invalid_json(tmp_path):
    path = tmp_path / "profile.json"
    path.write_text("{ nope", encoding="utf-8")

    with pytest.raises(ValueError, match="Invalid JSON"):
        load_profile(str(path))


def test_validate_profile_missing_fields():
    with pytest.raises(ValueError, match="missing required fields: .*store_file"):
        validate_profile({"model": "m", "api_key": {"type": "direct", "value": "x"}, "logs_dir": "/tmp"})


@pytest.mark.parametrize(
    ("overrides", "message"),
    [
        ({"model": ""}, "'model' must be a non-empty string"),
        ({"timeout": -1}, "'timeout' must be a finite, non-negative number"),
        ({"timeout": float("inf")}, "'timeout' must be a finite, non-negative number"),
        ({"timeout": True}, "'timeout' must be a number"),
        ({"system_prompt": 5}, "'system_prompt' must be a string"),
        ({"export": {"line_width": 0}}, "'export.line_width' must be a positive integer"),
        ({"export": []}, "'export' must be a dictionary"),
        ({"api_key": {"type": "vault"}}, "unknown type 'vault'"),
        ({"api_key": {"type": "json", "path": "/k.json"}}, "missing 'key' field"),
        ({"api_key": "gsk_plain"}, "'api_key' must be a dictionary"),
    ],
)
def test_validate_profile_rejects_bad_values(tmp_path, overrides, message):
    with pytest.raises(ValueError, match=message):
        validate_profile(_valid_profile(tmp_path, **overrides))


def test_validate_profile_accepts_keychain_config(tmp_path):
    validate_profile(
        _valid_profile(tmp_path, api_key={"type": "keychain", "service": "groqchat", "account": "groq"})
    )


def test_create_profile_writes_template(tmp_path):
    """init writes a loadable template profile."""
    path = tmp_path / "nested" / "profile.json"

    profile, messages = create_profile(str(path))

    assert path.exists()
    assert json.loads(path.read_text(encoding="utf-8")) == profile
    assert profile["api_key"] == {"type": "env", "key": "GROQ_API_KEY"}
    assert profile["export"] == {"line_width": 90}
    assert "Template profile created successfully!" in messages
    validate_profile(profile)


def test_create_profile_refuses_to_overwrite(tmp_path):
    path = tmp_path / "profile.json"
    path.write_text("{}", encoding="utf-8")

    with pytest.raises(ValueError, match="Profile already exists"):
        create_profile(str(path))
