"""CLI behavior tests."""

import json
import sys
from unittest.mock import AsyncMock, patch

import pytest

from groqchat.cli import build_engine, load_runtime_profile, main
from groqchat.errors import ProfileError
from groqchat.store import InMemoryMessageStore, JsonMessageStore


def _run_cli(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture, argv: list[str]):
    """Run CLI main() with a patched argv and capture exit code/stdout/stderr."""
    monkeypatch.setattr(sys, "argv", argv)
    with pytest.raises(SystemExit) as exc_info:
        main()
    captured = capsys.readouterr()
    return exc_info.value.code, captured.out, captured.err


def _write_profile(tmp_path, **overrides):
    profile = {
        "model": "llama-3.1-8b-instant",
        "api_key": {"type": "direct", "value": "gsk_test_key_1234567890"},
        "store_file": str(tmp_path / "store.json"),
        "logs_dir": str(tmp_path / "logs"),
        "exports_dir": str(tmp_path / "exports"),
    }
    profile.update(overrides)
    path = tmp_path / "profile.json"
    path.write_text(json.dumps(profile), encoding="utf-8")
    return path


def test_init_requires_profile_option(monkeypatch, capsys):
    code, out, _err = _run_cli(monkeypatch, capsys, ["groqchat", "init"])
    assert code == 1
    assert "Error: -p/--profile is required for init command" in out


def test_init_creates_profile(monkeypatch, capsys, tmp_path):
    profile_path = tmp_path / "new-profile.json"

    code, out, _err = _run_cli(monkeypatch, capsys, ["groqchat", "init", "-p", str(profile_path)])

    assert code == 0
    assert profile_path.exists()
    assert "Template profile created successfully!" in out


def test_init_refuses_existing_profile(monkeypatch, capsys, tmp_path):
    profile_path = _write_profile(tmp_path)

    code, out, _err = _run_cli(monkeypatch, capsys, ["groqchat", "init", "-p", str(profile_path)])

    assert code == 1
    assert "Profile already exists" in out


def test_unknown_command_returns_error(monkeypatch, capsys):
    code, out, _err = _run_cli(monkeypatch, capsys, ["groqchat", "unknown"])
    assert code == 1
    assert "Error: unknown command 'unknown'" in out


def test_profile_is_required(monkeypatch, capsys):
    code, out, _err = _run_cli(monkeypatch, capsys, ["groqchat"])
    assert code == 1
    assert "Error: -p/--profile is required" in out


def test_missing_profile_is_fatal(monkeypatch, capsys, tmp_path):
    code, out, _err = _run_cli(
        monkeypatch, capsys, ["groqchat", "-p", str(tmp_path / "missing.json")]
    )
    assert code == 1
    assert "Profile not found" in out


def test_relative_profile_path_is_rejected(monkeypatch, capsys):
    code, out, _err = _run_cli(monkeypatch, capsys, ["groqchat", "-p", "relative.json"])
    assert code == 1
    assert "Invalid profile path" in out


def test_run_starts_repl_and_logs(monkeypatch, tmp_path):
    profile_path = _write_profile(tmp_path)
    log_path = tmp_path / "run.log"
    monkeypatch.setattr(sys, "argv", ["groqchat", "-p", str(profile_path), "-l", str(log_path)])

    with patch("groqchat.cli.repl_loop", new_callable=AsyncMock) as mock_repl:
        main()

    mock_repl.assert_awaited_once()
    engine = mock_repl.await_args.args[0]
    assert isinstance(engine.store, JsonMessageStore)
    assert mock_repl.await_args.kwargs["exports_dir"] == str((tmp_path / "exports").resolve())
    log_text = log_path.read_text(encoding="utf-8")
    assert "INFO app_start" in log_text
    assert "INFO app_stop" in log_text
    assert "gsk_test_key_1234567890" not in log_text


def test_load_runtime_profile_wraps_errors(tmp_path):
    with pytest.raises(ProfileError, match="Profile not found"):
        load_runtime_profile(str(tmp_path / "missing.json"))


def test_build_engine_ephemeral_uses_memory_store(tmp_path):
    profile = load_runtime_profile(str(_write_profile(tmp_path)))

    engine = build_engine(profile, ephemeral=True)

    assert isinstance(engine.store, InMemoryMessageStore)
    assert engine.completion_provider.model == "llama-3.1-8b-instant"


def test_build_engine_reports_missing_key(tmp_path, monkeypatch):
    monkeypatch.delenv("GROQCHAT_TEST_MISSING_KEY", raising=False)
    profile = load_runtime_profile(
        str(_write_profile(tmp_path, api_key={"type": "env", "key": "GROQCHAT_TEST_MISSING_KEY"}))
    )

    with pytest.raises(ProfileError, match="not set"):
        build_engine(profile)
