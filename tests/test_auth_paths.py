"""Tests for the mocked login gate, data path resolution and the repo safety guard."""

from __future__ import annotations

import pytest

from wellnesslog.auth import AuthError, login, require_session
from wellnesslog.paths import default_data_path, resolve_data_path
from wellnesslog.safety import assert_safe_data_path, find_git_root


# ---- auth ----


def test_login_ok():
    assert login("demo@wellness.com", "Demo123!") == {"email": "demo@wellness.com"}


@pytest.mark.parametrize("email", ["", "demo", "demo@wellness", "a b@c.d", "@x.io"])
def test_login_bad_email(email):
    with pytest.raises(AuthError, match="valid email"):
        login(email, "secret1")


def test_login_short_password():
    with pytest.raises(AuthError, match="6\\+ chars"):
        login("demo@wellness.com", "12345")


def test_require_session():
    assert require_session({"user": {"email": "a@b.co"}}) == {"email": "a@b.co"}
    with pytest.raises(AuthError):
        require_session({"user": None})


# ---- paths ----


def test_data_arg_wins(tmp_path, monkeypatch):
    monkeypatch.setenv("WELLNESSLOG_DATA", str(tmp_path / "env.json"))
    assert resolve_data_path(str(tmp_path / "arg.json"), "dev") == (tmp_path / "arg.json").resolve()


def test_env_beats_profile(tmp_path, monkeypatch):
    monkeypatch.setenv("WELLNESSLOG_DATA", str(tmp_path / "env.json"))
    assert resolve_data_path(None, "dev") == (tmp_path / "env.json").resolve()


def test_profile_default(monkeypatch):
    monkeypatch.delenv("WELLNESSLOG_DATA", raising=False)
    assert resolve_data_path(None, "dev").name == "dev.json"
    assert default_data_path().name == "data.json"


# ---- safety ----


def test_find_git_root(tmp_path):
    (tmp_path / "repo" / ".git").mkdir(parents=True)
    nested = tmp_path / "repo" / "a" / "b"
    nested.mkdir(parents=True)
    assert find_git_root(nested) == tmp_path / "repo"


def test_guard_refuses_repo_path(tmp_path):
    (tmp_path / ".git").mkdir()
    with pytest.raises(SystemExit):
        assert_safe_data_path(tmp_path / "data.json", allow_repo_data_path=False)


def test_guard_override(tmp_path):
    (tmp_path / ".git").mkdir()
    assert_safe_data_path(tmp_path / "data.json", allow_repo_data_path=True)


@pytest.mark.parametrize("profile", ["../escape", "a/b", ".."])
def test_profile_name_must_stay_in_config_dir(profile, monkeypatch):
    monkeypatch.delenv("WELLNESSLOG_DATA", raising=False)
    with pytest.raises(SystemExit):
        resolve_data_path(None, profile)


def test_guard_message_names_repo(tmp_path, capsys):
    (tmp_path / ".git").mkdir()
    with pytest.raises(SystemExit) as exc:
        assert_safe_data_path(tmp_path / "data.json", allow_repo_data_path=False)
    assert exc.value.code == 2
    err = capsys.readouterr().err
    assert str(tmp_path) in err
    assert "data.json" in err
