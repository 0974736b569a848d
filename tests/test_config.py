from __future__ import annotations

import pytest
from pydantic import ValidationError

from core.config import AppSettings, get_user_env_file, write_user_env_vars


def test_env_vars_are_read(monkeypatch):
    monkeypatch.setenv("SQLHOOK_CANDIDATE_NAME", "Ada")
    monkeypatch.setenv("SQLHOOK_HTTP_TIMEOUT_SECONDS", "5")
    monkeypatch.setenv("SQLHOOK_LOG_LEVEL", "debug")

    settings = AppSettings(_env_file=None)

    assert settings.candidate_name == "Ada"
    assert settings.http_timeout_seconds == 5.0
    assert settings.log_level == "DEBUG"


def test_project_env_file_is_read(tmp_path):
    (tmp_path / ".env").write_text("SQLHOOK_CANDIDATE_REG_NO=REG42\n", encoding="utf-8")

    settings = AppSettings(_env_file=tmp_path / ".env")

    assert settings.candidate_reg_no == "REG42"


@pytest.mark.parametrize(
    "overrides",
    [
        {"http_timeout_seconds": 0},
        {"http_connect_timeout_seconds": -1},
        {"log_level": "LOUD"},
    ],
)
def test_invalid_values_are_rejected(overrides):
    with pytest.raises(ValidationError):
        AppSettings(_env_file=None, **overrides)


def test_write_user_env_vars_merges(tmp_path):
    path = write_user_env_vars({"SQLHOOK_CANDIDATE_NAME": "Ada Lovelace"})
    write_user_env_vars({"SQLHOOK_CANDIDATE_EMAIL": "ada@example.org"})

    assert path == get_user_env_file()
    assert str(path).startswith(str(tmp_path / "xdg"))
    text = path.read_text(encoding="utf-8")
    assert 'SQLHOOK_CANDIDATE_NAME="Ada Lovelace"' in text
    assert "SQLHOOK_CANDIDATE_EMAIL=ada@example.org" in text

    settings = AppSettings(_env_file=path)
    assert settings.candidate_name == "Ada Lovelace"
