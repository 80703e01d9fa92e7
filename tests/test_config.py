from __future__ import annotations

from apiary.core.config import AppSettings, read_env_file, write_user_env_vars


def test_defaults_point_at_w3c_api():
    settings = AppSettings(_env_file=None)
    assert settings.base_url == "https://api.w3.org/"
    assert settings.user_profile_url == "https://www.w3.org/users/"


def test_env_prefix(monkeypatch):
    monkeypatch.setenv("APIARY_API_KEY", "from-env")
    assert AppSettings(_env_file=None).api_key == "from-env"


def test_write_user_env_vars_merges(tmp_path):
    env_path = tmp_path / "apiary" / ".env"
    env_path.parent.mkdir()
    env_path.write_text("# comment\nAPIARY_BASE_URL=https://old.example/\nOTHER='kept'\n", encoding="utf-8")

    write_user_env_vars({"APIARY_API_KEY": "k", "APIARY_BASE_URL": "https://api.w3.org/"}, env_path=env_path)

    assert read_env_file(env_path) == {
        "APIARY_API_KEY": "k",
        "APIARY_BASE_URL": "https://api.w3.org/",
        "OTHER": "kept",
    }


def test_settings_read_env_file(tmp_path):
    env_path = tmp_path / ".env"
    write_user_env_vars({"APIARY_API_KEY": "stored"}, env_path=env_path)
    assert AppSettings(_env_file=env_path).api_key == "stored"
