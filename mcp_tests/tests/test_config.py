import json

import config


def test_get_config_value_dotted_lookup():
    cfg = {"integrations": {"github": [{"host": "a"}]}}
    assert config.get_config_value(cfg, "integrations.github") == [{"host": "a"}]
    assert config.get_config_value(cfg, "integrations.gitlab") is None
    assert config.get_config_value({"integrations": "x"}, "integrations.github") is None
    assert config.get_config_value({}, "integrations.github") is None


def test_load_app_config_from_file(tmp_path):
    path = tmp_path / "app-config.json"
    data = {"integrations": {"github": [{"host": "ghe.example.net", "apiBaseUrl": "https://ghe/api"}]}}
    path.write_text(json.dumps(data), encoding="utf-8")

    assert config.load_app_config(str(path)) == data


def test_load_app_config_uses_github_token(monkeypatch):
    monkeypatch.setattr(config, "GITHUB_CONFIG_FILE", "")
    monkeypatch.setenv("GITHUB_TOKEN", " abc ")

    assert config.load_app_config() == {"integrations": {"github": [{"host": "github.com", "token": "abc"}]}}


def test_load_app_config_empty(monkeypatch):
    monkeypatch.setattr(config, "GITHUB_CONFIG_FILE", "")
    monkeypatch.delenv("GITHUB_TOKEN", raising=False)

    assert config.load_app_config() == {}


def test_env_helpers(monkeypatch):
    monkeypatch.setenv("X_BOOL", "Yes")
    monkeypatch.setenv("X_INT", "nope")
    monkeypatch.setenv("X_FLOAT", " 2.5 ")

    assert config._env_bool("X_BOOL", False) is True
    assert config._env_int("X_INT", 7) == 7
    assert config._env_float("X_FLOAT", 1.0) == 2.5
