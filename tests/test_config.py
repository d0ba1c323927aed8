import pytest

from innovation_server import config as config_mod
from innovation_server.config import Config, _env_bool


@pytest.mark.parametrize("raw,expected", [("1", True), ("yes", True), ("ON", True), ("0", False), ("off", False)])
def test_env_bool(monkeypatch, raw, expected):
    monkeypatch.setenv("X_FLAG", raw)
    assert _env_bool("X_FLAG") is expected


def test_env_bool_unset_or_garbage_uses_default(monkeypatch):
    monkeypatch.delenv("X_FLAG", raising=False)
    assert _env_bool("X_FLAG", True) is True
    monkeypatch.setenv("X_FLAG", "maybe")
    assert _env_bool("X_FLAG", False) is False


def test_cors_origins_split():
    cfg = Config(CORS_ALLOW_ORIGINS=" http://a.com, ,http://b.com ")
    assert cfg.cors_origins() == ["http://a.com", "http://b.com"]


def test_load_config_returns_config():
    assert isinstance(config_mod.load_config(), Config)
