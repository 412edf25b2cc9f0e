import sys
from pathlib import Path

import pytest

# Ensure repo root is on path
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import settings
from settings import CONFIG_ENV_VAR, get_setting, load_app_config, resolve_path


@pytest.fixture(autouse=True)
def fresh_config(monkeypatch):
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    load_app_config.cache_clear()
    yield
    load_app_config.cache_clear()


def test_bundled_config_exists():
    assert settings.APP_CONFIG_PATH.exists()
    assert settings.APP_CONFIG_PATH.parent.parent.name == "markovpass"


def test_get_setting_dotted_path():
    assert get_setting("generator.sample_limit") == 2
    assert get_setting("corpus.pair_column") == "letter pair"
    assert get_setting("corpus.path") is None


def test_get_setting_default_for_missing_path():
    assert get_setting("generator.nope", 42) == 42
    assert get_setting("generator.sample_limit.deeper", "x") == "x"


def test_override_file_is_merged(tmp_path, monkeypatch):
    override = tmp_path / "local.yaml"
    override.write_text("generator:\n  password_length: 16\n")
    monkeypatch.setenv(CONFIG_ENV_VAR, str(override))
    load_app_config.cache_clear()

    assert get_setting("generator.password_length") == 16
    # Untouched keys keep their bundled defaults
    assert get_setting("generator.sample_limit") == 2


def test_missing_override_file(tmp_path, monkeypatch):
    monkeypatch.setenv(CONFIG_ENV_VAR, str(tmp_path / "missing.yaml"))
    with pytest.raises(FileNotFoundError):
        load_app_config()


def test_override_must_be_mapping(tmp_path, monkeypatch):
    override = tmp_path / "list.yaml"
    override.write_text("- a\n- b\n")
    monkeypatch.setenv(CONFIG_ENV_VAR, str(override))
    with pytest.raises(ValueError):
        load_app_config()


def test_resolve_path_relative(tmp_path):
    assert resolve_path("pairs.csv", base=tmp_path) == (tmp_path / "pairs.csv").resolve()


def test_resolve_path_absolute(tmp_path):
    assert resolve_path(str(tmp_path)) == tmp_path


def test_resolve_path_requires_value():
    with pytest.raises(ValueError):
        resolve_path(None)
