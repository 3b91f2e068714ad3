# tests/test_config.py

import pytest

from populator.core.config import PopulatorConfig


def test_defaults():
    config = PopulatorConfig()
    assert config.default_locale == "en"
    assert config.rules_file is None
    assert config.log_level == "INFO"


def test_from_env_vars():
    config = PopulatorConfig.from_env({
        "POPULATOR_DEFAULT_LOCALE": "de",
        "POPULATOR_RULES_FILE": "config/transforms.yaml",
        "POPULATOR_LOCALE_KEY": "de",
        "POPULATOR_LOG_LEVEL": "DEBUG",
    })

    assert config.default_locale == "de"
    assert config.rules_file == "config/transforms.yaml"
    assert config.locale_key == "de"
    assert config.log_level == "DEBUG"
    assert config.log_dir is None


def test_from_env_blank_values_fall_back():
    config = PopulatorConfig.from_env({"POPULATOR_DEFAULT_LOCALE": "", "POPULATOR_RULES_FILE": ""})
    assert config.default_locale == "en"
    assert config.rules_file is None


def test_from_file(tmp_path):
    path = tmp_path / "populator.yaml"
    path.write_text("default_locale: fr\nlocale_key: fr\nlog_level: WARNING\n")

    config = PopulatorConfig.from_file(str(path))

    assert config.default_locale == "fr"
    assert config.locale_key == "fr"
    assert config.log_level == "WARNING"


def test_from_file_missing(tmp_path):
    with pytest.raises(ValueError):
        PopulatorConfig.from_file(str(tmp_path / "absent.yaml"))


def test_from_file_empty_locale(tmp_path):
    path = tmp_path / "populator.yaml"
    path.write_text("default_locale: ''\n")

    with pytest.raises(ValueError):
        PopulatorConfig.from_file(str(path))
